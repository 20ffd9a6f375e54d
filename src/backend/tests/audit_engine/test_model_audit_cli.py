import csv
import json

from scripts.run_model_audit import main


def _write_csv(path, rows):
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=list(rows[0]))
        writer.writeheader()
        writer.writerows(rows)
    return path


def test_qaqc_command_writes_json_and_markdown(tmp_path, rules_text):
    rules = tmp_path / "rules.txt"
    rules.write_text(rules_text, encoding="utf-8")
    data = _write_csv(
        tmp_path / "model.csv",
        [
            {"File Name": "RMC-ABC-ZZ-L01-M3-A-000001.rvt", "Project Units": "Metric"},
            {"File Name": "RMC-QQQ-ZZ-L01-M3-A-1.rvt", "Project Units": "Imperial"},
        ],
    )
    out = tmp_path / "out"

    code = main(["--output-dir", str(out), "qaqc", "--rules", str(rules), "--data", str(data)])

    assert code == 0
    payload = json.loads((out / "qaqc_report.json").read_text())
    by_id = {r["check_id"]: r for r in payload["results"]}
    assert by_id["QA-FILE-NAME-CONVENTION"]["passed"] == 1
    assert by_id["QA-PROJECT-UNITS"]["total"] == 2
    assert by_id["QA-SURVEY-POINT"]["outcome"] == "MISSING_COLUMN"
    md = (out / "qaqc_report.md").read_text()
    assert "### QA-FILE-NAME-CONVENTION: COMPLETED" in md


def test_midp_command_with_yaml_config(tmp_path):
    required = _write_csv(
        tmp_path / "midp.csv",
        [{"Deliverable": "RMC-ABC-001", "Format": "rvt"}, {"Deliverable": "RMC-ABC-002", "Format": "pdf"}],
    )
    actual = _write_csv(tmp_path / "acc.csv", [{"Deliverable": "rmc-abc-001", "Format": "RVT"}])
    config = tmp_path / "audit.yaml"
    config.write_text("reconcile:\n  name_columns: [Deliverable]\n", encoding="utf-8")

    code = main(
        [
            "--config",
            str(config),
            "--output-dir",
            str(tmp_path),
            "midp",
            "--required",
            str(required),
            "--actual",
            str(actual),
        ]
    )

    assert code == 0
    payload = json.loads((tmp_path / "midp_report.json").read_text())
    assert payload["summary"] == {
        "all": 2,
        "matched": 1,
        "count_mismatch": 0,
        "missing_in_target": 1,
        "extra_in_target": 0,
    }


def test_weekly_command_uses_reference_time(tmp_path):
    data = _write_csv(
        tmp_path / "folders.csv",
        [{"Folder name and path": "P/M/B1/Arch", "Name": "a.rvt", "Last Updated": "Jan 12, 2026 2:24 PM"}],
    )
    code = main(["--output-dir", str(tmp_path), "weekly", "--data", str(data), "--now", "2026-01-14T10:00:00"])
    assert code == 0
    payload = json.loads((tmp_path / "weekly_report.json").read_text())
    assert payload["ok"] == 1
    assert payload["deliverables"][0]["status"] == "OK"


def test_missing_column_returns_error_code(tmp_path):
    data = _write_csv(tmp_path / "clash.csv", [{"Name": "T1", "Status": "Active"}])
    code = main(["--output-dir", str(tmp_path), "clash", "--data", str(data)])
    assert code == 2
    assert not (tmp_path / "clash_report.json").exists()


def test_profile_command_with_diff(tmp_path):
    old = tmp_path / "old.txt"
    new = tmp_path / "new.txt"
    old.write_text("Project: Riverside\nRevision: P01\n", encoding="utf-8")
    new.write_text("Project: Riverside\nRevision: P02\n", encoding="utf-8")
    code = main(["--output-dir", str(tmp_path), "profile", "--document", str(new), "--compare", str(old)])
    assert code == 0
    payload = json.loads((tmp_path / "profile_report.json").read_text())
    assert payload["profile"]["revision"] == "P02"
    assert any(c["removed"] and c["value"] == "P01" for c in payload["diff"])
