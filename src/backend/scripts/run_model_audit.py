from __future__ import annotations

import argparse
import csv
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

logger = logging.getLogger("run_model_audit")


def _ensure_backend_on_path() -> None:
    backend_dir = Path(__file__).resolve().parents[1]
    if str(backend_dir) not in sys.path:
        sys.path.insert(0, str(backend_dir))


def _load_csv(path: Path):
    _ensure_backend_on_path()
    from common.audit_engine.dataset import Dataset

    with path.open(newline="", encoding="utf-8-sig") as handle:
        records = list(csv.DictReader(handle))
    return Dataset.from_records(records, name=path.name)


def _load_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _load_config(path: str | None):
    _ensure_backend_on_path()
    from common.audit_engine.config import AuditConfig, load_audit_config

    return load_audit_config(path) if path else AuditConfig()


def _write_json(payload, out_path: Path) -> None:
    out_path.write_text(json.dumps(payload, indent=2, default=str))


def _audit_markdown(report, title: str) -> list[str]:
    lines = [
        f"# {title}",
        "",
        f"Generated at: {report.generated_at.isoformat()}",
        "",
        "## Totals",
    ]
    for status, count in report.totals.items():
        lines.append(f"- {status.value}: {count}")
    for outcome, count in report.outcomes.items():
        lines.append(f"- {outcome.value}: {count}")
    lines.append("")
    lines.append("## Results")
    for res in report.results:
        lines.append("")
        lines.append(f"### {res.check_id}: {res.outcome.value}")
        lines.append(res.check_title)
        if res.column:
            lines.append(f"- Column: {res.column}")
        if res.summary:
            lines.append(f"- Summary: {res.summary}")
        invalid = [v for v in res.verdicts if v.status.value != "Valid"]
        if invalid:
            lines.append("- Findings:")
            for verdict in invalid:
                lines.append(f"  - {verdict.status.value}: {verdict.reasoning} | {verdict.original_record}")
    return lines


def _comparison_markdown(results, summary) -> list[str]:
    lines = ["# MIDP vs ACC reconciliation", "", "## Totals"]
    for key, count in summary.model_dump().items():
        lines.append(f"- {key}: {count}")
    lines.append("")
    lines.append("| Base name | Format | Status | Required | Actual | Milestones |")
    lines.append("|---|---|---|---|---|---|")
    for res in results:
        lines.append(
            f"| {res.base_name} | {res.format} | {res.status.value} | {res.required_count} "
            f"| {res.actual_count} | {', '.join(res.merged_tags)} |"
        )
    return lines


def _parameters_markdown(report) -> list[str]:
    lines = ["# Parameter completion", "", f"Elements: {report.total_elements}", ""]
    lines.append("| Parameter | Filled | Empty | % Filled |")
    lines.append("|---|---|---|---|")
    for p in report.parameters:
        lines.append(f"| {p.parameter_name} | {p.filled_count} | {p.empty_count} | {p.percentage_filled:.2f} |")
    lines.append("")
    lines.append("## Source files")
    for s in report.source_files:
        lines.append(f"- {s.source_file}: {s.total_elements} element(s), {s.filled_percentage:.2f}% filled")
    if report.compliance is not None:
        c = report.compliance
        lines.append("")
        lines.append(f"## Compliance: {c.compliance_score:.2f}%")
        lines.append(f"- Matched: {', '.join(c.matched)}")
        lines.append(f"- Missing: {', '.join(c.missing)}")
        lines.append(f"- Extra: {', '.join(c.extra)}")
    return lines


def _clash_markdown(report) -> list[str]:
    lines = ["# Clash analysis", "", f"Total clashes: {report.total_clashes}", "", "## By status"]
    for status, count in report.status_counts.items():
        lines.append(f"- {status}: {count}")
    lines.append("")
    lines.append("## By discipline pair")
    for pair in report.discipline_pairs:
        lines.append(f"- {pair.pair}: {pair.total_clashes}")
    return lines


def _weekly_markdown(report) -> list[str]:
    lines = [
        "# Weekly deliverable updates",
        "",
        f"Window: {report.window.start.isoformat()} .. {report.window.end.isoformat()}",
        f"OK: {report.ok} / Late: {report.late} / Total: {report.total}",
        "",
        "| Building | Deliverable | Latest update | File | Status |",
        "|---|---|---|---|---|",
    ]
    for d in report.deliverables:
        stamp = d.latest_update.isoformat() if d.latest_update else ""
        lines.append(f"| {d.building} | {d.deliverable} | {stamp} | {d.latest_file_name} | {d.status.value} |")
    return lines


def _profile_markdown(profile, diff) -> list[str]:
    lines = [
        f"# Document profile: {profile.file_name}",
        "",
        f"- Project name: {profile.project_name}",
        f"- Project number: {profile.project_number}",
        f"- Revision: {profile.revision}",
        f"- Date: {profile.date}",
        f"- Words: {profile.word_count} ({profile.unique_words} unique), lines: {profile.line_count}",
        f"- Keywords: {', '.join(f'{k.word.upper()} ({k.count})' for k in profile.top_keywords)}",
        f"- Naming codes: {', '.join(profile.naming_codes)}",
    ]
    if diff is not None:
        added = sum(1 for c in diff if c.added)
        removed = sum(1 for c in diff if c.removed)
        lines.append("")
        lines.append(f"## Diff: {added} addition(s), {removed} removal(s)")
    return lines


def run_audit(args, config):
    _ensure_backend_on_path()
    from common.audit_engine.pipeline import analyze

    report = analyze(_load_text(Path(args.rules)), _load_csv(Path(args.data)), config, suite=args.command)
    title = "QA/QC audit" if args.command == "qaqc" else "File name segment audit"
    return report.model_dump(mode="json"), _audit_markdown(report, title)


def run_midp(args, config):
    _ensure_backend_on_path()
    from common.audit_engine.reconcile import reconcile_datasets, summarize_comparison

    results = reconcile_datasets(_load_csv(Path(args.required)), _load_csv(Path(args.actual)), config.reconcile)
    summary = summarize_comparison(results)
    payload = {
        "summary": summary.model_dump(mode="json"),
        "results": [r.model_dump(mode="json") for r in results],
    }
    return payload, _comparison_markdown(results, summary)


def run_parameters(args, config):
    _ensure_backend_on_path()
    from common.audit_engine.parameters import analyze_parameters

    template = _load_csv(Path(args.template)) if args.template else None
    report = analyze_parameters(_load_csv(Path(args.data)), template, config.parameters)
    return report.model_dump(mode="json"), _parameters_markdown(report)


def run_clash(args, config):
    _ensure_backend_on_path()
    from common.audit_engine.clash import aggregate_clashes

    report = aggregate_clashes(_load_csv(Path(args.data)), config.clash)
    return report.model_dump(mode="json"), _clash_markdown(report)


def run_weekly(args, config):
    _ensure_backend_on_path()
    from common.audit_engine.weekly import weekly_status

    now = datetime.fromisoformat(args.now) if args.now else datetime.now()
    report = weekly_status(_load_csv(Path(args.data)), now, config.weekly)
    return report.model_dump(mode="json"), _weekly_markdown(report)


def run_profile(args, config):
    _ensure_backend_on_path()
    from common.audit_engine.documents import diff_words, profile_document

    path = Path(args.document)
    text = _load_text(path)
    profile = profile_document(text, path.name)
    diff = diff_words(_load_text(Path(args.compare)), text) if args.compare else None
    payload = {
        "profile": profile.model_dump(mode="json"),
        "diff": [c.model_dump(mode="json") for c in diff] if diff is not None else None,
    }
    return payload, _profile_markdown(profile, diff)


COMMANDS = {
    "qaqc": run_audit,
    "segments": run_audit,
    "midp": run_midp,
    "parameters": run_parameters,
    "clash": run_clash,
    "weekly": run_weekly,
    "profile": run_profile,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Audit BIM/CAD deliverable exports against project rules and write JSON/MD outputs."
    )
    parser.add_argument("--config", default=None, help="Path to a YAML/JSON audit config.")
    parser.add_argument("--output-dir", default=".", help="Output directory for report files.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging level (default: WARNING).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("qaqc", "Run the QA/QC model checks."),
        ("segments", "Check every file name segment against the rules codes."),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--rules", required=True, help="Plain-text rules corpus (extracted PDF text).")
        p.add_argument("--data", required=True, help="CSV export of the model data.")

    p = sub.add_parser("midp", help="Reconcile a MIDP manifest against the ACC export.")
    p.add_argument("--required", required=True, help="MIDP (required deliverables) CSV.")
    p.add_argument("--actual", required=True, help="ACC (delivered files) CSV.")

    p = sub.add_parser("parameters", help="Parameter completion and LOIN compliance.")
    p.add_argument("--data", required=True, help="CSV export of element parameters.")
    p.add_argument("--template", default=None, help="Optional LOIN/standard template CSV.")

    p = sub.add_parser("clash", help="Aggregate a clash detective export.")
    p.add_argument("--data", required=True, help="Clash test CSV.")

    p = sub.add_parser("weekly", help="Weekly deliverable update status.")
    p.add_argument("--data", required=True, help="Document management folder export CSV.")
    p.add_argument("--now", default=None, help="Reference time (ISO format); defaults to now.")

    p = sub.add_parser("profile", help="Profile a text document, optionally diffing against an older version.")
    p.add_argument("--document", required=True, help="Plain-text document.")
    p.add_argument("--compare", default=None, help="Older version to diff against.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    _ensure_backend_on_path()
    from common.audit_engine.errors import AuditEngineError

    output_dir = Path(args.output_dir).resolve()
    output_dir.mkdir(parents=True, exist_ok=True)

    try:
        payload, md_lines = COMMANDS[args.command](args, _load_config(args.config))
    except AuditEngineError as exc:
        logger.error("%s failed: %s", args.command, exc)
        return 2

    base_name = f"{args.command}_report"
    out_json = output_dir / f"{base_name}.json"
    out_md = output_dir / f"{base_name}.md"
    _write_json(payload, out_json)
    out_md.write_text("\n".join(md_lines))

    print(f"Wrote {out_json}")
    print(f"Wrote {out_md}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
