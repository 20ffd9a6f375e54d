from common.audit_engine.checks.qa_file_name_convention import QA_FILE_NAME_CONVENTION, check_file_names
from common.audit_engine.models import CheckOutcome, VerdictStatus


def test_valid_and_invalid_file_names(make_ctx):
    ctx = make_ctx(
        [
            {"File Name": "RMC-ABC-ZZ-L01-M3-A-000123.rvt"},
            {"File Name": "RMC-QQQ-ZZ-L01-M3-A-12345.rvt"},
            {"File Name": "  "},
        ]
    )
    res = QA_FILE_NAME_CONVENTION().evaluate(ctx)

    assert res.outcome == CheckOutcome.COMPLETED
    assert res.column == "File Name"
    assert res.total == 2
    assert res.passed == 1
    assert res.pass_percentage == 50.0

    ok, bad = res.verdicts
    assert ok.status == VerdictStatus.VALID
    assert ok.reasoning == "Valid: Matches all project naming rules."
    assert ok.original_record == {"File Name": "RMC-ABC-ZZ-L01-M3-A-000123.rvt"}

    assert bad.status == VerdictStatus.INVALID
    assert "'12345' must be exactly 6 digits" in bad.reasoning
    assert "[QQQ]" in bad.reasoning
    assert bad.invalid_value == "RMC-QQQ-ZZ-L01-M3-A-12345.rvt"
    assert res.details[0].values["token_count"] > 0


def test_underscore_delimiter_and_lowercase_segments():
    vocab = frozenset({"RMC", "ABC"})
    verdicts = check_file_names([{"Name": "rmc_abc_000001.nwc"}], "Name", vocab)
    assert verdicts[0].status == VerdictStatus.VALID


def test_sequence_requires_exactly_six_ascii_digits():
    vocab = frozenset({"RMC"})
    rows = [{"Name": "RMC-0000001"}, {"Name": "RMC-00001a"}, {"Name": "RMC-１２３４５６"}]
    verdicts = check_file_names(rows, "Name", vocab)
    assert [v.status for v in verdicts] == [VerdictStatus.INVALID] * 3


def test_name_without_delimiter_is_only_a_sequence():
    verdicts = check_file_names([{"Name": "000042.rvt"}, {"Name": "MODEL.rvt"}], "Name", frozenset())
    assert verdicts[0].status == VerdictStatus.VALID
    assert verdicts[1].status == VerdictStatus.INVALID
    assert "Segments [" not in verdicts[1].reasoning


def test_sequence_length_is_configurable(make_ctx):
    ctx = make_ctx(
        [{"File Name": "RMC-ABC-0042"}],
        checks={"QA-FILE-NAME-CONVENTION": {"sequence_digits": 4}},
    )
    assert QA_FILE_NAME_CONVENTION().evaluate(ctx).passed == 1


def test_identity_column_is_kept_in_original_record(make_ctx):
    ctx = make_ctx(
        [{"Model Name": "RMC-ABC-000001", "Element ID": "77"}],
        identity_columns=["model name"],
    )
    res = QA_FILE_NAME_CONVENTION().evaluate(ctx)
    assert res.verdicts[0].original_record == {"Model Name": "RMC-ABC-000001"}
