import pytest

from common.audit_engine import analyze
from common.audit_engine.check import Check
from common.audit_engine.checks.qa_file_name_convention import QA_FILE_NAME_CONVENTION
from common.audit_engine.config import CheckConfigBase
from common.audit_engine.errors import EmptyInputError
from common.audit_engine.models import CheckOutcome, VerdictStatus
from common.audit_engine.registry import CheckRegistry, registry
from common.audit_engine.runner import AuditRunner


class _ExplodingCheck(Check):
    check_id = "TEST-EXPLODES"
    check_title = "Always raises"

    def default_config(self) -> CheckConfigBase:
        return CheckConfigBase(column_candidates=["file name"])

    def run(self, ctx, cfg, column):
        raise RuntimeError("boom")


ROWS = [
    {"File Name": "RMC-ABC-ZZ-L01-M3-A-000001.rvt", "Project Units": "Metric", "Imported CAD": "x.dwg"},
    {"File Name": "RMC-XXX-ZZ-L01-M3-A-1.rvt", "Project Units": "Metric", "Imported CAD": ""},
]


def test_failing_check_does_not_stop_the_run(make_ctx):
    ctx = make_ctx(ROWS)
    report = AuditRunner([_ExplodingCheck(), QA_FILE_NAME_CONVENTION()]).run(ctx)

    failed = report.get("TEST-EXPLODES")
    assert failed.outcome == CheckOutcome.FAILED
    assert "boom" in failed.summary
    assert report.get("QA-FILE-NAME-CONVENTION").outcome == CheckOutcome.COMPLETED
    assert report.outcomes[CheckOutcome.FAILED] == 1


def test_missing_columns_are_reported_per_check(make_ctx):
    report = AuditRunner().run(make_ctx(ROWS))
    survey = report.get("QA-SURVEY-POINT")
    assert survey.outcome == CheckOutcome.MISSING_COLUMN
    assert "survey point" in survey.summary
    assert report.get("QA-PROJECT-UNITS").outcome == CheckOutcome.COMPLETED
    assert report.get("QA-NAMING-SEGMENTS") is None


def test_totals_count_every_verdict(make_ctx):
    report = AuditRunner().run(make_ctx(ROWS))
    # 1 valid + 1 invalid file name, 2 valid units, 1 imported CAD violation.
    assert report.totals[VerdictStatus.VALID] == 3
    assert report.totals[VerdictStatus.INVALID] == 2
    assert report.suite == "qaqc"


def test_check_ids_filter(make_ctx):
    report = AuditRunner().run(make_ctx(ROWS), check_ids={"QA-PROJECT-UNITS"})
    assert [r.check_id for r in report.results] == ["QA-PROJECT-UNITS"]


def test_analyze_is_idempotent_and_order_independent(rules_text):
    first = analyze(rules_text, ROWS)
    second = analyze(rules_text, list(reversed(ROWS)))
    again = analyze(rules_text, ROWS)

    def by_check(report):
        return {
            r.check_id: sorted((v.status.value, v.reasoning) for v in r.verdicts) for r in report.results
        }

    assert by_check(first) == by_check(second)
    assert [r.model_dump() for r in first.results] == [
        r.model_dump() for r in again.results
    ]


def test_analyze_segments_suite(rules_text):
    report = analyze(rules_text, [{"File Name": "RMC-ABC-ZZ-L01-M3-A"}], suite="segments")
    assert [r.check_id for r in report.results] == ["QA-NAMING-SEGMENTS"]
    assert report.results[0].passed == 1


def test_analyze_rejects_empty_inputs(rules_text):
    with pytest.raises(EmptyInputError):
        analyze("   ", ROWS)
    with pytest.raises(EmptyInputError):
        analyze(rules_text, [])


def test_registry_contains_builtin_checks_and_rejects_duplicates():
    ids = set(registry.ids())
    assert {
        "QA-FILE-NAME-CONVENTION",
        "QA-PROJECT-UNITS",
        "QA-SURVEY-POINT",
        "QA-PROJECT-BASE-POINT",
        "QA-RVT-LINK-PINNED",
        "QA-NAVISWORKS-VIEW-NAME",
        "QA-STARTING-VIEW-NAME",
        "QA-LEVELS-PINNED",
        "QA-GRIDS-PINNED",
        "QA-REVIT-LINKS-PATH",
        "QA-IMPORTED-CAD",
        "QA-WORKSET-NAME",
        "QA-VIEWS-NOT-IN-SHEETS",
        "QA-NAMING-SEGMENTS",
    } <= ids

    local = CheckRegistry()
    local.register(QA_FILE_NAME_CONVENTION)
    with pytest.raises(ValueError):
        local.register(QA_FILE_NAME_CONVENTION)
