from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from ..check import Check
from ..config import CheckConfigBase
from ..context import AuditContext, identity_record
from ..dataset import cell_text
from ..models import CheckResult, VerdictRecord, VerdictStatus
from ..registry import register_check


def check_coordinates_in_text(
    rows: Iterable[Dict[str, Any]],
    column: str,
    source_text: str,
    *,
    identity_column: Optional[str] = None,
) -> List[VerdictRecord]:
    """A coordinate value is valid when it appears verbatim in the rules corpus."""
    verdicts: List[VerdictRecord] = []
    for row in rows:
        value = cell_text(row.get(column))
        if not value.strip():
            continue
        if value in source_text:
            verdicts.append(
                VerdictRecord(
                    original_record=identity_record(row, column, identity_column),
                    status=VerdictStatus.VALID,
                    reasoning="Valid: Coordinates found in source document.",
                )
            )
        else:
            verdicts.append(
                VerdictRecord(
                    original_record=identity_record(row, column, identity_column),
                    status=VerdictStatus.INVALID,
                    reasoning=f"Item not found: Coordinates '{value}' were not identified in the PDF rules.",
                    invalid_value=value,
                )
            )
    return verdicts


class _CoordinateCheck(Check):
    column_aliases: List[str] = []

    def default_config(self) -> CheckConfigBase:
        return CheckConfigBase(column_candidates=list(self.column_aliases))

    def run(self, ctx: AuditContext, cfg: CheckConfigBase, column: str) -> CheckResult:
        verdicts = check_coordinates_in_text(
            ctx.dataset.rows,
            column,
            ctx.source_text,
            identity_column=ctx.identity_column,
        )
        return self.result(column, verdicts)


@register_check
class QA_SURVEY_POINT(_CoordinateCheck):
    check_id = "QA-SURVEY-POINT"
    check_title = "Survey point matches the coordinates in the rules"
    column_aliases = ["survey point", "sp"]


@register_check
class QA_PROJECT_BASE_POINT(_CoordinateCheck):
    check_id = "QA-PROJECT-BASE-POINT"
    check_title = "Project base point matches the coordinates in the rules"
    column_aliases = ["project base point", "pbp"]
