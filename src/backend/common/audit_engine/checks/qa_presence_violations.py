from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from ..check import Check
from ..config import CheckConfigBase
from ..context import AuditContext, identity_record
from ..dataset import cell_text
from ..models import CheckResult, VerdictRecord, VerdictStatus
from ..registry import register_check


def flag_present_rows(
    rows: Iterable[Dict[str, Any]],
    column: str,
    reasoning: str,
    *,
    identity_column: Optional[str] = None,
) -> List[VerdictRecord]:
    """Every populated row is a violation; the value itself is not inspected."""
    return [
        VerdictRecord(
            original_record=identity_record(row, column, identity_column),
            status=VerdictStatus.INVALID,
            reasoning=reasoning,
        )
        for row in rows
        if cell_text(row.get(column)).strip()
    ]


class _PresenceViolationCheck(Check):
    column_aliases: List[str] = []
    violation = ""

    def default_config(self) -> CheckConfigBase:
        return CheckConfigBase(column_candidates=list(self.column_aliases))

    def run(self, ctx: AuditContext, cfg: CheckConfigBase, column: str) -> CheckResult:
        verdicts = flag_present_rows(
            ctx.dataset.rows,
            column,
            self.violation,
            identity_column=ctx.identity_column,
        )
        result = self.result(column, verdicts)
        if verdicts:
            result.summary = f"{len(verdicts)} violation(s) found in '{column}'."
        return result


@register_check
class QA_IMPORTED_CAD(_PresenceViolationCheck):
    check_id = "QA-IMPORTED-CAD"
    check_title = "No CAD files are imported into the model"
    column_aliases = ["imported cad"]
    violation = "Item is wrong: Imported CAD file found. CAD must be linked."


@register_check
class QA_VIEWS_NOT_IN_SHEETS(_PresenceViolationCheck):
    check_id = "QA-VIEWS-NOT-IN-SHEETS"
    check_title = "Every view is placed on a sheet"
    column_aliases = ["views not in sheets", "views not in sheet"]
    violation = "Item is wrong: This view is not placed on any drawing sheet."
