from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from ..check import Check
from ..config import CheckConfigBase
from ..context import AuditContext, identity_record
from ..dataset import cell_text
from ..models import CheckResult, VerdictRecord, VerdictStatus
from ..registry import register_check


def check_defined_in_text(
    rows: Iterable[Dict[str, Any]],
    column: str,
    source_text: str,
    *,
    identity_column: Optional[str] = None,
    subject: str = "Value",
) -> List[VerdictRecord]:
    haystack = source_text.lower()
    verdicts: List[VerdictRecord] = []
    for row in rows:
        value = cell_text(row.get(column))
        if not value.strip():
            continue
        if value.lower() in haystack:
            verdicts.append(
                VerdictRecord(
                    original_record=identity_record(row, column, identity_column),
                    status=VerdictStatus.VALID,
                    reasoning=f"Valid: {subject} name found in project standard.",
                )
            )
        else:
            verdicts.append(
                VerdictRecord(
                    original_record=identity_record(row, column, identity_column),
                    status=VerdictStatus.INVALID,
                    reasoning=f"Item not found: {subject} '{value}' is not defined in the project standard.",
                    invalid_value=value,
                )
            )
    return verdicts


class _DefinedInRulesCheck(Check):
    column_aliases: List[str] = []
    subject = "Value"

    def default_config(self) -> CheckConfigBase:
        return CheckConfigBase(column_candidates=list(self.column_aliases), partial_match=True)

    def run(self, ctx: AuditContext, cfg: CheckConfigBase, column: str) -> CheckResult:
        verdicts = check_defined_in_text(
            ctx.dataset.rows,
            column,
            ctx.source_text,
            identity_column=ctx.identity_column,
            subject=self.subject,
        )
        return self.result(column, verdicts)


@register_check
class QA_STARTING_VIEW_NAME(_DefinedInRulesCheck):
    check_id = "QA-STARTING-VIEW-NAME"
    check_title = "Starting view is defined in the project standard"
    column_aliases = ["starting view"]
    subject = "Starting view"


@register_check
class QA_WORKSET_NAME(_DefinedInRulesCheck):
    check_id = "QA-WORKSET-NAME"
    check_title = "Category worksets are authorized by the rules"
    column_aliases = ["workset name"]
    subject = "Workset"
