from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from ..check import Check
from ..config import KeywordCheckConfig
from ..context import AuditContext, identity_record
from ..dataset import cell_text
from ..models import CheckResult, VerdictRecord, VerdictStatus
from ..registry import register_check


def check_keyword_present(
    rows: Iterable[Dict[str, Any]],
    column: str,
    keyword: str,
    *,
    identity_column: Optional[str] = None,
    subject: str = "Navisworks View",
) -> List[VerdictRecord]:
    """Every populated value must contain ``keyword`` (case-insensitive).

    Unlike pinned links, a model without any such view fails: the view is
    mandatory.
    """
    populated = [row for row in rows if cell_text(row.get(column)).strip()]
    if not populated:
        return [
            VerdictRecord(
                original_record={"Check": subject},
                status=VerdictStatus.INVALID,
                reasoning=f"Item not found: No {subject} found in the Model.",
            )
        ]

    needle = keyword.lower()
    verdicts: List[VerdictRecord] = []
    for row in populated:
        value = cell_text(row.get(column))
        if needle in value.lower():
            verdicts.append(
                VerdictRecord(
                    original_record=identity_record(row, column, identity_column),
                    status=VerdictStatus.VALID,
                    reasoning="Valid: View name includes the mandatory keyword.",
                )
            )
        else:
            verdicts.append(
                VerdictRecord(
                    original_record=identity_record(row, column, identity_column),
                    status=VerdictStatus.INVALID,
                    reasoning=f"Item is wrong: View name must include '{keyword}' keyword.",
                    invalid_value=value,
                )
            )
    return verdicts


@register_check
class QA_NAVISWORKS_VIEW_NAME(Check):
    check_id = "QA-NAVISWORKS-VIEW-NAME"
    check_title = "Navisworks export view is present and named"
    config_model = KeywordCheckConfig

    def run(self, ctx: AuditContext, cfg: KeywordCheckConfig, column: str) -> CheckResult:
        verdicts = check_keyword_present(
            ctx.dataset.rows,
            column,
            cfg.required_keyword,
            identity_column=ctx.identity_column,
            subject=cfg.subject,
        )
        return self.result(column, verdicts)
