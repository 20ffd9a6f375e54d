from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..check import Check
from ..config import PinnedFlagCheckConfig
from ..context import AuditContext, identity_record
from ..dataset import cell_text
from ..models import CheckResult, VerdictRecord, VerdictStatus
from ..registry import register_check


def check_pinned_flags(
    rows: Iterable[Dict[str, Any]],
    column: str,
    *,
    identity_column: Optional[str] = None,
    true_values: Sequence[str] = ("true",),
    subject: str = "RVT Link",
) -> List[VerdictRecord]:
    """Every populated flag must read as pinned.

    An empty column means the model has nothing to pin, which passes.
    """
    accepted = {v.strip().lower() for v in true_values}
    populated = [row for row in rows if cell_text(row.get(column)).strip()]
    if not populated:
        return [
            VerdictRecord(
                original_record={"Check": subject},
                status=VerdictStatus.VALID,
                reasoning="Valid: There is no link in the Model, nothing to check.",
            )
        ]

    verdicts: List[VerdictRecord] = []
    for row in populated:
        value = cell_text(row.get(column)).strip()
        if value.lower() in accepted:
            verdicts.append(
                VerdictRecord(
                    original_record=identity_record(row, column, identity_column),
                    status=VerdictStatus.VALID,
                    reasoning="Valid: The linked model is correctly pinned.",
                )
            )
        else:
            verdicts.append(
                VerdictRecord(
                    original_record=identity_record(row, column, identity_column),
                    status=VerdictStatus.INVALID,
                    reasoning="Item is wrong: Linked models must be pinned to prevent accidental movement.",
                    invalid_value=value,
                )
            )
    return verdicts


@register_check
class QA_RVT_LINK_PINNED(Check):
    check_id = "QA-RVT-LINK-PINNED"
    check_title = "Linked RVT models are pinned"
    config_model = PinnedFlagCheckConfig

    def run(self, ctx: AuditContext, cfg: PinnedFlagCheckConfig, column: str) -> CheckResult:
        verdicts = check_pinned_flags(
            ctx.dataset.rows,
            column,
            identity_column=ctx.identity_column,
            true_values=cfg.true_values,
            subject=cfg.subject,
        )
        return self.result(column, verdicts)
