from __future__ import annotations

from typing import Any, Dict, Iterable, List, Sequence

from ..check import Check
from ..config import CategoryPinnedCheckConfig
from ..context import AuditContext
from ..dataset import cell_text
from ..models import CheckResult, VerdictRecord, VerdictStatus
from ..registry import register_check


def check_category_pinned(
    rows: Iterable[Dict[str, Any]],
    column: str,
    category: str,
    *,
    pinned_values: Sequence[str] = ("true", "yes"),
    excluded_categories: Sequence[str] = (),
) -> List[VerdictRecord]:
    """Evaluate ``<category>/<pinned flag>`` cells for one element category.

    Cells without a ``/`` carry no flag and are ignored, as are cells whose
    category text does not mention ``category`` (or mentions one of
    ``excluded_categories``, which another check claims first).
    """
    accepted = {v.strip().lower() for v in pinned_values}
    wanted = category.lower()
    verdicts: List[VerdictRecord] = []
    for row in rows:
        value = cell_text(row.get(column)).strip()
        if "/" not in value:
            continue
        parts = [p.strip().lower() for p in value.split("/")]
        cat, flag = parts[0], parts[1]
        if wanted not in cat or any(x in cat for x in excluded_categories):
            continue
        if flag in accepted:
            verdicts.append(
                VerdictRecord(
                    original_record={column: value},
                    status=VerdictStatus.VALID,
                    reasoning=f"Valid: {cat} is pinned.",
                )
            )
        else:
            verdicts.append(
                VerdictRecord(
                    original_record={column: value},
                    status=VerdictStatus.INVALID,
                    reasoning=f"Item is wrong: {cat} must be pinned.",
                    invalid_value=value,
                )
            )
    return verdicts


class _CategoryPinnedCheck(Check):
    config_model = CategoryPinnedCheckConfig
    category = ""
    excluded_categories: tuple[str, ...] = ()

    def run(self, ctx: AuditContext, cfg: CategoryPinnedCheckConfig, column: str) -> CheckResult:
        verdicts = check_category_pinned(
            ctx.dataset.rows,
            column,
            self.category,
            pinned_values=cfg.pinned_values,
            excluded_categories=self.excluded_categories,
        )
        return self.result(column, verdicts)


@register_check
class QA_LEVELS_PINNED(_CategoryPinnedCheck):
    check_id = "QA-LEVELS-PINNED"
    check_title = "Levels are pinned"
    category = "level"


@register_check
class QA_GRIDS_PINNED(_CategoryPinnedCheck):
    check_id = "QA-GRIDS-PINNED"
    check_title = "Grids are pinned"
    category = "grid"
    excluded_categories = ("level",)
