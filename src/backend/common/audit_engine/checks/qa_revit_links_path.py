from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from ..check import Check
from ..config import PathConventionCheckConfig
from ..context import AuditContext, identity_record
from ..dataset import cell_text
from ..models import CheckResult, VerdictRecord, VerdictStatus
from ..registry import register_check


def check_path_marker(
    rows: Iterable[Dict[str, Any]],
    column: str,
    marker: str,
    *,
    identity_column: Optional[str] = None,
) -> List[VerdictRecord]:
    verdicts: List[VerdictRecord] = []
    for row in rows:
        path = cell_text(row.get(column))
        if not path.strip():
            continue
        if marker in path:
            verdicts.append(
                VerdictRecord(
                    original_record=identity_record(row, column, identity_column),
                    status=VerdictStatus.VALID,
                    reasoning=f"Valid: Path utilizes {marker} cloud storage.",
                )
            )
        else:
            verdicts.append(
                VerdictRecord(
                    original_record=identity_record(row, column, identity_column),
                    status=VerdictStatus.INVALID,
                    reasoning=f"Item is wrong: Path '{path}' must use {marker}.",
                    invalid_value=path,
                )
            )
    return verdicts


@register_check
class QA_REVIT_LINKS_PATH(Check):
    check_id = "QA-REVIT-LINKS-PATH"
    check_title = "Revit links are loaded from the common data environment"
    config_model = PathConventionCheckConfig

    def run(self, ctx: AuditContext, cfg: PathConventionCheckConfig, column: str) -> CheckResult:
        verdicts = check_path_marker(
            ctx.dataset.rows,
            column,
            cfg.required_marker,
            identity_column=ctx.identity_column,
        )
        return self.result(column, verdicts)
