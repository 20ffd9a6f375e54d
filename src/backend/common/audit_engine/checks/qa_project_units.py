from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from ..check import Check
from ..config import ProjectUnitsCheckConfig
from ..context import AuditContext, identity_record
from ..dataset import cell_text
from ..models import CheckResult, CheckResultDetail, VerdictRecord, VerdictStatus
from ..registry import register_check
from ..text import determine_units_standard


def check_project_units(
    rows: Iterable[Dict[str, Any]],
    column: str,
    standard: str,
    *,
    identity_column: Optional[str] = None,
) -> List[VerdictRecord]:
    verdicts: List[VerdictRecord] = []
    for row in rows:
        value = cell_text(row.get(column)).strip()
        if not value:
            continue
        if standard.lower() in value.lower():
            verdicts.append(
                VerdictRecord(
                    original_record=identity_record(row, column, identity_column),
                    status=VerdictStatus.VALID,
                    reasoning=f"Valid: Matches the document's {standard} standard.",
                )
            )
        else:
            verdicts.append(
                VerdictRecord(
                    original_record=identity_record(row, column, identity_column),
                    status=VerdictStatus.INVALID,
                    reasoning=f"Item is wrong: Expected {standard} but found '{value}'.",
                    invalid_value=value,
                )
            )
    return verdicts


@register_check
class QA_PROJECT_UNITS(Check):
    check_id = "QA-PROJECT-UNITS"
    check_title = "Project units match the document standard"
    config_model = ProjectUnitsCheckConfig

    def run(self, ctx: AuditContext, cfg: ProjectUnitsCheckConfig, column: str) -> CheckResult:
        units = determine_units_standard(
            ctx.source_text,
            metric_keywords=cfg.metric_keywords,
            imperial_keywords=cfg.imperial_keywords,
        )
        verdicts = check_project_units(
            ctx.dataset.rows,
            column,
            units.standard,
            identity_column=ctx.identity_column,
        )
        details = [
            CheckResultDetail(
                key="units_standard",
                message=f"Document standard resolved to {units.standard}.",
                values=units.model_dump(),
            )
        ]
        return self.result(column, verdicts, details)
