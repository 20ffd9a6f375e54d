from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..check import Check
from ..config import NameSegmentsCheckConfig
from ..context import AuditContext, identity_record
from ..dataset import cell_text
from ..models import CheckResult, CheckResultDetail, VerdictRecord, VerdictStatus
from ..registry import register_check
from ..text import build_vocabulary, detect_delimiter, extract_segment_labels


def check_name_segments(
    rows: Iterable[Dict[str, Any]],
    column: str,
    vocabulary: frozenset[str],
    *,
    labels: Sequence[str] = (),
    identity_column: Optional[str] = None,
) -> Tuple[List[VerdictRecord], List[CheckResultDetail]]:
    """Validate every delimiter-separated segment of each file name.

    The delimiter is detected once, from the first row. When none can be
    detected the whole name is treated as a single segment. Segment positions
    are named after ``labels`` where the rules define a naming structure.
    """
    rows = list(rows)
    first = cell_text(rows[0].get(column)).strip() if rows else ""
    delimiter = detect_delimiter(first)

    verdicts: List[VerdictRecord] = []
    details: List[CheckResultDetail] = []
    for row in rows:
        full_name = cell_text(row.get(column)).strip()
        if not full_name:
            continue
        segments = full_name.split(delimiter) if delimiter else [full_name]
        issues: List[str] = []
        for index, segment in enumerate(segments):
            segment_name = labels[index] if index < len(labels) else f"Segment {index + 1}"
            is_valid = segment.upper() in vocabulary
            if not is_valid:
                issues.append(f"{segment_name} ({segment})")
            details.append(
                CheckResultDetail(
                    key=full_name,
                    message="Matched in PDF Rules" if is_valid else "Value not found in PDF tables/rules",
                    values={
                        "segment_index": index,
                        "segment_name": segment_name,
                        "segment_value": segment,
                        "status": "Correct" if is_valid else "Incorrect",
                    },
                )
            )

        if issues:
            verdicts.append(
                VerdictRecord(
                    original_record=identity_record(row, column, identity_column),
                    status=VerdictStatus.INVALID,
                    reasoning=f"Invalid: {', '.join(issues)}",
                    invalid_value=full_name,
                )
            )
        else:
            verdicts.append(
                VerdictRecord(
                    original_record=identity_record(row, column, identity_column),
                    status=VerdictStatus.VALID,
                    reasoning="All segments matched rules.",
                )
            )
    return verdicts, details


@register_check
class QA_NAMING_SEGMENTS(Check):
    check_id = "QA-NAMING-SEGMENTS"
    check_title = "Each file name segment is a code defined in the rules"
    suite = "segments"
    config_model = NameSegmentsCheckConfig

    def run(self, ctx: AuditContext, cfg: NameSegmentsCheckConfig, column: str) -> CheckResult:
        verdicts, details = check_name_segments(
            ctx.dataset.rows,
            column,
            build_vocabulary(ctx.source_text, codes_only=True),
            labels=extract_segment_labels(ctx.source_text),
            identity_column=ctx.identity_column,
        )
        return self.result(column, verdicts, details)
