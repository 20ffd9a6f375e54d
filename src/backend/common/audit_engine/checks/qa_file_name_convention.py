from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Optional

from ..check import Check
from ..config import FileNameCheckConfig
from ..context import AuditContext, identity_record
from ..dataset import cell_text
from ..models import CheckResult, CheckResultDetail, VerdictRecord, VerdictStatus
from ..registry import register_check
from ..text import split_segments, strip_extension


def check_file_names(
    rows: Iterable[Dict[str, Any]],
    column: str,
    vocabulary: frozenset[str],
    *,
    identity_column: Optional[str] = None,
    sequence_digits: int = 6,
) -> List[VerdictRecord]:
    """Validate file names as ``<code>-<code>-...-<NNNNNN>[.ext]``.

    Every segment but the last must be a token of the rules vocabulary; the
    last one is the sequence number and must be exactly ``sequence_digits``
    ASCII digits.
    """
    sequence = re.compile(rf"[0-9]{{{sequence_digits}}}")
    verdicts: List[VerdictRecord] = []
    for row in rows:
        original = cell_text(row.get(column)).strip()
        if not original:
            continue
        segments = split_segments(strip_extension(original))
        last = segments[-1]
        unknown = [s for s in segments[:-1] if s.upper() not in vocabulary]

        errors: List[str] = []
        if not sequence.fullmatch(last):
            errors.append(f"The sequence segment '{last}' must be exactly {sequence_digits} digits.")
        if unknown:
            errors.append(f"Segments [{', '.join(unknown)}] are wrong (not found in project rules).")

        if errors:
            verdicts.append(
                VerdictRecord(
                    original_record=identity_record(row, column, identity_column),
                    status=VerdictStatus.INVALID,
                    reasoning=f"Invalid: {' '.join(errors)}",
                    invalid_value=original,
                )
            )
        else:
            verdicts.append(
                VerdictRecord(
                    original_record=identity_record(row, column, identity_column),
                    status=VerdictStatus.VALID,
                    reasoning="Valid: Matches all project naming rules.",
                )
            )
    return verdicts


@register_check
class QA_FILE_NAME_CONVENTION(Check):
    check_id = "QA-FILE-NAME-CONVENTION"
    check_title = "File name follows the project naming convention"
    config_model = FileNameCheckConfig

    def run(self, ctx: AuditContext, cfg: FileNameCheckConfig, column: str) -> CheckResult:
        verdicts = check_file_names(
            ctx.dataset.rows,
            column,
            ctx.vocabulary,
            identity_column=ctx.identity_column,
            sequence_digits=cfg.sequence_digits,
        )
        details = [
            CheckResultDetail(
                key="vocabulary",
                message="Tokens extracted from the rules corpus.",
                values={"token_count": len(ctx.vocabulary)},
            )
        ]
        return self.result(column, verdicts, details)
