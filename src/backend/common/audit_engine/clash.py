"""Clash-detective export aggregation.

Each row of the export is one clash test. Tests are totalled per status and
grouped by the unordered pair of disciplines taking part, where a discipline
is the code in front of the first ``-`` of a selection set name
(``ARC-Walls`` -> ``ARC``).
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Optional

from .config import ClashConfig
from .dataset import Dataset, cell_text
from .models import CLASH_STATUSES, ClashReport, ClashTest, empty_status_counts

logger = logging.getLogger(__name__)


def parse_count(value: Any) -> int:
    """Read a clash count from a cell; anything unreadable counts as zero."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return int(value) if math.isfinite(value) else 0
    text = cell_text(value).strip().replace(",", "")
    if not text:
        return 0
    try:
        number = float(text)
    except ValueError:
        return 0
    return int(number) if math.isfinite(number) else 0


def discipline_code(selection: Any, unknown: str = "UNKNOWN") -> str:
    code = cell_text(selection).split("-", 1)[0].strip().upper()
    return code or unknown


def discipline_pair(code_a: str, code_b: str) -> str:
    return " - ".join(sorted((code_a, code_b)))


def aggregate_clashes(dataset: Dataset, config: Optional[ClashConfig] = None) -> ClashReport:
    cfg = config or ClashConfig()
    name_col = dataset.require_column([cfg.name_column], dimension="clash test name")
    status_col = dataset.require_column([cfg.status_column], dimension="clash status")
    clashes_col = dataset.require_column([cfg.clashes_column], dimension="clash count")
    sel_a_col = dataset.find_column([cfg.selection_a_column])
    sel_b_col = dataset.find_column([cfg.selection_b_column])
    status_cols: Dict[str, Optional[str]] = {s: dataset.find_column([s]) for s in CLASH_STATUSES}

    tests: List[ClashTest] = []
    for row in dataset.rows:
        name = cell_text(row.get(name_col)).strip()
        if not name:
            continue
        status = cell_text(row.get(status_col)).strip() or cfg.default_status
        clashes = parse_count(row.get(clashes_col))

        counts = empty_status_counts()
        for label, header in status_cols.items():
            if header is not None:
                counts[label] = parse_count(row.get(header))
            elif status.lower() == label.lower():
                counts[label] = clashes

        selection_a = cell_text(row.get(sel_a_col)).strip() if sel_a_col else ""
        selection_b = cell_text(row.get(sel_b_col)).strip() if sel_b_col else ""
        code_a = discipline_code(selection_a, cfg.unknown_discipline)
        code_b = discipline_code(selection_b, cfg.unknown_discipline)
        tests.append(
            ClashTest(
                name=name,
                status=status,
                clashes=clashes,
                status_counts=counts,
                selection_a=selection_a,
                selection_b=selection_b,
                discipline_a=code_a,
                discipline_b=code_b,
                discipline_pair=discipline_pair(code_a, code_b),
            )
        )

    report = ClashReport.from_tests(tests)
    logger.info(
        "Aggregated %d clash test(s) from %r: %d clash(es) over %d discipline pair(s)",
        len(report.tests),
        dataset.name,
        report.total_clashes,
        len(report.discipline_pairs),
    )
    return report


def filter_clashes(
    report: ClashReport,
    discipline_a: Optional[str] = None,
    discipline_b: Optional[str] = None,
) -> ClashReport:
    """Re-aggregate only the tests whose selection A / B disciplines match.

    ``None`` leaves that side unfiltered. The sides are not interchangeable.
    """
    tests = [
        t
        for t in report.tests
        if (discipline_a is None or t.discipline_a == discipline_a)
        and (discipline_b is None or t.discipline_b == discipline_b)
    ]
    return ClashReport.from_tests(tests)


def top_tests(report: ClashReport, by: str = "Active", limit: int = 10) -> List[ClashTest]:
    """Tests with the highest count for status ``by`` (or ``total``)."""
    if by.lower() == "total":
        key = lambda t: t.clashes  # noqa: E731
    else:
        label = next((s for s in CLASH_STATUSES if s.lower() == by.lower()), None)
        if label is None:
            raise ValueError(f"Unknown clash status {by!r}; expected 'total' or one of {', '.join(CLASH_STATUSES)}.")
        key = lambda t: t.status_counts.get(label, 0)  # noqa: E731
    ranked = sorted(report.tests, key=lambda t: (-key(t), t.name))
    return [t for t in ranked if key(t) > 0][:limit]
