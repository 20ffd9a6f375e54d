"""Deliverable manifest reconciliation (required MIDP vs. actual ACC export).

Both manifests are folded into a `FileIdentityMap` keyed by lower-cased base
name, holding a count per file format and the milestone tags seen on any of
the name's rows. `reconcile` then full-outer-joins the two maps on base name
and, within each name, on format.

Rows with a blank format are counted under the empty-format bucket ``""`` so a
required deliverable without a declared format is still compared rather than
silently dropped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .config import ReconcileConfig
from .dataset import Dataset, cell_text
from .models import ComparisonResult, ComparisonStatus, ComparisonSummary, classify_counts

logger = logging.getLogger(__name__)


@dataclass
class FileIdentity:
    display_name: str
    format_counts: Dict[str, int] = field(default_factory=dict)
    tags: set[str] = field(default_factory=set)


@dataclass
class FileIdentityMap:
    entries: Dict[str, FileIdentity] = field(default_factory=dict)
    total_rows: int = 0

    def add(self, name: str, file_format: str, tags: Iterable[str] = ()) -> None:
        key = name.lower()
        item = self.entries.get(key)
        if item is None:
            item = FileIdentity(display_name=name)
            self.entries[key] = item
        item.tags.update(tags)
        item.format_counts[file_format] = item.format_counts.get(file_format, 0) + 1
        self.total_rows += 1

    def get(self, key: str) -> Optional[FileIdentity]:
        return self.entries.get(key)

    def keys(self):
        return self.entries.keys()


def normalize_format(value) -> str:
    text = cell_text(value).strip()
    if text.startswith("."):
        text = text[1:]
    return text.lower()


def build_file_identity_map(dataset: Dataset, config: Optional[ReconcileConfig] = None) -> FileIdentityMap:
    cfg = config or ReconcileConfig()
    name_col = dataset.require_column(cfg.name_columns, dimension="deliverable name")
    format_col = dataset.require_column([cfg.format_column], dimension="file format")

    milestone_cols: Dict[str, str] = {}
    for label in cfg.milestone_labels:
        header = dataset.find_column([label], partial=True)
        if header:
            milestone_cols[label] = header
    logger.debug(
        "Manifest %r: name=%r format=%r milestones=%s",
        dataset.name,
        name_col,
        format_col,
        sorted(milestone_cols),
    )

    false_values = {v.strip().lower() for v in cfg.false_values}
    identities = FileIdentityMap()
    for row in dataset.rows:
        name = cell_text(row.get(name_col)).strip()
        if not name:
            continue
        tags = [
            label
            for label, header in milestone_cols.items()
            if cell_text(row.get(header)).strip().lower() not in false_values
        ]
        identities.add(name, normalize_format(row.get(format_col)), tags)
    return identities


def reconcile(required: FileIdentityMap, actual: FileIdentityMap) -> List[ComparisonResult]:
    """Compare required vs. actual deliverables per (base name, format).

    Emits exactly one result for every distinct pair present on either side,
    sorted by base name then format, case-insensitively.
    """
    results: List[ComparisonResult] = []
    keys = list(dict.fromkeys([*required.keys(), *actual.keys()]))
    for key in keys:
        req_item = required.get(key)
        act_item = actual.get(key)
        display = (req_item or act_item).display_name

        tags: set[str] = set()
        formats: Dict[str, None] = {}
        for item in (req_item, act_item):
            if item is None:
                continue
            tags.update(item.tags)
            for fmt in item.format_counts:
                formats.setdefault(fmt, None)

        for fmt in formats:
            required_count = req_item.format_counts.get(fmt, 0) if req_item else 0
            actual_count = act_item.format_counts.get(fmt, 0) if act_item else 0
            results.append(
                ComparisonResult(
                    base_name=display,
                    format=fmt.upper(),
                    status=classify_counts(required_count, actual_count),
                    required_count=required_count,
                    actual_count=actual_count,
                    merged_tags=sorted(tags),
                )
            )

    results.sort(key=lambda r: (r.base_name.casefold(), r.format.casefold(), r.base_name, r.format))
    return results


def summarize_comparison(results: Iterable[ComparisonResult]) -> ComparisonSummary:
    summary = ComparisonSummary()
    for res in results:
        summary.all += 1
        if res.status == ComparisonStatus.MATCHED:
            summary.matched += 1
        elif res.status == ComparisonStatus.COUNT_MISMATCH:
            summary.count_mismatch += 1
        elif res.status == ComparisonStatus.MISSING_IN_TARGET:
            summary.missing_in_target += 1
        elif res.status == ComparisonStatus.EXTRA_IN_TARGET:
            summary.extra_in_target += 1
    return summary


def filter_comparison(
    results: Iterable[ComparisonResult],
    *,
    milestone: Optional[str] = None,
    file_format: Optional[str] = None,
    status: Optional[ComparisonStatus] = None,
    untagged_only: bool = False,
) -> List[ComparisonResult]:
    out: List[ComparisonResult] = []
    for res in results:
        if untagged_only and res.merged_tags:
            continue
        if milestone is not None and milestone not in res.merged_tags:
            continue
        if file_format is not None and res.format != file_format.upper():
            continue
        if status is not None and res.status != status:
            continue
        out.append(res)
    return out


def reconcile_datasets(
    required: Dataset,
    actual: Dataset,
    config: Optional[ReconcileConfig] = None,
) -> List[ComparisonResult]:
    results = reconcile(build_file_identity_map(required, config), build_file_identity_map(actual, config))
    logger.info("Reconciled %r against %r: %d comparison(s)", required.name, actual.name, len(results))
    return results
