from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from .config import ParameterConfig
from .dataset import Dataset, cell_text, is_filled
from .models import ComplianceResult, ParameterReport, ParameterSummary, SourceFileSummary

logger = logging.getLogger(__name__)


def _sorted_names(values: Iterable[str]) -> List[str]:
    return sorted(values, key=lambda s: (s.casefold(), s))


def analyzable_columns(headers: Sequence[str], excluded: Sequence[str]) -> List[str]:
    skip = {e.lower() for e in excluded}
    return [h for h in headers if h.lower() not in skip]


def parameter_completion(dataset: Dataset, config: Optional[ParameterConfig] = None) -> List[ParameterSummary]:
    cfg = config or ParameterConfig()
    total = len(dataset.rows)
    summaries: List[ParameterSummary] = []
    for header in analyzable_columns(dataset.headers, cfg.excluded_columns):
        filled = sum(1 for row in dataset.rows if is_filled(row.get(header)))
        summaries.append(
            ParameterSummary(
                parameter_name=header,
                filled_count=filled,
                empty_count=total - filled,
                percentage_filled=(filled / total * 100) if total else 0.0,
            )
        )
    return summaries


def source_file_completion(dataset: Dataset, config: Optional[ParameterConfig] = None) -> List[SourceFileSummary]:
    """Cell fill ratios of the analyzable columns, grouped by source model file."""
    cfg = config or ParameterConfig()
    source_col = dataset.require_column(cfg.source_file_columns, dimension="source file")
    headers = analyzable_columns(dataset.headers, cfg.excluded_columns)

    groups: Dict[str, List[dict]] = {}
    for row in dataset.rows:
        source = cell_text(row.get(source_col)).strip()
        if source:
            groups.setdefault(source, []).append(row)

    summaries: List[SourceFileSummary] = []
    for source, rows in groups.items():
        filled = sum(1 for row in rows for h in headers if is_filled(row.get(h)))
        empty = len(rows) * len(headers) - filled
        cells = filled + empty
        summaries.append(
            SourceFileSummary(
                source_file=source,
                total_elements=len(rows),
                filled_cells=filled,
                empty_cells=empty,
                filled_percentage=(filled / cells * 100) if cells else 0.0,
                empty_percentage=(empty / cells * 100) if cells else 0.0,
            )
        )
    return summaries


def required_parameters(template: Dataset, config: Optional[ParameterConfig] = None) -> List[str]:
    """Parameters a LOIN/standard template requires.

    If the template has a parameter-list column the distinct values listed under
    it are used; otherwise the template's own headers are the parameters.
    """
    cfg = config or ParameterConfig()
    list_col = next(
        (h for h in template.headers if h.strip().lower() == cfg.required_parameter_column.strip().lower()),
        None,
    )
    if list_col is None:
        return analyzable_columns(template.headers, cfg.excluded_columns)

    params: Dict[str, None] = {}
    for row in template.rows:
        value = cell_text(row.get(list_col)).strip()
        if value:
            params.setdefault(value, None)
    return list(params)


def check_compliance(required: Sequence[str], columns: Sequence[str]) -> ComplianceResult:
    """Set comparison of required parameters vs. dataset columns.

    Names are compared after trimming only, so the comparison is case-sensitive.
    """
    column_set = {c.strip() for c in columns}
    required_set = {r.strip() for r in required}

    matched = [p for p in required if p.strip() in column_set]
    missing = [p for p in required if p.strip() not in column_set]
    extra = [c for c in columns if c.strip() not in required_set]

    if required:
        score = len(matched) / len(required) * 100
    else:
        # Nothing required: matches cannot exist, so this is 0 in practice.
        score = 100.0 if matched else 0.0

    return ComplianceResult(
        matched=_sorted_names(matched),
        missing=_sorted_names(missing),
        extra=_sorted_names(extra),
        compliance_score=score,
    )


def analyze_parameters(
    dataset: Dataset,
    template: Optional[Dataset] = None,
    config: Optional[ParameterConfig] = None,
) -> ParameterReport:
    cfg = config or ParameterConfig()
    source_files = source_file_completion(dataset, cfg)
    compliance = None
    if template is not None:
        compliance = check_compliance(
            required_parameters(template, cfg),
            analyzable_columns(dataset.headers, cfg.excluded_columns),
        )
        logger.info("Parameter compliance for %r: %.2f%%", dataset.name, compliance.compliance_score)
    return ParameterReport(
        total_elements=len(dataset.rows),
        parameters=parameter_completion(dataset, cfg),
        source_files=source_files,
        compliance=compliance,
    )
