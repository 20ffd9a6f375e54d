from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

import yaml
from pydantic import BaseModel, Field

from .text import IMPERIAL_KEYWORDS, METRIC_KEYWORDS

T = TypeVar("T", bound=BaseModel)

MIDP_MILESTONES = [
    "50% CONCEPT DESIGN",
    "100% CONCEPT DESIGN",
    "50% SCHEMATIC DESIGN",
    "100% SCHEMATIC DESIGN",
]


class CheckConfigBase(BaseModel):
    enabled: bool = True
    # Header aliases tried in order by the column locator.
    column_candidates: List[str] = Field(default_factory=list)
    # Allow "all significant words contained" header matches after exact matching fails.
    partial_match: bool = False


class FileNameCheckConfig(CheckConfigBase):
    column_candidates: List[str] = Field(default_factory=lambda: ["file name", "filename", "model name"])
    sequence_digits: int = Field(default=6, ge=1)


class ProjectUnitsCheckConfig(CheckConfigBase):
    column_candidates: List[str] = Field(default_factory=lambda: ["project units"])
    metric_keywords: List[str] = Field(default_factory=lambda: list(METRIC_KEYWORDS))
    imperial_keywords: List[str] = Field(default_factory=lambda: list(IMPERIAL_KEYWORDS))


class PinnedFlagCheckConfig(CheckConfigBase):
    column_candidates: List[str] = Field(default_factory=lambda: ["rvt link is pinned"])
    true_values: List[str] = Field(default_factory=lambda: ["true"])
    subject: str = "RVT Link"


class KeywordCheckConfig(CheckConfigBase):
    column_candidates: List[str] = Field(default_factory=lambda: ["navisworks view name"])
    required_keyword: str = "navisworks"
    subject: str = "Navisworks View"


class PathConventionCheckConfig(CheckConfigBase):
    column_candidates: List[str] = Field(default_factory=lambda: ["revit links path"])
    required_marker: str = "ACCDocs"


class CategoryPinnedCheckConfig(CheckConfigBase):
    column_candidates: List[str] = Field(default_factory=lambda: ["levels-grids / element is pinned"])
    pinned_values: List[str] = Field(default_factory=lambda: ["true", "yes"])


class NameSegmentsCheckConfig(CheckConfigBase):
    column_candidates: List[str] = Field(default_factory=lambda: ["file name", "filename"])


class ReconcileConfig(BaseModel):
    name_columns: List[str] = Field(default_factory=lambda: ["Model Name", "Drawing Name", "Name", "File Name"])
    format_column: str = "Format"
    milestone_labels: List[str] = Field(default_factory=lambda: list(MIDP_MILESTONES))
    # Cell values that mean "milestone does not apply" (compared trimmed, lower-case).
    false_values: List[str] = Field(default_factory=lambda: ["no", "false", "n/a", "-", "0", "nan", ""])


class ParameterConfig(BaseModel):
    excluded_columns: List[str] = Field(
        default_factory=lambda: ["category name", "element id", "source file", "file name"]
    )
    source_file_columns: List[str] = Field(default_factory=lambda: ["source file", "file name"])
    required_parameter_column: str = "loin parameter"


class ClashConfig(BaseModel):
    name_column: str = "Name"
    status_column: str = "Status"
    clashes_column: str = "Clashes"
    selection_a_column: str = "Selection A"
    selection_b_column: str = "Selection B"
    default_status: str = "Active"
    unknown_discipline: str = "UNKNOWN"


class WeeklyConfig(BaseModel):
    path_column: str = "Folder name and path"
    name_column: str = "Name"
    updated_column: str = "Last Updated"
    # datetime.weekday() numbering: Monday=0 ... Friday=4.
    anchor_weekday: int = Field(default=4, ge=0, le=6)
    building_segment: int = 2
    deliverable_segment: int = 3


class AuditConfig(BaseModel):
    """Project-specific configuration for every audit.

    Checks pull their typed config via `get_check_config`; the standalone
    analyzers read their own sections.
    """

    identity_columns: List[str] = Field(default_factory=lambda: ["file name", "filename", "model name"])
    checks: Dict[str, Dict[str, Any]] = Field(default_factory=dict)

    reconcile: ReconcileConfig = Field(default_factory=ReconcileConfig)
    parameters: ParameterConfig = Field(default_factory=ParameterConfig)
    clash: ClashConfig = Field(default_factory=ClashConfig)
    weekly: WeeklyConfig = Field(default_factory=WeeklyConfig)

    def get_check_config(
        self,
        check_id: str,
        model: Type[T],
        default: Optional[T] = None,
    ) -> T:
        if check_id not in self.checks:
            if default is not None:
                return default
            return model()  # type: ignore[call-arg]
        raw = dict(self.checks.get(check_id) or {})
        if default is not None:
            # Overrides are layered on top of the check's own defaults.
            return model.model_validate({**default.model_dump(), **raw})
        return model.model_validate(raw)


def load_audit_config(path: Union[str, Path]) -> AuditConfig:
    """Load an `AuditConfig` from a YAML (or JSON) file."""
    raw = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Audit config {path} must contain a mapping at the top level.")
    return AuditConfig.model_validate(raw)
