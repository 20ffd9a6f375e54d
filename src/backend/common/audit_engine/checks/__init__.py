from .qa_file_name_convention import QA_FILE_NAME_CONVENTION
from .qa_project_units import QA_PROJECT_UNITS
from .qa_coordinates import QA_PROJECT_BASE_POINT, QA_SURVEY_POINT
from .qa_rvt_link_pinned import QA_RVT_LINK_PINNED
from .qa_navisworks_view_name import QA_NAVISWORKS_VIEW_NAME
from .qa_defined_in_rules import QA_STARTING_VIEW_NAME, QA_WORKSET_NAME
from .qa_levels_grids_pinned import QA_GRIDS_PINNED, QA_LEVELS_PINNED
from .qa_revit_links_path import QA_REVIT_LINKS_PATH
from .qa_presence_violations import QA_IMPORTED_CAD, QA_VIEWS_NOT_IN_SHEETS
from .qa_naming_segments import QA_NAMING_SEGMENTS

__all__ = [
    "QA_FILE_NAME_CONVENTION",
    "QA_PROJECT_UNITS",
    "QA_SURVEY_POINT",
    "QA_PROJECT_BASE_POINT",
    "QA_RVT_LINK_PINNED",
    "QA_NAVISWORKS_VIEW_NAME",
    "QA_STARTING_VIEW_NAME",
    "QA_LEVELS_PINNED",
    "QA_GRIDS_PINNED",
    "QA_REVIT_LINKS_PATH",
    "QA_IMPORTED_CAD",
    "QA_WORKSET_NAME",
    "QA_VIEWS_NOT_IN_SHEETS",
    "QA_NAMING_SEGMENTS",
]
