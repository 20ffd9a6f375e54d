"""Deterministic audit engine for BIM/CAD project deliverables.

Rows exported from models, manifests and clash reports are checked against
a project rules corpus (plain text) with pattern matching and set logic only.
No file parsing, network access or document extraction lives here.
"""

from .config import AuditConfig, load_audit_config
from .context import AuditContext
from .dataset import Dataset
from .errors import AuditEngineError, EmptyInputError, MissingColumnError
from .models import (
    AuditRunReport,
    CheckOutcome,
    CheckResult,
    ComparisonResult,
    ComparisonStatus,
    VerdictRecord,
    VerdictStatus,
)
from .pipeline import analyze
from .runner import AuditRunner
from .text import build_vocabulary, normalize

# Import built-in checks so they self-register with the global registry.
from . import checks as _builtin_checks  # noqa: F401
