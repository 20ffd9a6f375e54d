from __future__ import annotations

from typing import Iterable, Sequence


class AuditEngineError(ValueError):
    pass


class MissingColumnError(AuditEngineError):
    """A required column could not be located among the dataset headers."""

    def __init__(self, candidates: Sequence[str], headers: Iterable[str] = (), *, dimension: str = ""):
        self.candidates = list(candidates)
        self.headers = list(headers)
        self.dimension = dimension
        label = f" for {dimension}" if dimension else ""
        super().__init__(
            f"Required column{label} not found. Expected one of: {', '.join(self.candidates)}."
        )


class EmptyInputError(AuditEngineError):
    pass
