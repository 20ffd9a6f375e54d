from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .config import AuditConfig
from .dataset import Dataset
from .errors import EmptyInputError
from .text import build_vocabulary, normalize


@dataclass(frozen=True)
class AuditContext:
    source_text: str
    dataset: Dataset
    vocabulary: frozenset[str] = frozenset()
    config: AuditConfig = field(default_factory=AuditConfig)

    @classmethod
    def build(
        cls,
        source_text: str,
        dataset: Dataset,
        config: Optional[AuditConfig] = None,
    ) -> "AuditContext":
        text = normalize(source_text or "")
        if not text.strip():
            raise EmptyInputError("Rules corpus is empty; nothing to check the dataset against.")
        return cls(
            source_text=text,
            dataset=dataset,
            vocabulary=build_vocabulary(text),
            config=config or AuditConfig(),
        )

    @property
    def identity_column(self) -> Optional[str]:
        return self.dataset.find_column(self.config.identity_columns)


def identity_record(row: Dict[str, Any], column: str, identity_column: Optional[str] = None) -> Dict[str, Any]:
    """Reduce ``row`` to its identifying column plus the checked column."""
    record: Dict[str, Any] = {}
    if identity_column:
        record[identity_column] = row.get(identity_column)
    record[column] = row.get(column)
    return record
