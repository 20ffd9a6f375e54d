from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from .columns import find_column, require_column
from .errors import EmptyInputError
from .text import normalize

Row = Mapping[str, Any]


def cell_text(value: Any) -> str:
    """Render a cell the way a spreadsheet export displays it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def is_filled(value: Any) -> bool:
    return cell_text(value).strip() != ""


@dataclass(frozen=True)
class Dataset:
    """Rows of one uploaded sheet with a fixed, ordered header set.

    Built through ``from_records`` so every header and string cell has been
    through the text normalizer before any check looks at it.
    """

    headers: tuple[str, ...]
    rows: tuple[Dict[str, Any], ...]
    name: str = ""

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]], *, name: str = "") -> "Dataset":
        rows: List[Dict[str, Any]] = []
        headers: Dict[str, None] = {}
        for record in records:
            cleaned = {normalize(str(k)): normalize(v) for k, v in record.items()}
            for key in cleaned:
                headers.setdefault(key, None)
            rows.append(cleaned)
        if not rows:
            label = f" '{name}'" if name else ""
            raise EmptyInputError(f"Dataset{label} has no rows.")
        return cls(headers=tuple(headers), rows=tuple(rows), name=name)

    def __len__(self) -> int:
        return len(self.rows)

    def find_column(self, candidates: Sequence[str], *, partial: bool = False) -> Optional[str]:
        return find_column(self.headers, candidates, partial=partial)

    def require_column(self, candidates: Sequence[str], *, partial: bool = False, dimension: str = "") -> str:
        return require_column(self.headers, candidates, partial=partial, dimension=dimension)

    def filled_rows(self, column: str) -> List[Dict[str, Any]]:
        return [row for row in self.rows if is_filled(row.get(column))]
