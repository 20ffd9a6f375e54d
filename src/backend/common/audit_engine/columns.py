from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence

from .errors import MissingColumnError

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_NON_WORD = re.compile(r"[^a-z0-9\s]")


def normalize_header(value: str) -> str:
    return _NON_ALNUM.sub("", str(value).lower())


def significant_words(value: str) -> List[str]:
    return [w for w in _NON_WORD.sub("", str(value).lower()).split() if len(w) > 1]


def find_column(
    headers: Sequence[str],
    candidates: Sequence[str],
    *,
    partial: bool = False,
) -> Optional[str]:
    """Locate the header to use for one of ``candidates``.

    Candidates are tried in priority order. Each is first compared exactly
    against every header once both sides are lower-cased and stripped of
    non-alphanumerics. With ``partial`` a candidate may also match a header
    that contains all of its significant words (e.g. ``starting view`` ->
    ``Starting View Name``).
    """
    for candidate in candidates:
        wanted = normalize_header(candidate)
        if not wanted:
            continue
        for header in headers:
            if normalize_header(header) == wanted:
                return header
        if partial:
            words = significant_words(candidate)
            if not words:
                continue
            for header in headers:
                lowered = str(header).lower()
                if all(w in lowered for w in words):
                    logger.debug("Column %r matched candidate %r by word containment", header, candidate)
                    return header
    return None


def require_column(
    headers: Sequence[str],
    candidates: Sequence[str],
    *,
    partial: bool = False,
    dimension: str = "",
) -> str:
    column = find_column(headers, candidates, partial=partial)
    if column is None:
        raise MissingColumnError(candidates, headers, dimension=dimension)
    return column
