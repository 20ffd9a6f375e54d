"""Corpus-side helpers: cleaning, tokenizing and simple keyword statistics.

Everything here is deterministic pattern matching over plain text. The corpus
is whatever an upstream extractor produced from the project standard (PDF
text, pasted rules); no file handling happens in this module.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Any, Iterable, List, Optional

from .models import UnitsStandard

# Ordinary whitespace survives cleaning even though it is category Cc.
_PRESERVED_WHITESPACE = frozenset("\t\n\r")
_STRIPPED_CATEGORIES = ("Cc", "Cf")

_TOKEN_SEPARATORS = re.compile(r"[\s,;|]+")
_BRACKETS = re.compile(r"[()\[\]{}]")
_CODE_TOKEN = re.compile(r"^[A-Z0-9_-]+$")
_EXTENSION = re.compile(r"\.[^/.]+$")
_LABEL_STRUCTURE = re.compile(r"\[([^\]]+)\](?:[-_]\[([^\]]+)\])+")

METRIC_KEYWORDS = ("metric", "millimeter", "meter")
IMPERIAL_KEYWORDS = ("imperial", "inch", "feet")


def normalize(value: Any) -> Any:
    """Remove invisible control/format characters from a string.

    Non-string values are returned unchanged so the function can be applied
    blindly to every cell of a row.
    """
    if not isinstance(value, str):
        return value
    return "".join(
        ch
        for ch in value
        if ch in _PRESERVED_WHITESPACE or unicodedata.category(ch) not in _STRIPPED_CATEGORIES
    )


def build_vocabulary(text: str, *, codes_only: bool = False) -> frozenset[str]:
    """Build the set of upper-cased tokens a rules corpus defines.

    Hyphenated tokens are inserted whole and also split into their segments
    (segments of a single character are skipped), so both ``ARCH-L01-001`` and
    ``ARCH`` / ``L01`` / ``001`` are members.

    With ``codes_only`` only tokens that already look like project codes
    (upper-case letters, digits, ``-`` and ``_``) are kept, without the
    hyphen expansion.
    """
    tokens: set[str] = set()
    for word in _TOKEN_SEPARATORS.split(text or ""):
        clean = _BRACKETS.sub("", word.strip())
        if not clean:
            continue
        if codes_only:
            if _CODE_TOKEN.match(clean):
                tokens.add(clean.upper())
            continue
        token = clean.upper()
        tokens.add(token)
        if "-" in token:
            tokens.update(part for part in token.split("-") if len(part) > 1)
    return frozenset(tokens)


def count_keywords(text: str, keywords: Iterable[str]) -> int:
    lowered = (text or "").lower()
    return sum(lowered.count(k.lower()) for k in keywords if k)


def determine_units_standard(
    text: str,
    *,
    metric_keywords: Iterable[str] = METRIC_KEYWORDS,
    imperial_keywords: Iterable[str] = IMPERIAL_KEYWORDS,
) -> UnitsStandard:
    metric = count_keywords(text, metric_keywords)
    imperial = count_keywords(text, imperial_keywords)
    # Ties go to metric.
    standard = "Metric" if metric >= imperial else "Imperial"
    return UnitsStandard(standard=standard, metric_count=metric, imperial_count=imperial)


def strip_extension(value: str) -> str:
    return _EXTENSION.sub("", value)


def detect_delimiter(sample: str) -> Optional[str]:
    if "-" in sample:
        return "-"
    if "_" in sample:
        return "_"
    return None


def split_segments(value: str, delimiter: Optional[str] = None) -> List[str]:
    """Split a name on ``delimiter`` (or the one detected from the name itself)."""
    if delimiter is None:
        delimiter = detect_delimiter(value)
    if delimiter is None:
        return [value]
    return value.split(delimiter)


def extract_segment_labels(text: str) -> List[str]:
    """Return labels from the first ``[Project]-[Originator]-...`` pattern in ``text``."""
    match = _LABEL_STRUCTURE.search(text or "")
    if match is None:
        return []
    return re.split(r"[-_]", _BRACKETS.sub("", match.group(0)))
