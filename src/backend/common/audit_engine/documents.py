from __future__ import annotations

import re
from collections import Counter
from difflib import SequenceMatcher
from typing import List

from .models import DiffChunk, DocumentProfile, KeywordCount
from .text import normalize

NOT_FOUND = "Not Found"

_PROJECT_NAME = re.compile(r"(?:Project Name|Project|Title)[:\s]+([^\n\r]+)", re.IGNORECASE)
_PROJECT_NUMBER = re.compile(r"(?:Project Number|Project No|Ref)[:\s]+([A-Z0-9-]+)", re.IGNORECASE)
_DATE = re.compile(
    r"(?:Date|Dated)[:\s]+(\d{1,2}[/\-\s]\d{1,2}[/\-\s]\d{2,4}|[A-Z][a-z]+ \d{1,2},? \d{4})",
    re.IGNORECASE,
)
_REVISION = re.compile(r"(?:Revision|Rev)[:\s]+([A-Z0-9]+)", re.IGNORECASE)
_NAMING_CODE = re.compile(r"\b[A-Z0-9]{2,6}(?:-[A-Z0-9]{2,6}){2,}\b")
_NON_LETTER = re.compile(r"[^a-z]")
_DIFF_TOKEN = re.compile(r"\s+|\w+|[^\w\s]")

STOP_WORDS = frozenset(
    {"the", "and", "for", "with", "this", "that", "from", "shall", "will", "must", "been", "each", "such"}
)
TOP_KEYWORDS = 8
MAX_NAMING_CODES = 10


def _extract(pattern: re.Pattern, text: str) -> str:
    match = pattern.search(text)
    return match.group(1).strip() if match else NOT_FOUND


def profile_document(text: str, file_name: str = "") -> DocumentProfile:
    """Offline summary of a project standard document's extracted text."""
    text = normalize(text or "")
    words = [w for w in text.split() if len(w) > 1]

    freq: Counter = Counter()
    for word in words:
        clean = _NON_LETTER.sub("", word.lower())
        if len(clean) > 3 and clean not in STOP_WORDS:
            freq[clean] += 1

    codes = list(dict.fromkeys(_NAMING_CODE.findall(text)))[:MAX_NAMING_CODES]
    return DocumentProfile(
        file_name=file_name,
        project_name=_extract(_PROJECT_NAME, text),
        project_number=_extract(_PROJECT_NUMBER, text),
        revision=_extract(_REVISION, text),
        date=_extract(_DATE, text),
        word_count=len(words),
        unique_words=len({w.lower() for w in words}),
        line_count=sum(1 for line in text.split("\n") if line.strip()),
        top_keywords=[KeywordCount(word=w, count=c) for w, c in freq.most_common(TOP_KEYWORDS)],
        naming_codes=codes,
    )


def diff_words(old: str, new: str) -> List[DiffChunk]:
    """Word-level diff; concatenating the non-added chunks rebuilds ``old``."""
    a = _DIFF_TOKEN.findall(normalize(old or ""))
    b = _DIFF_TOKEN.findall(normalize(new or ""))
    chunks: List[DiffChunk] = []

    def emit(tokens: List[str], *, added: bool = False, removed: bool = False) -> None:
        if not tokens:
            return
        value = "".join(tokens)
        if chunks and chunks[-1].added == added and chunks[-1].removed == removed:
            chunks[-1].value += value
        else:
            chunks.append(DiffChunk(value=value, added=added, removed=removed))

    for op, i1, i2, j1, j2 in SequenceMatcher(None, a, b, autojunk=False).get_opcodes():
        if op == "equal":
            emit(a[i1:i2])
        else:
            emit(a[i1:i2], removed=True)
            emit(b[j1:j2], added=True)
    return chunks
