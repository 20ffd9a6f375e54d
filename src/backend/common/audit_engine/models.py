from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, Field


class VerdictStatus(str, Enum):
    VALID = "Valid"
    INVALID = "Invalid"
    NEEDS_REVIEW = "Needs Review"


class CheckOutcome(str, Enum):
    COMPLETED = "COMPLETED"
    MISSING_COLUMN = "MISSING_COLUMN"
    DISABLED = "DISABLED"
    FAILED = "FAILED"


class VerdictRecord(BaseModel):
    original_record: Dict[str, Any] = Field(default_factory=dict)
    status: VerdictStatus
    reasoning: str = Field(min_length=1)
    invalid_value: Optional[str] = None


class CheckResultDetail(BaseModel):
    key: str
    message: str
    values: Dict[str, Any] = Field(default_factory=dict)


class CheckResult(BaseModel):
    check_id: str
    check_title: str
    outcome: CheckOutcome = CheckOutcome.COMPLETED
    column: Optional[str] = None
    summary: str = ""

    verdicts: List[VerdictRecord] = Field(default_factory=list)
    details: List[CheckResultDetail] = Field(default_factory=list)

    passed: int = 0
    total: int = 0
    pass_percentage: float = 100.0

    @classmethod
    def from_verdicts(
        cls,
        *,
        check_id: str,
        check_title: str,
        column: Optional[str],
        verdicts: List[VerdictRecord],
        details: Optional[List[CheckResultDetail]] = None,
    ) -> "CheckResult":
        passed = sum(1 for v in verdicts if v.status == VerdictStatus.VALID)
        total = len(verdicts)
        pct = (passed / total * 100) if total else 100.0
        if total == 0:
            summary = f"No populated values in '{column}' to check."
        else:
            summary = f"{passed} / {total} passed ({pct:.2f}%)."
        return cls(
            check_id=check_id,
            check_title=check_title,
            column=column,
            summary=summary,
            verdicts=verdicts,
            details=details or [],
            passed=passed,
            total=total,
            pass_percentage=pct,
        )


class AuditRunReport(BaseModel):
    run_id: str
    generated_at: datetime
    suite: str = ""

    results: List[CheckResult] = Field(default_factory=list)
    totals: Dict[VerdictStatus, int] = Field(default_factory=dict)
    outcomes: Dict[CheckOutcome, int] = Field(default_factory=dict)

    def get(self, check_id: str) -> Optional[CheckResult]:
        for res in self.results:
            if res.check_id == check_id:
                return res
        return None


class UnitsStandard(BaseModel):
    standard: str
    metric_count: int = 0
    imperial_count: int = 0


# --- Manifest reconciliation ---


class ComparisonStatus(str, Enum):
    MATCHED = "matched"
    MISSING_IN_TARGET = "missing_in_target"
    EXTRA_IN_TARGET = "extra_in_target"
    COUNT_MISMATCH = "count_mismatch"


def classify_counts(required_count: int, actual_count: int) -> ComparisonStatus:
    if required_count > 0 and actual_count == 0:
        return ComparisonStatus.MISSING_IN_TARGET
    if required_count == 0 and actual_count > 0:
        return ComparisonStatus.EXTRA_IN_TARGET
    if required_count == actual_count:
        return ComparisonStatus.MATCHED
    return ComparisonStatus.COUNT_MISMATCH


class ComparisonResult(BaseModel):
    base_name: str
    format: str
    status: ComparisonStatus
    required_count: int = 0
    actual_count: int = 0
    merged_tags: List[str] = Field(default_factory=list)


class ComparisonSummary(BaseModel):
    all: int = 0
    matched: int = 0
    count_mismatch: int = 0
    missing_in_target: int = 0
    extra_in_target: int = 0


# --- Parameter completion / compliance ---


class ParameterSummary(BaseModel):
    parameter_name: str
    filled_count: int
    empty_count: int
    percentage_filled: float


class SourceFileSummary(BaseModel):
    source_file: str
    total_elements: int
    filled_cells: int
    empty_cells: int
    filled_percentage: float
    empty_percentage: float


class ComplianceResult(BaseModel):
    matched: List[str] = Field(default_factory=list)
    missing: List[str] = Field(default_factory=list)
    extra: List[str] = Field(default_factory=list)
    compliance_score: float = 0.0


class ParameterReport(BaseModel):
    total_elements: int
    parameters: List[ParameterSummary] = Field(default_factory=list)
    source_files: List[SourceFileSummary] = Field(default_factory=list)
    compliance: Optional[ComplianceResult] = None


# --- Clash tests ---


CLASH_STATUSES = ("New", "Active", "Reviewed", "Approved", "Resolved")


def empty_status_counts() -> Dict[str, int]:
    return {status: 0 for status in CLASH_STATUSES}


def add_status_counts(target: Dict[str, int], source: Dict[str, int]) -> None:
    for status, count in source.items():
        target[status] = target.get(status, 0) + count


class ClashTest(BaseModel):
    name: str
    status: str
    clashes: int = 0
    status_counts: Dict[str, int] = Field(default_factory=empty_status_counts)
    selection_a: str = ""
    selection_b: str = ""
    discipline_a: str = ""
    discipline_b: str = ""
    discipline_pair: str = ""


class DisciplinePairSummary(BaseModel):
    pair: str
    total_clashes: int = 0
    status_counts: Dict[str, int] = Field(default_factory=empty_status_counts)


class ClashReport(BaseModel):
    tests: List[ClashTest] = Field(default_factory=list)
    total_clashes: int = 0
    status_counts: Dict[str, int] = Field(default_factory=empty_status_counts)
    discipline_pairs: List[DisciplinePairSummary] = Field(default_factory=list)
    unique_disciplines: List[str] = Field(default_factory=list)

    @classmethod
    def from_tests(cls, tests: Iterable[ClashTest]) -> "ClashReport":
        tests = list(tests)
        totals = empty_status_counts()
        pairs: Dict[str, DisciplinePairSummary] = {}
        disciplines: set[str] = set()
        total_clashes = 0
        for test in tests:
            total_clashes += test.clashes
            add_status_counts(totals, test.status_counts)
            disciplines.update((test.discipline_a, test.discipline_b))
            pair = pairs.setdefault(test.discipline_pair, DisciplinePairSummary(pair=test.discipline_pair))
            pair.total_clashes += test.clashes
            add_status_counts(pair.status_counts, test.status_counts)
        ordered_pairs = sorted(pairs.values(), key=lambda p: (-p.total_clashes, p.pair))
        return cls(
            tests=tests,
            total_clashes=total_clashes,
            status_counts=totals,
            discipline_pairs=ordered_pairs,
            unique_disciplines=sorted(d for d in disciplines if d),
        )


# --- Weekly delivery ---


class DeliveryState(str, Enum):
    OK = "OK"
    LATE = "Late"


class DeliveryWindow(BaseModel):
    start: datetime
    end: datetime

    def contains(self, moment: Optional[datetime]) -> bool:
        return moment is not None and self.start <= moment <= self.end


class DeliverableStatus(BaseModel):
    building: str
    deliverable: str
    latest_update: Optional[datetime] = None
    latest_file_name: str = ""
    status: DeliveryState


class WeeklyReport(BaseModel):
    window: DeliveryWindow
    deliverables: List[DeliverableStatus] = Field(default_factory=list)
    total: int = 0
    ok: int = 0
    late: int = 0


# --- Document profiling ---


class KeywordCount(BaseModel):
    word: str
    count: int


class DocumentProfile(BaseModel):
    file_name: str = ""
    project_name: str = "Not Found"
    project_number: str = "Not Found"
    revision: str = "Not Found"
    date: str = "Not Found"
    word_count: int = 0
    unique_words: int = 0
    line_count: int = 0
    top_keywords: List[KeywordCount] = Field(default_factory=list)
    naming_codes: List[str] = Field(default_factory=list)


class DiffChunk(BaseModel):
    value: str
    added: bool = False
    removed: bool = False
