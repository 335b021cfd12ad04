from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional

from cgpacalc.core.grades import grade_point, parse_number
from cgpacalc.core.models import Semester, SubjectEntry

logger = logging.getLogger(__name__)

INVALID_CREDITS = "Invalid Credits"
PERCENTAGE_OFFSET = 0.75
PERCENTAGE_FACTOR = 10.0


@dataclass(frozen=True)
class SemesterResult:
    sgpa: float
    total_credits: float
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class OverallResult:
    cgpa: float
    semester_results: List[SemesterResult]


def unknown_grade_message(grade: str) -> str:
    return f"Unknown Grade: '{grade}'"


def parse_credits(text: str) -> Optional[float]:
    value = parse_number(text)
    if value is None or value < 0:
        return None
    return value


def compute_semester_result(
    subjects: Iterable[SubjectEntry],
    grade_table: Mapping[str, float],
) -> SemesterResult:
    """
    SGPA = Σ(grade_point * credits) / Σ(credits)

    The first invalid row aborts the semester; partial sums are dropped.
    """
    credit_points = 0.0
    total_credits = 0.0

    for subject in subjects:
        credits = parse_credits(subject.credits)
        if credits is None:
            logger.debug("Invalid credits %r in row %s", subject.credits, subject.id)
            return SemesterResult(0.0, 0.0, INVALID_CREDITS)

        point = grade_point(grade_table, subject.grade)
        if point is None:
            logger.debug("Unknown grade %r in row %s", subject.grade, subject.id)
            return SemesterResult(0.0, 0.0, unknown_grade_message(subject.grade))

        credit_points += point * credits
        total_credits += credits

    sgpa = credit_points / total_credits if total_credits > 0 else 0.0
    return SemesterResult(sgpa, total_credits)


def compute_overall_result(
    semesters: Iterable[Semester],
    grade_table: Mapping[str, float],
) -> OverallResult:
    """
    CGPA = Σ(sgpa * semester_credits) / Σ(semester_credits) over error-free
    semesters. Errored semesters keep their slot in `semester_results`.
    """
    results = [compute_semester_result(sem.subjects, grade_table) for sem in semesters]

    weighted_sum = 0.0
    total_credits = 0.0
    for result in results:
        if not result.ok:
            continue
        weighted_sum += result.sgpa * result.total_credits
        total_credits += result.total_credits

    cgpa = weighted_sum / total_credits if total_credits > 0 else 0.0
    return OverallResult(cgpa, results)


def equivalent_percentage(cgpa: float, enabled: bool) -> Optional[float]:
    if not enabled:
        return None
    return (cgpa - PERCENTAGE_OFFSET) * PERCENTAGE_FACTOR


def clamp_percentage(value: float) -> float:
    return max(0.0, min(100.0, value))
