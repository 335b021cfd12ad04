from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, List, Optional, Tuple

from cgpacalc.core.gpa import SemesterResult, compute_overall_result, equivalent_percentage
from cgpacalc.core.grades import (
    DEFAULT_GRADE_TABLE,
    add_grade,
    remove_grade,
    rename_grade,
    update_points,
)
from cgpacalc.core.models import Semester

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalculationSummary:
    cgpa: float
    semester_results: List[SemesterResult]
    percentage: Optional[float]


Listener = Callable[[CalculationSummary], None]


def _first_semester() -> Tuple[Semester, ...]:
    return (Semester(title="Semester 1"),)


@dataclass
class AppState:
    """
    Mutable snapshot owned by the form. Every mutation swaps in a new value
    and pushes a fresh CalculationSummary to subscribers.
    """

    grade_table: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_GRADE_TABLE))
    semesters: Tuple[Semester, ...] = field(default_factory=_first_semester)
    include_percentage: bool = False
    _listeners: List[Listener] = field(default_factory=list, repr=False, compare=False)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def calculate(self) -> CalculationSummary:
        overall = compute_overall_result(self.semesters, self.grade_table)
        return CalculationSummary(
            cgpa=overall.cgpa,
            semester_results=overall.semester_results,
            percentage=equivalent_percentage(overall.cgpa, self.include_percentage),
        )

    def _notify(self) -> None:
        summary = self.calculate()
        for listener in list(self._listeners):
            listener(summary)

    def _replace_semester(self, semester: Semester) -> None:
        self.semesters = tuple(semester if s.id == semester.id else s for s in self.semesters)

    def _semester(self, semester_id: str) -> Semester:
        for semester in self.semesters:
            if semester.id == semester_id:
                return semester
        raise KeyError(f"Unknown semester: {semester_id}")

    # Semesters

    def add_semester(self) -> Semester:
        semester = Semester(title=f"Semester {len(self.semesters) + 1}")
        self.semesters = self.semesters + (semester,)
        logger.debug("Added %s", semester.title)
        self._notify()
        return semester

    def remove_semester(self, semester_id: str) -> None:
        if len(self.semesters) <= 1:
            return
        self.semesters = tuple(s for s in self.semesters if s.id != semester_id)
        logger.debug("Removed semester %s", semester_id)
        self._notify()

    def rename_semester(self, semester_id: str, title: str) -> None:
        self._replace_semester(self._semester(semester_id).with_title(title))
        self._notify()

    # Subject rows

    def add_subject(self, semester_id: str) -> None:
        self._replace_semester(self._semester(semester_id).with_subject_added())
        self._notify()

    def update_subject(
        self,
        semester_id: str,
        subject_id: str,
        *,
        grade: Optional[str] = None,
        credits: Optional[str] = None,
    ) -> None:
        semester = self._semester(semester_id)
        subject = semester.find_subject(subject_id)
        if subject is None:
            raise KeyError(f"Unknown subject: {subject_id}")

        changes = {}
        if grade is not None:
            changes["grade"] = grade
        if credits is not None:
            changes["credits"] = credits
        self._replace_semester(semester.with_subject_replaced(replace(subject, **changes)))
        self._notify()

    def remove_subject(self, semester_id: str, subject_id: str) -> None:
        semester = self._semester(semester_id)
        if len(semester.subjects) <= 1:
            return
        self._replace_semester(semester.with_subject_removed(subject_id))
        self._notify()

    # Grade table

    def add_grade(self) -> None:
        self.grade_table = add_grade(self.grade_table)
        self._notify()

    def rename_grade(self, old: str, new: str) -> None:
        self.grade_table = rename_grade(self.grade_table, old, new)
        self._notify()

    def update_grade_points(self, grade: str, text: str) -> None:
        self.grade_table = update_points(self.grade_table, grade, text)
        self._notify()

    def remove_grade(self, grade: str) -> None:
        if grade not in self.grade_table or len(self.grade_table) <= 1:
            return
        self.grade_table = remove_grade(self.grade_table, grade)
        logger.debug("Removed grade mapping %s", grade)
        self._notify()

    def set_include_percentage(self, enabled: bool) -> None:
        self.include_percentage = bool(enabled)
        self._notify()
