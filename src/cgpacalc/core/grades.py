import math
import re
from typing import Dict, Mapping, Optional


DEFAULT_GRADE_TABLE: Dict[str, float] = {
    "A+": 10.0,
    "A": 9.0,
    "B+": 8.0,
    "B": 7.0,
    "C": 6.0,
    "D": 5.0,
    "E": 4.0,
    "F": 0.0,
}

NEW_GRADE_LABEL = "NEW"

# ASCII decimal with optional exponent; no digit separators or non-ASCII digits
NUMBER_PATTERN = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)


class GradeTableError(ValueError):
    pass


def normalize_grade(grade: str) -> str:
    return grade.strip().upper()


def grade_point(grade_table: Mapping[str, float], grade: str) -> Optional[float]:
    return grade_table.get(normalize_grade(grade))


def parse_number(text: str) -> Optional[float]:
    text = text.strip()
    if not NUMBER_PATTERN.fullmatch(text):
        return None
    value = float(text)
    if not math.isfinite(value):
        return None
    return value


def add_grade(
    grade_table: Mapping[str, float],
    label: str = NEW_GRADE_LABEL,
    points: float = 0.0,
) -> Dict[str, float]:
    updated = dict(grade_table)
    updated[normalize_grade(label)] = float(points)
    return updated


def rename_grade(grade_table: Mapping[str, float], old: str, new: str) -> Dict[str, float]:
    """
    Returns a copy with `old` relabelled to `new`, keeping its position.
    A blank `new` label leaves the table as it was. If `new` already exists,
    the later of the two values wins at the earlier position.
    """
    key = normalize_grade(new)
    if not key:
        return dict(grade_table)

    updated: Dict[str, float] = {}
    for label, points in grade_table.items():
        if label == old:
            updated[key] = points
        else:
            updated[label] = points
    return updated


def update_points(grade_table: Mapping[str, float], grade: str, text: str) -> Dict[str, float]:
    updated = dict(grade_table)
    points = parse_number(text)
    if grade not in updated or points is None:
        return updated
    updated[grade] = points
    return updated


def remove_grade(grade_table: Mapping[str, float], grade: str) -> Dict[str, float]:
    if grade not in grade_table:
        raise GradeTableError(f"Unknown grade label: {grade}")
    if len(grade_table) <= 1:
        raise GradeTableError("Grade table must keep at least one entry")
    return {label: points for label, points in grade_table.items() if label != grade}
