from typing import Optional

from cgpacalc.core.gpa import SemesterResult, clamp_percentage


def format_semester_result(result: SemesterResult) -> str:
    if not result.ok:
        return f"Error: {result.error}"
    return f"SGPA: {result.sgpa:.2f} | Credits: {result.total_credits:.1f}"


def format_cgpa(cgpa: float) -> str:
    return f"Overall CGPA: {cgpa:.2f}"


def format_percentage(percentage: Optional[float]) -> Optional[str]:
    if percentage is None:
        return None
    return f"Equivalent Percentage: {clamp_percentage(percentage):.2f}%"


def format_points(points: float) -> str:
    return str(float(points))
