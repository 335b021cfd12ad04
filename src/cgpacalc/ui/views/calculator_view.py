import logging
from typing import Dict

import flet as ft

from cgpacalc.core.grades import normalize_grade
from cgpacalc.core.models import Semester, SubjectEntry
from cgpacalc.state.app_state import AppState, CalculationSummary
from cgpacalc.ui.formatting import format_cgpa, format_percentage, format_points, format_semester_result

logger = logging.getLogger(__name__)


def build_calculator_view(page: ft.Page, app_state: AppState, title: str) -> ft.Control:
    grade_editor = ft.Column(spacing=8)
    semester_list = ft.Column(spacing=12)
    cgpa_text = ft.Text(size=22, weight=ft.FontWeight.BOLD)
    percentage_text = ft.Text(size=18, visible=False)

    # semester id -> result line, refreshed on every recalculation
    result_texts: Dict[str, ft.Text] = {}

    def apply_summary(summary: CalculationSummary) -> None:
        for semester, result in zip(app_state.semesters, summary.semester_results):
            text = result_texts.get(semester.id)
            if text is None:
                continue
            text.value = format_semester_result(result)
            text.color = None if result.ok else ft.Colors.RED_400

        cgpa_text.value = format_cgpa(summary.cgpa)
        percentage_line = format_percentage(summary.percentage)
        percentage_text.visible = percentage_line is not None
        percentage_text.value = percentage_line or ""

    def show_summary(summary: CalculationSummary) -> None:
        apply_summary(summary)
        page.update()

    def build_grade_row(label: str, points: float) -> ft.Row:
        current = {"label": label}

        def on_label_change(e) -> None:
            new_label = normalize_grade(e.control.value or "")
            if not new_label or new_label == current["label"]:
                return
            size_before = len(app_state.grade_table)
            app_state.rename_grade(current["label"], new_label)
            current["label"] = new_label
            if len(app_state.grade_table) != size_before:
                render_grade_editor()

        def on_points_change(e) -> None:
            app_state.update_grade_points(current["label"], e.control.value or "")

        def on_delete(_) -> None:
            app_state.remove_grade(current["label"])
            render_grade_editor()

        controls = [
            ft.TextField(label="Grade", value=label, expand=1, on_change=on_label_change),
            ft.TextField(
                label="Points",
                value=format_points(points),
                expand=1,
                keyboard_type=ft.KeyboardType.NUMBER,
                on_change=on_points_change,
            ),
        ]
        if len(app_state.grade_table) > 1:
            controls.append(ft.TextButton("Del", on_click=on_delete))
        return ft.Row(controls=controls, vertical_alignment=ft.CrossAxisAlignment.CENTER, spacing=8)

    def render_grade_editor() -> None:
        grade_editor.controls.clear()
        for label, points in app_state.grade_table.items():
            grade_editor.controls.append(build_grade_row(label, points))
        page.update()

    def on_add_grade(_) -> None:
        app_state.add_grade()
        render_grade_editor()

    def build_subject_row(semester_id: str, subject: SubjectEntry) -> ft.Row:
        def on_grade_change(e) -> None:
            app_state.update_subject(semester_id, subject.id, grade=e.control.value or "")

        def on_credits_change(e) -> None:
            app_state.update_subject(semester_id, subject.id, credits=e.control.value or "")

        def on_delete(_) -> None:
            app_state.remove_subject(semester_id, subject.id)
            render_semesters()

        return ft.Row(
            spacing=8,
            vertical_alignment=ft.CrossAxisAlignment.CENTER,
            controls=[
                ft.TextField(label="Grade", value=subject.grade, expand=1, on_change=on_grade_change),
                ft.TextField(
                    label="Credits",
                    value=subject.credits,
                    expand=1,
                    keyboard_type=ft.KeyboardType.NUMBER,
                    on_change=on_credits_change,
                ),
                ft.TextButton("Del", on_click=on_delete),
            ],
        )

    def build_semester_card(semester: Semester) -> ft.Card:
        result_line = ft.Text(size=16)
        result_texts[semester.id] = result_line

        def on_title_change(e) -> None:
            app_state.rename_semester(semester.id, e.control.value or "")

        def on_remove(_) -> None:
            app_state.remove_semester(semester.id)
            render_semesters()

        def on_add_subject(_) -> None:
            app_state.add_subject(semester.id)
            render_semesters()

        return ft.Card(
            elevation=2,
            content=ft.Container(
                padding=12,
                content=ft.Column(
                    spacing=8,
                    controls=[
                        ft.Row(
                            vertical_alignment=ft.CrossAxisAlignment.CENTER,
                            controls=[
                                ft.TextField(
                                    label="Semester Title",
                                    value=semester.title,
                                    expand=1,
                                    on_change=on_title_change,
                                ),
                                ft.TextButton("Remove", on_click=on_remove),
                            ],
                        ),
                        *[build_subject_row(semester.id, subject) for subject in semester.subjects],
                        ft.Row(
                            alignment=ft.MainAxisAlignment.END,
                            controls=[ft.Button("Add Subject", on_click=on_add_subject)],
                        ),
                        result_line,
                    ],
                ),
            ),
        )

    def render_semesters() -> None:
        semester_list.controls.clear()
        result_texts.clear()
        for semester in app_state.semesters:
            semester_list.controls.append(build_semester_card(semester))
        show_summary(app_state.calculate())

    def on_add_semester(_) -> None:
        semester = app_state.add_semester()
        logger.info("Semester added: %s", semester.title)
        render_semesters()

    def on_toggle_percentage(e) -> None:
        app_state.set_include_percentage(bool(e.control.value))

    app_state.subscribe(show_summary)

    for label, points in app_state.grade_table.items():
        grade_editor.controls.append(build_grade_row(label, points))
    for semester in app_state.semesters:
        semester_list.controls.append(build_semester_card(semester))

    view = ft.Column(
        spacing=12,
        controls=[
            ft.Text(title, size=24, weight=ft.FontWeight.BOLD),
            ft.Text("Grade Scale (Editable)", size=18, weight=ft.FontWeight.BOLD),
            grade_editor,
            ft.TextButton("Add Grade Mapping", on_click=on_add_grade),
            ft.Divider(),
            ft.Text("Semesters", size=18, weight=ft.FontWeight.BOLD),
            semester_list,
            ft.Button("Add Semester", on_click=on_add_semester),
            ft.Divider(),
            ft.Row(
                vertical_alignment=ft.CrossAxisAlignment.CENTER,
                controls=[
                    ft.Checkbox(value=app_state.include_percentage, on_change=on_toggle_percentage),
                    ft.Column(
                        spacing=2,
                        controls=[
                            ft.Text("Show percentage (CGPA - 0.75) x 10"),
                            ft.Text("Verify with current AKTU ordinance", size=12),
                        ],
                    ),
                ],
            ),
            cgpa_text,
            percentage_text,
        ],
    )

    apply_summary(app_state.calculate())
    return view
