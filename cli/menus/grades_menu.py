# cli/menus/grades_menu.py

"""
View Grades menu for the Gradebook CLI.

Read-only tables of the figures the engine produces for the whole roster:
- Period averages
- Trimester service averages
- Practical exam scores
- Other course modules
- The full report for a single student

Every table is computed from one `Gradebook.snapshot()` so all columns agree.
"""

from typing import cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from engine.calculated import calculate_student_grades
from engine.course_modules import module_final_average
from engine.period_grades import class_period_averages
from models.academic_grades import COURSE_MODULES
from models.grade_source import EXAM_PERIODS, TRIMESTERS
from models.gradebook import Gradebook
from models.student import Student


def run(gradebook: Gradebook) -> None:
    """
    Top-level loop with dispatch for the View Grades menu.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    title = formatters.format_banner_text("View Grades")
    options = [
        ("Period Averages", view_period_averages),
        ("Service Averages", view_service_averages),
        ("Practical Exam Scores", view_practical_exam_scores),
        ("Other Course Modules", view_course_modules),
        ("Student Report", view_student_report),
    ]
    zero_option = "Return to Course Manager menu"

    while True:
        menu_response = helpers.display_menu(title, options, zero_option)

        if menu_response is MenuSignal.EXIT:
            break

        elif callable(menu_response):
            menu_response(gradebook)

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")

    helpers.returning_to("Course Manager menu")


def _roster(gradebook: Gradebook) -> list[Student]:
    return sorted(gradebook.students.values(), key=lambda s: s.sort_name)


# === class tables ===


def view_period_averages(gradebook: Gradebook) -> None:
    sources = gradebook.snapshot()
    averages = class_period_averages(sources)
    period_keys = sources.structure.period_keys

    rows = [
        model_formatters.format_grade_row(
            student, [averages[student.id][key].rounded() for key in period_keys]
        )
        for student in _roster(gradebook)
    ]

    helpers.display_table("Period Averages", period_keys, rows)


def view_service_averages(gradebook: Gradebook) -> None:
    sources = gradebook.snapshot()

    rows = []
    for student in _roster(gradebook):
        calculated = calculate_student_grades(student.id, sources)
        rows.append(
            model_formatters.format_grade_row(
                student, [calculated.service_average(t).rounded() for t in TRIMESTERS]
            )
        )

    helpers.display_table("Service Averages", list(TRIMESTERS), rows)


def view_practical_exam_scores(gradebook: Gradebook) -> None:
    sources = gradebook.snapshot()

    rows = []
    for student in _roster(gradebook):
        calculated = calculate_student_grades(student.id, sources)
        rows.append(
            model_formatters.format_grade_row(
                student, [calculated.practical_exam(p).rounded() for p in EXAM_PERIODS]
            )
        )

    helpers.display_table("Practical Exams", list(EXAM_PERIODS), rows)


def view_course_modules(gradebook: Gradebook) -> None:
    rows = [
        model_formatters.format_grade_row(
            student,
            [
                module_final_average(gradebook.course_grades.get(student.id), module).rounded()
                for module in COURSE_MODULES
            ],
        )
        for student in _roster(gradebook)
    ]

    helpers.display_table("Other Course Modules", [m[:8] for m in COURSE_MODULES], rows)


# === single student ===


def view_student_report(gradebook: Gradebook) -> None:
    student = helpers.find_student_from_list(gradebook)

    if student is MenuSignal.CANCEL:
        return
    student = cast(Student, student)

    report_response = gradebook.get_student_report(student.id)

    if not report_response.success:
        helpers.display_response_failure(report_response)
        return

    print(f"\n{model_formatters.format_student_multiline(student, gradebook)}")
    print(f"\n{model_formatters.format_student_report(report_response.data['report'], gradebook)}")
