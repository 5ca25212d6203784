# cli/menus/outcomes_menu.py

"""
View Learning Outcomes menu for the Gradebook CLI.

Shows the outcome overview for the class, the practical exam dashboard, and the weight
checks for every configured weight table.
"""

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from engine.dashboard import dashboard_summary, outcome_overview, outcome_progress, student_highlights
from engine.weights import check_all_weights
from models.gradebook import Gradebook


def run(gradebook: Gradebook) -> None:
    """
    Top-level loop with dispatch for the View Learning Outcomes menu.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    title = formatters.format_banner_text("Learning Outcomes")
    options = [
        ("Outcome Grades", view_outcome_grades),
        ("Practical Exam Dashboard", view_dashboard),
        ("Weight Checks", view_weight_checks),
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


def view_outcome_grades(gradebook: Gradebook) -> None:
    for outcome in outcome_overview(gradebook.snapshot()):
        print(f"\n{formatters.format_banner_text(outcome['name'])}")
        print(
            f"Weight: {formatters.format_weight(outcome['weight'])} | "
            f"Class average: {formatters.format_grade(outcome['class_average'])}"
        )

        for student_id, entry in outcome["students"].items():
            student = gradebook.students[student_id]
            line = model_formatters.format_outcome_line(
                student.sort_name,
                {
                    "grade": entry["grade"],
                    "covered_weight": entry["coverage"],
                    "declared_weight": outcome["declared_weight"],
                },
            )
            print(f"  {line}")


def view_dashboard(gradebook: Gradebook) -> None:
    sources = gradebook.snapshot()
    summary = dashboard_summary(sources)

    print(f"\n{formatters.format_banner_text('Dashboard')}")
    print(f"Students: {summary['total_students']}")
    print(f"Overall average: {formatters.format_grade(summary['overall_average'])}")
    print(f"Passing: {summary['passing_students']} | At risk: {summary['at_risk_students']}")

    print("\nProgress by RA:")
    for entry in outcome_progress(sources):
        print(f"  {entry['name']:<40} {formatters.format_grade(entry['average']):>6}")

    highlights = student_highlights(sources)
    for label, entries in (("Top students", highlights["top"]), ("Needs support", highlights["bottom"])):
        print(f"\n{label}:")
        helpers.display_results(
            entries,
            show_index=True,
            formatter=lambda e: f"{e['name']:<30} {formatters.format_grade(e['score']):>6}",
        )


def view_weight_checks(gradebook: Gradebook) -> None:
    checks = check_all_weights(gradebook.snapshot())

    print(f"\n{formatters.format_banner_text('Weight Checks')}")
    helpers.display_results(checks, formatter=model_formatters.format_weight_check)

    if all(check.is_balanced for check in checks):
        print("\nAll weight tables are balanced.")
