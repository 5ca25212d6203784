# cli/model_formatters.py

# anything that renders domain objects or engine results as display strings
from textwrap import dedent

import core.formatters as formatters
from engine.report import StudentReport
from engine.weights import WeightCheck
from models.gradebook import Gradebook
from models.student import Student

# === student formatters ===


def format_student_oneline(student: Student) -> str:
    status = " [ARCHIVED]" if not student.is_active else ""

    return f"{student.sort_name:<30} | {student.group or '-':<6}{status}"


def format_student_multiline(student: Student, gradebook: Gradebook) -> str:
    return dedent(
        f"""\
        Student in {gradebook.name}:
        ... Name: {student.full_name}
        ... NRE: {student.nre or '-'}
        ... Group: {student.group or '-'}
        ... Email: {student.email or '-'}
        ... Status: {student.status}"""
    )


# === grade row formatters ===


def format_grade_row(student: Student, grades: list[float | None]) -> str:
    return formatters.format_table_row(
        student.sort_name[:24],
        [formatters.format_grade(g) for g in grades],
    )


def format_service_entry(entry: dict) -> str:
    return formatters.format_table_row(
        f"{entry['service_name'][:16]} ({entry['trimester']})",
        [
            formatters.format_grade(entry["individual"]),
            formatters.format_grade(entry["group"]),
            formatters.format_grade(entry["grade"]),
            formatters.format_grade(entry["class_average"]),
        ],
    )


def format_weight_check(check: WeightCheck) -> str:
    status = "OK" if check.is_balanced else f"OFF BY {check.difference:+g}"

    return f"{check.label:<32} | {check.total:>7g} / {check.expected:<5g} | {status}"


def format_outcome_line(name: str, outcome: dict) -> str:
    grade = formatters.format_grade(outcome["grade"])
    coverage = formatters.format_coverage(
        outcome["covered_weight"] if outcome["grade"] is not None else None,
        outcome["declared_weight"],
    )

    return f"{name:<28} | {grade:>6} {coverage}".rstrip()


# === report formatters ===


def format_student_report(report: StudentReport, gradebook: Gradebook) -> str:
    student = gradebook.students[report.student_id]
    lines = [formatters.format_banner_text(student.full_name)]

    lines.append("\nPeriod averages:")
    for period_key, period in report.periods.items():
        instruments = ", ".join(
            f"{key} {formatters.format_grade(value)}"
            for key, value in period["instruments"].items()
        )
        lines.append(
            f"  {period['name']:<22} {formatters.format_grade(period['average']):>6}  ({instruments})"
        )

    lines.append("\nLearning outcomes:")
    for outcome_id, outcome in report.outcomes.items():
        name = gradebook.outcomes[outcome_id].name if outcome_id in gradebook.outcomes else outcome_id
        lines.append(f"  {format_outcome_line(name, outcome)}")

    lines.append("\nServices:")
    if not report.services:
        lines.append("  No services attended.")
    for entry in report.services:
        lines.append(f"  {format_service_entry(entry)}")

    lines.append("\nOther modules:")
    for module, grades in report.modules.items():
        lines.append(
            "  "
            + formatters.format_table_row(
                module,
                [formatters.format_grade(grades[key]) for key in ("t1", "t2", "t3", "rec", "final")],
            )
        )

    return "\n".join(lines)
