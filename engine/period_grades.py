# engine/period_grades.py

"""
Period instrument aggregation.

Each period's grade combines its instruments with a weighted mean over the instruments
that currently have a value. Manual instruments read the student's academic grades;
calculated ones read the Service-Day or Practical-Exam aggregate their descriptor was
resolved to when the evaluation structure was loaded.
"""

from __future__ import annotations

from core.grade import Grade
from core.numeric import weighted_mean
from engine.calculated import CalculatedGrades, calculate_student_grades, resolve_source
from engine.sources import GradeSources
from models.academic_grades import StudentAcademicGrades
from models.period import PeriodDefinition


def instrument_values(
    period: PeriodDefinition,
    academic: StudentAcademicGrades | None,
    calculated: CalculatedGrades,
) -> dict[str, Grade]:
    return {
        instrument.key: resolve_source(instrument.source, academic, calculated)
        for instrument in period.instruments
    }


def period_average(
    period: PeriodDefinition,
    academic: StudentAcademicGrades | None,
    calculated: CalculatedGrades,
) -> Grade:
    """
    Computes one student's weighted average for one period.

    Args:
        period (PeriodDefinition): The period and its instrument descriptors.
        academic (StudentAcademicGrades | None): The student's manual grades, if any.
        calculated (CalculatedGrades): The student's service and practical exam grades.

    Returns:
        The weighted mean rounded to 2 decimals, with `coverage` set to the summed weight
        of instruments that have a value, or an absent `Grade` if none does.
    """
    values = instrument_values(period, academic, calculated)
    pairs = [
        (values[instrument.key].value, instrument.weight)
        for instrument in period.instruments
        if values[instrument.key].is_present
    ]

    covered = sum(weight for _, weight in pairs)
    if covered == 0:
        return Grade.absent()

    return Grade.present(weighted_mean(pairs), coverage=covered)


def student_period_averages(
    student_id: str,
    sources: GradeSources,
    calculated: CalculatedGrades | None = None,
) -> dict[str, Grade]:
    calculated = calculated or calculate_student_grades(student_id, sources)
    academic = sources.academic_grades.get(student_id)

    return {
        period.key: period_average(period, academic, calculated)
        for period in sources.structure.periods
    }


def class_period_averages(sources: GradeSources) -> dict[str, dict[str, Grade]]:
    """Period averages for every student on the roster, keyed by student id."""
    return {
        student_id: student_period_averages(student_id, sources)
        for student_id in sources.students
    }
