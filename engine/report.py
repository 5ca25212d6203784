# engine/report.py

"""
Everything the presentation layer shows for one student, in one pass.

`build_student_report()` runs each aggregator once against a `GradeSources` snapshot and
returns a `StudentReport` of plain values: numbers rounded to 2 decimals, or None when
there is no data yet. No formatting happens here.
"""

from __future__ import annotations

from engine.calculated import calculate_student_grades
from engine.course_modules import student_module_summary
from engine.outcome_grades import declared_weight, student_criterion_grades, student_outcome_grades
from engine.period_grades import instrument_values, period_average
from engine.service_grades import service_history
from engine.sources import GradeSources


class StudentReport:

    def __init__(
        self,
        student_id: str,
        periods: dict[str, dict],
        calculated: dict[str, dict],
        criteria: dict[str, dict],
        outcomes: dict[str, dict],
        services: list[dict],
        modules: dict[str, dict],
    ):
        self.student_id = student_id
        self.periods = periods
        self.calculated = calculated
        self.criteria = criteria
        self.outcomes = outcomes
        self.services = services
        self.modules = modules

    def period_average(self, period_key: str) -> float | None:
        return self.periods.get(period_key, {}).get("average")

    def outcome_grade(self, outcome_id: str) -> float | None:
        return self.outcomes.get(outcome_id, {}).get("grade")

    def to_dict(self) -> dict:
        return {
            "student_id": self.student_id,
            "periods": self.periods,
            "calculated": self.calculated,
            "criteria": self.criteria,
            "outcomes": self.outcomes,
            "services": self.services,
            "modules": self.modules,
        }

    def __repr__(self) -> str:
        return f"StudentReport({self.student_id})"


def build_student_report(student_id: str, sources: GradeSources) -> StudentReport:
    calculated = calculate_student_grades(student_id, sources)
    academic = sources.academic_grades.get(student_id)

    periods = {}
    for period in sources.structure.periods:
        average = period_average(period, academic, calculated)
        periods[period.key] = {
            "name": period.name,
            "average": average.rounded(),
            "covered_weight": average.coverage,
            "instruments": {
                key: grade.rounded()
                for key, grade in instrument_values(period, academic, calculated).items()
            },
        }

    criteria = {
        criterion_id: {"grade": grade.rounded(), "graded_activities": grade.coverage}
        for criterion_id, grade in student_criterion_grades(student_id, sources, calculated).items()
    }

    outcomes = {
        outcome_id: {
            "grade": grade.rounded(),
            "covered_weight": grade.coverage or 0,
            "declared_weight": declared_weight(sources.outcomes[outcome_id], sources.criteria),
        }
        for outcome_id, grade in student_outcome_grades(student_id, sources, calculated).items()
    }

    return StudentReport(
        student_id=student_id,
        periods=periods,
        calculated=calculated.to_dict(),
        criteria=criteria,
        outcomes=outcomes,
        services=[entry.to_dict() for entry in service_history(student_id, sources)],
        modules=student_module_summary(student_id, sources),
    )
