# engine/calculated.py

"""
Per-student calculated grades and grade-source resolution.

`calculate_student_grades()` runs the Service-Day and Practical-Exam aggregators once per
student. `resolve_source()` then turns any `GradeSource` (an activity's, or a period
instrument's) into a `Grade` by reading either the student's manual academic grades or
those calculated grades.
"""

from __future__ import annotations

import logging

from core.grade import Grade
from core.numeric import coerce_grade
from engine.practical_exam import practical_exam_score
from engine.service_grades import service_averages
from engine.sources import GradeSources
from models.academic_grades import StudentAcademicGrades
from models.grade_source import EXAM_PERIODS, GradeSource, SourceKind

logger = logging.getLogger(__name__)


class CalculatedGrades:

    def __init__(
        self,
        student_id: str,
        service_averages: dict[str, Grade],
        practical_exams: dict[str, Grade],
    ):
        self._student_id = student_id
        self._service_averages = dict(service_averages)
        self._practical_exams = dict(practical_exams)

    @property
    def student_id(self) -> str:
        return self._student_id

    @property
    def service_averages(self) -> dict[str, Grade]:
        return dict(self._service_averages)

    @property
    def practical_exams(self) -> dict[str, Grade]:
        return dict(self._practical_exams)

    def service_average(self, trimester: str) -> Grade:
        return self._service_averages.get(trimester, Grade.absent())

    def practical_exam(self, exam_period: str) -> Grade:
        return self._practical_exams.get(exam_period, Grade.absent())

    def to_dict(self) -> dict:
        return {
            "service_averages": {k: g.rounded() for k, g in self._service_averages.items()},
            "practical_exams": {k: g.rounded() for k, g in self._practical_exams.items()},
        }

    def __repr__(self) -> str:
        return f"CalculatedGrades({self._student_id}, {self.to_dict()})"


def calculate_student_grades(student_id: str, sources: GradeSources) -> CalculatedGrades:
    exams = sources.practical_exams.values()
    return CalculatedGrades(
        student_id=student_id,
        service_averages=service_averages(student_id, sources),
        practical_exams={
            period: practical_exam_score(student_id, period, exams)
            for period in EXAM_PERIODS
        },
    )


def _within_scale(grade: Grade, source: GradeSource) -> Grade:
    if grade.is_present and coerce_grade(grade.value) is None:
        logger.debug("Calculated grade %s for %s is off the 0-10 scale", grade.value, source)
        return Grade.absent()

    return grade


def resolve_source(
    source: GradeSource,
    academic: StudentAcademicGrades | None,
    calculated: CalculatedGrades,
) -> Grade:
    """
    Reads the grade a source points at. Values off the 0-10 scale resolve to absent,
    whether entered by hand or calculated.
    """
    if source.kind is SourceKind.MANUAL:
        if academic is None:
            return Grade.absent()

        return Grade.from_optional(coerce_grade(academic.manual_grade(source.period, source.key)))

    if source.kind is SourceKind.SERVICE_AVERAGE:
        return _within_scale(calculated.service_average(source.period), source)

    return _within_scale(calculated.practical_exam(source.period), source)
