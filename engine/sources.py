# engine/sources.py

"""
A read-only bundle of every registry the aggregators consume.

`GradeSources` is built once per query pass, usually via `Gradebook.snapshot()`, and
handed to the engine functions. It copies the registry dictionaries into read-only
mappings so no aggregator can mutate the gradebook it was built from.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping

from models.academic_grades import StudentAcademicGrades, StudentCourseGrades
from models.instrument import EvaluationActivity, EvaluationInstrument
from models.outcome import EvaluationCriterion, LearningOutcome
from models.period import EvaluationStructure
from models.practical_exam import PRACTICAL_EXAM_RUBRIC, PracticalExamEvaluation, RubricGroup
from models.service import Service, ServiceEvaluation
from models.student import PracticeGroup, Student


def _by_id(records: Iterable | Mapping | None) -> Mapping:
    if records is None:
        return MappingProxyType({})

    if isinstance(records, Mapping):
        return MappingProxyType(dict(records))

    return MappingProxyType({r.id: r for r in records})


class GradeSources:

    def __init__(
        self,
        students: Iterable[Student] | Mapping[str, Student] | None = None,
        practice_groups: Iterable[PracticeGroup] | Mapping[str, PracticeGroup] | None = None,
        instruments: Iterable[EvaluationInstrument] | Mapping[str, EvaluationInstrument] | None = None,
        outcomes: Iterable[LearningOutcome] | Mapping[str, LearningOutcome] | None = None,
        criteria: Iterable[EvaluationCriterion] | Mapping[str, EvaluationCriterion] | None = None,
        services: Iterable[Service] | Mapping[str, Service] | None = None,
        service_evaluations: Iterable[ServiceEvaluation] | Mapping[str, ServiceEvaluation] | None = None,
        practical_exams: Iterable[PracticalExamEvaluation] | Mapping[str, PracticalExamEvaluation] | None = None,
        academic_grades: Iterable[StudentAcademicGrades] | Mapping[str, StudentAcademicGrades] | None = None,
        course_grades: Iterable[StudentCourseGrades] | Mapping[str, StudentCourseGrades] | None = None,
        structure: EvaluationStructure | None = None,
        rubric: tuple[RubricGroup, ...] = PRACTICAL_EXAM_RUBRIC,
    ):
        self._students = _by_id(students)
        self._practice_groups = _by_id(practice_groups)
        self._instruments = _by_id(instruments)
        self._outcomes = _by_id(outcomes)
        self._criteria = _by_id(criteria)
        self._services = _by_id(services)
        self._service_evaluations = _by_id(service_evaluations)
        self._practical_exams = _by_id(practical_exams)
        self._academic_grades = _by_id(academic_grades)
        self._course_grades = _by_id(course_grades)
        self._structure = structure or EvaluationStructure.default()
        self._rubric = tuple(rubric)
        self._activities = MappingProxyType(
            {
                activity.id: activity
                for instrument in self._instruments.values()
                for activity in instrument.activities
            }
        )

    # === properties ===

    @property
    def students(self) -> Mapping[str, Student]:
        return self._students

    @property
    def practice_groups(self) -> Mapping[str, PracticeGroup]:
        return self._practice_groups

    @property
    def instruments(self) -> Mapping[str, EvaluationInstrument]:
        return self._instruments

    @property
    def activities(self) -> Mapping[str, EvaluationActivity]:
        return self._activities

    @property
    def outcomes(self) -> Mapping[str, LearningOutcome]:
        return self._outcomes

    @property
    def criteria(self) -> Mapping[str, EvaluationCriterion]:
        return self._criteria

    @property
    def services(self) -> Mapping[str, Service]:
        return self._services

    @property
    def service_evaluations(self) -> Mapping[str, ServiceEvaluation]:
        return self._service_evaluations

    @property
    def practical_exams(self) -> Mapping[str, PracticalExamEvaluation]:
        return self._practical_exams

    @property
    def academic_grades(self) -> Mapping[str, StudentAcademicGrades]:
        return self._academic_grades

    @property
    def course_grades(self) -> Mapping[str, StudentCourseGrades]:
        return self._course_grades

    @property
    def structure(self) -> EvaluationStructure:
        return self._structure

    @property
    def rubric(self) -> tuple[RubricGroup, ...]:
        return self._rubric

    # === lookups ===

    def group_of(self, student_id: str) -> PracticeGroup | None:
        return next(
            (g for g in self._practice_groups.values() if g.has_student(student_id)),
            None,
        )

    def evaluation_for_service(self, service_id: str) -> ServiceEvaluation | None:
        return next(
            (e for e in self._service_evaluations.values() if e.service_id == service_id),
            None,
        )

    def __repr__(self) -> str:
        return (
            f"GradeSources({len(self._students)} students, {len(self._services)} services, "
            f"{len(self._practical_exams)} practical exams)"
        )
