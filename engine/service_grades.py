# engine/service_grades.py

"""
Service-Day aggregation.

For one service a student who attended gets:

    individual = sum of their individual rubric slots (unscored slots count as 0)
    group      = sum of their group's rubric slots, halved if their record says so
    grade      = individual * 0.6 + group * 0.4

A student with no group, or whose group was not scored, gets a group sum of 0. A student
who did not attend, or has no individual record, contributes nothing for that service.
The trimester service average is the plain mean of the per-service grades over attended
services, and is absent when no service was attended.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from core.grade import Grade
from core.numeric import coerce_score, mean, round_half_up
from engine.sources import GradeSources
from models.service import Service, ServiceEvaluation
from models.student import PracticeGroup

logger = logging.getLogger(__name__)

INDIVIDUAL_WEIGHT = 0.6
GROUP_WEIGHT = 0.4


class ServiceBreakdown:
    """One attended service, as shown in the student's service history."""

    def __init__(
        self,
        service: Service,
        individual: float,
        group: float,
        grade: float,
        group_name: str | None,
        class_average: Grade,
        observations: str,
    ):
        self.service = service
        self.individual = individual
        self.group = group
        self.grade = grade
        self.group_name = group_name
        self.class_average = class_average
        self.observations = observations

    def to_dict(self) -> dict:
        return {
            "service_id": self.service.id,
            "service_name": self.service.name,
            "trimester": self.service.trimester,
            "date": self.service.date.isoformat() if self.service.date else None,
            "individual": round_half_up(self.individual),
            "group": round_half_up(self.group),
            "grade": round_half_up(self.grade),
            "group_name": self.group_name,
            "class_average": self.class_average.rounded(),
            "observations": self.observations,
        }

    def __repr__(self) -> str:
        return f"ServiceBreakdown({self.service.id}, {self.individual}, {self.group}, {self.grade})"


def sum_slots(scores: Iterable[float | None]) -> float:
    return sum(coerce_score(score) for score in scores)


def _group_for(student_id: str, groups: Iterable[PracticeGroup]) -> PracticeGroup | None:
    return next((g for g in groups if g.has_student(student_id)), None)


def _service_components(
    student_id: str,
    evaluation: ServiceEvaluation,
    group: PracticeGroup | None,
) -> tuple[float, float] | None:
    individual = evaluation.individual_for(student_id)

    if individual is None or not individual.attendance:
        return None

    individual_sum = sum_slots(individual.scores)

    group_sum = 0.0
    group_scores = evaluation.group_for(group.id) if group else None
    if group_scores is not None:
        group_sum = sum_slots(group_scores.scores)
        if individual.halve_group_score:
            group_sum /= 2

    return individual_sum, group_sum


def combine_service_grade(individual: float, group: float) -> float:
    return individual * INDIVIDUAL_WEIGHT + group * GROUP_WEIGHT


def service_grade(
    student_id: str,
    evaluation: ServiceEvaluation,
    groups: Iterable[PracticeGroup],
) -> Grade:
    """
    Computes one student's grade for one service.

    Returns:
        The 60/40 combined grade, or an absent `Grade` if the student did not attend.
    """
    group = _group_for(student_id, groups)
    components = _service_components(student_id, evaluation, group)

    if components is None:
        return Grade.absent()

    return Grade.present(combine_service_grade(*components))


def service_average(
    student_id: str,
    trimester: str,
    services: Mapping[str, Service],
    evaluations: Iterable[ServiceEvaluation],
    groups: Iterable[PracticeGroup],
) -> Grade:
    """
    Averages a student's service grades over every attended service of a trimester.

    Args:
        student_id (str): The student being graded.
        trimester (str): "t1", "t2" or "t3".
        services (Mapping[str, Service]): All services by id.
        evaluations (Iterable[ServiceEvaluation]): All service evaluations.
        groups (Iterable[PracticeGroup]): All practice groups.

    Returns:
        The unrounded mean, with `coverage` set to the number of attended services, or
        an absent `Grade` when the student attended none.

    Notes:
        - Evaluations whose service id does not resolve are skipped.
    """
    groups = list(groups)
    grades: list[float] = []

    for evaluation in evaluations:
        service = services.get(evaluation.service_id)

        if service is None:
            logger.debug("Skipping evaluation %s for unknown service", evaluation.id)
            continue

        if service.trimester != trimester:
            continue

        grade = service_grade(student_id, evaluation, groups)
        if grade.is_present:
            grades.append(grade.value)

    if not grades:
        return Grade.absent()

    return Grade.present(mean(grades), coverage=len(grades))


def service_averages(student_id: str, sources: GradeSources) -> dict[str, Grade]:
    """Service average for every trimester in which services can be held."""
    return {
        trimester: service_average(
            student_id,
            trimester,
            sources.services,
            sources.service_evaluations.values(),
            sources.practice_groups.values(),
        )
        for trimester in ("t1", "t2", "t3")
    }


def service_class_average(
    evaluation: ServiceEvaluation,
    groups: Iterable[PracticeGroup],
) -> Grade:
    """Mean service grade over the students who attended this service."""
    groups = list(groups)
    grades = [
        grade.value
        for student_id in evaluation.individual_scores
        if (grade := service_grade(student_id, evaluation, groups)).is_present
    ]

    if not grades:
        return Grade.absent()

    return Grade.present(mean(grades), coverage=len(grades))


def service_history(student_id: str, sources: GradeSources) -> list[ServiceBreakdown]:
    """
    Lists every service the student attended, oldest first.

    Each entry carries the individual and group sums (after halving), the 60/40 grade,
    and the class average of that service. Services without a date sort last.
    """
    groups = list(sources.practice_groups.values())
    group = sources.group_of(student_id)
    history: list[ServiceBreakdown] = []

    for service in sources.services.values():
        evaluation = sources.evaluation_for_service(service.id)
        if evaluation is None:
            continue

        components = _service_components(student_id, evaluation, group)
        if components is None:
            continue

        individual_sum, group_sum = components
        individual = evaluation.individual_for(student_id)
        group_scores = evaluation.group_for(group.id) if group else None
        observations = " | ".join(
            text
            for text in (
                individual.observations if individual else "",
                group_scores.observations if group_scores else "",
            )
            if text
        )

        history.append(
            ServiceBreakdown(
                service=service,
                individual=individual_sum,
                group=group_sum,
                grade=combine_service_grade(individual_sum, group_sum),
                group_name=group.name if group else None,
                class_average=service_class_average(evaluation, groups),
                observations=observations,
            )
        )

    history.sort(key=lambda b: (b.service.date is None, b.service.date or 0, b.service.name))
    return history
