# engine/outcome_grades.py

"""
Criterion and learning-outcome (RA) aggregation.

A criterion's grade is the plain mean of the grades of its associated activities that
currently have one. Each activity's number comes from its declared `GradeSource`.
Activity ids that no longer resolve, and activities with no source, count as "no data".

An outcome's grade is the weighted mean of its graded criteria, each weighted by its
ponderación. The result's `coverage` is the ponderación actually graded so far, so a
caller can flag the outcome as provisional when it is below the declared total.
"""

from __future__ import annotations

import logging
from typing import Mapping

from core.grade import Grade
from core.numeric import mean, weighted_mean
from engine.calculated import CalculatedGrades, calculate_student_grades, resolve_source
from engine.sources import GradeSources
from models.academic_grades import StudentAcademicGrades
from models.instrument import EvaluationActivity
from models.outcome import EvaluationCriterion, LearningOutcome

logger = logging.getLogger(__name__)


def activity_grade(
    activity_id: str,
    activities: Mapping[str, EvaluationActivity],
    academic: StudentAcademicGrades | None,
    calculated: CalculatedGrades,
) -> Grade:
    activity = activities.get(activity_id)

    if activity is None:
        logger.debug("Activity %s does not resolve; treating as ungraded", activity_id)
        return Grade.absent()

    if activity.source is None:
        return Grade.absent()

    return resolve_source(activity.source, academic, calculated)


def criterion_grade(
    criterion: EvaluationCriterion,
    activities: Mapping[str, EvaluationActivity],
    academic: StudentAcademicGrades | None,
    calculated: CalculatedGrades,
) -> Grade:
    """
    Averages the grades of the activities associated with a criterion.

    Returns:
        The unrounded mean with `coverage` set to the number of graded activities, or an
        absent `Grade` if the criterion has no associations or none is graded yet.

    Notes:
        - An activity listed under two associations is counted twice, as listed.
    """
    grades = [
        grade.value
        for activity_id in criterion.activity_ids
        if (grade := activity_grade(activity_id, activities, academic, calculated)).is_present
    ]

    if not grades:
        return Grade.absent()

    return Grade.present(mean(grades), coverage=len(grades))


def outcome_grade(
    outcome: LearningOutcome,
    criteria: Mapping[str, EvaluationCriterion],
    activities: Mapping[str, EvaluationActivity],
    academic: StudentAcademicGrades | None,
    calculated: CalculatedGrades,
) -> Grade:
    """
    Weights the graded criteria of an outcome by their ponderación.

    Returns:
        The weighted mean rounded to 2 decimals, with `coverage` set to the sum of the
        ponderación of graded criteria, or an absent `Grade` if that sum is 0.
    """
    pairs: list[tuple[float, float]] = []

    for criterion_id in outcome.criterion_ids:
        criterion = criteria.get(criterion_id)

        if criterion is None:
            logger.debug("Outcome %s lists unknown criterion %s", outcome.id, criterion_id)
            continue

        grade = criterion_grade(criterion, activities, academic, calculated)
        if grade.is_present:
            pairs.append((grade.value, criterion.weight))

    covered = sum(weight for _, weight in pairs)
    if covered == 0:
        return Grade.absent()

    return Grade.present(weighted_mean(pairs), coverage=covered)


def declared_weight(outcome: LearningOutcome, criteria: Mapping[str, EvaluationCriterion]) -> float:
    return sum(criteria[c].weight for c in outcome.criterion_ids if c in criteria)


def student_criterion_grades(
    student_id: str,
    sources: GradeSources,
    calculated: CalculatedGrades | None = None,
) -> dict[str, Grade]:
    calculated = calculated or calculate_student_grades(student_id, sources)
    academic = sources.academic_grades.get(student_id)

    return {
        criterion_id: criterion_grade(criterion, sources.activities, academic, calculated)
        for criterion_id, criterion in sources.criteria.items()
    }


def student_outcome_grades(
    student_id: str,
    sources: GradeSources,
    calculated: CalculatedGrades | None = None,
) -> dict[str, Grade]:
    calculated = calculated or calculate_student_grades(student_id, sources)
    academic = sources.academic_grades.get(student_id)

    return {
        outcome_id: outcome_grade(
            outcome, sources.criteria, sources.activities, academic, calculated
        )
        for outcome_id, outcome in sources.outcomes.items()
    }
