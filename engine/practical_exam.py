# engine/practical_exam.py

"""
Practical-Exam aggregation.

Each rubric group is graded as the plain mean of its scored criteria. The exam's final
score is the weighted mean of the groups that have at least one scored criterion, so an
unscored group is left out of both the weighted sum and the weight total instead of
counting as 0.

An exam with nothing scored is absent, the same policy the Service-Day and criterion
aggregators follow. The exam-entry screen shows a placeholder for it rather than 0.00.
"""

from __future__ import annotations

from typing import Iterable

from core.grade import Grade
from core.numeric import coerce_grade, mean, weighted_mean
from models.practical_exam import PRACTICAL_EXAM_RUBRIC, PracticalExamEvaluation, RubricGroup


def group_average(evaluation: PracticalExamEvaluation, group: RubricGroup) -> Grade:
    scored = [
        score
        for criterion_id in group.criterion_ids
        if (score := coerce_grade(evaluation.score_for(group.id, criterion_id))) is not None
    ]

    if not scored:
        return Grade.absent()

    return Grade.present(mean(scored), coverage=len(scored))


def calculate_final_score(
    evaluation: PracticalExamEvaluation,
    rubric: Iterable[RubricGroup] = PRACTICAL_EXAM_RUBRIC,
) -> Grade:
    """
    Computes the final score of one practical exam from its rubric scores.

    Args:
        evaluation (PracticalExamEvaluation): The exam being scored.
        rubric (Iterable[RubricGroup]): The rubric groups and their weights.

    Returns:
        The weighted mean rounded to 2 decimals, with `coverage` set to the total weight
        of the scored groups, or an absent `Grade` when no criterion is scored.
    """
    pairs: list[tuple[float, float]] = []

    for group in rubric:
        average = group_average(evaluation, group)
        if average.is_present:
            pairs.append((average.value, group.weight))

    covered = sum(weight for _, weight in pairs)
    if covered == 0:
        return Grade.absent()

    return Grade.present(weighted_mean(pairs), coverage=covered)


def practical_exam_score(
    student_id: str,
    exam_period: str,
    evaluations: Iterable[PracticalExamEvaluation],
) -> Grade:
    """
    Reads the stored practical exam score of a student for one exam period.

    Only the saved `final_score` is used; it is never recomputed here. If more than one
    saved evaluation exists for the period their final scores are averaged.
    """
    scores = [
        score
        for e in evaluations
        if e.student_id == student_id and e.exam_period == exam_period
        if (score := coerce_grade(e.final_score)) is not None
    ]

    if not scores:
        return Grade.absent()

    return Grade.present(mean(scores))
