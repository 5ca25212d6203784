# engine/dashboard.py

"""
Class-level figures for the learning-outcome dashboard.

The summary, RA progress and highlights are all drawn from saved practical exams. The
outcome overview runs the criterion/RA cascade for every student on the roster.
"""

from __future__ import annotations

from core.grade import Grade
from core.numeric import coerce_grade, mean
from engine.outcome_grades import declared_weight, student_outcome_grades
from engine.practical_exam import group_average
from engine.sources import GradeSources

PASS_MARK = 5.0
HIGHLIGHT_COUNT = 3


def _final_scores_by_student(sources: GradeSources) -> dict[str, list[float]]:
    scores: dict[str, list[float]] = {}

    for evaluation in sources.practical_exams.values():
        score = coerce_grade(evaluation.final_score)
        if score is not None:
            scores.setdefault(evaluation.student_id, []).append(score)

    return scores


def dashboard_summary(sources: GradeSources) -> dict:
    """
    Headline numbers for the dashboard.

    Returns:
        dict: "total_students", "overall_average" (mean of every saved final score, or
        None), "passing_students" and "at_risk_students" (by each student's best final
        score against `PASS_MARK`).
    """
    by_student = _final_scores_by_student(sources)
    all_scores = [score for scores in by_student.values() for score in scores]
    best = [max(scores) for scores in by_student.values()]

    return {
        "total_students": len(sources.students),
        "overall_average": Grade.present(mean(all_scores)).rounded() if all_scores else None,
        "passing_students": sum(1 for score in best if score >= PASS_MARK),
        "at_risk_students": sum(1 for score in best if score < PASS_MARK),
    }


def outcome_progress(sources: GradeSources) -> list[dict]:
    """Mean of each rubric group's average across every saved practical exam."""
    progress = []

    for group in sources.rubric:
        averages = [
            average.value
            for evaluation in sources.practical_exams.values()
            if (average := group_average(evaluation, group)).is_present
        ]
        progress.append(
            {
                "id": group.id,
                "name": group.name,
                "weight": group.weight,
                "average": Grade.present(mean(averages)).rounded() if averages else None,
            }
        )

    return progress


def student_highlights(sources: GradeSources, count: int = HIGHLIGHT_COUNT) -> dict[str, list[dict]]:
    """
    The best and worst students by mean practical exam final score.

    Students with no saved final score are left out rather than ranked as 0.
    """
    by_student = _final_scores_by_student(sources)
    ranked = sorted(
        (
            {
                "student_id": student_id,
                "name": student.sort_name,
                "score": Grade.present(mean(by_student[student_id])).rounded(),
            }
            for student_id, student in sources.students.items()
            if student_id in by_student
        ),
        key=lambda entry: entry["score"],
        reverse=True,
    )

    return {
        "top": ranked[:count],
        "bottom": list(reversed(ranked[-count:])) if ranked else [],
    }


def outcome_overview(sources: GradeSources) -> list[dict]:
    """
    Every learning outcome with each student's grade and the class mean.

    The class mean only averages students whose outcome grade is present.
    """
    per_student = {
        student_id: student_outcome_grades(student_id, sources)
        for student_id in sources.students
    }

    overview = []
    for outcome_id, outcome in sources.outcomes.items():
        grades = {student_id: grades[outcome_id] for student_id, grades in per_student.items()}
        present = [g.value for g in grades.values() if g.is_present]

        overview.append(
            {
                "id": outcome_id,
                "name": outcome.name,
                "weight": outcome.weight,
                "declared_weight": declared_weight(outcome, sources.criteria),
                "class_average": Grade.present(mean(present)).rounded() if present else None,
                "students": {
                    student_id: {"grade": g.rounded(), "coverage": g.coverage}
                    for student_id, g in grades.items()
                },
            }
        )

    return overview
