# tests/test_outcome_grades.py

import logging

from engine.calculated import calculate_student_grades
from engine.outcome_grades import (
    criterion_grade,
    declared_weight,
    outcome_grade,
    student_criterion_grades,
    student_outcome_grades,
)
from engine.period_grades import student_period_averages
from engine.practical_exam import calculate_final_score
from engine.report import build_student_report
from engine.service_grades import service_averages
from engine.sources import GradeSources
from models.academic_grades import StudentAcademicGrades
from models.grade_source import GradeSource
from models.instrument import EvaluationActivity, EvaluationInstrument
from models.outcome import CriterionAssociation, EvaluationCriterion
from models.practical_exam import PracticalExamEvaluation


def _sources(sample_student, sample_instrument, sample_outcome, sample_criteria, grades):
    academic = StudentAcademicGrades("s001", {"t1": grades})

    return GradeSources(
        students=[sample_student],
        instruments=[sample_instrument],
        outcomes=[sample_outcome],
        criteria=sample_criteria,
        academic_grades=[academic],
    )


def test_criterion_averages_only_graded_activities(
    sample_student, sample_instrument, sample_outcome, sample_criteria
):
    sources = _sources(
        sample_student,
        sample_instrument,
        sample_outcome,
        sample_criteria,
        {"obs1": 6, "obs2": 8, "obs3": None},
    )

    grades = student_criterion_grades("s001", sources)

    assert grades["ce1"].rounded() == 7.0
    assert grades["ce1"].coverage == 2


def test_outcome_reports_graded_weight_coverage(
    sample_student, sample_instrument, sample_outcome, sample_criteria
):
    sources = _sources(
        sample_student,
        sample_instrument,
        sample_outcome,
        sample_criteria,
        {"obs1": 9, "obs2": 9},
    )

    grade = student_outcome_grades("s001", sources)["ra_cocina"]

    assert grade.rounded() == 9.0
    assert grade.coverage == 20
    assert declared_weight(sample_outcome, sources.criteria) == 50


def test_outcome_without_graded_criteria_is_absent(
    sample_student, sample_instrument, sample_outcome, sample_criteria
):
    sources = _sources(sample_student, sample_instrument, sample_outcome, sample_criteria, {})

    assert student_outcome_grades("s001", sources)["ra_cocina"].is_absent
    assert student_outcome_grades("s999", sources)["ra_cocina"].is_absent


def test_dangling_activity_is_no_data(
    caplog, sample_student, sample_instrument, sample_outcome, sample_criteria
):
    sources = _sources(
        sample_student, sample_instrument, sample_outcome, sample_criteria, {"obs1": 9}
    )

    with caplog.at_level(logging.DEBUG, logger="engine.outcome_grades"):
        grades = student_criterion_grades("s001", sources)

    assert grades["ce2"].is_absent
    assert "obs-missing" in caplog.text


def test_unknown_criterion_in_outcome_is_skipped(
    sample_student, sample_instrument, sample_outcome, sample_criteria
):
    sample_outcome.add_criterion_id("ce-undrafted")
    sources = _sources(
        sample_student, sample_instrument, sample_outcome, sample_criteria, {"obs1": 4}
    )

    grade = student_outcome_grades("s001", sources)["ra_cocina"]

    assert grade.rounded() == 4.0
    assert grade.coverage == 20


def test_calculated_activity_sources_feed_criteria(sample_student):
    instrument = EvaluationInstrument(
        "ex_practico",
        "Ex. Practico",
        18,
        [EvaluationActivity("act-7", "Ex. Practico 1", "t1", GradeSource.practical_exam("t1"))],
    )
    unbound = EvaluationInstrument(
        "fichas", "Fichas", 2, [EvaluationActivity("act-3", "Fichas 1", "t1")]
    )
    criterion = EvaluationCriterion(
        "ce1", "ra1", "Ejecuta técnicas", 100, [CriterionAssociation("ut1", ["act-7", "act-3"])]
    )
    exam = PracticalExamEvaluation("pe1", "s001", "t1", final_score=6.5)
    sources = GradeSources(
        students=[sample_student],
        instruments=[instrument, unbound],
        criteria=[criterion],
        practical_exams=[exam],
    )

    # act-3 has no grade source, so only the exam counts
    assert student_criterion_grades("s001", sources)["ce1"].value == 6.5


def test_repeated_activity_counts_twice(sample_student, sample_instrument):
    criterion = EvaluationCriterion(
        "ce1",
        "ra1",
        "Aplica técnicas",
        100,
        [CriterionAssociation("ut1", ["obs-1"]), CriterionAssociation("ut2", ["obs-1", "obs-2"])],
    )
    sources = GradeSources(
        students=[sample_student],
        instruments=[sample_instrument],
        criteria=[criterion],
        academic_grades=[StudentAcademicGrades("s001", {"t1": {"obs1": 10, "obs2": 4}})],
    )

    # (10 + 10 + 4) / 3
    assert student_criterion_grades("s001", sources)["ce1"].rounded() == 8.0


def test_aggregators_are_idempotent(
    sample_student, sample_instrument, sample_outcome, sample_criteria
):
    sources = _sources(
        sample_student, sample_instrument, sample_outcome, sample_criteria, {"obs1": 7.3, "obs2": 8.1}
    )

    first = student_outcome_grades("s001", sources)
    second = student_outcome_grades("s001", sources)

    assert first == second

    calculated = calculate_student_grades("s001", sources)
    academic = sources.academic_grades["s001"]
    criterion = sources.criteria["ce1"]

    assert criterion_grade(criterion, sources.activities, academic, calculated) == criterion_grade(
        criterion, sources.activities, academic, calculated
    )
    assert outcome_grade(
        sample_outcome, sources.criteria, sources.activities, academic, calculated
    ) == first["ra_cocina"]


def test_every_aggregator_is_idempotent_over_services_and_exams(
    sample_student,
    sample_group,
    sample_service,
    sample_service_evaluation,
    sample_practical_exam,
):
    sample_practical_exam.final_score = calculate_final_score(sample_practical_exam).rounded()
    sources = GradeSources(
        students=[sample_student],
        practice_groups=[sample_group],
        services=[sample_service],
        service_evaluations=[sample_service_evaluation],
        practical_exams=[sample_practical_exam],
        academic_grades=[StudentAcademicGrades("s001", {"t1": {"teorico1": 7.5}})],
    )

    assert service_averages("s001", sources) == service_averages("s001", sources)
    assert calculate_final_score(sample_practical_exam) == calculate_final_score(sample_practical_exam)
    assert calculate_student_grades("s001", sources).to_dict() == calculate_student_grades(
        "s001", sources
    ).to_dict()

    first_periods = student_period_averages("s001", sources)
    assert first_periods == student_period_averages("s001", sources)
    assert first_periods["t1"].is_present

    first_report = build_student_report("s001", sources).to_dict()
    assert first_report == build_student_report("s001", sources).to_dict()
    assert first_report["services"][0]["grade"] == 5.2
