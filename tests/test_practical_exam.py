# tests/test_practical_exam.py

import pytest

from engine.practical_exam import calculate_final_score, group_average, practical_exam_score
from models.practical_exam import PRACTICAL_EXAM_RUBRIC, CriterionScore, PracticalExamEvaluation


def test_final_score_excludes_unscored_groups(sample_practical_exam):
    final = calculate_final_score(sample_practical_exam)

    # RA1 = 8 (10 and 6), RA2 = 5, RA3 and RA4 unscored
    assert final.rounded() == 6.2
    assert final.coverage == pytest.approx(0.5)


def test_group_average_uses_only_scored_criteria(sample_practical_exam):
    ra1 = PRACTICAL_EXAM_RUBRIC[0]
    ra3 = PRACTICAL_EXAM_RUBRIC[2]

    assert group_average(sample_practical_exam, ra1).value == 8.0
    assert group_average(sample_practical_exam, ra1).coverage == 2
    assert group_average(sample_practical_exam, ra3).is_absent


def test_nothing_scored_is_absent():
    evaluation = PracticalExamEvaluation("pe1", "s001", "t2")

    # the exam entry screen used to show 0.00 here; an unscored exam is absent, not 0
    assert calculate_final_score(evaluation).is_absent


def test_fully_scored_exam():
    evaluation = PracticalExamEvaluation("pe1", "s001", "t3")
    for group in PRACTICAL_EXAM_RUBRIC:
        for criterion_id in group.criterion_ids:
            evaluation.set_score(group.id, criterion_id, 8)

    final = calculate_final_score(evaluation)

    assert final.rounded() == 8.0
    assert final.coverage == pytest.approx(1.0)


def test_practical_exam_score_reads_stored_final_score():
    stored = PracticalExamEvaluation("pe1", "s001", "t1", final_score=7.25)
    stored.set_score("ra1", "ra1_c1", 2)

    # the stored value wins over what the rubric scores would give now
    assert practical_exam_score("s001", "t1", [stored]).value == 7.25


def test_practical_exam_score_without_final_score_is_absent():
    unsaved = PracticalExamEvaluation("pe1", "s001", "t1")

    assert practical_exam_score("s001", "t1", [unsaved]).is_absent
    assert practical_exam_score("s002", "t1", []).is_absent


def test_set_score_keeps_notes():
    evaluation = PracticalExamEvaluation("pe1", "s001", "rec")
    evaluation.set_score("ra2", "ra2_c1", 5, notes="Punto de cocción justo")
    evaluation.set_score("ra2", "ra2_c1", 8)

    criterion = evaluation.scores_for_group("ra2")["ra2_c1"]

    assert criterion.score == 8.0
    assert criterion.notes == "Punto de cocción justo"


def test_invalid_exam_period_raises():
    with pytest.raises(ValueError):
        PracticalExamEvaluation("pe1", "s001", "t4")


def test_out_of_range_rubric_score_raises():
    evaluation = PracticalExamEvaluation("pe1", "s001", "t1")

    with pytest.raises(ValueError):
        evaluation.set_score("ra1", "ra1_c1", 11)


def test_criterion_score_levels():
    assert CriterionScore(8).level == "Bueno"
    assert CriterionScore(7).level is None
    assert CriterionScore().level is None
