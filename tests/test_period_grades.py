# tests/test_period_grades.py

import pytest

from core.grade import Grade
from engine.calculated import CalculatedGrades, calculate_student_grades, resolve_source
from engine.period_grades import class_period_averages, period_average, student_period_averages
from engine.sources import GradeSources
from models.academic_grades import StudentAcademicGrades
from models.grade_source import GradeSource
from models.period import EvaluationStructure
from models.practical_exam import PracticalExamEvaluation


def _calculated(services=None, exams=None):
    return CalculatedGrades("s001", services or {}, exams or {})


def test_period_average_excludes_missing_instruments():
    t1 = EvaluationStructure.default().get_period("t1")
    academic = StudentAcademicGrades("s001", {"t1": {"teorico1": 8.0}})
    calculated = _calculated(services={"t1": Grade.present(5.2)})

    average = period_average(t1, academic, calculated)

    # (5.2 * 0.4 + 8.0 * 0.15) / 0.55
    assert average.rounded() == 5.96
    assert average.coverage == pytest.approx(0.55)


def test_period_with_no_values_is_absent():
    t2 = EvaluationStructure.default().get_period("t2")

    assert period_average(t2, None, _calculated()).is_absent


def test_fully_graded_period():
    t1 = EvaluationStructure.default().get_period("t1")
    academic = StudentAcademicGrades("s001", {"t1": {"teorico1": 6.0, "teorico2": 7.0}})
    calculated = _calculated(
        services={"t1": Grade.present(8.0)},
        exams={"t1": Grade.present(5.0)},
    )

    average = period_average(t1, academic, calculated)

    # 8*0.4 + 5*0.3 + 6*0.15 + 7*0.15
    assert average.rounded() == 6.65
    assert average.coverage == pytest.approx(1.0)


def test_practical_exam_instrument_reads_matching_sub_period(sample_student):
    exams = [
        PracticalExamEvaluation("pe-t2", "s001", "t2", final_score=9.0),
        PracticalExamEvaluation("pe-rec", "s001", "rec", final_score=4.0),
    ]
    sources = GradeSources(students=[sample_student], practical_exams=exams)

    averages = student_period_averages("s001", sources)

    assert averages["t1"].is_absent
    assert averages["t2"].rounded() == 9.0
    assert averages["rec"].rounded() == 4.0


def test_unreadable_manual_value_is_ignored():
    source = GradeSource.manual("t1", "teorico1")
    academic = StudentAcademicGrades("s001", {"t1": {"teorico1": "n/a"}})

    assert resolve_source(source, academic, _calculated()).is_absent


def test_class_period_averages_cover_the_roster(sample_sources):
    averages = class_period_averages(sample_sources)

    assert set(averages) == {"s001", "s002"}
    # only the service instrument has a value: 5.2 over weight 0.4
    assert averages["s001"]["t1"].rounded() == 5.2
    assert averages["s002"]["t1"].is_absent


def test_calculated_grades_to_dict(sample_sources):
    calculated = calculate_student_grades("s001", sample_sources)

    data = calculated.to_dict()

    assert data["service_averages"] == {"t1": 5.2, "t2": None, "t3": None}
    assert data["practical_exams"] == {"t1": None, "t2": None, "t3": None, "rec": None}
