# tests/test_gradebook.py

import json
import os
import tempfile

import pytest

from core.response import ErrorCode
from models.gradebook import Gradebook
from models.instrument import EvaluationActivity, EvaluationInstrument
from models.outcome import EvaluationCriterion
from models.practical_exam import PracticalExamEvaluation
from models.service import GroupServiceScores, IndividualServiceScores, Service, ServiceEvaluation
from models.student import PracticeGroup


def test_create_new_gradebook(sample_gradebook):
    assert sample_gradebook.name == "Cocina y Gastronomía"
    assert sample_gradebook.academic_year == "2025-2026"
    assert not sample_gradebook.has_unsaved_changes

    for filename in ("metadata.json", "evaluation_structure.json", "students.json", "criteria.json"):
        assert os.path.exists(os.path.join(sample_gradebook.path, filename))


def test_create_seeds_default_course_data(sample_gradebook, empty_gradebook):
    assert len(sample_gradebook.instruments) == 6
    assert len(sample_gradebook.outcomes) == 3
    assert len(sample_gradebook.criteria) == 8
    assert "act-7" in sample_gradebook.activities

    assert not empty_gradebook.instruments
    assert not empty_gradebook.criteria


def test_load_missing_directory(tmp_path):
    response = Gradebook.load(str(tmp_path / "nowhere"))

    assert not response.success
    assert response.error is ErrorCode.NOT_FOUND


def test_load_rejects_bad_evaluation_structure(sample_gradebook):
    bad_structure = {
        "periods": [
            {
                "key": "t1",
                "name": "1º Trimestre",
                "instruments": [
                    {"key": "exPracticoT9", "name": "Ex. Práctico", "type": "calculated", "weight": 1.0},
                ],
            }
        ]
    }

    with open(os.path.join(sample_gradebook.path, "evaluation_structure.json"), "w") as f:
        json.dump(bad_structure, f)

    response = Gradebook.load(sample_gradebook.path)

    assert not response.success
    assert response.error is ErrorCode.INVALID_FIELD_VALUE


def test_load_without_structure_file_uses_default(sample_gradebook):
    os.remove(os.path.join(sample_gradebook.path, "evaluation_structure.json"))

    response = Gradebook.load(sample_gradebook.path)

    assert response.success
    assert response.data["gradebook"].structure.period_keys == ["t1", "t2", "t3", "rec"]


# === data manipulators ===

# --- gradebook methods ---


def test_mark_dirty(sample_gradebook):
    gb = sample_gradebook
    assert not gb.has_unsaved_changes

    gb._mark_dirty()
    assert gb.has_unsaved_changes


# --- student methods ---


def test_add_student(sample_gradebook, sample_student):
    response = sample_gradebook.add_student(sample_student)

    assert response.success
    assert sample_student in sample_gradebook.students.values()
    assert sample_gradebook.has_unsaved_changes


def test_add_duplicate_student(sample_gradebook, sample_student):
    sample_gradebook.add_student(sample_student)
    response = sample_gradebook.add_student(sample_student)

    assert not response.success
    assert response.error is ErrorCode.DUPLICATE_RECORD
    assert response.status_code == 409


def test_find_student_by_uuid(sample_gradebook, sample_student):
    sample_gradebook.add_student(sample_student)

    assert sample_gradebook.find_student_by_uuid("s001").data["record"] is sample_student

    response = sample_gradebook.find_student_by_uuid("s999")
    assert response.error is ErrorCode.NOT_FOUND
    assert response.status_code == 404


def test_get_records_with_predicate(sample_gradebook, sample_student, second_student):
    second_student.toggle_active_status()
    sample_gradebook.add_student(sample_student)
    sample_gradebook.add_student(second_student)

    response = sample_gradebook.get_records(sample_gradebook.students, lambda s: s.is_active)

    assert response.data["records"] == [sample_student]


def test_remove_student_drops_their_scores(sample_gradebook, sample_student):
    gb = sample_gradebook
    gb.add_student(sample_student)
    gb.set_manual_grade("s001", "t1", "teorico1", 7)
    gb.set_course_module_grade("s001", "FOL", "t1", 6)
    gb.save_practical_exam(PracticalExamEvaluation("pe1", "s001", "t1"))

    response = gb.remove_student(sample_student)

    assert response.success
    assert "s001" not in gb.academic_grades
    assert "s001" not in gb.course_grades
    assert not gb.practical_exams


def test_practice_groups_do_not_overlap(sample_gradebook, sample_group):
    assert sample_gradebook.add_practice_group(sample_group).success

    response = sample_gradebook.add_practice_group(PracticeGroup("g2", "Brigada 2", ["s002", "s003"]))

    assert response.error is ErrorCode.VALIDATION_FAILED


def test_remove_practice_group(sample_gradebook, sample_group):
    sample_gradebook.add_practice_group(sample_group)

    assert sample_gradebook.remove_practice_group(sample_group).success
    assert "g1" not in sample_gradebook.practice_groups
    assert sample_gradebook.remove_practice_group(sample_group).error is ErrorCode.NOT_FOUND


def test_find_seeded_course_records(sample_gradebook):
    assert sample_gradebook.find_instrument_by_uuid("examen").data["record"].name == "Examen"
    assert sample_gradebook.find_activity_by_uuid("act-8").data["record"].period == "t2"
    assert sample_gradebook.find_outcome_by_uuid("cocina_basica").success
    assert sample_gradebook.find_criterion_by_uuid("pan_001").data["record"].weight == 30

    missing = sample_gradebook.find_criterion_by_uuid("med_006")

    assert missing.error is ErrorCode.NOT_FOUND
    assert missing.status_code == 404


# --- instruments, outcomes and criteria ---


def test_add_instrument_rejects_reused_activity_ids(sample_gradebook):
    instrument = EvaluationInstrument(
        "extra", "Extra", 0, [EvaluationActivity("act-1", "Repetida", "t1")]
    )

    response = sample_gradebook.add_instrument(instrument)

    assert response.error is ErrorCode.DUPLICATE_RECORD


def test_remove_instrument_leaves_dangling_associations(sample_gradebook):
    gb = sample_gradebook
    criterion = gb.criteria["cocina_001"]
    gb.associate_criterion(criterion, "ut1", ["act-3"])

    gb.remove_instrument(gb.instruments["fichas"])

    assert "act-3" not in gb.activities
    assert criterion.activity_ids == ["act-3"]


def test_add_and_remove_criterion_updates_outcome(sample_gradebook):
    gb = sample_gradebook
    criterion = EvaluationCriterion("med_003", "cocina_mediterranea", "Emplata con criterio", 15)

    assert gb.add_criterion(criterion).success
    assert gb.outcomes["cocina_mediterranea"].criterion_ids.count("med_003") == 1

    gb.remove_criterion(criterion)
    assert "med_003" not in gb.criteria
    assert "med_003" not in gb.outcomes["cocina_mediterranea"].criterion_ids


def test_add_criterion_for_unknown_outcome(sample_gradebook):
    criterion = EvaluationCriterion("x_001", "ra_inexistente", "Sin resultado", 10)

    assert sample_gradebook.add_criterion(criterion).error is ErrorCode.NOT_FOUND


def test_remove_outcome_removes_its_criteria(sample_gradebook):
    gb = sample_gradebook
    gb.remove_outcome(gb.outcomes["panaderia_pasteleria"])

    assert "pan_001" not in gb.criteria
    assert "cocina_001" in gb.criteria


def test_associate_criterion_reports_unresolved_activities(sample_gradebook):
    criterion = sample_gradebook.criteria["cocina_001"]

    response = sample_gradebook.associate_criterion(criterion, "ut1", ["act-1", "act-99"])

    assert response.success
    assert response.data["unresolved"] == ["act-99"]
    assert criterion.activity_ids == ["act-1", "act-99"]


# --- services ---


def test_add_service_creates_evaluation(sample_gradebook, sample_service):
    response = sample_gradebook.add_service(sample_service)

    assert response.success
    assert sample_gradebook.find_service_evaluation("srv1").success


def test_save_service_evaluation(sample_gradebook, sample_service, sample_service_evaluation):
    sample_gradebook.add_service(sample_service)

    response = sample_gradebook.save_service_evaluation(sample_service_evaluation)

    assert response.success
    assert list(sample_gradebook.service_evaluations) == ["eval-srv1"]
    assert sample_gradebook.service_evaluations["eval-srv1"] is sample_service_evaluation


def test_score_new_service_evaluation(sample_gradebook, sample_service, sample_student, sample_group):
    sample_gradebook.add_student(sample_student)
    sample_gradebook.add_practice_group(sample_group)
    evaluation = sample_gradebook.add_service(sample_service).data["evaluation"]

    evaluation.set_individual_scores("s001", IndividualServiceScores(scores=[2.0, 3.0]))
    evaluation.set_group_scores("g1", GroupServiceScores(scores=[2.0, 3.0, 3.0]))

    assert sample_gradebook.save_service_evaluation(evaluation).success

    report = sample_gradebook.get_student_report("s001").data["report"]

    # 5 * 0.6 + 8 * 0.4
    assert report.services[0]["grade"] == pytest.approx(6.2)


def test_locked_service_rejects_changes(sample_gradebook, sample_service, sample_service_evaluation):
    sample_gradebook.add_service(sample_service)
    sample_gradebook.toggle_service_locked_status(sample_service)

    response = sample_gradebook.save_service_evaluation(sample_service_evaluation)

    assert not response.success
    assert response.error is ErrorCode.RECORD_LOCKED
    assert response.status_code == 423


def test_evaluation_for_unknown_service(sample_gradebook):
    evaluation = ServiceEvaluation("e1", "nope", {"s001": IndividualServiceScores(scores=[2.5])})

    assert sample_gradebook.save_service_evaluation(evaluation).error is ErrorCode.NOT_FOUND


def test_remove_service_removes_evaluation(sample_gradebook):
    service = Service("srv9", "Servicio Primavera", "t3")
    sample_gradebook.add_service(service)

    sample_gradebook.remove_service(service)

    assert not sample_gradebook.service_evaluations


# --- practical exams ---


def test_save_practical_exam_stores_final_score(sample_gradebook, sample_student, sample_practical_exam):
    sample_gradebook.add_student(sample_student)

    response = sample_gradebook.save_practical_exam(sample_practical_exam)

    assert response.success
    assert response.data["final_score"] == 6.2
    assert sample_practical_exam.final_score == 6.2


def test_save_empty_practical_exam_stores_no_score(sample_gradebook, sample_student):
    sample_gradebook.add_student(sample_student)

    response = sample_gradebook.save_practical_exam(PracticalExamEvaluation("pe1", "s001", "t2"))

    assert response.success
    assert response.data["final_score"] is None


def test_save_practical_exam_replaces_previous(sample_gradebook, sample_student, sample_practical_exam):
    gb = sample_gradebook
    gb.add_student(sample_student)
    gb.save_practical_exam(sample_practical_exam)

    retake = PracticalExamEvaluation("pe2", "s001", "t1")
    retake.set_score("ra4", "ra4_c1", 9)
    gb.save_practical_exam(retake)

    assert list(gb.practical_exams) == ["pe2"]
    assert gb.find_practical_exam("s001", "t1").data["record"].final_score == 9.0


def test_new_practical_exam_reuses_stored_exam(sample_gradebook, sample_student, sample_practical_exam):
    gb = sample_gradebook
    gb.add_student(sample_student)
    gb.save_practical_exam(sample_practical_exam)

    assert gb.new_practical_exam("s001", "t1").data["record"] is sample_practical_exam

    fresh = gb.new_practical_exam("s001", "rec").data["record"]
    assert fresh.exam_period == "rec"
    assert fresh.id not in gb.practical_exams


def test_practical_exam_for_unknown_student(sample_gradebook, sample_practical_exam):
    response = sample_gradebook.save_practical_exam(sample_practical_exam)

    assert response.error is ErrorCode.NOT_FOUND


# --- manual grades ---


def test_set_manual_grade(sample_gradebook, sample_student):
    sample_gradebook.add_student(sample_student)

    response = sample_gradebook.set_manual_grade("s001", "t1", "teorico1", "8.5")

    assert response.success
    assert sample_gradebook.academic_grades["s001"].manual_grade("t1", "teorico1") == 8.5


def test_set_manual_grade_rejects_bad_values(sample_gradebook, sample_student):
    sample_gradebook.add_student(sample_student)

    assert sample_gradebook.set_manual_grade("s001", "t1", "teorico1", 11).error is ErrorCode.INVALID_FIELD_VALUE
    assert sample_gradebook.set_manual_grade("s001", "t1", "teorico1", "ocho").error is ErrorCode.INVALID_FIELD_VALUE
    assert sample_gradebook.set_manual_grade("s001", "t9", "teorico1", 5).error is ErrorCode.NOT_FOUND
    assert sample_gradebook.set_manual_grade("s999", "t1", "teorico1", 5).error is ErrorCode.NOT_FOUND


def test_set_course_module_grade(sample_gradebook, sample_student):
    sample_gradebook.add_student(sample_student)

    assert sample_gradebook.set_course_module_grade("s001", "EIE", "t2", 6).success
    assert sample_gradebook.set_course_module_grade("s001", "EIE", "t2", -1).error is ErrorCode.INVALID_FIELD_VALUE


def test_update_evaluation_structure(sample_gradebook):
    response = sample_gradebook.update_evaluation_structure({"periods": "nope"})

    assert response.error is ErrorCode.INVALID_FIELD_VALUE
    assert sample_gradebook.structure.period_keys == ["t1", "t2", "t3", "rec"]


# === reports ===


def test_student_report(sample_gradebook, sample_student, sample_group, sample_service, sample_service_evaluation):
    gb = sample_gradebook
    gb.add_student(sample_student)
    gb.add_practice_group(sample_group)
    gb.add_service(sample_service)
    gb.save_service_evaluation(sample_service_evaluation)
    gb.set_manual_grade("s001", "t1", "teorico1", 8)

    report = gb.get_student_report("s001").data["report"]

    assert report.calculated["service_averages"]["t1"] == 5.2
    assert report.period_average("t1") == 5.96
    assert report.periods["t1"]["instruments"]["exPracticoT1"] is None
    assert report.services[0]["grade"] == pytest.approx(5.2)
    # act-1 reads teorico1 and feeds nothing else in the defaults
    assert report.outcome_grade("cocina_basica") is None


def test_student_report_for_unknown_student(sample_gradebook):
    assert sample_gradebook.get_student_report("s999").error is ErrorCode.NOT_FOUND


# === persistence ===


def test_save_and_load_round_trip(
    sample_gradebook,
    sample_student,
    sample_group,
    sample_service,
    sample_service_evaluation,
    sample_practical_exam,
):
    gb = sample_gradebook
    gb.add_student(sample_student)
    gb.add_practice_group(sample_group)
    gb.add_service(sample_service, with_evaluation=False)
    gb.add_service_evaluation(sample_service_evaluation)
    gb.save_practical_exam(sample_practical_exam)
    gb.set_manual_grade("s001", "t1", "teorico2", 9.5)
    gb.associate_criterion(gb.criteria["cocina_001"], "ut1", ["act-2", "act-7"])

    with tempfile.TemporaryDirectory() as temp_dir:
        gb._metadata = {"name": "Test Course", "academic_year": "2024-2025", "created_at": "Testing"}

        assert gb.save(temp_dir).success

        with open(os.path.join(temp_dir, "students.json")) as f:
            data = json.load(f)

        assert data[0]["id"] == "s001"
        assert data[0]["last_name"] == "García"

        response = Gradebook.load(temp_dir)

    assert response.success
    loaded = response.data["gradebook"]

    assert loaded.name == "Test Course"
    assert not loaded.has_unsaved_changes
    assert loaded.practical_exams["pe1"].final_score == 6.2
    assert loaded.services["srv1"].date == sample_service.date
    assert loaded.get_student_report("s001").data["report"].to_dict() == (
        gb.get_student_report("s001").data["report"].to_dict()
    )
