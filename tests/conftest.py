# tests/conftest.py

import datetime

import pytest

from engine.sources import GradeSources
from models.gradebook import Gradebook
from models.grade_source import GradeSource
from models.instrument import EvaluationActivity, EvaluationInstrument
from models.outcome import CriterionAssociation, EvaluationCriterion, LearningOutcome
from models.practical_exam import PracticalExamEvaluation
from models.service import (
    GroupServiceScores,
    IndividualServiceScores,
    Service,
    ServiceEvaluation,
    ServiceRubric,
)
from models.student import PracticeGroup, Student


@pytest.fixture
def sample_gradebook(tmp_path):
    gradebook_response = Gradebook.create(
        "Cocina y Gastronomía", "2025-2026", str(tmp_path / "gradebook")
    )
    return gradebook_response.data["gradebook"]


@pytest.fixture
def empty_gradebook(tmp_path):
    gradebook_response = Gradebook.create(
        "Cocina y Gastronomía", "2025-2026", str(tmp_path / "empty"), seed_defaults=False
    )
    return gradebook_response.data["gradebook"]


@pytest.fixture
def sample_student():
    return Student("s001", "Lucía", "García", nre="1001", group="G1", email="lgarcia@ies.es")


@pytest.fixture
def second_student():
    return Student("s002", "Mario", "Pérez", nre="1002", group="G1")


@pytest.fixture
def sample_group():
    return PracticeGroup("g1", "Brigada 1", ["s001", "s002"])


@pytest.fixture
def sample_service():
    return Service("srv1", "Servicio Otoño", "t1", date=datetime.date(2025, 10, 15))


@pytest.fixture
def ten_slot_rubric():
    return ServiceRubric(
        [{"id": f"ind{n}", "label": f"Ítem {n}", "max_score": 1.0} for n in range(1, 11)]
    )


@pytest.fixture
def eight_slot_rubric():
    maxima = [1.0, 1.5, 1.0, 1.5, 1.0, 1.0, 1.0, 2.0]
    return ServiceRubric(
        [{"id": f"grp{n}", "label": f"Ítem {n}", "max_score": m} for n, m in enumerate(maxima, 1)]
    )


@pytest.fixture
def sample_service_evaluation(ten_slot_rubric, eight_slot_rubric):
    return ServiceEvaluation(
        "eval-srv1",
        "srv1",
        individual_scores={
            "s001": IndividualServiceScores(
                scores=[1.0, 1.0, None, 0, 0, 0, 0, 0, 0, 0],
                rubric=ten_slot_rubric,
            ),
        },
        group_scores={
            "g1": GroupServiceScores(
                scores=[1.0, 1.5, 1.0, 1.5, 1.0, 1.0, 1.0, 2.0],
                rubric=eight_slot_rubric,
            ),
        },
        individual_rubric=ten_slot_rubric,
        group_rubric=eight_slot_rubric,
    )


@pytest.fixture
def sample_practical_exam():
    evaluation = PracticalExamEvaluation("pe1", "s001", "t1")
    evaluation.set_score("ra1", "ra1_c1", 10)
    evaluation.set_score("ra1", "ra1_c2", 6)
    evaluation.set_score("ra2", "ra2_c1", 5)
    return evaluation


@pytest.fixture
def sample_instrument():
    return EvaluationInstrument(
        "observacion",
        "Observación Sistemática",
        20,
        [
            EvaluationActivity("obs-1", "Observación 1", "t1", GradeSource.manual("t1", "obs1")),
            EvaluationActivity("obs-2", "Observación 2", "t1", GradeSource.manual("t1", "obs2")),
            EvaluationActivity("obs-3", "Observación 3", "t1", GradeSource.manual("t1", "obs3")),
        ],
    )


@pytest.fixture
def sample_criteria():
    return [
        EvaluationCriterion(
            "ce1",
            "ra_cocina",
            "Aplica técnicas de cocción",
            20,
            [CriterionAssociation("ut1", ["obs-1", "obs-2", "obs-3"])],
        ),
        EvaluationCriterion(
            "ce2",
            "ra_cocina",
            "Presenta elaboraciones",
            30,
            [CriterionAssociation("ut1", ["obs-missing"])],
        ),
    ]


@pytest.fixture
def sample_outcome():
    return LearningOutcome("ra_cocina", "Cocina Básica", 100, ["ce1", "ce2"])


@pytest.fixture
def sample_sources(
    sample_student,
    second_student,
    sample_group,
    sample_service,
    sample_service_evaluation,
):
    return GradeSources(
        students=[sample_student, second_student],
        practice_groups=[sample_group],
        services=[sample_service],
        service_evaluations=[sample_service_evaluation],
    )
