# models/practical_exam.py

"""
Practical exam rubric and per-student exam evaluations.

The rubric is fixed: four learning-outcome groups weighted 20/30/30/20, each holding a
few criteria scored on the discrete scale in `SCORE_LEVELS` (or left unscored).

A `PracticalExamEvaluation` exists per (student, exam period). Its `final_score` is
computed once when the exam-entry screen saves it (see `Gradebook.save_practical_exam`)
and is read verbatim afterwards, even if the rubric changes later.
"""

from __future__ import annotations

import math
from typing import Any

from models.grade_source import EXAM_PERIODS


class RubricGroup:

    def __init__(self, id: str, name: str, weight: float, criteria: list[tuple[str, str]]):
        self._id = id
        self._name = name
        self._weight = weight
        self._criteria = tuple(criteria)

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def weight(self) -> float:
        return self._weight

    @property
    def criterion_ids(self) -> list[str]:
        return [criterion_id for criterion_id, _ in self._criteria]

    @property
    def criteria(self) -> tuple[tuple[str, str], ...]:
        return self._criteria

    def __repr__(self) -> str:
        return f"RubricGroup({self._id}, {self._weight}, {len(self._criteria)} criteria)"


PRACTICAL_EXAM_RUBRIC: tuple[RubricGroup, ...] = (
    RubricGroup(
        "ra1",
        "RA1: Realizar el aprovisionamiento",
        0.20,
        [
            ("ra1_c1", "CE1.1: Identifica necesidades"),
            ("ra1_c2", "CE1.2: Cumplimenta documentación"),
            ("ra1_c3", "CE1.3: Realiza recepción"),
        ],
    ),
    RubricGroup(
        "ra2",
        "RA2: Preparar y presentar elaboraciones",
        0.30,
        [
            ("ra2_c1", "CE2.1: Ejecuta técnicas de cocción"),
            ("ra2_c2", "CE2.2: Aplica técnicas de conservación"),
            ("ra2_c3", "CE2.3: Realiza emplatado estético"),
            ("ra2_c4", "CE2.4: Mantiene orden y limpieza"),
        ],
    ),
    RubricGroup(
        "ra3",
        "RA3: Aplicar sistemas de gestión",
        0.30,
        [
            ("ra3_c1", "CE3.1: Controla costes"),
            ("ra3_c2", "CE3.2: Aplica APPCC"),
        ],
    ),
    RubricGroup(
        "ra4",
        "RA4: Actuar bajo normas de seguridad",
        0.20,
        [
            ("ra4_c1", "CE4.1: Aplica normas higiénico-sanitarias"),
            ("ra4_c2", "CE4.2: Utiliza EPIs correctamente"),
        ],
    ),
)

SCORE_LEVELS: dict[float, str] = {
    10.0: "Excelente",
    8.0: "Bueno",
    5.0: "Suficiente",
    2.0: "Insuficiente",
}


class CriterionScore:

    def __init__(self, score: float | None = None, notes: str = ""):
        self._score = CriterionScore.validate_score_input(score)
        self._notes = notes

    @property
    def score(self) -> float | None:
        return self._score

    @property
    def notes(self) -> str:
        return self._notes

    @property
    def is_scored(self) -> bool:
        return self._score is not None

    @property
    def level(self) -> str | None:
        """The `SCORE_LEVELS` label for this score, or None when unscored or off the scale."""
        return SCORE_LEVELS.get(self._score) if self._score is not None else None

    def to_dict(self) -> dict:
        return {"score": self._score, "notes": self._notes}

    @classmethod
    def from_dict(cls, data: dict) -> CriterionScore:
        return cls(score=data.get("score"), notes=data.get("notes", ""))

    def __repr__(self) -> str:
        return f"CriterionScore({self._score})"

    @staticmethod
    def validate_score_input(score: Any) -> float | None:
        """
        Accepts None (not scored yet) or a finite number between 0 and 10.

        Scores off the `SCORE_LEVELS` scale are accepted; the scale only drives the
        entry screen's buttons.

        Raises:
            TypeError: If the input is not None and cannot be cast to float.
            ValueError: If the input is non-finite or outside 0-10.
        """
        if score is None:
            return None

        try:
            score = float(score)

        except (TypeError, ValueError):
            raise TypeError("Score must be a number or None.") from None

        if not math.isfinite(score) or score < 0 or score > 10:
            raise ValueError("Score must be between 0 and 10.")

        return score


class PracticalExamEvaluation:

    def __init__(
        self,
        id: str,
        student_id: str,
        exam_period: str,
        scores: dict[str, dict[str, CriterionScore]] | None = None,
        final_score: float | None = None,
    ):
        if exam_period not in EXAM_PERIODS:
            raise ValueError(f"Unknown exam period: '{exam_period}'.")

        self._id = id
        self._student_id = student_id
        self._exam_period = exam_period
        self._scores: dict[str, dict[str, CriterionScore]] = {
            ra_id: dict(criteria) for ra_id, criteria in (scores or {}).items()
        }
        self._final_score = final_score

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def student_id(self) -> str:
        return self._student_id

    @property
    def exam_period(self) -> str:
        return self._exam_period

    @property
    def final_score(self) -> float | None:
        return self._final_score

    @final_score.setter
    def final_score(self, final_score: float | None) -> None:
        self._final_score = final_score

    def score_for(self, ra_id: str, criterion_id: str) -> float | None:
        criterion_score = self._scores.get(ra_id, {}).get(criterion_id)
        return criterion_score.score if criterion_score else None

    def scores_for_group(self, ra_id: str) -> dict[str, CriterionScore]:
        return dict(self._scores.get(ra_id, {}))

    def set_score(
        self,
        ra_id: str,
        criterion_id: str,
        score: float | None,
        notes: str | None = None,
    ) -> None:
        current = self._scores.get(ra_id, {}).get(criterion_id)
        if notes is None:
            notes = current.notes if current else ""

        self._scores.setdefault(ra_id, {})[criterion_id] = CriterionScore(score, notes)

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "student_id": self._student_id,
            "exam_period": self._exam_period,
            "scores": {
                ra_id: {c_id: c.to_dict() for c_id, c in criteria.items()}
                for ra_id, criteria in self._scores.items()
            },
            "final_score": self._final_score,
        }

    @classmethod
    def from_dict(cls, data: dict) -> PracticalExamEvaluation:
        return cls(
            id=data["id"],
            student_id=data["student_id"],
            exam_period=data["exam_period"],
            scores={
                ra_id: {c_id: CriterionScore.from_dict(c) for c_id, c in criteria.items()}
                for ra_id, criteria in data.get("scores", {}).items()
            },
            final_score=data.get("final_score"),
        )

    def __repr__(self) -> str:
        return f"PracticalExamEvaluation({self._id}, {self._student_id}, {self._exam_period}, {self._final_score})"
