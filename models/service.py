# models/service.py

"""
Restaurant services and their day-of-service evaluations.

A `Service` is one simulated restaurant session, held in exactly one trimester. Its
`ServiceEvaluation` stores:
- per-student `IndividualServiceScores`: attendance, one score per individual rubric
  item (None = slot not scored yet), free-text observations, and a flag that halves the
  group score for that student (e.g. the student joined the brigade mid-service).
- per-group `GroupServiceScores`: one score per group rubric item and observations.

Each rubric is a `ServiceRubric`: an ordered list of items with a maximum score, the
maxima adding up to at most 10. Slot `i` is scored out of item `i`'s maximum, so each
rubric sum, and therefore the 60/40 service grade, stays within 0-10. An evaluation
carries its own rubrics; the defaults are `INDIVIDUAL_EVALUATION_ITEMS` and
`GROUP_EVALUATION_ITEMS`.

Locking a service only stops further edits through the `Gradebook`; it has no effect on
any computed grade.
"""

from __future__ import annotations

import datetime
import math
from typing import Any

from core.numeric import MAX_GRADE
from models.grade_source import TRIMESTERS

INDIVIDUAL_EVALUATION_ITEMS = [
    {"id": "actitud", "label": "Actitud, Respeto y Colaboración", "max_score": 2.5},
    {"id": "tecnicas", "label": "Técnicas Individuales y Destreza", "max_score": 4.0},
    {"id": "responsabilidad", "label": "Responsabilidad y Autonomía", "max_score": 2.5},
    {"id": "higiene", "label": "Higiene y Seguridad", "max_score": 1.0},
]

GROUP_EVALUATION_ITEMS = [
    {"id": "organizacion", "label": "Organización y Planificación", "max_score": 2.0},
    {"id": "ejecucion", "label": "Ejecución y Técnicas", "max_score": 3.0},
    {"id": "sabor", "label": "Sabor y Presentación", "max_score": 3.0},
    {"id": "limpieza", "label": "Limpieza y Orden", "max_score": 2.0},
]


class ServiceRubric:

    def __init__(self, items: list[dict]):
        self._items = ServiceRubric.validate_items_input(items)

    @property
    def items(self) -> list[dict]:
        return [dict(item) for item in self._items]

    @property
    def max_scores(self) -> tuple[float, ...]:
        return tuple(item["max_score"] for item in self._items)

    @property
    def total(self) -> float:
        return sum(self.max_scores)

    def validate_scores(self, scores: Any) -> list[float | None]:
        """
        Checks one list of slot scores against this rubric.

        Raises:
            TypeError: If `scores` is not a list, or a slot is neither None nor a number.
            ValueError: If there are more slots than rubric items, or a slot is
                non-finite, negative or above its item's maximum.
        """
        if scores is None:
            return []

        if not isinstance(scores, (list, tuple)):
            raise TypeError("Rubric scores must be a list.")

        if len(scores) > len(self._items):
            raise ValueError(
                f"Rubric has {len(self._items)} items but {len(scores)} scores were given."
            )

        validated: list[float | None] = []
        for score, item in zip(scores, self._items):
            if score is None:
                validated.append(None)
                continue

            try:
                score = float(score)
            except (TypeError, ValueError):
                raise TypeError("Rubric scores must be numbers or None.") from None

            if not math.isfinite(score) or score < 0 or score > item["max_score"]:
                raise ValueError(
                    f"Score for {item['label']} must be between 0 and {item['max_score']:g}."
                )

            validated.append(score)

        return validated

    def to_dict(self) -> list[dict]:
        return self.items

    @classmethod
    def from_dict(cls, data: list[dict]) -> ServiceRubric:
        return cls(data)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ServiceRubric) and self._items == other._items

    def __repr__(self) -> str:
        return f"ServiceRubric({list(self.max_scores)})"

    @staticmethod
    def validate_items_input(items: Any) -> list[dict]:
        """
        Validates rubric items: each needs an id, a label and a positive finite
        `max_score`, and the maxima may not add up to more than 10.

        Raises:
            TypeError: If `items` is not a list of mappings or a maximum is not numeric.
            ValueError: If the list is empty, a maximum is not positive and finite, or
                the maxima exceed 10 in total.
        """
        if not isinstance(items, (list, tuple)) or not all(isinstance(i, dict) for i in items):
            raise TypeError("Rubric items must be a list of dicts.")

        if not items:
            raise ValueError("A rubric needs at least one item.")

        validated = []
        for item in items:
            try:
                max_score = float(item["max_score"])
            except (TypeError, ValueError):
                raise TypeError("Rubric max_score must be a number.") from None

            if not math.isfinite(max_score) or max_score <= 0:
                raise ValueError("Rubric max_score must be positive.")

            validated.append(
                {
                    "id": str(item["id"]),
                    "label": str(item.get("label", item["id"])),
                    "max_score": max_score,
                }
            )

        if sum(i["max_score"] for i in validated) > MAX_GRADE + 1e-9:
            raise ValueError(f"Rubric maxima may not add up to more than {MAX_GRADE:g}.")

        return validated


INDIVIDUAL_RUBRIC = ServiceRubric(INDIVIDUAL_EVALUATION_ITEMS)
GROUP_RUBRIC = ServiceRubric(GROUP_EVALUATION_ITEMS)


class Service:

    def __init__(
        self,
        id: str,
        name: str,
        trimester: str,
        date: datetime.date | None = None,
        is_locked: bool = False,
    ):
        if trimester not in TRIMESTERS:
            raise ValueError(f"Services belong to t1, t2 or t3, not '{trimester}'.")

        self._id = id
        self._name = name
        self._trimester = trimester
        self._date = date
        self._is_locked = is_locked

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def trimester(self) -> str:
        return self._trimester

    @property
    def date(self) -> datetime.date | None:
        return self._date

    @property
    def is_locked(self) -> bool:
        return self._is_locked

    def toggle_locked_status(self) -> None:
        self._is_locked = not self._is_locked

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "name": self._name,
            "trimester": self._trimester,
            "date": self._date.isoformat() if self._date else None,
            "is_locked": self._is_locked,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Service:
        date_str = data.get("date")
        return cls(
            id=data["id"],
            name=data["name"],
            trimester=data["trimester"],
            date=datetime.date.fromisoformat(date_str) if date_str else None,
            is_locked=data.get("is_locked", False),
        )

    def __repr__(self) -> str:
        return f"Service({self._id}, {self._name}, {self._trimester}, {self._is_locked})"

    def __str__(self) -> str:
        return f"SERVICE: name: {self._name}, trimester: {self._trimester}, id: {self._id}"


class IndividualServiceScores:

    def __init__(
        self,
        attendance: bool = True,
        scores: list[float | None] | None = None,
        observations: str = "",
        halve_group_score: bool = False,
        rubric: ServiceRubric = INDIVIDUAL_RUBRIC,
    ):
        self._attendance = attendance
        self._scores = rubric.validate_scores(scores)
        self._observations = observations
        self._halve_group_score = halve_group_score

    @property
    def attendance(self) -> bool:
        return self._attendance

    @property
    def scores(self) -> tuple[float | None, ...]:
        return tuple(self._scores)

    @property
    def observations(self) -> str:
        return self._observations

    @property
    def halve_group_score(self) -> bool:
        return self._halve_group_score

    def to_dict(self) -> dict:
        return {
            "attendance": self._attendance,
            "scores": list(self._scores),
            "observations": self._observations,
            "halve_group_score": self._halve_group_score,
        }

    @classmethod
    def from_dict(cls, data: dict, rubric: ServiceRubric = INDIVIDUAL_RUBRIC) -> IndividualServiceScores:
        return cls(
            attendance=data.get("attendance", True),
            scores=data.get("scores", []),
            observations=data.get("observations", ""),
            halve_group_score=data.get("halve_group_score", False),
            rubric=rubric,
        )

    def __repr__(self) -> str:
        return f"IndividualServiceScores({self._attendance}, {self._scores}, {self._halve_group_score})"


class GroupServiceScores:

    def __init__(
        self,
        scores: list[float | None] | None = None,
        observations: str = "",
        rubric: ServiceRubric = GROUP_RUBRIC,
    ):
        self._scores = rubric.validate_scores(scores)
        self._observations = observations

    @property
    def scores(self) -> tuple[float | None, ...]:
        return tuple(self._scores)

    @property
    def observations(self) -> str:
        return self._observations

    def to_dict(self) -> dict:
        return {"scores": list(self._scores), "observations": self._observations}

    @classmethod
    def from_dict(cls, data: dict, rubric: ServiceRubric = GROUP_RUBRIC) -> GroupServiceScores:
        return cls(
            scores=data.get("scores", []),
            observations=data.get("observations", ""),
            rubric=rubric,
        )

    def __repr__(self) -> str:
        return f"GroupServiceScores({self._scores})"


class ServiceEvaluation:
    """
    The scores of one service, checked against the evaluation's own rubrics.

    Every individual and group score list is re-validated against `individual_rubric`
    or `group_rubric` when it enters the evaluation, whichever rubric it was built with.
    """

    def __init__(
        self,
        id: str,
        service_id: str,
        individual_scores: dict[str, IndividualServiceScores] | None = None,
        group_scores: dict[str, GroupServiceScores] | None = None,
        individual_rubric: ServiceRubric = INDIVIDUAL_RUBRIC,
        group_rubric: ServiceRubric = GROUP_RUBRIC,
    ):
        self._id = id
        self._service_id = service_id
        self._individual_rubric = individual_rubric
        self._group_rubric = group_rubric
        self._individual_scores: dict[str, IndividualServiceScores] = {}
        self._group_scores: dict[str, GroupServiceScores] = {}

        for student_id, scores in (individual_scores or {}).items():
            self.set_individual_scores(student_id, scores)

        for group_id, scores in (group_scores or {}).items():
            self.set_group_scores(group_id, scores)

    @property
    def id(self) -> str:
        return self._id

    @property
    def service_id(self) -> str:
        return self._service_id

    @property
    def individual_rubric(self) -> ServiceRubric:
        return self._individual_rubric

    @property
    def group_rubric(self) -> ServiceRubric:
        return self._group_rubric

    @property
    def individual_scores(self) -> dict[str, IndividualServiceScores]:
        return dict(self._individual_scores)

    @property
    def group_scores(self) -> dict[str, GroupServiceScores]:
        return dict(self._group_scores)

    def individual_for(self, student_id: str) -> IndividualServiceScores | None:
        return self._individual_scores.get(student_id)

    def group_for(self, group_id: str) -> GroupServiceScores | None:
        return self._group_scores.get(group_id)

    def set_individual_scores(self, student_id: str, scores: IndividualServiceScores) -> None:
        self._individual_rubric.validate_scores(list(scores.scores))
        self._individual_scores[student_id] = scores

    def set_group_scores(self, group_id: str, scores: GroupServiceScores) -> None:
        self._group_rubric.validate_scores(list(scores.scores))
        self._group_scores[group_id] = scores

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "service_id": self._service_id,
            "individual_rubric": self._individual_rubric.to_dict(),
            "group_rubric": self._group_rubric.to_dict(),
            "individual_scores": {
                student_id: s.to_dict() for student_id, s in self._individual_scores.items()
            },
            "group_scores": {
                group_id: s.to_dict() for group_id, s in self._group_scores.items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict) -> ServiceEvaluation:
        individual_rubric = ServiceRubric.from_dict(
            data.get("individual_rubric", INDIVIDUAL_EVALUATION_ITEMS)
        )
        group_rubric = ServiceRubric.from_dict(data.get("group_rubric", GROUP_EVALUATION_ITEMS))

        return cls(
            id=data["id"],
            service_id=data["service_id"],
            individual_scores={
                student_id: IndividualServiceScores.from_dict(s, individual_rubric)
                for student_id, s in data.get("individual_scores", {}).items()
            },
            group_scores={
                group_id: GroupServiceScores.from_dict(s, group_rubric)
                for group_id, s in data.get("group_scores", {}).items()
            },
            individual_rubric=individual_rubric,
            group_rubric=group_rubric,
        )

    def __repr__(self) -> str:
        return f"ServiceEvaluation({self._id}, {self._service_id})"
