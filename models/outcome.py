# models/outcome.py

"""
Learning outcomes (RA) and their evaluation criteria.

A `LearningOutcome` owns an ordered list of criterion ids and a weight (percent). Each
`EvaluationCriterion` carries its own ponderación (percent of its outcome) and a list of
`CriterionAssociation` links, each tying the criterion to one unit of work (UT) and a
list of activity ids.

Neither outcomes nor criteria store a grade: grades are always derived by
`engine.outcome_grades`. Weights are expected to add up to 100 among siblings, which is
reported by `engine.weights` but never enforced.
"""

from __future__ import annotations

import math
from typing import Any


def _validate_percent(weight: Any, label: str) -> float:
    try:
        weight = float(weight)

    except (TypeError, ValueError):
        raise TypeError(f"{label} must be a number.") from None

    if not math.isfinite(weight):
        raise ValueError(f"{label} must be a finite number.")

    if weight < 0 or weight > 100:
        raise ValueError(f"{label} must be between 0 and 100.")

    return weight


class CriterionAssociation:

    def __init__(self, unit_id: str, activity_ids: list[str] | None = None):
        self._unit_id = unit_id
        self._activity_ids: tuple[str, ...] = tuple(activity_ids or [])

    @property
    def unit_id(self) -> str:
        return self._unit_id

    @property
    def activity_ids(self) -> tuple[str, ...]:
        return self._activity_ids

    def to_dict(self) -> dict:
        return {
            "unit_id": self._unit_id,
            "activity_ids": list(self._activity_ids),
        }

    @classmethod
    def from_dict(cls, data: dict) -> CriterionAssociation:
        return cls(unit_id=data["unit_id"], activity_ids=data.get("activity_ids", []))

    def __repr__(self) -> str:
        return f"CriterionAssociation({self._unit_id}, {list(self._activity_ids)})"


class EvaluationCriterion:

    def __init__(
        self,
        id: str,
        outcome_id: str,
        description: str,
        weight: float,
        associations: list[CriterionAssociation] | None = None,
        code: str = "",
    ):
        self._id = id
        self._outcome_id = outcome_id
        self._code = code
        self._description = description
        # weight uses setter method for validation
        self.weight = weight
        self._associations: list[CriterionAssociation] = list(associations or [])

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def outcome_id(self) -> str:
        return self._outcome_id

    @property
    def code(self) -> str:
        return self._code

    @property
    def description(self) -> str:
        return self._description

    @property
    def weight(self) -> float:
        return self._weight

    @weight.setter
    def weight(self, weight: Any) -> None:
        self._weight = _validate_percent(weight, "Ponderación")

    @property
    def associations(self) -> tuple[CriterionAssociation, ...]:
        return tuple(self._associations)

    @property
    def activity_ids(self) -> list[str]:
        """Every associated activity id, in association order, repeats included."""
        return [a_id for assoc in self._associations for a_id in assoc.activity_ids]

    def associate(self, unit_id: str, activity_ids: list[str]) -> CriterionAssociation:
        association = CriterionAssociation(unit_id, activity_ids)
        self._associations.append(association)
        return association

    def clear_associations(self, unit_id: str | None = None) -> None:
        if unit_id is None:
            self._associations = []
        else:
            self._associations = [a for a in self._associations if a.unit_id != unit_id]

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "outcome_id": self._outcome_id,
            "code": self._code,
            "description": self._description,
            "weight": self._weight,
            "associations": [a.to_dict() for a in self._associations],
        }

    @classmethod
    def from_dict(cls, data: dict) -> EvaluationCriterion:
        return cls(
            id=data["id"],
            outcome_id=data["outcome_id"],
            code=data.get("code", ""),
            description=data["description"],
            weight=data["weight"],
            associations=[
                CriterionAssociation.from_dict(a) for a in data.get("associations", [])
            ],
        )

    def __repr__(self) -> str:
        return f"EvaluationCriterion({self._id}, {self._outcome_id}, {self._weight})"

    def __str__(self) -> str:
        return f"CRITERION: {self._code or self._id}: {self._description} ({self._weight} %)"


class LearningOutcome:

    def __init__(
        self,
        id: str,
        name: str,
        weight: float,
        criterion_ids: list[str] | None = None,
        description: str = "",
    ):
        self._id = id
        self._name = name
        self._description = description
        self.weight = weight
        self._criterion_ids: list[str] = list(criterion_ids or [])

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def weight(self) -> float:
        return self._weight

    @weight.setter
    def weight(self, weight: Any) -> None:
        self._weight = _validate_percent(weight, "Outcome weight")

    @property
    def criterion_ids(self) -> tuple[str, ...]:
        return tuple(self._criterion_ids)

    def add_criterion_id(self, criterion_id: str) -> None:
        if criterion_id not in self._criterion_ids:
            self._criterion_ids.append(criterion_id)

    def remove_criterion_id(self, criterion_id: str) -> None:
        if criterion_id in self._criterion_ids:
            self._criterion_ids.remove(criterion_id)

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "name": self._name,
            "description": self._description,
            "weight": self._weight,
            "criterion_ids": list(self._criterion_ids),
        }

    @classmethod
    def from_dict(cls, data: dict) -> LearningOutcome:
        return cls(
            id=data["id"],
            name=data["name"],
            weight=data["weight"],
            criterion_ids=data.get("criterion_ids", []),
            description=data.get("description", ""),
        )

    def __repr__(self) -> str:
        return f"LearningOutcome({self._id}, {self._name}, {self._weight})"

    def __str__(self) -> str:
        return f"OUTCOME: name: {self._name}, weight: {self._weight}, id: {self._id}"
