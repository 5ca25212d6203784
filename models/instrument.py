# models/instrument.py

"""
Evaluation instruments and the activities they hold.

An `EvaluationInstrument` is a named grading channel ("Examen", "Servicios",
"P. Diaria", ...) with a weight-in-course percentage and an ordered list of
`EvaluationActivity` records. Activities live inside their instrument and are removed
with it.

Each activity may name a `GradeSource` telling the engine where its number comes from.
Activities with no source have no data yet and always grade as absent.
"""

from __future__ import annotations

import math
from typing import Any

from models.grade_source import EXAM_PERIODS, GradeSource


class EvaluationActivity:

    def __init__(
        self,
        id: str,
        name: str,
        period: str,
        source: GradeSource | None = None,
    ):
        if period not in EXAM_PERIODS:
            raise ValueError(f"Unknown period for activity {id}: '{period}'.")

        self._id = id
        self._name = name
        self._period = period
        self._source = source

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def period(self) -> str:
        return self._period

    @property
    def source(self) -> GradeSource | None:
        return self._source

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "name": self._name,
            "period": self._period,
            "source": self._source.to_dict() if self._source else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> EvaluationActivity:
        source_data = data.get("source")
        return cls(
            id=data["id"],
            name=data["name"],
            period=data["period"],
            source=GradeSource.from_dict(source_data) if source_data else None,
        )

    def __repr__(self) -> str:
        return f"EvaluationActivity({self._id}, {self._name}, {self._period})"


class EvaluationInstrument:

    def __init__(
        self,
        id: str,
        name: str,
        weight_in_course: float,
        activities: list[EvaluationActivity] | None = None,
        description: str = "",
    ):
        self._id = id
        self._name = name
        self._description = description
        # weight_in_course uses setter method for validation
        self.weight_in_course = weight_in_course
        self._activities: list[EvaluationActivity] = list(activities or [])

    # === properties ===

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
    def weight_in_course(self) -> float:
        return self._weight_in_course

    @weight_in_course.setter
    def weight_in_course(self, weight: Any) -> None:
        self._weight_in_course = EvaluationInstrument.validate_weight_input(weight)

    @property
    def activities(self) -> tuple[EvaluationActivity, ...]:
        return tuple(self._activities)

    def add_activity(self, activity: EvaluationActivity) -> None:
        if any(a.id == activity.id for a in self._activities):
            raise ValueError(f"Activity {activity.id} already belongs to {self._name}.")

        self._activities.append(activity)

    def activities_in_period(self, period: str) -> list[EvaluationActivity]:
        return [a for a in self._activities if a.period == period]

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "name": self._name,
            "description": self._description,
            "weight_in_course": self._weight_in_course,
            "activities": [a.to_dict() for a in self._activities],
        }

    @classmethod
    def from_dict(cls, data: dict) -> EvaluationInstrument:
        return cls(
            id=data["id"],
            name=data["name"],
            weight_in_course=data["weight_in_course"],
            activities=[EvaluationActivity.from_dict(a) for a in data.get("activities", [])],
            description=data.get("description", ""),
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"EvaluationInstrument({self._id}, {self._name}, {self._weight_in_course})"

    def __str__(self) -> str:
        return f"INSTRUMENT: name: {self._name}, weight: {self._weight_in_course}, id: {self._id}"

    # === data validators ===

    @staticmethod
    def validate_weight_input(weight: Any) -> float:
        """
        Validates a weight-in-course percentage.

        Raises:
            TypeError: If the input cannot be cast to float.
            ValueError: If the input is non-finite or outside 0-100.
        """
        try:
            weight = float(weight)

        except (TypeError, ValueError):
            raise TypeError("Weight must be a number.") from None

        if not math.isfinite(weight):
            raise ValueError("Weight must be a finite number.")

        if weight < 0 or weight > 100:
            raise ValueError("Weight must be between 0 and 100.")

        return weight
