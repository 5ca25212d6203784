# models/period.py

"""
The academic periods and the instruments that make up each period's grade.

Each period (first, second and third term, plus remediation) declares an ordered list of
instrument descriptors: {key, name, type, weight}. "manual" instruments read the
instructor-entered grade stored under their key; "calculated" instruments are resolved
through `CALCULATED_INSTRUMENT_SOURCES` into the Service-Day or Practical-Exam
aggregate for the matching sub-period.

Weights are fractions (0.4 = 40 %). They are expected to add up to 1.0 per period, but
that is only reported, never enforced.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable

from models.grade_source import EXAM_PERIODS, GradeSource, SourceKind

logger = logging.getLogger(__name__)

MANUAL = "manual"
CALCULATED = "calculated"

# calculated instrument key -> source, given the key of the period being defined
CALCULATED_INSTRUMENT_SOURCES: dict[str, Callable[[str], GradeSource]] = {
    "servicios": GradeSource.service_average,
    "exPracticoT1": lambda _: GradeSource.practical_exam("t1"),
    "exPracticoT2": lambda _: GradeSource.practical_exam("t2"),
    "exPracticoT3": lambda _: GradeSource.practical_exam("t3"),
    "exPracticoRec": lambda _: GradeSource.practical_exam("rec"),
}

DEFAULT_EVALUATION_STRUCTURE: dict[str, Any] = {
    "periods": [
        {
            "key": "t1",
            "name": "1º Trimestre",
            "instruments": [
                {"key": "servicios", "name": "Servicios", "type": CALCULATED, "weight": 0.4},
                {"key": "exPracticoT1", "name": "Ex. Práctico", "type": CALCULATED, "weight": 0.3},
                {"key": "teorico1", "name": "Ex. Teórico 1", "type": MANUAL, "weight": 0.15},
                {"key": "teorico2", "name": "Ex. Teórico 2", "type": MANUAL, "weight": 0.15},
            ],
        },
        {
            "key": "t2",
            "name": "2º Trimestre",
            "instruments": [
                {"key": "servicios", "name": "Servicios", "type": CALCULATED, "weight": 0.4},
                {"key": "exPracticoT2", "name": "Ex. Práctico", "type": CALCULATED, "weight": 0.3},
                {"key": "teorico1", "name": "Ex. Teórico 1", "type": MANUAL, "weight": 0.15},
                {"key": "teorico2", "name": "Ex. Teórico 2", "type": MANUAL, "weight": 0.15},
            ],
        },
        {
            "key": "t3",
            "name": "3º Trimestre",
            "instruments": [
                {"key": "servicios", "name": "Servicios", "type": CALCULATED, "weight": 0.4},
                {"key": "exPracticoT3", "name": "Ex. Práctico", "type": CALCULATED, "weight": 0.3},
                {"key": "teorico1", "name": "Ex. Teórico 1", "type": MANUAL, "weight": 0.15},
                {"key": "teorico2", "name": "Ex. Teórico 2", "type": MANUAL, "weight": 0.15},
            ],
        },
        {
            "key": "rec",
            "name": "Recuperación",
            "instruments": [
                {"key": "exPracticoRec", "name": "Ex. Práctico", "type": CALCULATED, "weight": 0.5},
                {"key": "teoricoRec", "name": "Ex. Teórico", "type": MANUAL, "weight": 0.5},
            ],
        },
    ]
}


class InstrumentDescriptor:

    def __init__(self, key: str, name: str, weight: float, source: GradeSource):
        self._key = key
        self._name = name
        self._weight = InstrumentDescriptor.validate_weight_input(weight)
        self._source = source

    @property
    def key(self) -> str:
        return self._key

    @property
    def name(self) -> str:
        return self._name

    @property
    def weight(self) -> float:
        return self._weight

    @property
    def source(self) -> GradeSource:
        return self._source

    @property
    def is_manual(self) -> bool:
        return self._source.kind is SourceKind.MANUAL

    def to_dict(self) -> dict:
        return {
            "key": self._key,
            "name": self._name,
            "type": MANUAL if self.is_manual else CALCULATED,
            "weight": self._weight,
        }

    @classmethod
    def from_dict(cls, data: dict, period_key: str) -> InstrumentDescriptor:
        """
        Builds a descriptor, resolving its grade source for `period_key`.

        Raises:
            ValueError: If the type is unknown or a calculated key has no source.
            KeyError: If a required field is missing.
        """
        key = data["key"]
        instrument_type = data["type"]

        if instrument_type == MANUAL:
            source = GradeSource.manual(period_key, key)

        elif instrument_type == CALCULATED:
            resolver = CALCULATED_INSTRUMENT_SOURCES.get(key)
            if resolver is None:
                raise ValueError(
                    f"Calculated instrument '{key}' in period '{period_key}' has no known source."
                )
            source = resolver(period_key)

        else:
            raise ValueError(f"Unknown instrument type: '{instrument_type}'.")

        return cls(key=key, name=data["name"], weight=data["weight"], source=source)

    def __repr__(self) -> str:
        return f"InstrumentDescriptor({self._key}, {self._weight}, {self._source!r})"

    @staticmethod
    def validate_weight_input(weight: Any) -> float:
        try:
            weight = float(weight)

        except (TypeError, ValueError):
            raise TypeError("Instrument weight must be a number.") from None

        if not math.isfinite(weight) or weight < 0:
            raise ValueError("Instrument weight must be a finite, non-negative number.")

        return weight


class PeriodDefinition:

    def __init__(self, key: str, name: str, instruments: list[InstrumentDescriptor]):
        if key not in EXAM_PERIODS:
            raise ValueError(f"Unknown period: '{key}'.")

        keys = [i.key for i in instruments]
        if len(keys) != len(set(keys)):
            raise ValueError(f"Period '{key}' declares the same instrument key twice.")

        self._key = key
        self._name = name
        self._instruments = tuple(instruments)

    @property
    def key(self) -> str:
        return self._key

    @property
    def name(self) -> str:
        return self._name

    @property
    def instruments(self) -> tuple[InstrumentDescriptor, ...]:
        return self._instruments

    @property
    def total_weight(self) -> float:
        return sum(i.weight for i in self._instruments)

    def to_dict(self) -> dict:
        return {
            "key": self._key,
            "name": self._name,
            "instruments": [i.to_dict() for i in self._instruments],
        }

    @classmethod
    def from_dict(cls, data: dict) -> PeriodDefinition:
        key = data["key"]
        return cls(
            key=key,
            name=data["name"],
            instruments=[
                InstrumentDescriptor.from_dict(i, key) for i in data["instruments"]
            ],
        )

    def __repr__(self) -> str:
        return f"PeriodDefinition({self._key}, {len(self._instruments)} instruments)"


class EvaluationStructure:
    """
    The full set of period definitions, in declaration order.

    Built once from configuration via `from_dict()`; every calculated instrument is
    resolved to a `GradeSource` at that point.
    """

    def __init__(self, periods: list[PeriodDefinition]):
        keys = [p.key for p in periods]
        if len(keys) != len(set(keys)):
            raise ValueError("Evaluation structure declares the same period twice.")

        self._periods = tuple(periods)

    @classmethod
    def default(cls) -> EvaluationStructure:
        return cls.from_dict(DEFAULT_EVALUATION_STRUCTURE)

    @property
    def periods(self) -> tuple[PeriodDefinition, ...]:
        return self._periods

    @property
    def period_keys(self) -> list[str]:
        return [p.key for p in self._periods]

    def get_period(self, key: str) -> PeriodDefinition | None:
        return next((p for p in self._periods if p.key == key), None)

    def to_dict(self) -> dict:
        return {"periods": [p.to_dict() for p in self._periods]}

    @classmethod
    def from_dict(cls, data: dict) -> EvaluationStructure:
        if not isinstance(data, dict) or not isinstance(data.get("periods"), list):
            raise ValueError("Evaluation structure must be a dictionary with a 'periods' list.")

        try:
            periods = [PeriodDefinition.from_dict(p) for p in data["periods"]]
        except KeyError as e:
            raise ValueError(f"Evaluation structure is missing field {e}.") from None

        for period in periods:
            if not math.isclose(period.total_weight, 1.0):
                logger.warning(
                    "Instrument weights for period %s add up to %s, not 1.0",
                    period.key,
                    period.total_weight,
                )

        return cls(periods)
