# core/grade.py

"""
The value every aggregator returns: either an absent grade or a present one.

A present `Grade` carries a finite value and, where the producing layer knows it, the
total declared weight that actually contributed to that value (`coverage`). An absent
`Grade` carries neither. Absent and 0.0 are never interchangeable: `Grade.absent()`
compares unequal to `Grade.present(0.0)` and renders as None in `rounded()`.
"""

from __future__ import annotations

import math

from core.numeric import round_half_up


class Grade:

    __slots__ = ("_value", "_coverage")

    def __init__(self, value: float | None = None, coverage: float | None = None):
        if value is not None and not math.isfinite(value):
            value = None

        self._value = None if value is None else float(value)
        self._coverage = None if self._value is None or coverage is None else coverage

    # === public classmethods ===

    @classmethod
    def absent(cls) -> Grade:
        return cls()

    @classmethod
    def present(cls, value: float, coverage: float | None = None) -> Grade:
        return cls(value, coverage)

    @classmethod
    def from_optional(cls, value: float | None) -> Grade:
        return cls(value)

    # === properties ===

    @property
    def value(self) -> float | None:
        return self._value

    @property
    def coverage(self) -> float | None:
        return self._coverage

    @property
    def is_present(self) -> bool:
        return self._value is not None

    @property
    def is_absent(self) -> bool:
        return self._value is None

    def rounded(self, decimals: int = 2) -> float | None:
        if self._value is None:
            return None

        return round_half_up(self._value, decimals)

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "value": self.rounded(),
            "coverage": self._coverage,
        }

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grade):
            return NotImplemented

        return self._value == other._value and self._coverage == other._coverage

    def __hash__(self) -> int:
        return hash((self._value, self._coverage))

    def __bool__(self) -> bool:
        return self.is_present

    def __repr__(self) -> str:
        if self._value is None:
            return "Grade(ABSENT)"

        return f"Grade({self._value}, coverage={self._coverage})"

    def __str__(self) -> str:
        rounded = self.rounded()
        return "-" if rounded is None else f"{rounded:.2f}"
