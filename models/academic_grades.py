# models/academic_grades.py

"""
Manually entered grades.

`StudentAcademicGrades` holds one student's manual instrument grades per period
(`periods[period_key][instrument_key]`), e.g. `periods["t1"]["teorico1"] = 6.5`.

`StudentCourseGrades` holds one student's grades in the other course modules
(FOL, Inglés Técnico, EIE), one value per period including remediation.

Both records are keyed by student id. Values are a number in 0-10 or None; the range
check is applied when a value is set, and anything unusable that reaches the engine
anyway is read as absent.
"""

from __future__ import annotations

import math
from typing import Any

from models.grade_source import EXAM_PERIODS

COURSE_MODULES: tuple[str, ...] = ("FOL", "Inglés Técnico", "EIE")


def validate_grade_input(value: Any) -> float | None:
    """
    Validates a manually entered grade.

    Returns:
        None for None or a blank string, otherwise the value as a float.

    Raises:
        TypeError: If the input cannot be cast to float.
        ValueError: If the input is non-finite or outside 0-10.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return None

    try:
        value = float(value)

    except (TypeError, ValueError):
        raise TypeError("Grade must be a number or blank.") from None

    if not math.isfinite(value) or value < 0 or value > 10:
        raise ValueError("Grade must be between 0 and 10.")

    return value


def _validate_period(period_key: str) -> None:
    if period_key not in EXAM_PERIODS:
        raise ValueError(f"Unknown period: '{period_key}'.")


class StudentAcademicGrades:

    def __init__(
        self,
        student_id: str,
        periods: dict[str, dict[str, float | None]] | None = None,
    ):
        self._student_id = student_id
        self._periods: dict[str, dict[str, Any]] = {
            period_key: dict(grades) for period_key, grades in (periods or {}).items()
        }

    @property
    def id(self) -> str:
        return self._student_id

    @property
    def student_id(self) -> str:
        return self._student_id

    def manual_grade(self, period_key: str, instrument_key: str) -> Any:
        """Returns the raw stored value, which the engine coerces on read."""
        return self._periods.get(period_key, {}).get(instrument_key)

    def manual_grades(self, period_key: str) -> dict[str, Any]:
        return dict(self._periods.get(period_key, {}))

    def set_manual_grade(self, period_key: str, instrument_key: str, value: Any) -> None:
        _validate_period(period_key)
        self._periods.setdefault(period_key, {})[instrument_key] = validate_grade_input(value)

    def to_dict(self) -> dict:
        return {
            "student_id": self._student_id,
            "periods": {
                period_key: {"manual_grades": dict(grades)}
                for period_key, grades in self._periods.items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict) -> StudentAcademicGrades:
        return cls(
            student_id=data["student_id"],
            periods={
                period_key: dict(period.get("manual_grades", {}))
                for period_key, period in data.get("periods", {}).items()
            },
        )

    def __repr__(self) -> str:
        return f"StudentAcademicGrades({self._student_id}, {self._periods})"


class StudentCourseGrades:

    def __init__(
        self,
        student_id: str,
        modules: dict[str, dict[str, float | None]] | None = None,
    ):
        self._student_id = student_id
        self._modules: dict[str, dict[str, Any]] = {
            module: dict(grades) for module, grades in (modules or {}).items()
        }

    @property
    def id(self) -> str:
        return self._student_id

    @property
    def student_id(self) -> str:
        return self._student_id

    @property
    def modules(self) -> list[str]:
        return list(self._modules)

    def module_grades(self, module: str) -> dict[str, Any]:
        return dict(self._modules.get(module, {}))

    def set_module_grade(self, module: str, period_key: str, value: Any) -> None:
        _validate_period(period_key)
        self._modules.setdefault(module, {})[period_key] = validate_grade_input(value)

    def to_dict(self) -> dict:
        return {
            "student_id": self._student_id,
            "modules": {module: dict(grades) for module, grades in self._modules.items()},
        }

    @classmethod
    def from_dict(cls, data: dict) -> StudentCourseGrades:
        return cls(student_id=data["student_id"], modules=data.get("modules", {}))

    def __repr__(self) -> str:
        return f"StudentCourseGrades({self._student_id}, {self._modules})"
