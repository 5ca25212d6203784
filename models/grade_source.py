# models/grade_source.py

"""
Describes where a number comes from.

Both evaluation activities and period instruments point at a `GradeSource`, which is
one of:
- MANUAL: a instructor-entered academic grade, read by (period, instrument key).
- SERVICE_AVERAGE: the Service-Day average of a trimester.
- PRACTICAL_EXAM: the stored practical exam score of an exam period.

Sources are resolved when the configuration is built, so a misspelled key fails at
load time instead of silently grading as absent.
"""

from __future__ import annotations

from enum import Enum

TRIMESTERS: tuple[str, ...] = ("t1", "t2", "t3")
EXAM_PERIODS: tuple[str, ...] = ("t1", "t2", "t3", "rec")


class SourceKind(str, Enum):
    MANUAL = "manual"
    SERVICE_AVERAGE = "service_average"
    PRACTICAL_EXAM = "practical_exam"


class GradeSource:

    def __init__(self, kind: SourceKind, period: str, key: str | None = None):
        self._kind = SourceKind(kind)
        self._period = period
        self._key = key
        GradeSource.validate_source_input(self._kind, period, key)

    # === public classmethods ===

    @classmethod
    def manual(cls, period: str, key: str) -> GradeSource:
        return cls(SourceKind.MANUAL, period, key)

    @classmethod
    def service_average(cls, trimester: str) -> GradeSource:
        return cls(SourceKind.SERVICE_AVERAGE, trimester)

    @classmethod
    def practical_exam(cls, exam_period: str) -> GradeSource:
        return cls(SourceKind.PRACTICAL_EXAM, exam_period)

    # === properties ===

    @property
    def kind(self) -> SourceKind:
        return self._kind

    @property
    def period(self) -> str:
        return self._period

    @property
    def key(self) -> str | None:
        return self._key

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "kind": self._kind.value,
            "period": self._period,
            "key": self._key,
        }

    @classmethod
    def from_dict(cls, data: dict) -> GradeSource:
        return cls(
            kind=SourceKind(data["kind"]),
            period=data["period"],
            key=data.get("key"),
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GradeSource):
            return NotImplemented

        return (self._kind, self._period, self._key) == (
            other._kind,
            other._period,
            other._key,
        )

    def __hash__(self) -> int:
        return hash((self._kind, self._period, self._key))

    def __repr__(self) -> str:
        return f"GradeSource({self._kind.value}, {self._period}, {self._key})"

    # === data validators ===

    @staticmethod
    def validate_source_input(kind: SourceKind, period: str, key: str | None) -> None:
        """
        Checks that a source can actually be resolved.

        Raises:
            ValueError:
                - If a service average names a period other than t1, t2 or t3.
                - If a manual grade or practical exam names an unknown period.
                - If a manual grade has no instrument key.
        """
        if kind is SourceKind.SERVICE_AVERAGE:
            if period not in TRIMESTERS:
                raise ValueError(f"Service averages exist only for trimesters, not '{period}'.")
            return

        if period not in EXAM_PERIODS:
            raise ValueError(f"Unknown period: '{period}'.")

        if kind is SourceKind.MANUAL and not key:
            raise ValueError("Manual grade sources require an instrument key.")
