# models/student.py

"""
Represents a student enrolled in the course.

The grading engine only ever uses `id` as a lookup key; the remaining fields identify
the student on screen and in printed reports. Students are sorted by surname, as the
roster arrives from the school's records.
"""

from __future__ import annotations

import re


class Student:

    def __init__(
        self,
        id: str,
        first_name: str,
        last_name: str,
        nre: str = "",
        group: str = "",
        email: str | None = None,
        active: bool = True,
    ):
        self._id: str = id
        self._first_name: str = first_name
        self._last_name: str = last_name
        self._nre: str = nre
        self._group: str = group
        self._email: str | None = (
            Student.validate_email_input(email) if email is not None else None
        )
        self._is_active: bool = active

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def first_name(self) -> str:
        return self._first_name

    @property
    def last_name(self) -> str:
        return self._last_name

    @property
    def full_name(self) -> str:
        return f"{self._first_name} {self._last_name}"

    @property
    def sort_name(self) -> str:
        return f"{self._last_name}, {self._first_name}"

    @property
    def nre(self) -> str:
        return self._nre

    @property
    def group(self) -> str:
        return self._group

    @property
    def email(self) -> str | None:
        return self._email

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def status(self) -> str:
        return "'ACTIVE'" if self._is_active else "'INACTIVE'"

    def toggle_active_status(self) -> None:
        self._is_active = not self._is_active

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "first_name": self._first_name,
            "last_name": self._last_name,
            "nre": self._nre,
            "group": self._group,
            "email": self._email,
            "active": self._is_active,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Student:
        return cls(
            id=data["id"],
            first_name=data["first_name"],
            last_name=data["last_name"],
            nre=data.get("nre", ""),
            group=data.get("group", ""),
            email=data.get("email"),
            active=data.get("active", True),
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Student({self._id}, {self._first_name}, {self._last_name}, {self._is_active})"

    def __str__(self) -> str:
        return f"STUDENT: name: {self.full_name}, group: {self._group}, id: {self._id}"

    # === data validators ===

    @staticmethod
    def validate_email_input(email: str) -> str:
        """
        Normalizes an email address (strip, lowercase) and checks it has one '@' and a domain.

        Raises:
            ValueError: If the email does not conform to the expected format.
        """
        email = email.strip().lower()
        if not re.fullmatch(r"^[^@\s]+@[^@\s]+\.[^@\s]+$", email):
            raise ValueError(
                "Invalid input. Email must be a valid address with one @ and a domain."
            )
        return email


class PracticeGroup:
    """A kitchen brigade: the unit whose group rubric is scored on each service day."""

    def __init__(self, id: str, name: str, student_ids: list[str] | None = None):
        self._id = id
        self._name = name
        self._student_ids: list[str] = list(student_ids or [])

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def student_ids(self) -> tuple[str, ...]:
        return tuple(self._student_ids)

    def has_student(self, student_id: str) -> bool:
        return student_id in self._student_ids

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "name": self._name,
            "student_ids": list(self._student_ids),
        }

    @classmethod
    def from_dict(cls, data: dict) -> PracticeGroup:
        return cls(
            id=data["id"],
            name=data["name"],
            student_ids=data.get("student_ids", []),
        )

    def __repr__(self) -> str:
        return f"PracticeGroup({self._id}, {self._name}, {len(self._student_ids)} students)"
