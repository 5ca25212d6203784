# core/response.py

from __future__ import annotations

from enum import Enum


class ErrorCode(Enum):
    # === Not Found ===
    NOT_FOUND = "NOT_FOUND"

    # === Constraint Violations ===
    # a record with the same id (or the same natural key) is already tracked
    DUPLICATE_RECORD = "DUPLICATE_RECORD"

    # === Validation Failures ===
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
    INVALID_INPUT = "INVALID_INPUT"

    # score outside 0-10, weight outside 0-100, unknown period key, etc.
    INVALID_FIELD_VALUE = "INVALID_FIELD_VALUE"
    VALIDATION_FAILED = "VALIDATION_FAILED"

    # === State Restrictions ===
    # evaluations of a locked service cannot be replaced
    RECORD_LOCKED = "RECORD_LOCKED"

    # === Internal Faults ===
    INTERNAL_ERROR = "INTERNAL_ERROR"


class Response:
    """
    Standard result envelope for `Gradebook` manipulators and accessors.

    Attributes:
        success (bool): Whether the operation succeeded.
        detail (str | None): Optional human-readable explanation.
        error (ErrorCode | str | None): Optional machine-readable error identifier.
        status_code (int | None): HTTP-style status code (200, 400, 404, 409, 423).
        data (dict): Operation payload, empty when there is none.
    """

    def __init__(
        self,
        success: bool,
        detail: str | None = None,
        error: ErrorCode | str | None = None,
        status_code: int | None = None,
        data: dict | None = None,
    ):
        self._success = success
        self._detail = detail
        self._error = error
        self._status_code = status_code
        self._data = data or {}

    # === properties ===

    @property
    def success(self) -> bool:
        return self._success

    @property
    def detail(self) -> str | None:
        return self._detail

    @property
    def error(self) -> ErrorCode | str | None:
        return self._error

    @property
    def status_code(self) -> int | None:
        return self._status_code

    @property
    def data(self) -> dict:
        return self._data

    # === public classmethods ===

    @classmethod
    def succeed(
        cls,
        detail: str | None = None,
        status_code: int | None = 200,
        data: dict | None = None,
    ) -> Response:
        return cls(success=True, detail=detail, status_code=status_code, data=data)

    @classmethod
    def fail(
        cls,
        detail: str | None = None,
        error: ErrorCode | str | None = None,
        status_code: int | None = 400,
        data: dict | None = None,
    ) -> Response:
        return cls(
            success=False,
            detail=detail,
            error=error,
            status_code=status_code,
            data=data,
        )

    def to_dict(self) -> dict:
        return {
            "success": self._success,
            "error": self._error.value if isinstance(self._error, Enum) else self._error,
            "detail": self._detail,
            "data": self._data,
            "status_code": self._status_code,
        }

    # === dunder methods ===

    def __str__(self) -> str:
        if self._success:
            return f"Success: {self._detail or ''}"

        error_str = (
            self._error.value if isinstance(self._error, Enum) else self._error or ""
        )
        return f"Error: {error_str} {self._detail or ''}".rstrip()
