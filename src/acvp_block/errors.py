"""Exception types raised while processing ACVP block-cipher vector sets."""

from __future__ import annotations

from typing import Any


class AcvpError(Exception):
    """Base class for all errors raised by the driver.

    Carries the identifiers of the test group and test case (when known)
    and the name of the offending field so callers can report where a
    vector set went wrong.
    """

    def __init__(
        self,
        message: str,
        tg_id: int | None = None,
        tc_id: int | None = None,
        field: str | None = None,
    ) -> None:
        super().__init__(message)
        self.tg_id = tg_id
        self.tc_id = tc_id
        self.field = field

    @property
    def location(self) -> str:
        """Human-readable "group/case" location, or empty string."""
        if self.tg_id is None:
            return ""
        if self.tc_id is None:
            return f"test group {self.tg_id}"
        return f"test case {self.tg_id}/{self.tc_id}"


class VectorSetDecodeError(AcvpError, ValueError):
    """The vector set (or a hex field inside it) could not be decoded."""


class VectorSetValidationError(AcvpError, ValueError):
    """The vector set decoded but violates a protocol constraint."""

    def __init__(
        self,
        message: str,
        tg_id: int | None = None,
        tc_id: int | None = None,
        field: str | None = None,
        expected: Any = None,
        actual: Any = None,
    ) -> None:
        super().__init__(message, tg_id=tg_id, tc_id=tc_id, field=field)
        self.expected = expected
        self.actual = actual


class OracleError(AcvpError, RuntimeError):
    """The implementation under test failed to perform an operation.

    Fatal for the current run: a failing implementation invalidates the
    whole vector set, so nothing retries or skips past it.
    """

    def __init__(self, message: str, operation: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.operation = operation


class InternalError(AcvpError, RuntimeError):
    """An internal invariant was violated (a bug, not bad input)."""
