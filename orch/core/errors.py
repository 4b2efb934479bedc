"""Error payloads and exit codes.

Failures travel as frozen dataclasses inside ``Err``. Each one exposes a
``message`` and an optional ``hint`` so the CLI edge can render any of them the
same way. ``ErrorCode`` maps them onto stable process exit codes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

__all__ = [
    "ErrorCode",
    "ValidationError",
    "NotFoundError",
    "UnitFailure",
    "AggregateFailure",
    "OrchestratorError",
]


class ErrorCode(IntEnum):
    """Exit codes for the ``orch`` host.

    - 0: Success
    - 1: User error (unknown check, bad arguments)
    - 2: Environment error (missing secrets, unreadable config)
    - 3: Build error (a job or the suite failed)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    BUILD_ERROR = 3

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK


@dataclass(frozen=True, slots=True)
class ValidationError:
    """A precondition failed before any side effect happened.

    Attributes:
        message: What was wrong.
        missing: Names of the absent inputs (secret keys, payload fields).
        hint: Optional fix suggestion.
    """

    message: str
    missing: tuple[str, ...] = ()
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class NotFoundError:
    """No check is registered under the requested identifier."""

    name: str
    available: tuple[str, ...] = ()

    @property
    def message(self) -> str:
        return f"No check found with name: {self.name}"

    @property
    def hint(self) -> str | None:
        if not self.available:
            return None
        return f"available: {', '.join(self.available)}"


@dataclass(frozen=True, slots=True)
class UnitFailure:
    """A single unit of work did not complete successfully.

    Attributes:
        job: Name of the failing unit.
        reason: Substrate-provided detail (stderr tail, exception text).
        returncode: Exit status when the substrate reported one, else None.
    """

    job: str
    reason: str
    returncode: int | None = None

    @property
    def message(self) -> str:
        if self.returncode is not None:
            return f"job {self.job} failed (exit {self.returncode})"
        return f"job {self.job} failed: {self.reason}"

    @property
    def hint(self) -> str | None:
        if self.returncode is not None and self.reason:
            return self.reason
        return None


@dataclass(frozen=True, slots=True)
class AggregateFailure:
    """Outcome of a concurrent group in which at least one unit failed.

    ``first`` is the earliest failure by submission order; ``failures`` holds
    every failure, also in submission order.
    """

    first: UnitFailure
    failures: tuple[UnitFailure, ...] = field(default=())

    @property
    def message(self) -> str:
        return self.first.message

    @property
    def hint(self) -> str | None:
        others = [f.job for f in self.failures if f is not self.first]
        if others:
            return f"also failed: {', '.join(others)}"
        return self.first.hint


OrchestratorError = ValidationError | NotFoundError | UnitFailure | AggregateFailure
