"""Error presentation and exit code mapping for the host edge."""

from __future__ import annotations

from typing import TYPE_CHECKING

from orch.core.errors import (
    AggregateFailure,
    ErrorCode,
    NotFoundError,
    OrchestratorError,
    UnitFailure,
    ValidationError,
)
from orch.output.console import Style

if TYPE_CHECKING:
    from orch.output.console import ConsoleProtocol

__all__ = ["print_error", "error_exit_code"]


def print_error(error: OrchestratorError, console: ConsoleProtocol) -> None:
    match error:
        case ValidationError(message=message, missing=missing, hint=hint):
            console.error(message)
            if missing:
                console.print(f"missing: {', '.join(missing)}", Style.DIM)
            if hint:
                console.print(f"hint: {hint}", Style.DIM)
        case NotFoundError():
            console.error(error.message)
            if error.hint:
                console.print(error.hint, Style.DIM)
        case UnitFailure():
            console.error(error.message)
            if error.hint:
                console.print(error.hint, Style.DIM)
        case AggregateFailure(failures=failures):
            console.error(f"{len(failures)} job(s) failed; first: {error.message}")
            for failure in failures:
                console.print(f"- {failure.job}", Style.DIM)


def error_exit_code(error: OrchestratorError) -> int:
    match error:
        case NotFoundError():
            return int(ErrorCode.USER_ERROR)
        case ValidationError():
            return int(ErrorCode.ENV_ERROR)
        case UnitFailure() | AggregateFailure():
            return int(ErrorCode.BUILD_ERROR)
    return int(ErrorCode.BUILD_ERROR)
