"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer

from orch.core.errors import OrchestratorError
from orch.core.result import Err, Result
from orch.output.errors import error_exit_code, print_error

if TYPE_CHECKING:
    from orch.cli.context import CLIContext


def exit_on_error[T](result: Result[T, OrchestratorError], ctx: CLIContext) -> None:
    """Print the error and exit with its code if ``result`` is Err."""
    if isinstance(result, Err):
        print_error(result.error, ctx.console)
        raise typer.Exit(code=error_exit_code(result.error))
