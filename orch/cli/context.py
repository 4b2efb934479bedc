from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from orch.core.config import Config, load_config, parse_toml
from orch.core.errors import ErrorCode
from orch.core.result import Err
from orch.core.structured import get_table, str_mapping
from orch.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    console: ConsoleProtocol


def build_context(config_path: Path | None) -> CLIContext:
    config_result = load_config(config_path)
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    return CLIContext(config=config_result.value, console=RichConsole())


def load_secrets(path: Path | None) -> dict[str, str]:
    """Read the ``[secrets]`` table of a TOML file; no file means no secrets."""
    if path is None:
        return {}

    parsed = parse_toml(path)
    if isinstance(parsed, Err):
        typer.echo(f"error: {parsed.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    return str_mapping(get_table(parsed.value, "secrets") or {})
