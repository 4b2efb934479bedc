"""Read-only commands: tag matching and the check table."""

from __future__ import annotations

from pathlib import Path

import typer

from orch.cli.context import build_context
from orch.core.errors import ErrorCode
from orch.jobs.executor import DryRunExecutor
from orch.services.catalog import JobCatalog
from orch.services.tags import TagMatcher


def match_tag(
    ref: str = typer.Argument(..., help="Ref to inspect, e.g. refs/tags/v1.2.3."),
    config_path: Path | None = typer.Option(None, "--config", help="Orchestrator config TOML."),
) -> None:
    """Print the release version carried by REF; exit 1 if it is not a release tag."""
    ctx = build_context(config_path)
    version = TagMatcher(ctx.config.release_tag_pattern).extract_version(ref, console=ctx.console)
    if version is None:
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    typer.echo(version)


def checks(
    config_path: Path | None = typer.Option(None, "--config", help="Orchestrator config TOML."),
) -> None:
    """List the check names that can be re-requested."""
    ctx = build_context(config_path)
    catalog = JobCatalog(
        config=ctx.config,
        executor=DryRunExecutor(console=ctx.console),
        console=ctx.console,
    )
    for name, factory in catalog.suite_factories().items():
        job = factory()
        typer.echo(f"{name}\t{job.spec.image}")
