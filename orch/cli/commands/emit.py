from __future__ import annotations

import asyncio
from pathlib import Path

import typer

from orch.cli.commands._helpers import exit_on_error
from orch.cli.context import build_context, load_secrets
from orch.core.errors import ErrorCode
from orch.events.handlers import build_router, build_services
from orch.events.model import Event, EventKind, Project
from orch.jobs.executor import DockerExecutor, DryRunExecutor
from orch.jobs.model import JobExecutor
from orch.output.console import Style
from orch.services.checks import ConsoleStatusReporter


def emit(
    kind: str = typer.Argument(..., help="Event kind, e.g. push or check_suite:requested."),
    ref: str = typer.Option("", "--ref", help="refs/tags/<tag> or refs/heads/<branch>."),
    build_id: str = typer.Option("local", "--build-id", help="Build identifier."),
    repo: str | None = typer.Option(None, "--repo", help="<org>/<name> (default from config)."),
    payload_file: Path | None = typer.Option(
        None, "--payload-file", help="Webhook body (JSON) for check-run and comment events."
    ),
    secrets_file: Path | None = typer.Option(
        None, "--secrets-file", help="TOML file with a [secrets] table."
    ),
    config_path: Path | None = typer.Option(None, "--config", help="Orchestrator config TOML."),
    execute: bool = typer.Option(
        False, "--execute/--dry-run", help="Run jobs in docker instead of printing them."
    ),
    source: Path = typer.Option(Path("."), "--source", help="Sources mounted into job containers."),
    timeout: float | None = typer.Option(None, "--timeout", help="Per-job timeout in seconds."),
) -> None:
    """Deliver one event to the orchestrator, as the CI host would."""
    ctx = build_context(config_path)
    console = ctx.console

    if EventKind.parse(kind) is None:
        known = ", ".join(str(k) for k in EventKind)
        console.error(f"unknown event kind: {kind}")
        console.print(f"known: {known}", Style.DIM)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    payload = b""
    if payload_file is not None:
        try:
            payload = payload_file.read_bytes()
        except OSError as e:
            console.error(f"cannot read payload: {e}")
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    executor: JobExecutor
    if execute:
        executor = DockerExecutor(
            source_root=source.expanduser().resolve(),
            console=console,
            timeout=timeout,
        )
    else:
        executor = DryRunExecutor(console=console)

    services = build_services(
        config=ctx.config,
        executor=executor,
        reporter=ConsoleStatusReporter(console=console),
        console=console,
    )
    router = build_router(services)

    project = Project(
        repo_name=repo or f"{ctx.config.project.org}/{ctx.config.project.name}",
        secrets=load_secrets(secrets_file),
    )
    event = Event(kind=kind, ref=ref, build_id=build_id, payload=payload)

    result = asyncio.run(router.dispatch(event, project))
    exit_on_error(result, ctx)
