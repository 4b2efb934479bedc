"""Test doubles for the execution substrate and the status reporter."""

from __future__ import annotations

from dataclasses import dataclass, field

from orch.core.config import Config
from orch.core.errors import UnitFailure
from orch.core.result import Err, Ok, Result
from orch.events.handlers import Services, build_services
from orch.jobs.model import JobSpec
from orch.output.console import MockConsole
from orch.services.checks import StatusReport


def _empty_specs() -> list[JobSpec]:
    return []


def _empty_reports() -> list[StatusReport]:
    return []


@dataclass
class RecordingExecutor:
    """Records every executed spec; jobs named in ``fail`` exit with status 1."""

    fail: frozenset[str] = frozenset()
    executed: list[JobSpec] = field(default_factory=_empty_specs)

    @property
    def names(self) -> list[str]:
        return [s.name for s in self.executed]

    async def execute(self, spec: JobSpec) -> Result[None, UnitFailure]:
        self.executed.append(spec)
        if spec.name in self.fail:
            return Err(UnitFailure(job=spec.name, reason=f"{spec.name} broke", returncode=1))
        return Ok(None)


@dataclass
class RecordingReporter:
    reports: list[StatusReport] = field(default_factory=_empty_reports)

    async def report(self, report: StatusReport) -> None:
        self.reports.append(report)

    def status_of(self, check: str) -> str | None:
        for r in self.reports:
            if r.check == check:
                return str(r.status)
        return None


@dataclass
class Harness:
    services: Services
    executor: RecordingExecutor
    reporter: RecordingReporter
    console: MockConsole


def harness(*, fail: set[str] | None = None, config: Config | None = None) -> Harness:
    executor = RecordingExecutor(fail=frozenset(fail or ()))
    reporter = RecordingReporter()
    console = MockConsole()
    services = build_services(
        config=config or Config(),
        executor=executor,
        reporter=reporter,
        console=console,
    )
    return Harness(services=services, executor=executor, reporter=reporter, console=console)


RELEASE_SECRETS = {
    "dockerhubUsername": "bot",
    "dockerhubPassword": "hunter2",
    "ghToken": "gh-token",
}
