"""Check runs: a job whose outcome is reported back to the host."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

from orch.core.errors import UnitFailure
from orch.core.result import Err, Ok, Result
from orch.events.model import Event, Project
from orch.jobs.group import settle
from orch.jobs.model import UnitOfWork
from orch.output.console import ConsoleProtocol, Style

__all__ = [
    "Check",
    "CheckStatus",
    "ConsoleStatusReporter",
    "StatusReport",
    "StatusReporter",
]


class CheckStatus(Enum):
    SUCCESS = auto()
    FAILURE = auto()

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True, slots=True)
class StatusReport:
    repo_name: str
    build_id: str
    check: str
    status: CheckStatus
    details_url: str
    summary: str | None = None


class StatusReporter(Protocol):
    async def report(self, report: StatusReport) -> None: ...


class ConsoleStatusReporter:
    """Writes check conclusions to the console instead of a hosting API."""

    def __init__(self, *, console: ConsoleProtocol) -> None:
        self._console = console

    async def report(self, report: StatusReport) -> None:
        line = f"check {report.check} on {report.repo_name}: {report.status}"
        if report.status == CheckStatus.SUCCESS:
            self._console.success(line)
        else:
            self._console.error(line)
            if report.summary:
                self._console.print(report.summary, Style.DIM)
        self._console.print(f"details: {report.details_url}", Style.DIM)


@dataclass(frozen=True, slots=True)
class Check:
    """Runs ``job`` and reports its conclusion, whatever it is.

    The job's own result is returned unchanged, so a failed check still fails
    the group it belongs to after its status has been published.
    """

    event: Event
    project: Project
    job: UnitOfWork
    details_url: str
    reporter: StatusReporter = field(repr=False, compare=False)

    @property
    def name(self) -> str:
        return self.job.name

    async def run(self) -> Result[None, UnitFailure]:
        failure = await settle(self.job)
        await self.reporter.report(
            StatusReport(
                repo_name=self.project.repo_name,
                build_id=self.event.build_id,
                check=self.job.name,
                status=CheckStatus.SUCCESS if failure is None else CheckStatus.FAILURE,
                details_url=self.details_url,
                summary=None if failure is None else failure.message,
            )
        )
        if failure is not None:
            return Err(failure)
        return Ok(None)
