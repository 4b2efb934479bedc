from __future__ import annotations

import asyncio

from orch.core.errors import UnitFailure
from orch.core.result import Err, Ok, Result
from orch.events.model import Event, Project
from orch.jobs.model import NoopJob
from orch.output.console import MockConsole, Style
from orch.services.checks import Check, CheckStatus, ConsoleStatusReporter, StatusReport
from orch.test.fakes import RecordingReporter

EVENT = Event(kind="check_suite:requested", ref="refs/heads/master", build_id="42")
PROJECT = Project(repo_name="brigadecore/brigade")


class Failing:
    name = "test-go"

    async def run(self) -> Result[None, UnitFailure]:
        return Err(UnitFailure(job="test-go", reason="lint", returncode=2))


class Exploding:
    name = "test-e2e"

    async def run(self) -> Result[None, UnitFailure]:
        raise OSError("no docker")


def _check(job: object, reporter: RecordingReporter) -> Check:
    return Check(
        event=EVENT,
        project=PROJECT,
        job=job,  # type: ignore[arg-type]
        details_url="https://ci.example/builds/42",
        reporter=reporter,
    )


def test_check_reports_success() -> None:
    reporter = RecordingReporter()
    check = _check(NoopJob(name="test-js"), reporter)

    assert asyncio.run(check.run()) == Ok(None)
    assert check.name == "test-js"
    assert reporter.reports == [
        StatusReport(
            repo_name="brigadecore/brigade",
            build_id="42",
            check="test-js",
            status=CheckStatus.SUCCESS,
            details_url="https://ci.example/builds/42",
        )
    ]


def test_check_reports_failure_and_returns_it() -> None:
    reporter = RecordingReporter()

    result = asyncio.run(_check(Failing(), reporter).run())

    assert result == Err(UnitFailure(job="test-go", reason="lint", returncode=2))
    assert reporter.reports[0].status == CheckStatus.FAILURE
    assert reporter.reports[0].summary == "job test-go failed (exit 2)"


def test_check_reports_failure_when_job_raises() -> None:
    reporter = RecordingReporter()

    result = asyncio.run(_check(Exploding(), reporter).run())

    assert isinstance(result, Err)
    assert "no docker" in result.error.reason
    assert reporter.status_of("test-e2e") == "failure"


def test_console_reporter_prints_conclusion() -> None:
    console = MockConsole()
    reporter = ConsoleStatusReporter(console=console)
    report = StatusReport(
        repo_name="o/r",
        build_id="1",
        check="test-go",
        status=CheckStatus.FAILURE,
        details_url="https://ci.example/1",
        summary="job test-go failed (exit 2)",
    )

    asyncio.run(reporter.report(report))

    assert console.count(Style.ERROR) == 1
    assert console.find("check test-go on o/r: failure")
    assert console.find("details: https://ci.example/1")
