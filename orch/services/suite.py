from __future__ import annotations

from collections.abc import Sequence

from orch.core.config import Config
from orch.core.errors import AggregateFailure
from orch.core.result import Err, Ok, Result
from orch.events.model import Event, Project
from orch.jobs.group import ParallelGroup, settle
from orch.jobs.model import JobFactory
from orch.output.console import ConsoleProtocol, Style
from orch.services.catalog import JobCatalog
from orch.services.checks import Check, StatusReporter

__all__ = ["SuiteRunner"]


class SuiteRunner:
    """Runs the check suite and, on mainline, publishes edge images.

    Each check reports its own status, so every suite job runs to completion
    even when another has already failed.
    """

    def __init__(
        self,
        *,
        config: Config,
        catalog: JobCatalog,
        group: ParallelGroup,
        reporter: StatusReporter,
        console: ConsoleProtocol,
    ) -> None:
        self._config = config
        self._catalog = catalog
        self._group = group
        self._reporter = reporter
        self._console = console

    def is_mainline(self, event: Event) -> bool:
        return event.branch == self._config.project.mainline_branch

    async def run_checks(
        self,
        factories: Sequence[JobFactory],
        event: Event,
        project: Project,
    ) -> Result[None, AggregateFailure]:
        details_url = self._config.details_url(event.build_id)
        checks = [
            Check(
                event=event,
                project=project,
                job=factory(),
                details_url=details_url,
                reporter=self._reporter,
            )
            for factory in factories
        ]
        return await self._group.run_all(checks)

    async def run(self, event: Event, project: Project) -> Result[None, AggregateFailure]:
        self._console.header(f"check suite for {project.repo_name} ({event.ref or 'no ref'})")
        factories = list(self._catalog.suite_factories().values())
        result = await self.run_checks(factories, event, project)
        if isinstance(result, Err):
            return result

        if self.is_mainline(event):
            await self._publish_edge(project)
        return Ok(None)

    async def run_tests(self) -> Result[None, AggregateFailure]:
        """Run the suite jobs without reporting check statuses."""
        jobs = [factory() for factory in self._catalog.suite_factories().values()]
        return await self._group.run_all(jobs)

    async def _publish_edge(self, project: Project) -> None:
        self._console.print("mainline build: publishing edge images", Style.DIM)
        failure = await settle(self._catalog.build_and_publish_images(project, ""))
        if failure is not None:
            # edge images are best effort; the suite already passed
            self._console.warning(f"edge image publish failed: {failure.message}")
