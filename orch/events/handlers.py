"""Event handlers and the startup wiring that registers them."""

from __future__ import annotations

from dataclasses import dataclass

from orch.core.config import Config
from orch.core.errors import OrchestratorError
from orch.core.result import Err, Ok, Result
from orch.core.structured import get_path, parse_json_object
from orch.events.model import Event, EventKind, Project
from orch.events.router import EventRouter
from orch.jobs.group import ParallelGroup, settle
from orch.jobs.model import JobExecutor
from orch.output.console import ConsoleProtocol, Style
from orch.services.catalog import JobCatalog
from orch.services.checks import StatusReporter
from orch.services.dispatch import CheckDispatcher
from orch.services.release import ReleasePipeline
from orch.services.suite import SuiteRunner
from orch.services.tags import TagMatcher

__all__ = ["Handlers", "Services", "build_router", "build_services"]

TRUSTED_ASSOCIATIONS = frozenset({"OWNER", "MEMBER", "COLLABORATOR"})


@dataclass(frozen=True, slots=True)
class Services:
    config: Config
    catalog: JobCatalog
    suite: SuiteRunner
    dispatcher: CheckDispatcher
    release: ReleasePipeline
    tags: TagMatcher
    console: ConsoleProtocol


def build_services(
    *,
    config: Config,
    executor: JobExecutor,
    reporter: StatusReporter,
    console: ConsoleProtocol,
) -> Services:
    catalog = JobCatalog(config=config, executor=executor, console=console)
    group = ParallelGroup(console=console)
    suite = SuiteRunner(
        config=config,
        catalog=catalog,
        group=group,
        reporter=reporter,
        console=console,
    )
    return Services(
        config=config,
        catalog=catalog,
        suite=suite,
        dispatcher=CheckDispatcher(
            factories=catalog.suite_factories(),
            suite=suite,
            console=console,
        ),
        release=ReleasePipeline(config=config, catalog=catalog, group=group, console=console),
        tags=TagMatcher(config.release_tag_pattern),
        console=console,
    )


class Handlers:
    def __init__(self, services: Services) -> None:
        self._s = services

    async def on_push(self, event: Event, project: Project) -> Result[None, OrchestratorError]:
        """Tags matching the release grammar release; mainline pushes build edge."""
        console = self._s.console
        version = self._s.tags.extract_version(event.ref, console=console)
        if version is None and not self._s.suite.is_mainline(event):
            if not event.is_tag:
                console.print(f"push to {event.ref or '?'}: nothing to do", Style.DIM)
            return Ok(None)

        suite = await self._s.suite.run(event, project)
        if isinstance(suite, Err):
            return suite
        if version is None:
            return Ok(None)
        return await self._s.release.run(project, version)

    async def on_check_suite(
        self, event: Event, project: Project
    ) -> Result[None, OrchestratorError]:
        return await self._s.suite.run(event, project)

    async def on_check_run(self, event: Event, project: Project) -> Result[None, OrchestratorError]:
        return await self._s.dispatcher.dispatch_event(event, project)

    async def on_exec(self, event: Event, project: Project) -> Result[None, OrchestratorError]:
        del event, project
        return await self._s.suite.run_tests()

    async def on_e2e(self, event: Event, project: Project) -> Result[None, OrchestratorError]:
        del event, project
        failure = await settle(self._s.catalog.e2e())
        if failure is not None:
            return Err(failure)
        return Ok(None)

    async def on_issue_comment(
        self, event: Event, project: Project
    ) -> Result[None, OrchestratorError]:
        """Re-run the suite when a trusted user comments the trigger phrase."""
        console = self._s.console
        data = parse_json_object(event.payload) or {}
        body = get_path(data, "body", "comment", "body")
        association = get_path(data, "body", "comment", "author_association")

        if not isinstance(body, str) or body.strip() != self._s.config.comment_trigger:
            console.print("comment does not request a build; ignoring", Style.DIM)
            return Ok(None)
        if association not in TRUSTED_ASSOCIATIONS:
            console.info(f"comment author association {association!r} may not trigger builds")
            return Ok(None)
        return await self._s.suite.run(event, project)


def build_router(services: Services) -> EventRouter:
    """Register a handler for every event kind and validate the table."""
    h = Handlers(services)
    router = EventRouter(console=services.console)
    router.register(EventKind.PUSH, h.on_push)
    router.register(EventKind.EXEC, h.on_exec)
    router.register(EventKind.E2E, h.on_e2e)
    router.register(EventKind.CHECK_SUITE_REQUESTED, h.on_check_suite)
    router.register(EventKind.CHECK_SUITE_REREQUESTED, h.on_check_suite)
    router.register(EventKind.CHECK_RUN_REREQUESTED, h.on_check_run)
    router.register(EventKind.ISSUE_COMMENT_CREATED, h.on_issue_comment)
    router.register(EventKind.ISSUE_COMMENT_EDITED, h.on_issue_comment)
    router.validate()
    return router
