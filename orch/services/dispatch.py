"""Re-running a single named check on request."""

from __future__ import annotations

from collections.abc import Mapping

from orch.core.errors import AggregateFailure, NotFoundError, ValidationError
from orch.core.result import Err, Result
from orch.core.structured import get_path, parse_json_object
from orch.events.model import Event, Project
from orch.jobs.model import JobFactory
from orch.output.console import ConsoleProtocol
from orch.services.suite import SuiteRunner

__all__ = ["CheckDispatcher", "check_name_from_payload"]

type DispatchError = NotFoundError | ValidationError | AggregateFailure


def check_name_from_payload(payload: bytes) -> str | None:
    data = parse_json_object(payload)
    if data is None:
        return None
    name = get_path(data, "body", "check_run", "name")
    if not isinstance(name, str) or not name.strip():
        return None
    return name.strip()


class CheckDispatcher:
    def __init__(
        self,
        *,
        factories: Mapping[str, JobFactory],
        suite: SuiteRunner,
        console: ConsoleProtocol,
    ) -> None:
        self._factories = dict(factories)
        self._suite = suite
        self._console = console

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._factories)

    async def dispatch(
        self,
        name: str,
        event: Event,
        project: Project,
    ) -> Result[None, NotFoundError | AggregateFailure]:
        """Run the check registered as ``name`` as a single-element suite."""
        factory = self._factories.get(name)
        if factory is None:
            return Err(NotFoundError(name=name, available=self.names))

        self._console.info(f"Check requested: {name}")
        return await self._suite.run_checks([factory], event, project)

    async def dispatch_event(self, event: Event, project: Project) -> Result[None, DispatchError]:
        """Dispatch the check named in a check-run re-request payload."""
        name = check_name_from_payload(event.payload)
        if name is None:
            return Err(
                ValidationError(
                    message="check_run payload does not name a check",
                    missing=("body.check_run.name",),
                )
            )
        return await self.dispatch(name, event, project)
