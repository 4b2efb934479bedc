from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable

from orch.core.errors import OrchestratorError
from orch.core.result import Ok, Result
from orch.events.model import Event, EventKind, Project
from orch.output.console import ConsoleProtocol, Style

__all__ = ["EventRouter", "Handler"]

type Handler = Callable[[Event, Project], Awaitable[Result[None, OrchestratorError]]]


class EventRouter:
    """Registration table from event kind to handler.

    The table is filled once at startup. Registration mistakes are programming
    errors and raise; unknown kinds at dispatch time are ignored.
    """

    def __init__(self, *, console: ConsoleProtocol) -> None:
        self._console = console
        self._handlers: dict[EventKind, Handler] = {}

    @property
    def kinds(self) -> tuple[EventKind, ...]:
        return tuple(self._handlers)

    def register(self, kind: EventKind, handler: Handler) -> None:
        if not isinstance(kind, EventKind):
            raise ValueError(f"not an event kind: {kind!r}")
        if kind in self._handlers:
            raise ValueError(f"handler already registered for {kind}")
        self._handlers[kind] = handler

    def validate(self, required: Iterable[EventKind] = tuple(EventKind)) -> None:
        missing = [str(k) for k in required if k not in self._handlers]
        if missing:
            raise ValueError(f"no handler registered for: {', '.join(missing)}")

    async def dispatch(self, event: Event, project: Project) -> Result[None, OrchestratorError]:
        kind = EventKind.parse(event.kind)
        handler = self._handlers.get(kind) if kind is not None else None
        if handler is None:
            self._console.print(f"ignoring event {event.kind!r}: no handler", Style.DIM)
            return Ok(None)
        return await handler(event, project)
