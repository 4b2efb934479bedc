"""Units of work.

A ``JobSpec`` describes what to run (image, environment, ordered shell
tasks); a ``Job`` binds a spec to the executor that runs it. Anything with a
``name`` and an awaitable ``run()`` returning a ``Result`` is a unit of work,
which lets checks and the no-op notifier sit in the same groups as jobs.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Protocol

from orch.core.errors import UnitFailure
from orch.core.result import Ok, Result

__all__ = [
    "UnitOfWork",
    "JobExecutor",
    "JobSpec",
    "Job",
    "NoopJob",
    "JobFactory",
    "env_pairs",
]


class UnitOfWork(Protocol):
    @property
    def name(self) -> str: ...

    async def run(self) -> Result[None, UnitFailure]: ...


class JobExecutor(Protocol):
    """The substrate that actually executes a job spec."""

    async def execute(self, spec: JobSpec) -> Result[None, UnitFailure]: ...


type JobFactory = Callable[[], UnitOfWork]


def env_pairs(env: Mapping[str, str]) -> tuple[tuple[str, str], ...]:
    return tuple(env.items())


@dataclass(frozen=True, slots=True)
class JobSpec:
    """Immutable description of one job.

    Attributes:
        name: Identity of the job; also the check name reported to the host.
        image: Execution target (container image).
        env: Environment bindings, in declaration order.
        tasks: Shell commands run in order; the first failing one fails the job.
        work_dir: Optional working directory inside the target.
        privileged: Whether the target needs elevated privileges (docker-in-docker).
        shell: Interpreter used to run ``tasks``.
    """

    name: str
    image: str
    env: tuple[tuple[str, str], ...] = ()
    tasks: tuple[str, ...] = ()
    work_dir: str | None = None
    privileged: bool = False
    shell: str = "/bin/sh"

    def env_dict(self) -> dict[str, str]:
        return dict(self.env)

    def script(self) -> str:
        """Tasks as one newline-separated script that stops at the first failure."""
        return "\n".join(("set -e", *self.tasks))


@dataclass(frozen=True, slots=True)
class Job:
    spec: JobSpec
    executor: JobExecutor = field(repr=False, compare=False)

    @property
    def name(self) -> str:
        return self.spec.name

    async def run(self) -> Result[None, UnitFailure]:
        return await self.executor.execute(self.spec)


@dataclass(frozen=True, slots=True)
class NoopJob:
    """Null object: a unit that completes immediately and successfully."""

    name: str = "noop"

    async def run(self) -> Result[None, UnitFailure]:
        return Ok(None)
