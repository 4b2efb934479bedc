"""Reference execution substrates.

``DockerExecutor`` runs each job in a throwaway container with the project
sources mounted; ``DryRunExecutor`` only prints what would run. Both satisfy
``JobExecutor``; the orchestration layer never depends on which one is used.
"""

from __future__ import annotations

import asyncio
import os
from pathlib import Path

from orch.core.errors import UnitFailure
from orch.core.result import Err, Ok, Result
from orch.jobs.model import JobSpec
from orch.output.console import ConsoleProtocol, Style
from orch.platform.process import run as run_process

__all__ = ["DEFAULT_MOUNT", "DockerExecutor", "DryRunExecutor", "docker_command"]

DEFAULT_MOUNT = "/src"


def docker_command(spec: JobSpec, *, source_root: Path) -> list[str]:
    mount = spec.work_dir or DEFAULT_MOUNT
    cmd = ["docker", "run", "--rm"]
    if spec.privileged:
        cmd.append("--privileged")
    # Values travel in the docker client environment, never on argv.
    for key, _ in spec.env:
        cmd.extend(["-e", key])
    cmd.extend(["-v", f"{source_root}:{mount}", "-w", mount])
    cmd.extend([spec.image, spec.shell, "-c", spec.script()])
    return cmd


class DockerExecutor:
    def __init__(
        self,
        *,
        source_root: Path,
        console: ConsoleProtocol,
        timeout: float | None = None,
    ) -> None:
        self._source_root = source_root
        self._console = console
        self._timeout = timeout

    async def execute(self, spec: JobSpec) -> Result[None, UnitFailure]:
        cmd = docker_command(spec, source_root=self._source_root)
        self._console.print(f"{spec.name}: docker run {spec.image}", Style.DIM)

        env = {**os.environ, **spec.env_dict()}
        result = await asyncio.to_thread(
            run_process, cmd, self._source_root, env, timeout=self._timeout
        )
        if isinstance(result, Err):
            e = result.error
            return Err(UnitFailure(job=spec.name, reason=e.tail(), returncode=e.returncode))

        self._console.success(spec.name)
        return Ok(None)


class DryRunExecutor:
    """Prints the job plan and succeeds. Environment values are not shown."""

    def __init__(self, *, console: ConsoleProtocol) -> None:
        self._console = console

    async def execute(self, spec: JobSpec) -> Result[None, UnitFailure]:
        flags = " (privileged)" if spec.privileged else ""
        self._console.print(f"{spec.name}: {spec.image}{flags}")
        if spec.env:
            keys = ", ".join(k for k, _ in spec.env)
            self._console.print(f"  env: {keys}", Style.DIM)
        if spec.work_dir:
            self._console.print(f"  workdir: {spec.work_dir}", Style.DIM)
        for task in spec.tasks:
            self._console.print(f"  $ {task}", Style.DIM)
        return Ok(None)
