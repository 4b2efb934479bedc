"""Release pipeline for official tags: images, GitHub release, notification."""

from __future__ import annotations

from orch.core.config import Config
from orch.core.errors import UnitFailure, ValidationError
from orch.core.result import Err, Ok, Result
from orch.events.model import Project
from orch.jobs.group import ParallelGroup
from orch.jobs.model import UnitOfWork
from orch.output.console import ConsoleProtocol
from orch.services.catalog import JobCatalog

__all__ = ["ReleasePipeline"]


class ReleasePipeline:
    def __init__(
        self,
        *,
        config: Config,
        catalog: JobCatalog,
        group: ParallelGroup,
        console: ConsoleProtocol,
    ) -> None:
        self._config = config
        self._catalog = catalog
        self._group = group
        self._console = console

    def required_secrets(self) -> tuple[str, ...]:
        keys = self._config.secrets
        return (keys.registry_username, keys.registry_password, keys.release_token)

    def validate(self, project: Project) -> Result[None, ValidationError]:
        missing = tuple(k for k in self.required_secrets() if project.secret(k) is None)
        if missing:
            return Err(
                ValidationError(
                    message=f"Project must have {', '.join(f'secrets.{k}' for k in missing)} set",
                    missing=missing,
                    hint="No release stage was started.",
                )
            )
        return Ok(None)

    def stages(self, project: Project, version: str) -> list[UnitOfWork]:
        title = f"{self._config.project.name.capitalize()} Release"
        url = f"https://github.com/{project.repo_name}/releases/tag/{version}"
        return [
            self._catalog.build_and_publish_images(project, version),
            self._catalog.github_release(project, version),
            self._catalog.notify(title, f"{version} release now on GitHub! <{url}>", project),
        ]

    async def run(
        self, project: Project, version: str
    ) -> Result[None, ValidationError | UnitFailure]:
        """Validate secrets once, then run the stages strictly in order.

        The first failing stage aborts the remaining ones.
        """
        validated = self.validate(project)
        if isinstance(validated, Err):
            return validated

        self._console.header(f"release {version} of {project.repo_name}")
        result = await self._group.run_each(self.stages(project, version))
        if isinstance(result, Err):
            return result

        self._console.success(f"released {version}")
        return Ok(None)
