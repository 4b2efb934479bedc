"""Concrete jobs of the brigade build: test suites, image publishing, releases."""

from __future__ import annotations

from collections.abc import Callable

from orch.core.config import Config
from orch.events.model import Project
from orch.jobs.model import Job, JobExecutor, JobSpec, NoopJob, UnitOfWork, env_pairs
from orch.output.console import ConsoleProtocol

__all__ = ["JobCatalog", "TEST_GO", "TEST_JS", "TEST_E2E"]

TEST_GO = "test-go"
TEST_JS = "test-javascript"
TEST_E2E = "test-e2e"


class JobCatalog:
    """Builds fresh job instances; nothing is cached between events."""

    def __init__(
        self,
        *,
        config: Config,
        executor: JobExecutor,
        console: ConsoleProtocol,
    ) -> None:
        self._config = config
        self._executor = executor
        self._console = console

    def _job(self, spec: JobSpec) -> Job:
        return Job(spec=spec, executor=self._executor)

    def suite_factories(self) -> dict[str, Callable[[], Job]]:
        """The check suite, keyed by check name, in submission order."""
        return {
            TEST_GO: self.go_test,
            TEST_JS: self.js_test,
            TEST_E2E: self.e2e,
        }

    def go_test(self) -> Job:
        local_path = self._config.project.local_path
        return self._job(
            JobSpec(
                name=TEST_GO,
                image=self._config.images.go,
                env=env_pairs({"SKIP_DOCKER": "true"}),
                tasks=(
                    f"cd {local_path}",
                    "make verify-vendored-code lint test-unit",
                ),
                work_dir=local_path,
            )
        )

    def js_test(self) -> Job:
        return self._job(
            JobSpec(
                name=TEST_JS,
                image=self._config.images.js,
                env=env_pairs({"SKIP_DOCKER": "true"}),
                tasks=(
                    "cd /src",
                    "make verify-vendored-code-js test-js yarn-audit",
                ),
            )
        )

    def e2e(self) -> Job:
        # kind needs its own docker daemon, hence privileged docker-in-docker
        local_path = self._config.project.local_path
        return self._job(
            JobSpec(
                name=TEST_E2E,
                image=self._config.images.kind,
                tasks=(
                    "dockerd-entrypoint.sh &",
                    "sleep 20",
                    "kind create cluster --wait 300s",
                    'export KUBECONFIG="$(kind get kubeconfig-path)"',
                    f"cd {local_path}",
                    "CREATE_KIND=false make e2e",
                ),
                work_dir=local_path,
                privileged=True,
            )
        )

    def build_and_publish_images(self, project: Project, version: str) -> Job:
        """Image build and push; an empty ``version`` publishes edge images."""
        keys = self._config.secrets
        registry = project.secret(keys.registry) or self._config.default_registry
        org = project.secret(keys.registry_org) or self._config.project.org
        username = project.secret(keys.registry_username) or ""
        password = project.secret(keys.registry_password) or ""
        return self._job(
            JobSpec(
                name="build-and-publish-images",
                image=self._config.images.docker,
                env=env_pairs(
                    {
                        "DOCKER_REGISTRY": registry,
                        "DOCKER_ORG": org,
                        "DOCKER_USERNAME": username,
                        "DOCKER_PASSWORD": password,
                        "VERSION": version,
                    }
                ),
                tasks=(
                    "apk add --update --no-cache make git",
                    "dockerd-entrypoint.sh &",
                    "sleep 20",
                    "cd /src",
                    'echo "$DOCKER_PASSWORD" | docker login "$DOCKER_REGISTRY" '
                    '-u "$DOCKER_USERNAME" --password-stdin',
                    "make build-all-images push-all-images",
                    'docker logout "$DOCKER_REGISTRY"',
                ),
                privileged=True,
            )
        )

    def github_release(self, project: Project, tag: str) -> Job:
        """Cross-compile the CLI and upload it as a GitHub release for ``tag``."""
        local_path = self._config.project.local_path
        token = project.secret(self._config.secrets.release_token) or ""
        return self._job(
            JobSpec(
                name="release",
                image=self._config.images.go,
                env=env_pairs(
                    {
                        "SKIP_DOCKER": "true",
                        "GITHUB_USER": project.org,
                        "GITHUB_REPO": project.name,
                        "GITHUB_TOKEN": token,
                    }
                ),
                tasks=(
                    "go get -u github.com/tcnksm/ghr",
                    f"cd {local_path}",
                    f"VERSION={tag} make build-brig",
                    f"last_tag=$(git describe --tags {tag}^ --abbrev=0 --always)",
                    f'ghr -u "$GITHUB_USER" -r "$GITHUB_REPO" -n "{project.name} {tag}" '
                    "-b \"$(git log --no-merges --pretty=format:'- %s %H (%aN)' HEAD ^$last_tag)\" "
                    f"{tag} bin",
                    f'echo "Release is at https://github.com/{project.repo_name}/releases/tag/{tag}"',
                ),
                work_dir=local_path,
                shell="/bin/bash",
            )
        )

    def notify(self, title: str, message: str, project: Project) -> UnitOfWork:
        """Slack notification, or a no-op unit when no webhook is configured."""
        name = f"{self._config.project.name}-slack-notify"
        webhook = project.secret(self._config.secrets.webhook)
        if webhook is None:
            self._console.info(
                f"Slack notification for '{title}' not sent; "
                f"no {self._config.secrets.webhook} secret found."
            )
            return NoopJob(name=name)

        return self._job(
            JobSpec(
                name=name,
                image=self._config.images.notify,
                env=env_pairs(
                    {
                        "SLACK_WEBHOOK": webhook,
                        "SLACK_USERNAME": self._config.notify.username,
                        "SLACK_TITLE": title,
                        "SLACK_MESSAGE": message,
                        "SLACK_COLOR": self._config.notify.color,
                    }
                ),
                tasks=("/slack-notify",),
            )
        )
