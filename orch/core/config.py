"""Typed orchestrator configuration.

One immutable ``Config`` is built at startup (from defaults, optionally
overlaid by a TOML file) and handed to every component. Nothing reads
module-level settings at run time.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_table

__all__ = [
    "Config",
    "ConfigError",
    "ImagesConfig",
    "NotifyConfig",
    "ProjectConfig",
    "SecretKeys",
    "check_tag_pattern",
    "load_config",
    "RELEASE_TAG_PATTERN",
]

# Anchored release tag grammar: v<major>(.<minor>)*(-<prerelease>)?
RELEASE_TAG_PATTERN = r"^refs/tags/(v[0-9]+(?:\.[0-9]+)*(?:-.+)?)$"

DETAILS_URL_TEMPLATE = "https://brigadecore.github.io/kashti/builds/{build_id}"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None

    @property
    def hint(self) -> str | None:
        return str(self.path) if self.path else None


@dataclass(frozen=True, slots=True)
class ImagesConfig:
    """Container images used by the job catalog."""

    go: str = "quay.io/deis/lightweight-docker-go:v0.7.0"
    js: str = "node:12.3.1-stretch"
    docker: str = "docker:stable-dind"
    kind: str = "brigadecore/golang-kind:1.12.7-v0.4.0"
    notify: str = "technosophos/slack-notify:latest"


@dataclass(frozen=True, slots=True)
class ProjectConfig:
    """The project being built and where its sources are mounted."""

    name: str = "brigade"
    org: str = "brigadecore"
    mainline_branch: str = "master"
    gopath: str = "/go"

    @property
    def local_path(self) -> str:
        return f"{self.gopath}/src/github.com/{self.org}/{self.name}"


@dataclass(frozen=True, slots=True)
class SecretKeys:
    """Names of the project secrets the release stages read."""

    release_token: str = "ghToken"
    registry: str = "dockerhubRegistry"
    registry_org: str = "dockerhubOrg"
    registry_username: str = "dockerhubUsername"
    registry_password: str = "dockerhubPassword"
    webhook: str = "SLACK_WEBHOOK"


@dataclass(frozen=True, slots=True)
class NotifyConfig:
    username: str = "brigade-ci"
    color: str = "#00ff00"


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    images: ImagesConfig = field(default_factory=ImagesConfig)
    project: ProjectConfig = field(default_factory=ProjectConfig)
    secrets: SecretKeys = field(default_factory=SecretKeys)
    notify: NotifyConfig = field(default_factory=NotifyConfig)
    release_tag_pattern: str = RELEASE_TAG_PATTERN
    details_url_template: str = DETAILS_URL_TEMPLATE
    comment_trigger: str = "/brig run"
    default_registry: str = "docker.io"

    def details_url(self, build_id: str) -> str:
        return self.details_url_template.format(build_id=build_id)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML); absent keys keep defaults."""
        images: StrDict = get_table(data, "images") or {}
        project: StrDict = get_table(data, "project") or {}
        secrets: StrDict = get_table(data, "secrets") or {}
        notify: StrDict = get_table(data, "notify") or {}
        d_images = ImagesConfig()
        d_project = ProjectConfig()
        d_secrets = SecretKeys()
        d_notify = NotifyConfig()
        base = cls()

        return cls(
            images=ImagesConfig(
                go=get_str(images, "go") or d_images.go,
                js=get_str(images, "js") or d_images.js,
                docker=get_str(images, "docker") or d_images.docker,
                kind=get_str(images, "kind") or d_images.kind,
                notify=get_str(images, "notify") or d_images.notify,
            ),
            project=ProjectConfig(
                name=get_str(project, "name") or d_project.name,
                org=get_str(project, "org") or d_project.org,
                mainline_branch=get_str(project, "mainline_branch") or d_project.mainline_branch,
                gopath=get_str(project, "gopath") or d_project.gopath,
            ),
            secrets=SecretKeys(
                release_token=get_str(secrets, "release_token") or d_secrets.release_token,
                registry=get_str(secrets, "registry") or d_secrets.registry,
                registry_org=get_str(secrets, "registry_org") or d_secrets.registry_org,
                registry_username=get_str(secrets, "registry_username")
                or d_secrets.registry_username,
                registry_password=get_str(secrets, "registry_password")
                or d_secrets.registry_password,
                webhook=get_str(secrets, "webhook") or d_secrets.webhook,
            ),
            notify=NotifyConfig(
                username=get_str(notify, "username") or d_notify.username,
                color=get_str(notify, "color") or d_notify.color,
            ),
            release_tag_pattern=get_str(data, "release_tag_pattern") or base.release_tag_pattern,
            details_url_template=get_str(data, "details_url_template")
            or base.details_url_template,
            comment_trigger=get_str(data, "comment_trigger") or base.comment_trigger,
            default_registry=get_str(data, "default_registry") or base.default_registry,
        )


def parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file whose root must be a table."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def check_tag_pattern(pattern: str) -> str | None:
    """Return why ``pattern`` cannot match release tags, or None if it can."""
    try:
        regex = re.compile(pattern)
    except re.error as e:
        return f"Invalid release_tag_pattern: {e}"
    if regex.groups < 1:
        return "release_tag_pattern must capture the version in a group"
    return None


def load_config(path: Path | None) -> Result[Config, ConfigError]:
    """Load configuration; ``None`` means built-in defaults.

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    if path is None:
        return Ok(Config())

    parsed = parse_toml(path)
    if isinstance(parsed, Err):
        return parsed

    config = Config.from_dict(parsed.value)
    problem = check_tag_pattern(config.release_tag_pattern)
    if problem is not None:
        return Err(ConfigError(problem, path=path))
    return Ok(config)
