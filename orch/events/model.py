"""Inbound event and project types supplied by the host per trigger."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType

__all__ = ["Event", "EventKind", "Project"]

TAG_REF_PREFIX = "refs/tags/"
BRANCH_REF_PREFIX = "refs/heads/"


class EventKind(StrEnum):
    PUSH = "push"
    EXEC = "exec"
    E2E = "e2e"
    CHECK_SUITE_REQUESTED = "check_suite:requested"
    CHECK_SUITE_REREQUESTED = "check_suite:rerequested"
    CHECK_RUN_REREQUESTED = "check_run:rerequested"
    ISSUE_COMMENT_CREATED = "issue_comment:created"
    ISSUE_COMMENT_EDITED = "issue_comment:edited"

    @classmethod
    def parse(cls, value: str) -> EventKind | None:
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class Event:
    """One inbound CI event.

    Attributes:
        kind: Event name as delivered by the host (e.g. "push").
        ref: ``refs/tags/<tag>`` or ``refs/heads/<branch>``.
        build_id: Host build identifier, used in check detail URLs.
        payload: Raw webhook body (JSON for check-run and comment events).
    """

    kind: str
    ref: str = ""
    build_id: str = ""
    payload: bytes = b""

    @property
    def is_tag(self) -> bool:
        return self.ref.startswith(TAG_REF_PREFIX)

    @property
    def branch(self) -> str | None:
        if self.ref.startswith(BRANCH_REF_PREFIX):
            return self.ref[len(BRANCH_REF_PREFIX) :]
        if self.ref and not self.ref.startswith("refs/"):
            return self.ref
        return None


def _freeze(secrets: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(secrets))


@dataclass(frozen=True, slots=True)
class Project:
    """Project metadata and secrets, read-only for one event's processing."""

    repo_name: str
    secrets: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "secrets", _freeze(self.secrets))

    def secret(self, key: str) -> str | None:
        """Secret value, or None when absent or blank. Never raises."""
        value = self.secrets.get(key)
        if value is None or not value.strip():
            return None
        return value

    @property
    def org(self) -> str:
        return self.repo_name.split("/", 1)[0]

    @property
    def name(self) -> str:
        parts = self.repo_name.split("/", 1)
        return parts[1] if len(parts) == 2 else parts[0]
