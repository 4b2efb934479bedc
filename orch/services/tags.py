from __future__ import annotations

import re

from orch.core.config import RELEASE_TAG_PATTERN
from orch.events.model import TAG_REF_PREFIX
from orch.output.console import ConsoleProtocol

__all__ = ["TagMatcher", "extract_version"]


class TagMatcher:
    """Decides whether a ref is an official release tag."""

    def __init__(self, pattern: str = RELEASE_TAG_PATTERN) -> None:
        self._regex = re.compile(pattern)

    @property
    def pattern(self) -> str:
        return self._regex.pattern

    def extract_version(self, ref: str, *, console: ConsoleProtocol) -> str | None:
        """Return the version captured from a release tag ref, else None.

        ``refs/tags/v1.2.3`` yields ``v1.2.3``. A tag that does not fit the
        release grammar gets an informational notice; branch refs are ignored
        silently.
        """
        m = self._regex.fullmatch(ref)
        if m is not None:
            return m.group(1)
        if ref.startswith(TAG_REF_PREFIX):
            console.info(
                f"Ref {ref} does not match expected official release tag regex "
                f"({self._regex.pattern}); not releasing."
            )
        return None


_DEFAULT = TagMatcher()


def extract_version(ref: str, *, console: ConsoleProtocol) -> str | None:
    return _DEFAULT.extract_version(ref, console=console)
