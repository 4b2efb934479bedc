"""Orchestration services: checks, suite, release."""

from .catalog import TEST_E2E, TEST_GO, TEST_JS, JobCatalog
from .checks import Check, CheckStatus, ConsoleStatusReporter, StatusReport, StatusReporter
from .dispatch import CheckDispatcher
from .release import ReleasePipeline
from .suite import SuiteRunner
from .tags import TagMatcher, extract_version

__all__ = [
    "TEST_E2E",
    "TEST_GO",
    "TEST_JS",
    "Check",
    "CheckDispatcher",
    "CheckStatus",
    "ConsoleStatusReporter",
    "JobCatalog",
    "ReleasePipeline",
    "StatusReport",
    "StatusReporter",
    "SuiteRunner",
    "TagMatcher",
    "extract_version",
]
