from __future__ import annotations

import asyncio
import json

from orch.core.errors import AggregateFailure, ValidationError
from orch.core.result import Err, Ok
from orch.events.handlers import build_router
from orch.events.model import Event, EventKind, Project
from orch.test.fakes import RELEASE_SECRETS, harness

SUITE = {"test-go", "test-javascript", "test-e2e"}
RELEASE_STAGES = ["build-and-publish-images", "release"]


def _project(**secrets: str) -> Project:
    return Project(repo_name="brigadecore/brigade", secrets=secrets)


def _comment(body: str, association: str = "MEMBER") -> bytes:
    return json.dumps(
        {"body": {"comment": {"body": body, "author_association": association}}}
    ).encode()


def test_router_covers_every_kind() -> None:
    router = build_router(harness().services)
    assert set(router.kinds) == set(EventKind)


def test_push_release_tag_runs_suite_then_release() -> None:
    h = harness()
    router = build_router(h.services)

    result = asyncio.run(
        router.dispatch(Event(kind="push", ref="refs/tags/v1.2.3"), _project(**RELEASE_SECRETS))
    )

    assert result == Ok(None)
    assert set(h.executor.names[:3]) == SUITE
    assert h.executor.names[3:] == RELEASE_STAGES
    assert h.executor.executed[3].env_dict()["VERSION"] == "v1.2.3"


def test_push_release_tag_with_failing_suite_does_not_release() -> None:
    h = harness(fail={"test-e2e"})
    router = build_router(h.services)

    result = asyncio.run(
        router.dispatch(Event(kind="push", ref="refs/tags/v1.2.3"), _project(**RELEASE_SECRETS))
    )

    assert isinstance(result, Err)
    assert isinstance(result.error, AggregateFailure)
    assert set(h.executor.names) == SUITE


def test_push_release_tag_without_secrets_fails_after_suite() -> None:
    h = harness()
    router = build_router(h.services)

    result = asyncio.run(router.dispatch(Event(kind="push", ref="refs/tags/v1.2.3"), _project()))

    assert isinstance(result, Err)
    assert isinstance(result.error, ValidationError)
    assert set(h.executor.names) == SUITE


def test_push_mainline_publishes_edge_and_no_release() -> None:
    h = harness()
    router = build_router(h.services)

    result = asyncio.run(
        router.dispatch(Event(kind="push", ref="refs/heads/master"), _project(**RELEASE_SECRETS))
    )

    assert result == Ok(None)
    extra = [n for n in h.executor.names if n not in SUITE]
    assert extra == ["build-and-publish-images"]
    assert h.executor.executed[-1].env_dict()["VERSION"] == ""


def test_push_unofficial_tag_does_nothing() -> None:
    h = harness()
    router = build_router(h.services)

    result = asyncio.run(router.dispatch(Event(kind="push", ref="refs/tags/latest"), _project()))

    assert result == Ok(None)
    assert h.executor.executed == []
    assert h.console.find("not releasing")


def test_push_feature_branch_does_nothing() -> None:
    h = harness()
    router = build_router(h.services)

    result = asyncio.run(router.dispatch(Event(kind="push", ref="refs/heads/topic"), _project()))

    assert result == Ok(None)
    assert h.executor.executed == []


def test_check_suite_requested_runs_suite() -> None:
    h = harness()
    router = build_router(h.services)

    result = asyncio.run(
        router.dispatch(Event(kind="check_suite:rerequested", ref="refs/heads/topic"), _project())
    )

    assert result == Ok(None)
    assert set(h.executor.names) == SUITE
    assert len(h.reporter.reports) == 3


def test_check_run_rerequested_runs_named_check() -> None:
    h = harness()
    router = build_router(h.services)
    payload = json.dumps({"body": {"check_run": {"name": "test-javascript"}}}).encode()

    result = asyncio.run(
        router.dispatch(Event(kind="check_run:rerequested", payload=payload), _project())
    )

    assert result == Ok(None)
    assert h.executor.names == ["test-javascript"]


def test_exec_runs_suite_without_reports() -> None:
    h = harness()
    router = build_router(h.services)

    assert asyncio.run(router.dispatch(Event(kind="exec"), _project())) == Ok(None)
    assert set(h.executor.names) == SUITE
    assert h.reporter.reports == []


def test_e2e_runs_only_e2e() -> None:
    h = harness(fail={"test-e2e"})
    router = build_router(h.services)

    result = asyncio.run(router.dispatch(Event(kind="e2e"), _project()))

    assert isinstance(result, Err)
    assert h.executor.names == ["test-e2e"]


def test_issue_comment_trigger_reruns_suite() -> None:
    h = harness()
    router = build_router(h.services)
    event = Event(kind="issue_comment:created", payload=_comment(" /brig run "))

    assert asyncio.run(router.dispatch(event, _project())) == Ok(None)
    assert set(h.executor.names) == SUITE


def test_issue_comment_other_text_is_ignored() -> None:
    h = harness()
    router = build_router(h.services)
    event = Event(kind="issue_comment:edited", payload=_comment("looks good"))

    assert asyncio.run(router.dispatch(event, _project())) == Ok(None)
    assert h.executor.executed == []


def test_issue_comment_from_untrusted_author_is_ignored() -> None:
    h = harness()
    router = build_router(h.services)
    event = Event(kind="issue_comment:created", payload=_comment("/brig run", "NONE"))

    assert asyncio.run(router.dispatch(event, _project())) == Ok(None)
    assert h.executor.executed == []
