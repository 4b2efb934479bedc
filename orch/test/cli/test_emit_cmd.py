from __future__ import annotations

import json
from pathlib import Path

import pytest
import typer

from orch.cli.context import CLIContext
from orch.core.config import Config
from orch.core.errors import ErrorCode
from orch.output.console import MockConsole


def _patch_context(monkeypatch: pytest.MonkeyPatch) -> MockConsole:
    import orch.cli.commands.emit as emit_cmd

    console = MockConsole()
    monkeypatch.setattr(
        emit_cmd, "build_context", lambda _path: CLIContext(config=Config(), console=console)
    )
    return console


def _emit(kind: str, **overrides: object) -> None:
    import orch.cli.commands.emit as emit_cmd

    args: dict[str, object] = {
        "kind": kind,
        "ref": "",
        "build_id": "local",
        "repo": None,
        "payload_file": None,
        "secrets_file": None,
        "config_path": None,
        "execute": False,
        "source": Path("."),
        "timeout": None,
    }
    args.update(overrides)
    emit_cmd.emit(**args)  # type: ignore[arg-type]


def test_emit_check_suite_dry_run(monkeypatch: pytest.MonkeyPatch) -> None:
    console = _patch_context(monkeypatch)

    _emit("check_suite:requested", ref="refs/heads/topic")

    assert console.find("$ make verify-vendored-code lint test-unit")
    assert console.find("check test-go on brigadecore/brigade: success")


def test_emit_unknown_kind_is_user_error(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_context(monkeypatch)

    with pytest.raises(typer.Exit) as exc:
        _emit("deploy")

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)


def test_emit_unknown_check_is_user_error(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    console = _patch_context(monkeypatch)
    payload = tmp_path / "payload.json"
    payload.write_text(json.dumps({"body": {"check_run": {"name": "nonexistent"}}}), encoding="utf-8")

    with pytest.raises(typer.Exit) as exc:
        _emit("check_run:rerequested", payload_file=payload)

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)
    assert console.find("No check found with name: nonexistent")


def test_emit_release_without_secrets_is_env_error(monkeypatch: pytest.MonkeyPatch) -> None:
    console = _patch_context(monkeypatch)

    with pytest.raises(typer.Exit) as exc:
        _emit("push", ref="refs/tags/v1.2.3")

    assert exc.value.exit_code == int(ErrorCode.ENV_ERROR)
    assert console.find("missing: dockerhubUsername, dockerhubPassword, ghToken")


def test_emit_release_with_secrets_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    console = _patch_context(monkeypatch)
    secrets = tmp_path / "secrets.toml"
    secrets.write_text(
        '[secrets]\ndockerhubUsername = "bot"\ndockerhubPassword = "pw"\nghToken = "t"\n',
        encoding="utf-8",
    )

    _emit("push", ref="refs/tags/v1.2.3", secrets_file=secrets, repo="acme/widget")

    assert console.find("OK released v1.2.3")
    assert console.find("release: quay.io/deis/lightweight-docker-go:v0.7.0")
