from __future__ import annotations

import pytest

from orch.output.console import MockConsole, RichConsole, Style


def test_mock_console_records_styles() -> None:
    console = MockConsole()
    console.success("built")
    console.error("broke")
    console.warning("slow")
    console.info("note")
    console.header("Suite")
    console.print("plain")

    assert console.messages == [
        "OK built",
        "error: broke",
        "warning: slow",
        "info: note",
        "Suite",
        "plain",
    ]
    assert console.count(Style.INFO) == 1
    assert console.find("broke")[0].style == Style.ERROR


def test_rich_console_does_not_interpret_markup(capsys: pytest.CaptureFixture[str]) -> None:
    console = RichConsole()
    console.info("tag [v1] pushed")
    console.print("[bold]literal[/bold]", Style.DIM)

    out = capsys.readouterr().out
    assert "info: tag [v1] pushed" in out
    assert "[bold]literal[/bold]" in out
