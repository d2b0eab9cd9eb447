"""Tests for the bundled demo application (demo/)."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from cliframe.cli import exit_codes
from cliframe.demo import DemoApplication, cli
from cliframe.demo.demo_command import DEFAULT_DELAY_MS, DemoCommand
from cliframe.version import __version__

from conftest import RecordingOutput, ScriptedReader


@pytest.fixture
def app(output: RecordingOutput) -> DemoApplication:
    return DemoApplication(output=output, line_reader=ScriptedReader("  Ada  "))


@patch("cliframe.cli.command.RichSpinner")
class TestDemoCommand:
    def test_greets_user(
        self, spinner_cls: MagicMock, app: DemoApplication, output: RecordingOutput,
    ) -> None:
        assert app.run(["demo", "0"], terminate=False) == exit_codes.SUCCESS
        assert " I suppose [cyan]Ada[/cyan] is the smart one?" in output.messages("log")
        assert output.messages("success") == ["Go build your own command now!"]
        spinner_cls.return_value.stop.assert_called_once()
        assert output.lines.count(("erase", "")) == 2

    def test_invalid_delay(
        self, spinner_cls: MagicMock, app: DemoApplication, output: RecordingOutput,
    ) -> None:
        assert app.run(["demo", "soon"], terminate=False) == exit_codes.GENERAL_ERROR
        assert output.messages("error") == ["Error: Invalid delay: soon"]
        spinner_cls.assert_not_called()

    def test_dash_number_is_a_flag(self, spinner_cls: MagicMock, app: DemoApplication) -> None:
        with patch("cliframe.cli.command.wait", new_callable=AsyncMock) as waited:
            assert app.run(["demo", "-5"], terminate=False) == exit_codes.SUCCESS
        # "-5" is flag-prefixed, so the default delay applies.
        assert app.parsed.flags == ("-5",)
        waited.assert_awaited_once_with(DEFAULT_DELAY_MS)

    def test_default_delay(self, spinner_cls: MagicMock, app: DemoApplication) -> None:
        app.parsed = app.parsed.__class__(command="demo")
        assert DemoCommand(app).delay() == DEFAULT_DELAY_MS


class TestDemoApplication:
    def test_version(self, app: DemoApplication, output: RecordingOutput) -> None:
        assert app.run(["--version"], terminate=False) == exit_codes.SUCCESS
        assert output.messages("log") == [f"Demo application@{__version__}"]

    def test_help_lists_demo(self, app: DemoApplication, output: RecordingOutput) -> None:
        assert app.run([], terminate=False) == exit_codes.SUCCESS
        assert "   [green]demo[/green] : Demo command with basic features." in output.messages("log")

    def test_describe(self, app: DemoApplication, output: RecordingOutput) -> None:
        assert app.run(["demo", "-d"], terminate=False) == exit_codes.SUCCESS
        assert "Describing command: demo" in output.text
        assert "delay" in output.text


def test_cli_exits(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli(["--version"])
    assert exc_info.value.code == 0
    assert f"Demo application@{__version__}" in capsys.readouterr().out
