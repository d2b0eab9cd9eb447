"""Shared pytest fixtures and configuration for the cliframe test suite.

Guidelines
----------
* No interactive terminal — prompts are fed by :class:`ScriptedReader`.
* Output assertions use :class:`RecordingOutput` instead of Rich.
* Tests must not depend on OS state.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from cliframe.cli.application import Application


class RecordingOutput:
    """In-memory :class:`~cliframe.core.protocols.OutputSink`."""

    def __init__(self) -> None:
        self.lines: list[tuple[str, str]] = []

    def log(self, message: str = "") -> None:
        self.lines.append(("log", message))

    def info(self, message: str) -> None:
        self.lines.append(("info", message))

    def success(self, message: str) -> None:
        self.lines.append(("success", message))

    def warning(self, message: str) -> None:
        self.lines.append(("warning", message))

    def error(self, message: str) -> None:
        self.lines.append(("error", message))

    def erase(self) -> None:
        self.lines.append(("erase", ""))

    @property
    def text(self) -> str:
        return "\n".join(message for _, message in self.lines)

    def messages(self, level: str) -> list[str]:
        return [message for lvl, message in self.lines if lvl == level]


class ScriptedReader:
    """:class:`~cliframe.core.protocols.LineReader` returning canned answers."""

    def __init__(self, *answers: str) -> None:
        self._answers = list(answers)
        self.prompts: list[str] = []

    async def read_line(self, message: str = "") -> str:
        self.prompts.append(message)
        return self._answers.pop(0)


@pytest.fixture
def output() -> RecordingOutput:
    return RecordingOutput()


@pytest.fixture
def make_app(output: RecordingOutput) -> Callable[..., Application]:
    """Factory building an :class:`Application` wired to the recording sink."""

    def _make(options: dict[str, Any] | None = None, **kwargs: Any) -> Application:
        kwargs.setdefault("output", output)
        kwargs.setdefault("line_reader", ScriptedReader())
        return Application(options, **kwargs)

    return _make
