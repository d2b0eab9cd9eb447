"""Protocols (interfaces) for the terminal collaborators.

Commands and the lifecycle runner depend only on these contracts.
The Rich/questionary implementations in :mod:`cliframe.cli` satisfy
them structurally; tests may substitute recording fakes.
"""

from __future__ import annotations

from typing import Protocol


class OutputSink(Protocol):
    """Line-output sink with styleable text.

    Messages may contain Rich markup (``[green]…[/green]``).
    """

    def log(self, message: str = "") -> None:
        """Write a plain line."""
        ...  # pragma: no cover

    def info(self, message: str) -> None:
        ...  # pragma: no cover

    def success(self, message: str) -> None:
        ...  # pragma: no cover

    def warning(self, message: str) -> None:
        ...  # pragma: no cover

    def error(self, message: str) -> None:
        """Write a diagnostic line to the error channel."""
        ...  # pragma: no cover

    def erase(self) -> None:
        """Clear the previously written line."""
        ...  # pragma: no cover


class LineReader(Protocol):
    """One-shot asynchronous line input."""

    async def read_line(self, message: str = "") -> str:
        """Prompt with *message* and return the entered line.

        Raises
        ------
        PromptCancelledError
            When the user aborts the prompt.
        """
        ...  # pragma: no cover
