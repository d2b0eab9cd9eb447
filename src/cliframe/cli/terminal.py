"""Terminal primitives available to command bodies.

* :class:`RichSpinner` — indeterminate progress indicator built on a
  Rich :class:`~rich.progress.Progress` with a spinner column.
* :class:`QuestionaryLineReader` — one-shot line prompt via questionary.
* :func:`wait` — explicit "wait N milliseconds" suspension point.

Optional UI packages are imported lazily; a missing package raises
:class:`~cliframe.exceptions.EnvironmentError` only when the primitive
is actually used.
"""

from __future__ import annotations

import asyncio
from typing import Any

from cliframe.cli.console import get_rich_console
from cliframe.exceptions import EnvironmentError, PromptCancelledError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive prompts."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


class RichSpinner:
    """Spinner shown while a command waits on something.

    Usage::

        with RichSpinner("warming up...") as spinner:
            await wait(2000)
    """

    def __init__(self, text: str = "") -> None:
        try:
            from rich.progress import Progress, SpinnerColumn, TextColumn
        except ModuleNotFoundError as exc:
            raise EnvironmentError(
                "rich is not installed. Install with: pip install rich",
            ) from exc

        self._progress: Any = Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            console=get_rich_console(),
            transient=True,
        )
        self._text = text
        self._task_id: Any = None
        self._started: bool = False

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> RichSpinner:
        self.start()
        return self

    def __exit__(self, *_args: object) -> None:
        self.stop()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self._started

    def start(self) -> None:
        """Start the spinner."""
        if not self._started:
            self._progress.start()
            self._task_id = self._progress.add_task(self._text, total=None)
            self._started = True

    def stop(self) -> None:
        """Stop and clear the spinner (idempotent)."""
        if self._started:
            self._progress.stop()
            self._started = False


class QuestionaryLineReader:
    """Satisfies :class:`~cliframe.core.protocols.LineReader`."""

    async def read_line(self, message: str = "") -> str:
        questionary = _import_questionary()
        answer: str | None = await questionary.text(message).ask_async()
        if answer is None:
            raise PromptCancelledError("Prompt was cancelled.")
        return answer


async def wait(milliseconds: float) -> None:
    """Suspend the current command for *milliseconds*."""
    await asyncio.sleep(max(milliseconds, 0) / 1000)
