"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.
"""

from __future__ import annotations

import re
import sys
from typing import Any, TextIO

from cliframe.core.protocols import OutputSink
from cliframe.exceptions import EnvironmentError

_MARKUP_TAG = re.compile(r"(?<!\\)\[/?[a-zA-Z#][a-zA-Z0-9 #_.]*\]")


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console(*, stderr: bool = False) -> Any:
    """Create a Rich console instance targeting stdout or stderr."""
    console_class = _load_rich_console_class()
    return console_class(stderr=stderr)


def escape(text: object) -> str:
    """Escape user text so Rich does not read it as markup."""
    try:
        from rich.markup import escape as rich_escape
    except ModuleNotFoundError:
        return str(text)
    return rich_escape(str(text))


def strip_markup(text: str) -> str:
    """Remove Rich markup tags for plain-text output."""
    return _MARKUP_TAG.sub("", text).replace("\\[", "[")


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback."""

    def __init__(self, *, stderr: bool = False) -> None:
        self._stderr = stderr

    def _stream(self) -> TextIO:
        return sys.stderr if self._stderr else sys.stdout

    def print(self, *objects: object, **kwargs: Any) -> None:
        """Render with Rich when available, else plain print."""
        try:
            rich_console = get_rich_console(stderr=self._stderr)
        except EnvironmentError:
            plain = [strip_markup(obj) if isinstance(obj, str) else obj for obj in objects]
            print(*plain, file=self._stream())
            return
        kwargs.setdefault("soft_wrap", True)
        rich_console.print(*objects, **kwargs)

    def erase_line(self) -> None:
        """Clear the previous line.  A no-op when not writing to a terminal."""
        try:
            rich_console = get_rich_console(stderr=self._stderr)
        except EnvironmentError:
            return
        from rich.control import Control
        from rich.segment import ControlType

        rich_console.control(
            Control(
                (ControlType.ERASE_IN_LINE, 2),
                (ControlType.CURSOR_UP, 1),
                (ControlType.ERASE_IN_LINE, 2),
            )
        )


def render(markup: str) -> str:
    """Render one line of markup to the text the console would print."""
    try:
        rich_console = get_rich_console()
    except EnvironmentError:
        return strip_markup(markup) + "\n"
    with rich_console.capture() as capture:
        rich_console.print(markup, soft_wrap=True)
    return capture.get()


_LEVEL_MARKUP: dict[str, tuple[str, str]] = {
    "log": ("", ""),
    "info": ("[cyan]", "[/cyan]"),
    "success": ("[bold green]", "[/bold green]"),
    "warning": ("[yellow]", "[/yellow]"),
    "error": ("[bold red]", "[/bold red]"),
}


def styled(level: str, message: str) -> str:
    """Wrap *message* in the markup used for *level*."""
    opening, closing = _LEVEL_MARKUP[level]
    return f"{opening}{message}{closing}"


class StyledConsole:
    """Styled line sink used for every message the framework prints.

    Satisfies :class:`~cliframe.core.protocols.OutputSink`.  Regular
    output goes to stdout, errors to stderr.
    """

    def __init__(
        self,
        out: _ConsoleProxy | None = None,
        err: _ConsoleProxy | None = None,
    ) -> None:
        self._out = out or _ConsoleProxy()
        self._err = err or _ConsoleProxy(stderr=True)

    def log(self, message: str = "") -> None:
        self._out.print(message)

    def info(self, message: str) -> None:
        self._out.print(styled("info", message))

    def success(self, message: str) -> None:
        self._out.print(styled("success", message))

    def warning(self, message: str) -> None:
        self._out.print(styled("warning", message))

    def error(self, message: str) -> None:
        self._err.print(styled("error", message))

    def erase(self) -> None:
        self._out.erase_line()


class BufferedOutput:
    """Output sink that can hold messages back instead of printing them.

    Wraps another :class:`~cliframe.core.protocols.OutputSink`.  Between
    :meth:`start` and :meth:`end` every message is appended to an
    in-memory buffer; otherwise it is forwarded to *target* unchanged.
    Buffered messages are never printed afterwards: read them back with
    :meth:`get_contents` (one rendered line per message, markup resolved)
    or drop them with :meth:`clean`.
    """

    def __init__(self, target: OutputSink) -> None:
        self.target = target
        self._entries: list[tuple[str, str]] = []
        self._capturing = False

    @property
    def capturing(self) -> bool:
        return self._capturing

    def start(self) -> None:
        """Begin holding messages back.  A second call keeps the buffer."""
        self._capturing = True

    def end(self) -> None:
        """Stop capturing; held messages stay readable until cleaned."""
        self._capturing = False

    def clean(self) -> None:
        """Discard held messages without changing the capture state."""
        self._entries.clear()

    def end_clean(self) -> None:
        self.clean()
        self.end()

    def get_contents(self) -> list[str]:
        return [render(styled(level, message)) for level, message in self._entries]

    def get_clean(self) -> list[str]:
        """Return the held messages and discard them; capturing continues."""
        contents = self.get_contents()
        self.clean()
        return contents

    def __len__(self) -> int:
        """Number of held messages."""
        return len(self._entries)

    # -- OutputSink ----------------------------------------------------

    def _emit(self, level: str, message: str) -> None:
        if self._capturing:
            self._entries.append((level, message))
        else:
            getattr(self.target, level)(message)

    def log(self, message: str = "") -> None:
        self._emit("log", message)

    def info(self, message: str) -> None:
        self._emit("info", message)

    def success(self, message: str) -> None:
        self._emit("success", message)

    def warning(self, message: str) -> None:
        self._emit("warning", message)

    def error(self, message: str) -> None:
        self._emit("error", message)

    def erase(self) -> None:
        """Clear the previous line, or drop the last held message while capturing."""
        if self._capturing:
            if self._entries:
                self._entries.pop()
        else:
            self.target.erase()


console = StyledConsole()
