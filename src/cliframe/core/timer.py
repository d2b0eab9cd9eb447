"""Duration measurement with explicit span handles.

Callers keep the :class:`TimerSpan` returned by :meth:`Timer.start`
and pass it back to :meth:`Timer.stop`; there is no shared namespace
of in-flight timers.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

_NS_PER_MS = 1_000_000
_NS_PER_S = 1_000_000_000


@dataclass(frozen=True, slots=True)
class TimerSpan:
    """Handle to a running measurement."""

    name: str
    started_ns: int


def format_duration(elapsed_ns: int) -> str:
    """Render nanoseconds as ``"2s 13.5ms"`` (seconds omitted when zero)."""
    seconds, remainder = divmod(max(elapsed_ns, 0), _NS_PER_S)
    millis = remainder / _NS_PER_MS
    prefix = f"{seconds}s " if seconds else ""
    return f"{prefix}{millis:g}ms"


class Timer:
    """Monotonic stopwatch producing formatted durations.

    Parameters
    ----------
    clock:
        Nanosecond clock, injectable for tests.
    """

    def __init__(self, clock: Callable[[], int] = time.perf_counter_ns) -> None:
        self._clock = clock

    def start(self, name: str = "") -> TimerSpan:
        """Start a new span."""
        return TimerSpan(name=name, started_ns=self._clock())

    def elapsed_ns(self, span: TimerSpan) -> int:
        return self._clock() - span.started_ns

    def stop(self, span: TimerSpan) -> str:
        """Return the formatted time elapsed since *span* started."""
        return format_duration(self.elapsed_ns(span))
