"""Core layer — argument parsing, typed binding and command registry.

Rules
-----
* No ``print()`` calls.
* No terminal or filesystem I/O.
* No imports from ``cli``.
"""

from cliframe.core.argv_parser import parse
from cliframe.core.binder import bind_argument, bind_flags, coerce_argument
from cliframe.core.models import ArgumentSpec, ArgumentType, FlagSpec, FlagValues, ParsedInput
from cliframe.core.protocols import LineReader, OutputSink
from cliframe.core.registry import CommandRegistry
from cliframe.core.timer import Timer, TimerSpan

__all__: list[str] = [
    "ArgumentSpec",
    "ArgumentType",
    "CommandRegistry",
    "FlagSpec",
    "FlagValues",
    "LineReader",
    "OutputSink",
    "ParsedInput",
    "Timer",
    "TimerSpan",
    "bind_argument",
    "bind_flags",
    "coerce_argument",
    "parse",
]
