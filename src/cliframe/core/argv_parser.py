"""Pure process-argument partitioning.

Convention
----------
``<program> [command] [...positional-args] [...flags]``

1. The first token is the command unless it starts with ``-``; in that
   case the default command is used and the token is kept as a flag.
2. Every remaining token starting with ``-`` is a flag, every other
   token a positional argument.  Relative order is preserved within
   each partition.

Tokens are assumed to be pre-split by the shell; there is no quoting
or ``--`` terminator handling.
"""

from __future__ import annotations

from collections.abc import Sequence

from cliframe.core.models import ParsedInput
from cliframe.exceptions import NoCommandError

FLAG_PREFIX = "-"


def is_flag(token: str) -> bool:
    """Return ``True`` when *token* is flag-prefixed."""
    return token.startswith(FLAG_PREFIX)


def parse(tokens: Sequence[str], default_command: str | None = None) -> ParsedInput:
    """Split *tokens* into command, positional arguments and flags.

    Raises
    ------
    NoCommandError
        If no explicit command is present and *default_command* is unset.
    """
    remaining = list(tokens)

    if remaining and not is_flag(remaining[0]):
        command: str | None = remaining.pop(0).lower()
    elif default_command:
        command = default_command
    else:
        raise NoCommandError(
            "No arguments supplied or default command not set.",
            hint="Pass a command name as the first argument.",
        )

    arguments: list[str] = []
    flags: list[str] = []
    for token in remaining:
        if is_flag(token):
            flags.append(token)
        else:
            arguments.append(token)

    return ParsedInput(
        command=command,
        arguments=tuple(arguments),
        flags=tuple(flags),
    )
