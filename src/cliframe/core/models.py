"""Domain models for cliframe.

Declarations (:class:`ArgumentSpec`, :class:`FlagSpec`) and per-run
values (:class:`ParsedInput`, :class:`FlagValues`) are **frozen**
dataclasses.  They are created once and never mutated afterwards.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any


# ---------------------------------------------------------------------------
# Argument declarations
# ---------------------------------------------------------------------------

class ArgumentType(str, enum.Enum):
    """Semantic type a positional argument is coerced to."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    ARRAY = "array"
    JSON = "json"


@dataclass(frozen=True, slots=True)
class ArgumentSpec:
    """Declaration of one positional argument.

    Identity is the index in the owning command's argument table.
    """

    type: ArgumentType
    name: str
    description: str = ""
    default: Any = None

    def __post_init__(self) -> None:
        # Accept plain strings ("integer") as well as enum members.
        object.__setattr__(self, "type", ArgumentType(self.type))

    @classmethod
    def coerce(cls, value: ArgumentSpec | Sequence[Any]) -> ArgumentSpec:
        """Build a spec from ``(type, name[, description[, default]])``."""
        if isinstance(value, ArgumentSpec):
            return value
        return cls(*value)


# ---------------------------------------------------------------------------
# Flag declarations
# ---------------------------------------------------------------------------

def flag_identifier(long_form: str) -> str:
    """Derive the lookup identifier of a flag from its long form.

    ``"--dry-run"`` becomes ``"dry_run"``.
    """
    return long_form.lstrip("-").replace("-", "_")


@dataclass(frozen=True, slots=True)
class FlagSpec:
    """Declaration of one boolean switch.

    Identity is the ``(short, long)`` pair.  The ``identifier`` defaults
    to the normalised long form.
    """

    short: str
    long: str
    description: str = ""
    default: Any = False
    is_boolean: bool = True
    identifier: str = field(default="")

    def __post_init__(self) -> None:
        if not self.identifier:
            object.__setattr__(self, "identifier", flag_identifier(self.long))

    def matches(self, token: str) -> bool:
        """Return ``True`` when *token* is this flag's short or long form."""
        return token in (self.short, self.long)

    @classmethod
    def coerce(cls, value: FlagSpec | Sequence[Any]) -> FlagSpec:
        """Build a spec from ``(short, long[, description[, default]])``."""
        if isinstance(value, FlagSpec):
            return value
        return cls(*value)


# ---------------------------------------------------------------------------
# Per-run values
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ParsedInput:
    """The partitioned process arguments of one invocation."""

    command: str | None
    """Case-folded command token, or the default command."""

    arguments: tuple[str, ...] = ()
    """Non-flag tokens after the command, in original order."""

    flags: tuple[str, ...] = ()
    """Tokens starting with ``-``, in original order."""


@dataclass(frozen=True, slots=True)
class FlagValues(Mapping[str, Any]):
    """Immutable mapping of flag identifier to bound value."""

    values: Mapping[str, Any] = field(default_factory=dict)

    def __getitem__(self, identifier: str) -> Any:
        return self.values[identifier]

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def is_set(self, identifier: str) -> bool:
        """Return ``True`` when the flag is declared and truthy."""
        return bool(self.values.get(identifier, False))
