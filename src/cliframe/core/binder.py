"""Typed binding of positional arguments and flags.

Every function in this module is a **pure** transformation.  Problems
that must not abort binding (malformed JSON literals) are handed to an
optional ``on_error`` callback instead of being printed or raised.
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from cliframe.core.models import ArgumentSpec, ArgumentType, FlagSpec, FlagValues
from cliframe.exceptions import ArgumentCoercionError

TRUTHY_LITERALS: frozenset[str] = frozenset({"1", "true", "yes", "y"})
"""Case-sensitive literals a ``boolean`` argument treats as true."""

ARRAY_SEPARATOR = ","

# ASCII digits only: int() and float() also take "1_000" and non-Latin digits.
_INTEGER_LITERAL = re.compile(r"[+-]?[0-9]+")
_FLOAT_LITERAL = re.compile(
    r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    r"|[+-]?(?:inf|infinity|nan)",
    re.IGNORECASE,
)

ErrorReporter = Callable[[ArgumentCoercionError], None]


# ---------------------------------------------------------------------------
# Scalar coercions
# ---------------------------------------------------------------------------

def _to_boolean(raw: str) -> bool:
    return raw in TRUTHY_LITERALS


def _to_integer(raw: str) -> int | float:
    if not _INTEGER_LITERAL.fullmatch(raw.strip()):
        return math.nan
    try:
        return int(raw, 10)
    except ValueError:
        return math.nan


def _to_float(raw: str) -> float:
    if not _FLOAT_LITERAL.fullmatch(raw.strip()):
        return math.nan
    try:
        return float(raw)
    except ValueError:
        return math.nan


def _to_array(raw: str) -> list[str]:
    return raw.split(ARRAY_SEPARATOR)


_COERCIONS: dict[ArgumentType, Callable[[str], Any]] = {
    ArgumentType.BOOLEAN: _to_boolean,
    ArgumentType.INTEGER: _to_integer,
    ArgumentType.FLOAT: _to_float,
    ArgumentType.ARRAY: _to_array,
}


def is_invalid_number(value: Any) -> bool:
    """Return ``True`` for the not-a-number sentinel of a failed coercion."""
    return isinstance(value, float) and math.isnan(value)


# ---------------------------------------------------------------------------
# Contract A — positional arguments
# ---------------------------------------------------------------------------

def coerce_argument(
    raw: str | None,
    spec: ArgumentSpec | None,
    *,
    on_error: ErrorReporter | None = None,
    index: int | None = None,
) -> Any:
    """Coerce *raw* to the type declared by *spec*.

    Never raises.  Returns ``None`` when there is no spec, and the
    spec's default (``None`` unless declared) when *raw* is absent.
    Unparsable numbers become ``nan``; malformed JSON is reported
    through *on_error* and becomes ``None``.
    """
    if spec is None:
        return None
    if raw is None:
        return spec.default

    if spec.type is ArgumentType.JSON:
        try:
            return json.loads(raw)
        except (ValueError, RecursionError) as exc:
            if on_error is not None:
                on_error(
                    ArgumentCoercionError(
                        f"Argument '{spec.name}' is not valid JSON: {exc}",
                        index=index,
                        raw=raw,
                    )
                )
            return None

    coercion = _COERCIONS.get(spec.type)
    if coercion is None:
        return raw
    return coercion(raw)


def bind_argument(
    index: int,
    specs: Sequence[ArgumentSpec],
    arguments: Sequence[str],
    *,
    on_error: ErrorReporter | None = None,
) -> Any:
    """Look up argument *index* in both tables and coerce it."""
    spec = specs[index] if 0 <= index < len(specs) else None
    raw = arguments[index] if 0 <= index < len(arguments) else None
    return coerce_argument(raw, spec, on_error=on_error, index=index)


# ---------------------------------------------------------------------------
# Contract B — flags
# ---------------------------------------------------------------------------

def flag_value(spec: FlagSpec, flag_tokens: Iterable[str]) -> Any:
    """Return the bound value of a single flag."""
    if any(spec.matches(token) for token in flag_tokens):
        return True
    if spec.is_boolean:
        return bool(spec.default)
    return spec.default


def bind_flags(specs: Iterable[FlagSpec], flag_tokens: Sequence[str]) -> FlagValues:
    """Bind every declared flag to its value for *flag_tokens*.

    Specs are independent of each other, so iteration order does not
    matter and re-binding the same tokens yields equal values.
    """
    tokens = tuple(flag_tokens)
    return FlagValues({spec.identifier: flag_value(spec, tokens) for spec in specs})


def find_flag(token: str, *tables: Iterable[FlagSpec]) -> FlagSpec | None:
    """Return the first spec matching *token*, searching *tables* in order."""
    for table in tables:
        for spec in table:
            if spec.matches(token):
                return spec
    return None
