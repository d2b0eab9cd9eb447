"""Deep merge / clone of option structures.

Used to compose default options with user overrides.  Neither input is
mutated; nested mappings are merged key by key while sequences and
scalars from the override replace the default wholesale.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any


def clone(value: Any) -> Any:
    """Return a deep copy of *value*."""
    return copy.deepcopy(value)


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any] | None) -> dict[str, Any]:
    """Return a new dict of *base* deep-merged with *override*."""
    merged: dict[str, Any] = {key: clone(value) for key, value in base.items()}
    if not override:
        return merged
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = clone(value)
    return merged
