"""Command registry — maps registry keys to command factories.

Keys are chosen by the caller (or taken from the factory's declared
``name``) and stored case-folded, so lookups are case-insensitive.
The registry never caches instances: every :meth:`instantiate` call
builds a fresh command.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

from cliframe.exceptions import DuplicateCommandError, InvalidCommandError

CommandFactory = Callable[..., Any]


def canonical_key(name: str) -> str:
    """Return the case-insensitive form of a command name."""
    return name.strip().casefold()


class CommandRegistry:
    """Append-only mapping of registry key to command factory."""

    def __init__(self) -> None:
        self._factories: dict[str, CommandFactory] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, factory: CommandFactory, key: str | None = None) -> str:
        """Register *factory* and return the key it was stored under.

        Raises
        ------
        InvalidCommandError
            If *factory* is not callable or declares no usable name.
        DuplicateCommandError
            If the derived key is already registered.
        """
        if not callable(factory):
            raise InvalidCommandError(
                f"Command factory must be callable, got {type(factory).__name__}.",
                hint="Register the command class itself, not an instance.",
            )

        declared = key if key is not None else getattr(factory, "name", None)
        if not isinstance(declared, str) or not declared.strip():
            raise InvalidCommandError(
                f"Command factory {factory!r} declares no name.",
                hint="Set a 'name' class attribute or pass an explicit key.",
            )

        registry_key = canonical_key(declared)
        if registry_key in self._factories:
            raise DuplicateCommandError(
                f"Command '{registry_key}' is already registered.",
            )
        self._factories[registry_key] = factory
        return registry_key

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def resolve(self, name: str | None) -> str | None:
        """Return the registry key for *name*, or ``None``.  Never raises."""
        if not name:
            return None
        registry_key = canonical_key(name)
        if registry_key in self._factories:
            return registry_key
        return None

    def factory(self, registry_key: str) -> CommandFactory:
        return self._factories[registry_key]

    def instantiate(self, registry_key: str, *args: Any, **kwargs: Any) -> Any:
        """Build a new instance of the command stored under *registry_key*."""
        return self._factories[registry_key](*args, **kwargs)

    def keys(self) -> list[str]:
        """Return all registry keys in lexicographic order."""
        return sorted(self._factories)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.resolve(name) is not None

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._factories)
