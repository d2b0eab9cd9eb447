"""Custom exception hierarchy for cliframe.

Every error condition the framework reports must be a subclass of
:class:`CliFrameError` so that the application error boundary can
render a clean message (and optional hint) instead of a stack trace.

Hierarchy
---------
CliFrameError
├── ConfigurationError
│   ├── DuplicateCommandError
│   └── InvalidCommandError
├── InputError
│   └── NoCommandError
├── ResolutionError
├── ArgumentCoercionError
├── CommandExecutionError
├── VersionLookupError
├── PromptCancelledError
└── EnvironmentError
"""

from __future__ import annotations


class CliFrameError(Exception):
    """Base exception for all cliframe errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Registration ----------------------------------------------------------

class ConfigurationError(CliFrameError):
    """Raised when the application or a command is wired incorrectly."""


class DuplicateCommandError(ConfigurationError):
    """Raised when a registry key is registered twice."""


class InvalidCommandError(ConfigurationError):
    """Raised when a registered factory cannot construct a command."""


# --- Input -----------------------------------------------------------------

class InputError(CliFrameError):
    """Raised when the raw process arguments cannot be interpreted."""


class NoCommandError(InputError):
    """Raised when no command was given and no default is configured."""


# --- Dispatch --------------------------------------------------------------

class ResolutionError(CliFrameError):
    """Raised when neither the requested nor the default command exists."""


class ArgumentCoercionError(CliFrameError):
    """A positional argument could not be coerced to its declared type.

    Never raised out of the binder: it is handed to the error reporter
    and the argument resolves to ``None``.
    """

    def __init__(
        self,
        message: str,
        *,
        index: int | None = None,
        raw: str | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.index: int | None = index
        self.raw: str | None = raw


class CommandExecutionError(CliFrameError):
    """Raised by a command's main phase when it cannot complete."""


class VersionLookupError(CliFrameError):
    """Raised when the version flag is set but no version is known."""


# --- Terminal --------------------------------------------------------------

class PromptCancelledError(CliFrameError):
    """Raised when a one-shot prompt is aborted (Esc / Ctrl+D)."""


class EnvironmentError(CliFrameError):
    """Raised when a required runtime dependency is not available."""
