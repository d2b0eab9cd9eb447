"""Application entry point — command registry, lifecycle runner and error boundary.

:meth:`Application.run` is the **sole error boundary** of a cliframe
program.  It catches :class:`~cliframe.exceptions.CliFrameError`,
``KeyboardInterrupt`` and any unexpected ``Exception``, renders a
user-friendly message and maps the outcome to an exit code.

Lifecycle of one invocation
---------------------------
``Start → Resolving → Instantiated → Prechecking → {Describing | Executing} → Done``

1. **Start** — parse the process arguments and bind application flags.
   The version flag prints ``name@version`` and ends the run here.
2. **Resolving** — look the command up in the registry.  The help flag
   forces the built-in help command.  An unknown command is reported
   and the default command is tried; if that fails too the run ends
   with :class:`~cliframe.exceptions.ResolutionError`.
3. **Instantiated** — build a fresh command bound to the run's flags.
4. **Prechecking** — await ``precheck()``; anything but ``True`` skips
   the main phase.
5. **Executing** — await ``execute()``.
"""

from __future__ import annotations

import asyncio
import inspect
import os
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from importlib import metadata
from typing import Any

from cliframe.cli import exit_codes
from cliframe.cli.command import DESCRIBE_FLAG, VERBOSE_FLAG, Command, flag_tables
from cliframe.cli.console import BufferedOutput, console, escape
from cliframe.cli.help_command import HelpCommand
from cliframe.cli.terminal import QuestionaryLineReader
from cliframe.core.argv_parser import parse
from cliframe.core.binder import bind_flags, find_flag
from cliframe.core.models import FlagSpec, FlagValues, ParsedInput
from cliframe.core.protocols import LineReader, OutputSink
from cliframe.core.registry import CommandFactory, CommandRegistry
from cliframe.core.timer import Timer, TimerSpan
from cliframe.exceptions import (
    CliFrameError,
    InvalidCommandError,
    ResolutionError,
    VersionLookupError,
)
from cliframe.utils.merge import deep_merge


VERSION_FLAG = FlagSpec("-v", "--version", "Show application name and version.")
HELP_FLAG = FlagSpec("-h", "--help", "Show the list of commands.")

APPLICATION_FLAGS: tuple[FlagSpec, ...] = (VERSION_FLAG, VERBOSE_FLAG, DESCRIBE_FLAG, HELP_FLAG)


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ApplicationOptions:
    """Resolved application configuration."""

    name: str
    version: str | None
    distribution: str | None
    cwd: str
    default: str | None
    flags: tuple[FlagSpec, ...]

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> ApplicationOptions:
        return cls(
            name=str(options["name"]),
            version=options.get("version"),
            distribution=options.get("distribution"),
            cwd=str(options["cwd"]),
            default=options.get("default") or None,
            flags=tuple(FlagSpec.coerce(f) for f in options["flags"]),
        )


def default_options() -> dict[str, Any]:
    return {
        "name": "Application",
        "version": None,
        "distribution": None,
        "cwd": os.getcwd(),
        "default": HelpCommand.name,
        "flags": list(APPLICATION_FLAGS),
    }


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

class Application:
    """Owns the command registry and runs one command per invocation.

    Parameters
    ----------
    options:
        Overrides deep-merged over :func:`default_options`.
    output:
        Line sink for every printed message.  Defaults to the Rich console.
        Wrapped in a :class:`BufferedOutput` for the ``ob_*`` helpers.
    line_reader:
        One-shot line input used by :meth:`Command.prompt`.
    register_defaults:
        Register the built-in :class:`HelpCommand`.
    """

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        *,
        output: OutputSink | None = None,
        line_reader: LineReader | None = None,
        timer: Timer | None = None,
        register_defaults: bool = True,
    ) -> None:
        self.timer: Timer = timer or Timer()
        self._construct_span: TimerSpan = self.timer.start("application-construct")
        self.options = ApplicationOptions.from_mapping(
            deep_merge(default_options(), options),
        )
        self.output = BufferedOutput(output or console)
        self.line_reader: LineReader = line_reader or QuestionaryLineReader()
        self.registry = CommandRegistry()

        # Per-run state, replaced at the start of every dispatch.
        self.parsed = ParsedInput(command=None)
        self.flag_values = FlagValues()
        self.command: Command | None = None

        if register_defaults:
            self.register(HelpCommand)

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def register(self, factory: CommandFactory, key: str | None = None) -> str:
        """Register a command class (or factory) and return its key.

        Raises
        ------
        InvalidCommandError
            If *factory* is a class that does not inherit from :class:`Command`.
        DuplicateCommandError
            If the key is already taken.
        """
        if isinstance(factory, type) and not issubclass(factory, Command):
            raise InvalidCommandError(
                f"{factory.__name__} must inherit from Command.",
            )
        return self.registry.register(factory, key)

    def instantiate(
        self,
        registry_key: str,
        options: Mapping[str, Any] | None = None,
    ) -> Command:
        """Build a fresh instance of a registered command bound to this application."""
        return self.registry.instantiate(registry_key, self, options)

    # ------------------------------------------------------------------
    # Flags & version
    # ------------------------------------------------------------------

    def flag(self, identifier: str, default: Any = False) -> Any:
        return self.flag_values.get(identifier, default)

    @property
    def verbose(self) -> bool:
        if self.command is not None:
            return self.command.verbose
        return bool(self.flag("verbose"))

    def resolve_version(self) -> str:
        """Return the configured version or the installed distribution's.

        Raises
        ------
        VersionLookupError
            If neither is available.
        """
        if self.options.version:
            return str(self.options.version)
        if self.options.distribution:
            try:
                return metadata.version(self.options.distribution)
            except metadata.PackageNotFoundError as exc:
                raise VersionLookupError(
                    f"Distribution '{self.options.distribution}' is not installed.",
                ) from exc
        raise VersionLookupError(
            f"No version configured for {self.options.name}.",
            hint="Pass a 'version' or 'distribution' option to the application.",
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _resolve_command(self) -> str:
        requested = self.parsed.command
        registry_key = self.registry.resolve(requested)

        if self.flag("help"):
            registry_key = self.registry.resolve(HelpCommand.name) or registry_key

        if registry_key is None:
            self.output.error(f"Unknown command: {escape(requested)}")
            registry_key = self.registry.resolve(self.options.default)
            if registry_key is None:
                raise ResolutionError(
                    f"Default command '{self.options.default}' is not registered.",
                    hint="Register the default command or pass a known command name.",
                )
        return registry_key

    def _report_start(self, command: Command) -> None:
        out = self.output
        out.success(f"Command {escape(command.options.name)} running in: {escape(self.options.cwd)}")

        if self.parsed.arguments:
            out.log("\n With arguments:")
            for index, raw in enumerate(self.parsed.arguments):
                out.log(f"  [green]{escape(raw)}[/green] {escape(command.argument_description(index))}")

        if self.parsed.flags:
            out.log("\n With flags:")
            for token in self.parsed.flags:
                spec = find_flag(token, *flag_tables(command))
                description = spec.description if spec is not None else "Unknown flag"
                out.log(f"  [green]{escape(token)}[/green] {escape(description)}")
        out.log()

    async def dispatch(self, argv: Sequence[str]) -> int:
        """Run one full lifecycle for *argv* and return the exit code.

        Errors propagate; :meth:`run` is the error boundary.
        """
        try:
            return await self._dispatch(argv)
        finally:
            # Diagnostics from the error boundary must not land in a buffer.
            self.output.end()

    async def _dispatch(self, argv: Sequence[str]) -> int:
        self.command = None
        self.parsed = parse(argv, self.options.default)
        self.flag_values = bind_flags(self.options.flags, self.parsed.flags)

        if self.flag("version"):
            self.output.log(f"{escape(self.options.name)}@{escape(self.resolve_version())}")
            return exit_codes.SUCCESS

        command = self.instantiate(self._resolve_command())
        self.command = command

        span: TimerSpan | None = None
        if command.verbose:
            span = self.timer.start("command-run")
            self._report_start(command)

        proceed = await _settle(command.precheck())
        if proceed is True:
            await _settle(command.execute())
            phase = "Command"
        else:
            phase = "Precheck"

        if span is not None:
            self.output.log()
            self.output.success(
                f"{phase} {escape(command.options.name)} completed in {self.timer.stop(span)}"
            )
            self.output.log()
        return exit_codes.SUCCESS

    # ------------------------------------------------------------------
    # Error boundary
    # ------------------------------------------------------------------

    def _report_error(self, exc: CliFrameError) -> None:
        self.output.error(f"Error: {escape(exc)}")
        if exc.hint:
            self.output.warning(f"Hint: {escape(exc.hint)}")

    def run(self, argv: Sequence[str] | None = None, *, terminate: bool = True) -> int:
        """Run the application for *argv* (default ``sys.argv[1:]``).

        Parameters
        ----------
        argv:
            Explicit argument list, enabling deterministic testing.
        terminate:
            Exit the process with the resulting code.  Embedding code
            and tests pass ``False`` to get the code returned instead.

        Returns
        -------
        int
            OS process exit code (only when *terminate* is ``False``).
        """
        tokens = list(sys.argv[1:] if argv is None else argv)
        try:
            code = asyncio.run(self.dispatch(tokens))
        except CliFrameError as exc:
            self._report_error(exc)
            code = exit_codes.GENERAL_ERROR
        except KeyboardInterrupt:
            self.output.warning("\nAborted by user.")
            code = exit_codes.KEYBOARD_INTERRUPT
        except Exception as exc:  # noqa: BLE001
            self.output.error(
                "Unexpected error. Please report this issue.\n"
                f"  {type(exc).__name__}: {escape(exc)}"
            )
            code = exit_codes.UNEXPECTED_ERROR

        if terminate:
            if self.verbose:
                self.output.info(f"Completed after {self.timer.stop(self._construct_span)}")
            sys.exit(code)
        return code


async def _settle(result: Any) -> Any:
    """Await *result* when a phase returned an awaitable."""
    if inspect.isawaitable(result):
        return await result
    return result
