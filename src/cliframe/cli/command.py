"""Command base class — declared arguments/flags and the two-phase lifecycle.

A command is a named unit of work.  Subclasses declare ``name``,
``description``, ``arguments`` and ``flags`` as class attributes and
implement :meth:`Command.execute`.  The lifecycle runner in
:mod:`cliframe.cli.application` creates a fresh instance per
invocation, awaits :meth:`Command.precheck` and, when that returns
``True``, awaits :meth:`Command.execute`.

Only :meth:`Command.execute` may perform the command's side effects.
Construction must stay free of them: the help command instantiates
every registered command just to read its metadata.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from cliframe.cli.console import BufferedOutput, escape
from cliframe.cli.terminal import RichSpinner, wait
from cliframe.core.binder import bind_argument, bind_flags
from cliframe.core.models import ArgumentSpec, FlagSpec, FlagValues
from cliframe.core.protocols import OutputSink
from cliframe.exceptions import ArgumentCoercionError, CommandExecutionError
from cliframe.utils.merge import deep_merge

if TYPE_CHECKING:
    from cliframe.cli.application import Application


VERBOSE_FLAG = FlagSpec("-i", "--verbose", "Enable debug output.")
DESCRIBE_FLAG = FlagSpec("-d", "--describe", "Describe command arguments and flags.")

COMMAND_FLAGS: tuple[FlagSpec, ...] = (VERBOSE_FLAG, DESCRIBE_FLAG)
"""Flags every command declares unless it replaces its flag table."""


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CommandOptions:
    """Resolved metadata of one command instance."""

    name: str
    description: str
    arguments: tuple[ArgumentSpec, ...]
    flags: tuple[FlagSpec, ...]

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> CommandOptions:
        return cls(
            name=str(options["name"]),
            description=str(options["description"]),
            arguments=tuple(ArgumentSpec.coerce(a) for a in options["arguments"]),
            flags=tuple(FlagSpec.coerce(f) for f in options["flags"]),
        )


# ---------------------------------------------------------------------------
# Table rendering (shared with the help command)
# ---------------------------------------------------------------------------

def print_arguments(
    output: OutputSink,
    arguments: Sequence[ArgumentSpec],
    title: str = "\n Arguments:",
) -> None:
    if not arguments:
        return
    output.log(title)
    for index, spec in enumerate(arguments):
        output.log(
            f"  [green]{index}[/green] [cyan]{escape(spec.name)}[/cyan]"
            f" {{[yellow]{spec.type.value}[/yellow]}} : {escape(spec.description)}"
        )


def print_flags(
    output: OutputSink,
    flags: Sequence[FlagSpec],
    title: str = "\n Flags:",
) -> None:
    if not flags:
        return
    output.log(title)
    for spec in flags:
        output.log(
            f"  [green]{spec.short}[/green], [green]{spec.long}[/green]"
            f" : {escape(spec.description)}"
        )


# ---------------------------------------------------------------------------
# Command
# ---------------------------------------------------------------------------

class Command:
    """Base class for every registered command.

    Parameters
    ----------
    app:
        The owning application (non-owning back-reference).
    options:
        Optional overrides deep-merged over the class-level declarations.
    """

    name: ClassVar[str] = "[no name]"
    description: ClassVar[str] = "[no description]"
    arguments: ClassVar[Sequence[ArgumentSpec | Sequence[Any]]] = ()
    flags: ClassVar[Sequence[FlagSpec | Sequence[Any]]] = COMMAND_FLAGS

    def __init__(self, app: Application, options: Mapping[str, Any] | None = None) -> None:
        self.app = app
        self.options = CommandOptions.from_mapping(
            deep_merge(self._default_options(), options),
        )
        self.flag_values: FlagValues = bind_flags(self.options.flags, app.parsed.flags)
        self.inherited_flag_values: FlagValues = bind_flags(
            _unshadowed(app.options.flags, self.options.flags),
            app.parsed.flags,
        )
        self._spinner: RichSpinner | None = None

    @classmethod
    def _default_options(cls) -> dict[str, Any]:
        return {
            "name": cls.name,
            "description": cls.description,
            "arguments": list(cls.arguments),
            "flags": list(cls.flags),
        }

    # ------------------------------------------------------------------
    # Bound input
    # ------------------------------------------------------------------

    @property
    def output(self) -> BufferedOutput:
        return self.app.output

    def arg(self, index: int) -> Any:
        """Return positional argument *index* coerced to its declared type."""
        return bind_argument(
            index,
            self.options.arguments,
            self.app.parsed.arguments,
            on_error=self._report_coercion_error,
        )

    def flag(self, identifier: str, default: Any = False) -> Any:
        """Return a flag value; command scope shadows application scope."""
        if identifier in self.flag_values:
            return self.flag_values[identifier]
        return self.inherited_flag_values.get(identifier, default)

    @property
    def verbose(self) -> bool:
        return bool(self.flag("verbose"))

    def _report_coercion_error(self, error: ArgumentCoercionError) -> None:
        self.output.error(escape(error))

    def argument_description(self, index: int) -> str:
        if 0 <= index < len(self.options.arguments):
            return self.options.arguments[index].description
        return "Unknown argument"

    # ------------------------------------------------------------------
    # Describe phase
    # ------------------------------------------------------------------

    def describe(self) -> None:
        """Print the command's description, arguments and flags."""
        self.output.success(f"Describing command: {escape(self.options.name)}")
        self.output.log(f"\n {escape(self.options.description)}")
        self.describe_after_head()
        print_arguments(self.output, self.options.arguments)
        print_flags(self.output, self.options.flags)
        self.output.log()
        self.describe_after_details()

    def describe_after_head(self) -> None:
        """Hook: printed right after the description."""

    def describe_after_details(self) -> None:
        """Hook: printed after the argument and flag tables."""

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def precheck(self) -> bool:
        """Decide whether :meth:`execute` runs.

        The describe flag prints usage and skips the main phase.
        """
        if self.flag("describe"):
            self.describe()
            return False
        return True

    async def execute(self) -> None:
        """Main phase.  Subclasses must override."""
        raise CommandExecutionError(
            f"Command '{self.options.name}' does not implement execute().",
        )

    # ------------------------------------------------------------------
    # Terminal helpers
    # ------------------------------------------------------------------

    def progress_start(self, text: str = "") -> None:
        """Show a spinner until :meth:`progress_stop` is called."""
        self.progress_stop()
        self._spinner = RichSpinner(text)
        self._spinner.start()

    def progress_stop(self) -> None:
        if self._spinner is not None:
            self._spinner.stop()
            self._spinner = None

    async def prompt(self, message: str = "") -> str:
        """Read one line of input."""
        return await self.app.line_reader.read_line(message)

    async def wait(self, milliseconds: float) -> None:
        await wait(milliseconds)

    def erase(self) -> None:
        """Clear the previously printed line."""
        self.output.erase()

    # ------------------------------------------------------------------
    # Output buffering
    # ------------------------------------------------------------------

    def ob_start(self) -> None:
        """Hold printed messages back until :meth:`ob_end`."""
        self.output.start()

    def ob_end(self) -> None:
        self.output.end()

    def ob_clean(self) -> None:
        self.output.clean()

    def ob_end_clean(self) -> None:
        self.output.end_clean()

    def ob_get_clean(self) -> list[str]:
        return self.output.get_clean()

    def ob_get_contents(self) -> list[str]:
        """Rendered lines held since :meth:`ob_start`."""
        return self.output.get_contents()

    def ob_get_length(self) -> int:
        return len(self.output)


def _unshadowed(outer: Iterable[FlagSpec], inner: Sequence[FlagSpec]) -> list[FlagSpec]:
    """Specs of *outer* whose short and long forms are not taken by *inner*."""
    taken = {form for spec in inner for form in (spec.short, spec.long)}
    return [spec for spec in outer if spec.short not in taken and spec.long not in taken]


def flag_tables(command: Command) -> Iterable[Sequence[FlagSpec]]:
    """Flag tables in lookup order: command scope, then application scope."""
    return (command.options.flags, command.app.options.flags)
