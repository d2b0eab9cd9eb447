"""cliframe — a minimal framework for command-line applications.

Parses process arguments into a command, positional arguments and
boolean flags, resolves the command in a registry and runs it through
a precheck/execute lifecycle.
"""

from cliframe.cli.application import Application
from cliframe.cli.command import Command
from cliframe.cli.help_command import HelpCommand
from cliframe.core.models import ArgumentSpec, ArgumentType, FlagSpec
from cliframe.core.timer import Timer
from cliframe.version import __version__

__all__: list[str] = [
    "Application",
    "ArgumentSpec",
    "ArgumentType",
    "Command",
    "FlagSpec",
    "HelpCommand",
    "Timer",
    "__version__",
]
