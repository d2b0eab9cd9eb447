"""Built-in ``help`` command.

Lists the application's global flags and every registered command.
Each registered factory is instantiated transiently to read its
declared name and description; the instances are discarded.
"""

from __future__ import annotations

from cliframe.cli.command import Command, print_flags
from cliframe.cli.console import escape


class HelpCommand(Command):
    name = "help"
    description = "Shows a list of all registered commands and some general information."

    async def execute(self) -> None:
        app = self.app
        self.output.success(f"{escape(app.options.name)}: Help")
        self.after_head()

        print_flags(self.output, app.options.flags, "\n Global flags:")
        self.after_flags()

        self.output.log("\n Commands:")
        for key in app.registry.keys():
            command = app.instantiate(key)
            detail = f" [cyan](class {type(command).__name__})[/cyan]" if self.verbose else ""
            self.output.log(
                f"   [green]{escape(command.options.name)}[/green]{detail}"
                f" : {escape(command.options.description)}"
            )
        self.after_commands()
        self.output.log()

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def after_head(self) -> None:
        """Hook: printed after the help title."""

    def after_flags(self) -> None:
        """Hook: printed after the global flags."""

    def after_commands(self) -> None:
        """Hook: printed after the command list."""
