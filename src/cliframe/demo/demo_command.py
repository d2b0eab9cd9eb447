"""``demo`` command — spinner, delay argument and an interactive prompt."""

from __future__ import annotations

from cliframe.cli.command import Command
from cliframe.cli.console import escape
from cliframe.core.binder import is_invalid_number
from cliframe.core.models import ArgumentSpec, ArgumentType
from cliframe.exceptions import CommandExecutionError

DEFAULT_DELAY_MS = 2000


class DemoCommand(Command):
    name = "demo"
    description = "Demo command with basic features."
    arguments = (
        ArgumentSpec(
            ArgumentType.INTEGER,
            "delay",
            "Time (ms) to delay command execution and show a spinner.",
        ),
    )

    def delay(self) -> int:
        value = self.arg(0)
        if value is None:
            return DEFAULT_DELAY_MS
        if is_invalid_number(value) or value < 0:
            raise CommandExecutionError(
                f"Invalid delay: {self.app.parsed.arguments[0]}",
                hint="The delay must be a whole number of milliseconds.",
            )
        return value

    async def execute(self) -> None:
        delay = self.delay()

        self.progress_start(" warming up...")
        try:
            await self.wait(delay)
        finally:
            self.progress_stop()

        self.output.info(" Please enter your name:")
        name = (await self.prompt()).strip()
        # Clear the question and the answer line.
        self.erase()
        self.erase()
        self.output.log(f" I suppose [cyan]{escape(name)}[/cyan] is the smart one?")
        self.output.success("Go build your own command now!")
