"""Demo application showing the framework's basic features.

Run it with ``python -m cliframe`` or the ``cliframe-demo`` script::

    cliframe-demo demo 1500 -i
    cliframe-demo demo -d
    cliframe-demo --help
"""

from __future__ import annotations

from collections.abc import Sequence

from cliframe.cli.application import Application
from cliframe.demo.demo_command import DemoCommand
from cliframe.version import __version__


class DemoApplication(Application):
    def __init__(self, **kwargs: object) -> None:
        super().__init__({"name": "Demo application", "version": __version__}, **kwargs)  # type: ignore[arg-type]
        self.register(DemoCommand)


def cli(argv: Sequence[str] | None = None) -> None:
    """Console-script entry point."""
    DemoApplication().run(argv)


__all__: list[str] = ["DemoApplication", "DemoCommand", "cli"]
