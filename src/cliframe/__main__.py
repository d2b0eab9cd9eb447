"""Allow ``python -m cliframe`` invocation.

Runs the bundled demo application so that ``python -m cliframe``
behaves identically to the ``cliframe-demo`` console script.
"""

from __future__ import annotations

from cliframe.demo import cli

if __name__ == "__main__":
    cli()
