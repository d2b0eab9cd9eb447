"""Shared utilities — cross-cutting helpers with no business logic.

Rules
-----
* No I/O.
* Importable by any layer.
"""

from cliframe.utils.merge import clone, deep_merge

__all__: list[str] = ["clone", "deep_merge"]
