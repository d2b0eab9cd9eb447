"""CLI layer — console output, terminal primitives, commands and the runner.

This package is the outermost layer of the framework.  It may import
from ``core`` and ``utils``, but ``core`` never imports from ``cli``.
"""
