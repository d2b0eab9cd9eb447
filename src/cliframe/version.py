"""Single source of the cliframe version string."""

__version__ = "1.0.0"
