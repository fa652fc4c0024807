"""Interactive reverse and normal Polish notation calculator with user-defined functions."""

__version__ = "1.0.0"
__all__ = ["cli", "expressions"]