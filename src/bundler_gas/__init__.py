"""Gas pricing for bundled user operation submissions."""

__version__ = "0.1.0"
