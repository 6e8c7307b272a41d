"""Byte-signature parsing and pattern scanning over memory buffers."""

__version__ = "0.1.0"

__all__ = ["benchmark", "memory", "scanner", "signature"]