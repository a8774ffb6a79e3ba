"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/errors.py
Process-level error types for the comparison engine.

Content mismatch is never an error: it is a NOT_MATCHED verdict.
These exceptions only describe why a comparison could not be set up.
"""

from typing import Optional


class CompareError(Exception):
    """Base exception for all comparison engine errors."""

    def __init__(self, message: str, identity: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.identity = identity


class ConfigurationError(CompareError, ValueError):
    """
    Invalid session parameters: fewer than two sources, zero buffer capacity,
    zero elements. Raised before any I/O takes place.
    """


class ResourceError(CompareError, RuntimeError):
    """
    A resource could not be acquired: a source failed to open, standard input
    was claimed twice, or buffers could not be allocated.
    """
