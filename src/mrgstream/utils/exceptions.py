"""Custom exceptions for mrgstream."""

from __future__ import annotations


class MrgStreamError(Exception):
    """Base exception for mrgstream."""


class ConfigError(MrgStreamError):
    """Invalid configuration."""


class NotInvertibleError(MrgStreamError, ArithmeticError):
    """Value has no multiplicative inverse modulo the given modulus."""


class SingularMatrixError(MrgStreamError, ArithmeticError):
    """Linear system has no unique solution modulo the given modulus."""


class SplitError(MrgStreamError):
    """Base class for stream-splitting failures."""


class InvalidSplitError(SplitError, ValueError):
    """Invalid partition request (stream count or stream index)."""


class SingularSplitError(SplitError):
    """Decimated samples do not determine a unique recurrence."""


class ParseError(MrgStreamError, ValueError):
    """Malformed textual generator representation."""
