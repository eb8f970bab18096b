"""
Exceptions for patmatch.

This module contains the exception hierarchy for pattern matcher operations.
"""


class PatternMatcherError(Exception):
    """Base exception for patmatch operations."""
    pass


class ArgumentError(PatternMatcherError, ValueError):
    """Raised when a matcher is constructed with an invalid argument."""
    pass


class MatcherDisposedError(PatternMatcherError, RuntimeError):
    """Raised when a disposed matcher is used."""
    pass


class ConfigurationError(PatternMatcherError):
    """Raised when configuration is invalid."""
    pass
