"""
cmdspec exception classes.

This package provides all exception types used throughout cmdspec for
consistent error handling and reporting.
"""

from cmdspec.exceptions.core import (
    CommandSpecError,
    DefinitionConflictError,
    ErrorContext,
    ErrorLevel,
    MultipleReturnValuesError,
    StyleWarningsError,
    UnsupportedTypeError,
)

__all__ = [
    "CommandSpecError",
    "DefinitionConflictError",
    "ErrorContext",
    "ErrorLevel",
    "MultipleReturnValuesError",
    "StyleWarningsError",
    "UnsupportedTypeError",
]
