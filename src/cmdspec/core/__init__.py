"""
Core building blocks for cmdspec.

This package provides the parameter type vocabulary and the naming
utilities shared by the parser and the model builder.
"""

from cmdspec.core.naming import (
    DEFAULT_FALLBACK_IDENTIFIER,
    DEFAULT_RESERVED_NAMES,
    NameAllocator,
    sanitize_identifier,
    to_kebab_case,
)
from cmdspec.core.types import PRIMITIVE_TYPES, ParamType, parse_type_tag

__all__ = [
    "DEFAULT_FALLBACK_IDENTIFIER",
    "DEFAULT_RESERVED_NAMES",
    "NameAllocator",
    "PRIMITIVE_TYPES",
    "ParamType",
    "parse_type_tag",
    "sanitize_identifier",
    "to_kebab_case",
]
