"""
Parameter type vocabulary for command declarations.

Command functions may only declare parameters from a small closed set of
types: primitives, slices of primitives and single-level pointers to
primitives. This module turns the raw type tags handed over by the
declaration walker into `ParamType` values and rejects everything else.
"""

import re

from attrs import frozen

PRIMITIVE_TYPES = frozenset(
    {
        "string",
        "bool",
        "int",
        "int8",
        "int16",
        "int32",
        "int64",
        "uint",
        "uint8",
        "uint16",
        "uint32",
        "uint64",
        "float32",
        "float64",
        "time.Duration",
    }
)

TYPE_TAG_PATTERN = re.compile(r"^(?P<slice>\[\])?(?P<pointer>\*)?(?P<base>[\w.]+)$")

_TYPE_DESCRIPTIONS = {
    "int": "integer",
    "bool": "boolean",
    "time.Duration": "duration",
}


@frozen
class ParamType:
    """A parsed parameter type from the closed type vocabulary."""

    base: str
    is_slice: bool = False
    is_pointer: bool = False

    @property
    def tag(self) -> str:
        """Canonical type tag, e.g. `[]*int`."""
        return ("[]" if self.is_slice else "") + ("*" if self.is_pointer else "") + self.base

    @property
    def is_bool(self) -> bool:
        return self.base == "bool"

    @property
    def is_string(self) -> bool:
        return self.base == "string"

    @property
    def is_duration(self) -> bool:
        return self.base == "time.Duration"

    @property
    def description(self) -> str:
        """Human readable name of the base type used in help output."""
        return _TYPE_DESCRIPTIONS.get(self.base, self.base)

    def __str__(self) -> str:
        return self.tag


def parse_type_tag(tag: str, is_variadic: bool = False) -> ParamType | None:
    """
    Parse a raw type tag into a `ParamType`.

    Params:
        tag: Type tag as written in the declaration (e.g. "string", "[]int", "*bool")
        is_variadic: True when the tag is the element type of a variadic parameter

    Returns:
        The parsed type, or None when the tag is outside the supported vocabulary.
        Variadic parameters are reported as slices of their element type.
    """
    match = TYPE_TAG_PATTERN.match(tag.strip()) if tag else None
    if match is None or match.group("base") not in PRIMITIVE_TYPES:
        return None

    is_slice = bool(match.group("slice"))
    if is_variadic:
        if is_slice:
            # ...[]T would be a slice of slices
            return None
        is_slice = True

    return ParamType(
        base=match.group("base"),
        is_slice=is_slice,
        is_pointer=bool(match.group("pointer")),
    )
