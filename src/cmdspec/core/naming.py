"""
Naming helpers for generated identifiers and flag names.

This module converts parameter identifiers into kebab-case flag names and
command path segments into collision-free PascalCase identifiers for the
structures emitted by code generation.
"""

import re
from collections.abc import Iterable

from inflection import dasherize, underscore

# Names used by generated code that command structs must never take.
DEFAULT_RESERVED_NAMES = (
    "Cmd",
    "RootCmd",
    "UserError",
    "NewRoot",
    "NewUserError",
    "executeUsage",
    "main",
    "init",
)

DEFAULT_FALLBACK_IDENTIFIER = "Cmd"

_WORD_PATTERN = re.compile(r"[^\W_]+")


def to_kebab_case(name: str) -> str:
    """
    Convert an identifier to its kebab-case flag form.

    Params:
        name: Identifier such as "userName", "JSONData" or "dry_run"

    Returns:
        Lower-case, hyphen separated name ("user-name", "json-data", "dry-run")
    """
    return dasherize(underscore(name)).lower()


def sanitize_identifier(
    seed: str, fallback: str = DEFAULT_FALLBACK_IDENTIFIER
) -> str:
    """
    Turn an arbitrary string into a PascalCase identifier.

    Every maximal run of letters and digits becomes one word with its first
    character upper-cased; anything else only separates words.

    Params:
        seed: Source text (function name, path segment, ...)
        fallback: Word used for empty results and prefixed to a leading digit

    Returns:
        A non-empty identifier made of letters and digits only

    Examples:
        "foo-bar" -> "FooBar"
        "list items" -> "ListItems"
        "2fa" -> "Cmd2fa"
        "---" -> "Cmd"
    """
    words = _WORD_PATTERN.findall(seed or "")
    result = "".join(word[0].upper() + word[1:] for word in words)
    if not result:
        return fallback
    if result[0].isdigit():
        return fallback + result
    return result


class NameAllocator:
    """Hands out unique identifiers derived from seed strings.

    Allocation is a pure function of the sequence of seeds: the first seed
    sanitizing to a given base gets the base itself, later ones get numeric
    suffixes starting at 2.
    """

    def __init__(
        self,
        reserved: Iterable[str] | None = None,
        fallback: str = DEFAULT_FALLBACK_IDENTIFIER,
    ):
        self._fallback = fallback
        self._used: set[str] = set(
            DEFAULT_RESERVED_NAMES if reserved is None else reserved
        )

    def allocate(self, seed: str) -> str:
        """
        Allocate a unique identifier for a seed.

        Params:
            seed: Text to derive the identifier from

        Returns:
            The sanitized seed, suffixed with 2, 3, ... if already taken
        """
        base = sanitize_identifier(seed, self._fallback)
        name = base
        counter = 2
        while name in self._used:
            name = f"{base}{counter}"
            counter += 1
        self._used.add(name)
        return name

    def is_allocated(self, name: str) -> bool:
        """Check whether a name is reserved or already handed out."""
        return name in self._used
