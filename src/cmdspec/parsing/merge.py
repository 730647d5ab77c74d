"""
Per-parameter merge of comment candidates.

A function parameter can be described in up to three places: an entry in the
`Flags:` block of the function comment, a trailing comment on the parameter's
own line, and a comment on the line right above it. Each source produces a
`ParsedParam`; this module folds them into one, lowest priority first.
"""

import logging
from collections.abc import Callable, Iterable
from enum import IntEnum

from cmdspec.core.naming import to_kebab_case
from cmdspec.parsing.models import ParsedParam
from cmdspec.parsing.params import parse_param_details, sort_flags

logger = logging.getLogger(__name__)


class CandidateSource(IntEnum):
    """Where a parameter candidate came from; higher values take priority."""

    PRECEDING = 1
    INLINE = 2
    FLAGS_BLOCK = 3


# Groups of fields that are applied together. The numeric bounds of a vararg
# and the index of a positional only make sense next to their marker.
_FIELD_GROUPS: tuple[tuple[str, ...], ...] = (
    ("flags",),
    ("default",),
    ("description",),
    ("required",),
    ("inherited",),
    ("from_parent",),
    ("is_positional", "positional_index"),
    ("is_vararg", "vararg_min", "vararg_max"),
    ("parser",),
    ("generator",),
    ("env_var", "env_fallback"),
)


def _is_set(value) -> bool:
    return value is not None and value is not False and value != "" and value != 0 and value != []


def apply_if_set(fields: tuple[str, ...]) -> Callable[[ParsedParam, ParsedParam], None]:
    """
    Build a merge step copying a field group when the lead field is set.

    Params:
        fields: Field names; the first one decides whether the group is copied

    Returns:
        Callable(target, candidate) that mutates target in place
    """
    lead = fields[0]

    def apply(target: ParsedParam, candidate: ParsedParam) -> None:
        if not _is_set(getattr(candidate, lead)):
            return
        for name in fields:
            value = getattr(candidate, name)
            setattr(target, name, list(value) if isinstance(value, list) else value)

    return apply


_MERGE_STEPS = tuple(apply_if_set(group) for group in _FIELD_GROUPS)


def merge_candidates(
    candidates: Iterable[tuple[CandidateSource, ParsedParam | None]],
) -> ParsedParam:
    """
    Fold tagged candidates into one ParsedParam.

    Candidates are applied from lowest to highest priority; a set field of a
    higher-priority candidate replaces the value, an unset one never erases it.

    Params:
        candidates: (source, candidate) pairs in any order, None candidates skipped

    Returns:
        New merged ParsedParam

    Examples:
        FLAGS_BLOCK default "guest" + INLINE description "User name"
        -> default "guest", description "User name"
    """
    merged = ParsedParam()
    ordered = sorted(
        (pair for pair in candidates if pair[1] is not None), key=lambda pair: pair[0]
    )
    for _, candidate in ordered:
        for step in _MERGE_STEPS:
            step(merged, candidate)
    return merged


def merge_parameter(
    name: str,
    is_variadic: bool = False,
    flags_block: ParsedParam | None = None,
    inline_comment: str = "",
    preceding_comment: str = "",
) -> ParsedParam:
    """
    Produce the final parameter record for one function parameter.

    Params:
        name: Parameter identifier from the function signature
        is_variadic: Signature declares the parameter variadic
        flags_block: Candidate from the `Flags:` block, if any
        inline_comment: Trailing comment on the parameter line
        preceding_comment: Comment on the line above the parameter

    Returns:
        Merged ParsedParam with aliases derived and positional forced for varargs
    """
    candidates = [(CandidateSource.FLAGS_BLOCK, flags_block)]
    if inline_comment.strip():
        candidates.append((CandidateSource.INLINE, parse_param_details(inline_comment)))
    if preceding_comment.strip():
        candidates.append((CandidateSource.PRECEDING, parse_param_details(preceding_comment)))

    merged = merge_candidates(candidates)

    # Parameters deferring to an ancestor take its aliases once the tree is flattened
    if not merged.flags and not merged.is_positional and not is_variadic and not merged.from_parent:
        kebab = to_kebab_case(name)
        if kebab != name:
            merged.flags = [kebab]
    merged.flags = sort_flags(merged.flags)

    if is_variadic:
        merged.is_vararg = True
        merged.is_positional = True
    elif merged.is_vararg:
        merged.is_positional = True

    logger.debug("Merged parameter %s from %d candidate(s)", name, len(candidates))
    return merged
