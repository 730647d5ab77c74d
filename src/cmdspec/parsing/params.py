"""
Parameter detail parsing.

Turns one parameter description, as found in a `Flags:` block, a legacy
`flag`/`param` line or a comment next to the parameter, into a
`ParsedParam`:

    --name, -n (default: "guest") The user name
    @1 The input file
    1...3 Extra files
"""

import re

from cmdspec.parsing.attributes import extract_attribute_block, parse_attributes, unquote
from cmdspec.parsing.models import ParsedParam

DEFAULT_PATTERN = re.compile(
    r"default:\s*(?P<value>\"[^\"]*\"|[^\s,;()]+(?:\([^()]*\))?)", re.IGNORECASE
)
POSITIONAL_PATTERN = re.compile(r"@(?P<index>\d+)")
VARARG_PATTERN = re.compile(r"(?P<min>\d+)\.\.\.(?P<max>\d+)|\.\.\.")
FLAG_PATTERN = re.compile(r"(?<![\w-])-{1,2}[^\W\d][\w-]*")

_EMPTY_BRACKETS = re.compile(r"\(\s*[,;:]*\s*\)|\[\s*[,;:]*\s*\]")
_ORPHAN_PUNCTUATION = re.compile(r"(?:^|(?<=\s))[,;:]+(?=\s|$)")
_EDGE_PUNCTUATION = " \t,;:"


def sort_flags(flags: list[str]) -> list[str]:
    """
    Deduplicate and order flag names.

    Longer flags sort first, ties are broken alphabetically.

    Params:
        flags: Flag names without leading dashes

    Returns:
        New ordered list without duplicates or empty names

    Examples:
        ["n", "name"] -> ["name", "n"]
    """
    unique = {flag for flag in flags if flag}
    return sorted(unique, key=lambda flag: (-len(flag), flag))


def _peel_attribute_blocks(text: str, param: ParsedParam) -> str:
    """Consume leading/trailing attribute blocks until none is left."""
    while True:
        for prefer in ("start", "end"):
            block, remaining = extract_attribute_block(text, prefer)
            # A parenthetical without attributes is ordinary prose
            if block is not None and parse_attributes(block, ParsedParam()):
                break
        else:
            return text
        parse_attributes(block, param)
        text = remaining


def _clean_description(text: str) -> str:
    """Normalize the text left after token removal."""
    previous = None
    while previous != text:
        previous = text
        text = _EMPTY_BRACKETS.sub(" ", text)
    text = _ORPHAN_PUNCTUATION.sub(" ", text)
    text = " ".join(text.split())
    return text.strip(_EDGE_PUNCTUATION)


def parse_param_details(text: str) -> ParsedParam:
    """
    Parse one parameter description into a ParsedParam.

    Extraction order:
    1. Leading/trailing attribute blocks (see `extract_attribute_block`)
    2. `default: <value>` (captured before punctuation cleanup so values like
       `foo()` survive)
    3. Positional marker `@N`
    4. Vararg marker `...` or `min...max`
    5. Flag tokens `-x` / `--long`, deduplicated and sorted longest first
    The remaining text, whitespace-normalized, is the description.

    Params:
        text: Parameter description text

    Returns:
        ParsedParam with every recognised field set
    """
    param = ParsedParam()
    text = _peel_attribute_blocks(text.strip(), param)

    default_match = DEFAULT_PATTERN.search(text)
    if default_match:
        if not param.default:
            param.default = unquote(default_match.group("value").strip())
        text = text[: default_match.start()] + " " + text[default_match.end() :]

    positional_match = POSITIONAL_PATTERN.search(text)
    if positional_match:
        param.is_positional = True
        param.positional_index = int(positional_match.group("index"))
        text = POSITIONAL_PATTERN.sub(" ", text)

    vararg_match = VARARG_PATTERN.search(text)
    if vararg_match:
        param.is_vararg = True
        if vararg_match.group("min") is not None:
            param.vararg_min = int(vararg_match.group("min"))
            param.vararg_max = int(vararg_match.group("max"))
        text = VARARG_PATTERN.sub(" ", text)

    param.flags.extend(match.lstrip("-") for match in FLAG_PATTERN.findall(text))
    param.flags = sort_flags(param.flags)
    text = FLAG_PATTERN.sub(" ", text)

    param.description = _clean_description(text)
    return param
