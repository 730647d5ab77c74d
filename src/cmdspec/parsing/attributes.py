"""
Attribute block extraction and parsing.

Parameter descriptions may carry one parenthesized metadata block, either at
the very start or at the very end of the text:

    (required; aka: n) The user name
    The user name (default: "guest")

This module isolates such blocks and decodes their delimiter-separated
attributes into `ParsedParam` fields.
"""

import re

from cmdspec.parsing.models import FuncRef, ParsedParam

ATTRIBUTE_REQUIRED = "required"
ATTRIBUTE_GLOBAL = "global"
ATTRIBUTE_INHERITED = "inherited"
ATTRIBUTE_FROM = "from"
ATTRIBUTE_FROM_PARENT = "from parent"
ATTRIBUTE_PARSER = "parser"
ATTRIBUTE_GENERATOR = "generator"
ATTRIBUTE_DEFAULT = "default"
ATTRIBUTE_FALLBACK = "fallback"
ALIAS_ATTRIBUTES = frozenset({"aka", "alias", "aliases"})

ENV_DEFAULT_PATTERN = re.compile(
    r"^default\s+from\s+(?:environment|env)\s+(?P<var>[A-Za-z_][A-Za-z0-9_]*)"
    r"(?:\s*\[?\s*fallback:\s*(?P<fallback>.*?)\s*\]?)?$",
    re.IGNORECASE,
)


def _tracks_quotes(text: str) -> bool:
    """Quotes only protect parentheses when they come in pairs; a lone `"` is literal text."""
    return text.count('"') % 2 == 0


def _paren_depths(text: str) -> list[int] | None:
    """Depth after each character, ignoring parens inside double quotes.

    Returns None when the text as a whole is unbalanced.
    """
    depths = []
    depth = 0
    in_quote = False
    track_quotes = _tracks_quotes(text)
    for char in text:
        if char == '"' and track_quotes:
            in_quote = not in_quote
        elif not in_quote:
            if char == "(":
                depth += 1
            elif char == ")":
                depth -= 1
                if depth < 0:
                    return None
        depths.append(depth)
    if depth != 0:
        return None
    return depths


def _leading_block(stripped: str, depths: list[int]) -> tuple[str | None, str]:
    if not stripped.startswith("("):
        return None, stripped
    close = depths.index(0)
    return stripped[1:close], " ".join(stripped[close + 1 :].split())


def _trailing_block(stripped: str, depths: list[int]) -> tuple[str | None, str]:
    if not stripped.endswith(")"):
        return None, stripped
    # Walk back to the opening paren matching the final one
    open_index = len(stripped) - 1
    while open_index > 0 and depths[open_index - 1] != 0:
        open_index -= 1
    if stripped[open_index] != "(":
        # The final paren is quoted text
        return None, stripped
    return stripped[open_index + 1 : -1], " ".join(stripped[:open_index].split())


def extract_attribute_block(text: str, prefer: str = "start") -> tuple[str | None, str]:
    """
    Locate a leading or trailing parenthesized attribute block.

    A block is accepted only when it starts at position 0 or ends at the last
    non-whitespace character. A parenthetical strictly inside the text is
    prose and is left untouched, as is any text with unbalanced parentheses.
    Nested parentheses (e.g. "parser: f(a, b)") stay inside the block.

    Params:
        text: Free text that may contain an attribute block
        prefer: "start" to try the leading block first, "end" for the trailing one

    Returns:
        Tuple of (block_content, remaining_text). block_content is None when
        no block was found; remaining_text has the block removed and its
        whitespace collapsed, or is the original text when nothing was found.

    Examples:
        "(required) Description" -> ("required", "Description")
        "Description (required)" -> ("required", "Description")
        "Description (required) text" -> (None, "Description (required) text")
        "(e.g. x) Name (required)", prefer="end" -> ("required", "(e.g. x) Name")
    """
    stripped = text.strip()
    if not stripped:
        return None, text

    depths = _paren_depths(stripped)
    if depths is None:
        return None, text

    finders = (_leading_block, _trailing_block)
    if prefer == "end":
        finders = finders[::-1]
    for finder in finders:
        block, remaining = finder(stripped, depths)
        if block is not None:
            return block, remaining
    return None, text


def split_safe(text: str, separator: str) -> list[str]:
    """
    Split on a separator that is outside quotes and parentheses.

    Params:
        text: Attribute string
        separator: Single separator character

    Returns:
        List of raw parts (not stripped), empty trailing part dropped

    Examples:
        'parser: f(a;b); required' with ";" -> ['parser: f(a;b)', ' required']
    """
    parts = []
    current = []
    depth = 0
    in_quote = False
    track_quotes = _tracks_quotes(text)

    for char in text:
        if char == '"' and track_quotes:
            in_quote = not in_quote
        if not in_quote:
            if char == "(":
                depth += 1
            elif char == ")":
                depth -= 1

        if depth == 0 and not in_quote and char == separator:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)

    if current:
        parts.append("".join(current))
    return parts


def parse_func_ref(value: str) -> FuncRef:
    """
    Parse a parser/generator reference.

    Qualification is split at the last dot that is neither quoted nor inside
    parentheses.

    Params:
        value: Reference text, one of `Func`, `pkg.Func` or `"import/path".Func`

    Returns:
        FuncRef with import path and package name filled when qualified

    Examples:
        'MyFunc' -> FuncRef("MyFunc")
        'pkg.MyFunc' -> FuncRef("MyFunc", "pkg", "pkg")
        '"github.com/foo/bar".MyFunc' -> FuncRef("MyFunc", "github.com/foo/bar", "bar", quoted=True)
        '"fmt".Sprintf("%s", val)' -> FuncRef('Sprintf("%s", val)', "fmt", "fmt", quoted=True)
    """
    value = value.strip()
    last_dot = -1
    depth = 0
    in_quote = False
    for index, char in enumerate(value):
        if char == '"':
            in_quote = not in_quote
        elif not in_quote:
            if char == "(":
                depth += 1
            elif char == ")":
                depth -= 1
            elif char == "." and depth == 0:
                last_dot = index

    if last_dot == -1:
        return FuncRef(function_name=value)

    qualifier = value[:last_dot].strip()
    quoted = len(qualifier) >= 2 and qualifier.startswith('"') and qualifier.endswith('"')
    import_path = qualifier.strip('"')
    return FuncRef(
        function_name=value[last_dot + 1 :].strip(),
        import_path=import_path,
        package_name=import_path.rstrip("/").rsplit("/", 1)[-1],
        quoted=quoted,
    )


def unquote(value: str) -> str:
    """Strip one pair of surrounding double quotes."""
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    return value


def _split_attribute_parts(attributes: str) -> list[str]:
    parts = split_safe(attributes, ";")
    # Keys never contain commas, so a comma in a key means comma-separated attributes
    for part in parts:
        key = part.split(":", 1)[0]
        if "," in key:
            return split_safe(attributes, ",")
    return parts


def parse_attributes(attributes: str, param: ParsedParam) -> bool:
    """
    Decode an attribute block into a ParsedParam.

    Tokens are separated by ";" (or "," when no semicolon form is used) and
    may appear in any order. Unknown tokens are ignored. Each attribute
    targets its own field, so attributes simply accumulate.

    Params:
        attributes: Attribute block content without the outer parentheses
        param: Record to populate in place

    Returns:
        True if at least one attribute was recognised
    """
    recognised = False

    for raw_part in _split_attribute_parts(attributes):
        part = raw_part.strip()
        if not part:
            continue

        env_match = ENV_DEFAULT_PATTERN.match(part)
        if env_match:
            param.env_var = env_match.group("var")
            if env_match.group("fallback") is not None:
                param.env_fallback = unquote(env_match.group("fallback").strip())
            recognised = True
            continue

        key, _, value = part.partition(":")
        key = key.strip().lower()
        value = value.strip()

        if key.startswith("-"):
            param.flags.append(key.lstrip("-"))
        elif key == ATTRIBUTE_REQUIRED:
            param.required = True
        elif key in (ATTRIBUTE_GLOBAL, ATTRIBUTE_INHERITED):
            param.inherited = True
        elif key == ATTRIBUTE_FROM_PARENT or (
            key == ATTRIBUTE_FROM and value.lower() == "parent"
        ):
            param.from_parent = True
        elif key == ATTRIBUTE_PARSER and value:
            param.parser = parse_func_ref(value)
        elif key == ATTRIBUTE_GENERATOR and value:
            param.generator = parse_func_ref(value)
        elif key in ALIAS_ATTRIBUTES and value:
            for alias in value.split(","):
                alias = alias.strip().lstrip("-")
                if alias:
                    param.flags.append(alias)
        elif key == ATTRIBUTE_DEFAULT and value:
            param.default = unquote(value)
        elif key == ATTRIBUTE_FALLBACK and value:
            param.env_fallback = unquote(value)
        else:
            continue

        recognised = True

    return recognised
