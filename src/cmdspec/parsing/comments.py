"""
Documentation comment scanner.

Recognises the command declaration and its parameter directives in the
documentation comment of one function:

    Add is a subcommand `app remote add` that registers a remote

    Registers a new remote under a short name.

    Aliases: a, new

    Flags:

    	name: @1 Short name of the remote
    	url: --url, -u (required) Remote location

Everything that is not a directive becomes extended help text.
"""

import re
from dataclasses import dataclass, field
from enum import Enum

from cmdspec.parsing.models import ParsedParam
from cmdspec.parsing.params import parse_param_details

DIRECTIVE_IS_SUBCOMMAND = "is a subcommand"
DIRECTIVE_FLAGS = "Flags:"
DIRECTIVE_ALIAS_PREFIXES = ("aliases:", "alias:")
PREFIX_FLAG = "flag "
PREFIX_PARAM = "param "

WARNING_SPACE_INDENTATION = "space-indentation"
WARNING_FLAGS_BLOCK_SPACING = "flags-block-spacing"


class ScanState(Enum):
    """State of the comment scanner."""

    SEEKING_DECLARATION = "seeking_declaration"
    NORMAL = "normal"
    IN_FLAGS_BLOCK = "in_flags_block"


@dataclass
class ScanWarning:
    """Non-fatal style problem found while scanning a comment."""

    kind: str
    message: str
    line_number: int


@dataclass
class ParsedComment:
    """
    Result of scanning one documentation comment.

    Params:
        declared: True if the comment contains the subcommand declaration marker
        command_name: Root command name (first backtick token), may be empty
        sequence: Subcommand path below the root command
        description: Short description from the declaration line
        extended_help: All remaining prose, paragraph breaks preserved
        aliases: Command aliases in declaration order
        params: Parameter details keyed by parameter name
        warnings: Style warnings found while scanning
    """

    declared: bool = False
    command_name: str = ""
    sequence: list[str] = field(default_factory=list)
    description: str = ""
    extended_help: str = ""
    aliases: list[str] = field(default_factory=list)
    params: dict[str, ParsedParam] = field(default_factory=dict)
    warnings: list[ScanWarning] = field(default_factory=list)

    @property
    def is_root_declaration(self) -> bool:
        """The comment declares a root command rather than a subcommand."""
        return not self.sequence


class CommentScanner:
    """Line-oriented scanner for command documentation comments."""

    PARAM_DEFINITION_PATTERN = re.compile(r"^(?P<name>\w+)(?:[:\s]\s*(?P<rest>.*))?$")
    IMPLICIT_PARAM_PATTERN = re.compile(r"^(?P<name>\w+):\s*(?P<rest>.*)$")
    IMPLICIT_MARKER_PATTERN = re.compile(r"@\d+|\.\.\.")
    INLINE_ALIAS_PATTERN = re.compile(r"\((?i:aliases|alias|aka):\s*(?P<aliases>[^)]+)\)")

    def __init__(
        self,
        warn_space_indentation: bool = True,
        warn_flags_block_spacing: bool = True,
    ):
        self.warn_space_indentation = warn_space_indentation
        self.warn_flags_block_spacing = warn_flags_block_spacing

    def scan(self, text: str | None) -> ParsedComment:
        """
        Scan a documentation comment.

        Params:
            text: Comment text with comment markers already removed

        Returns:
            ParsedComment; `declared` is False when the declaration marker is absent
        """
        result = ParsedComment()
        if not text:
            return result

        help_lines: list[str] = []
        state = ScanState.SEEKING_DECLARATION
        check_flags_spacing = False

        for line_number, line in enumerate(text.splitlines(), start=1):
            trimmed = line.strip()

            if check_flags_spacing:
                check_flags_spacing = False
                if trimmed and self.warn_flags_block_spacing:
                    result.warnings.append(
                        ScanWarning(
                            WARNING_FLAGS_BLOCK_SPACING,
                            f"'Flags:' block for command '{result.command_name}' should be followed by an empty line",
                            line_number,
                        )
                    )

            if not trimmed:
                if help_lines:
                    help_lines.append("")
                continue

            if DIRECTIVE_IS_SUBCOMMAND in line:
                self._scan_declaration(line, result)
                state = ScanState.NORMAL
                continue

            # Indented lines of a flags block are parameters, even one named `alias`
            in_flags_line = state is ScanState.IN_FLAGS_BLOCK and line.startswith((" ", "\t"))
            if not in_flags_line and self._scan_aliases(trimmed, result):
                continue

            if trimmed == DIRECTIVE_FLAGS:
                state = ScanState.IN_FLAGS_BLOCK
                check_flags_spacing = True
                continue

            param_line = None

            if state is ScanState.IN_FLAGS_BLOCK:
                if line.startswith((" ", "\t")):
                    if line.startswith(" ") and self.warn_space_indentation:
                        result.warnings.append(
                            ScanWarning(
                                WARNING_SPACE_INDENTATION,
                                f"Parameter '{trimmed}' in command '{result.command_name}' uses spaces for indentation. Use tabs.",
                                line_number,
                            )
                        )
                    param_line = trimmed
                else:
                    # Unindented line ends the block and is handled as a normal line
                    state = ScanState.NORMAL if result.declared else ScanState.SEEKING_DECLARATION

            if param_line is None:
                param_line = self._legacy_or_implicit_param(trimmed)

            if param_line is not None and self._add_param(param_line, result):
                continue

            help_lines.append(trimmed)

        result.extended_help = "\n".join(help_lines).strip()
        return result

    def _scan_declaration(self, line: str, result: ParsedComment) -> None:
        """Parse the `is a subcommand` line."""
        result.declared = True
        remainder = line[line.index(DIRECTIVE_IS_SUBCOMMAND) + len(DIRECTIVE_IS_SUBCOMMAND) :]

        start = remainder.find("`")
        end = remainder.rfind("`")
        if start != -1 and start < end:
            tokens = remainder[start + 1 : end].split()
            if tokens:
                result.command_name = tokens[0]
                result.sequence = tokens[1:]
            remainder = remainder[end + 1 :]

        rest = remainder.strip()

        alias_match = self.INLINE_ALIAS_PATTERN.search(rest)
        if alias_match:
            result.aliases.extend(_split_aliases(alias_match.group("aliases")))
            rest = " ".join(rest.replace(alias_match.group(0), "", 1).split())

        if rest.startswith("that "):
            result.description = rest[len("that ") :].strip()
        elif rest.startswith("-- "):
            result.description = rest[len("-- ") :].strip()
        elif rest:
            result.description = rest

    def _scan_aliases(self, trimmed: str, result: ParsedComment) -> bool:
        """Handle `Aliases:` lines and standalone `(aliases: ...)` lines."""
        lowered = trimmed.lower()
        if lowered.startswith(DIRECTIVE_ALIAS_PREFIXES):
            result.aliases.extend(_split_aliases(trimmed.split(":", 1)[1]))
            return True

        alias_match = self.INLINE_ALIAS_PATTERN.fullmatch(trimmed)
        if alias_match:
            result.aliases.extend(_split_aliases(alias_match.group("aliases")))
            return True
        return False

    def _legacy_or_implicit_param(self, trimmed: str) -> str | None:
        """Return the parameter text of a `flag`/`param` or implicit line."""
        if trimmed.startswith(PREFIX_FLAG):
            return trimmed[len(PREFIX_FLAG) :].strip()
        if trimmed.startswith(PREFIX_PARAM):
            return trimmed[len(PREFIX_PARAM) :].strip()

        implicit = self.IMPLICIT_PARAM_PATTERN.match(trimmed)
        # Plain "word: text" is prose unless it carries a positional or vararg marker
        if implicit and self.IMPLICIT_MARKER_PATTERN.search(implicit.group("rest")):
            return trimmed
        return None

    def _add_param(self, param_line: str, result: ParsedComment) -> bool:
        match = self.PARAM_DEFINITION_PATTERN.match(param_line)
        if match is None:
            return False
        result.params[match.group("name")] = parse_param_details(match.group("rest") or "")
        return True


def _split_aliases(text: str) -> list[str]:
    return [alias.strip() for alias in re.split(r"[,;]", text) if alias.strip()]


def scan_comment(text: str | None) -> ParsedComment:
    """
    Scan a documentation comment with default settings.

    Params:
        text: Comment text with comment markers already removed

    Returns:
        ParsedComment for the comment
    """
    return CommentScanner().scan(text)
