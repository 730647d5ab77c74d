"""
Usage text rendering.

This module renders the help view of a subcommand: the usage synopsis, its
descriptions, one flags section per declaring command (so inherited flags
are listed under the ancestor that declared them), the positional
arguments and the direct subcommands.
"""

from cmdspec.structure.models import FunctionParameter, SubCommand

INDENT = "  "
COLUMN_GAP = "  "


def _parameter_line(parameter: FunctionParameter, flag_width: int, default_width: int) -> str:
    columns = [parameter.flag_string().ljust(flag_width)]
    if default_width:
        columns.append(parameter.default_string().ljust(default_width))
    description = parameter.description
    if parameter.required:
        description = f"{description} (required)".strip()
    columns.append(description)
    return (INDENT + COLUMN_GAP.join(columns)).rstrip()


def _argument_name(parameter: FunctionParameter) -> str:
    if parameter.is_vararg:
        return f"[{parameter.name}...]"
    return f"<{parameter.name}>"


def render_usage(subcommand: SubCommand) -> str:
    """
    Render the help text of a subcommand.

    Params:
        subcommand: Node of a built model (back-references wired)

    Returns:
        Multi-line usage text ending in a newline

    Examples:
        Usage: app remote add [flags...] <name>

        Registers a remote

        `app` Flags:
          --verbose, -v  Verbose output

        `add` Flags:
          --url, -u string  Remote location

        Arguments:
          <name>  Short name of the remote
    """
    sections = [f"Usage: {subcommand.full_usage()}"]

    if subcommand.description:
        sections.append(subcommand.description)
    if subcommand.extended_help:
        sections.append(subcommand.extended_help)

    groups = subcommand.parameter_groups()
    flag_parameters = [parameter for group in groups for parameter in group.parameters]
    flag_width = max((len(p.flag_string()) for p in flag_parameters), default=0)
    default_width = max((len(p.default_string()) for p in flag_parameters), default=0)

    for group in groups:
        lines = [f"`{group.label}` Flags:"]
        lines.extend(_parameter_line(p, flag_width, default_width) for p in group.parameters)
        sections.append("\n".join(lines))

    positionals = sorted(
        (p for p in subcommand.parameters if p.is_positional),
        key=lambda p: (p.is_vararg, p.positional_index),
    )
    if positionals:
        width = max(len(_argument_name(p)) for p in positionals)
        lines = ["Arguments:"]
        for parameter in positionals:
            line = INDENT + _argument_name(parameter).ljust(width) + COLUMN_GAP + parameter.description
            lines.append(line.rstrip())
        sections.append("\n".join(lines))

    if subcommand.has_subcommands:
        width = max(len(child.name) for child in subcommand.subcommands)
        lines = ["Subcommands:"]
        for child in subcommand.subcommands:
            line = INDENT + child.name.ljust(width) + COLUMN_GAP + child.description
            lines.append(line.rstrip())
        sections.append("\n".join(lines))

    return "\n\n".join(sections) + "\n"
