"""
Canonical documentation comment rendering.

Renders a command back into the comment syntax understood by the comment
scanner, in a normalized layout: declaration line, extended help, sorted
aliases and a tab-indented `Flags:` block with one line per parameter.
Scanning the rendered text yields the same command metadata again.
"""

from cmdspec.structure.models import Command, FunctionParameter, SubCommand


def _flag_token(flag: str) -> str:
    return ("--" if len(flag) > 1 else "-") + flag


def _attributes(parameter: FunctionParameter) -> list[str]:
    attributes = []
    if parameter.required:
        attributes.append("required")
    if parameter.inherited:
        attributes.append("global")
    if parameter.default:
        value = parameter.default
        if parameter.type.is_string and not value.startswith('"'):
            value = f'"{value}"'
        attributes.append(f"default: {value}")
    if parameter.env_var:
        attributes.append(f"default from environment {parameter.env_var}")
    if parameter.env_fallback:
        attributes.append(f'fallback: "{parameter.env_fallback}"')
    if parameter.parser is not None:
        attributes.append(f"parser: {parameter.parser.qualified}")
    if parameter.generator is not None:
        attributes.append(f"generator: {parameter.generator.qualified}")
    return attributes


def format_parameter(parameter: FunctionParameter, include_inherited: bool = True) -> str:
    """
    Render the description of one parameter.

    Params:
        parameter: Parameter to render
        include_inherited: Render the values a `from: parent` parameter took
            over from its ancestor; otherwise only the marker is written

    Returns:
        Text for the right-hand side of a `Flags:` block line

    Examples:
        "--name, -n @1 The user name (required; default: \"guest\")"
    """
    if parameter.from_parent and not include_inherited:
        return "(from: parent)"

    parts = [", ".join(_flag_token(flag) for flag in parameter.flags)]
    if parameter.is_positional and parameter.positional_index:
        parts.append(f"@{parameter.positional_index}")
    if parameter.is_vararg:
        if parameter.vararg_min or parameter.vararg_max:
            parts.append(f"{parameter.vararg_min}...{parameter.vararg_max}")
        else:
            parts.append("...")
    parts.append(parameter.description)

    attributes = _attributes(parameter)
    if parameter.from_parent:
        attributes.append("from: parent")
    if attributes:
        parts.append(f"({'; '.join(attributes)})")

    return " ".join(part for part in parts if part)


def format_comment(node: Command | SubCommand, include_inherited: bool = False) -> str:
    """
    Render a command as a documentation comment.

    Params:
        node: Concrete root command or subcommand of a built model
        include_inherited: See `format_parameter`

    Returns:
        Comment text without comment markers

    Raises:
        ValueError: If the node is synthetic and has no function to document
    """
    if node.function is None:
        raise ValueError(f"Command `{node.name}` has no function to document")

    if isinstance(node, SubCommand):
        command_path = node.prog_name()
        aliases = sorted(node.aliases)
    else:
        command_path = node.name
        aliases = []

    declaration = f"{node.function.function_name} is a subcommand `{command_path}`"
    if node.description:
        declaration += f" that {node.description}"

    sections = [declaration]
    if node.extended_help:
        sections.append(node.extended_help)
    if aliases:
        sections.append("aliases: " + ", ".join(aliases))

    parameters = sorted(node.parameters, key=lambda parameter: parameter.name)
    if parameters:
        lines = ["Flags:", ""]
        for parameter in parameters:
            text = format_parameter(parameter, include_inherited)
            lines.append(f"\t{parameter.name}: {text}".rstrip())
        sections.append("\n".join(lines))

    return "\n\n".join(sections)
