"""
Command data model.

The model handed to code generation: a `DataModel` owns root `Command`s,
each command owns a tree of `SubCommand`s, and every node owns its
`FunctionParameter`s. Nodes reference their parent and owning command
explicitly; these back-references are wired by the model builder.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from attrs import field as attrs_field
from attrs import frozen

from cmdspec.core.types import ParamType
from cmdspec.parsing.models import FuncRef


@frozen
class FunctionBinding:
    """The function implementing a command."""

    function_name: str
    import_path: str = ""
    package_name: str = ""
    definition_file: str = ""
    doc_start: int | None = None
    doc_end: int | None = None
    parameter_names: tuple[str, ...] = attrs_field(default=(), converter=tuple)
    return_count: int = 0
    returns_error: bool = False


def _flag_token(flag: str) -> str:
    return ("--" if len(flag) > 1 else "-") + flag


@dataclass
class FunctionParameter:
    """
    One flag or positional argument of a command.

    Params:
        name: Parameter identifier from the function signature
        type: Parameter type from the closed type vocabulary
        flags: Flag aliases without dashes, longest first
        default: Raw default value text
        description: Help text
        required: Parameter must be provided
        inherited: Parameter is visible to every descendant command
        from_parent: Parameter re-uses an ancestor's declaration
        is_positional: Parameter is a positional argument
        positional_index: 1-based position when positional
        is_vararg: Parameter captures remaining arguments
        vararg_min: Minimum argument count (0 = unspecified)
        vararg_max: Maximum argument count (0 = unspecified)
        parser: Custom value parser
        generator: Value generator
        env_var: Environment variable providing the default
        env_fallback: Literal fallback when the environment variable is unset
        declared_in: Space separated path of the declaring command
    """

    name: str
    type: ParamType
    flags: list[str] = field(default_factory=list)
    default: str = ""
    description: str = ""
    required: bool = False
    inherited: bool = False
    from_parent: bool = False
    is_positional: bool = False
    positional_index: int = 0
    is_vararg: bool = False
    vararg_min: int = 0
    vararg_max: int = 0
    parser: FuncRef | None = None
    generator: FuncRef | None = None
    env_var: str = ""
    env_fallback: str = ""
    declared_in: str = ""

    def __post_init__(self):
        if self.is_vararg:
            self.is_positional = True

    def flag_names(self) -> list[str]:
        """Flag names used on the command line; the parameter name if none are declared."""
        return list(self.flags) if self.flags else [self.name]

    def flag_string(self) -> str:
        """
        Render the flag column of the usage view.

        Returns:
            e.g. "--name, -n string"; the type is omitted for booleans
        """
        flags = ", ".join(_flag_token(flag) for flag in self.flag_names())
        if self.type.is_bool and not self.type.is_slice:
            return flags
        return f"{flags} {self.type.tag}"

    def default_string(self) -> str:
        """Render the default as `(default: value)`, quoting string defaults."""
        if not self.default:
            return ""
        value = self.default
        if self.type.is_string and not value.startswith('"'):
            value = f'"{value}"'
        return f"(default: {value})"

    def type_description(self) -> str:
        return self.type.description


@dataclass
class ParameterGroup:
    """Parameters sharing one declaring command, for grouped help output."""

    label: str
    declared_in: str
    parameters: list[FunctionParameter] = field(default_factory=list)


def _has_flags(parameters: list[FunctionParameter]) -> bool:
    return any(not parameter.is_positional for parameter in parameters)


@dataclass(eq=False)
class SubCommand:
    """
    One node of a command's subtree.

    A node without a function binding is synthetic: it only exists because a
    deeper path was declared.
    """

    name: str
    function: FunctionBinding | None = None
    description: str = ""
    extended_help: str = ""
    aliases: list[str] = field(default_factory=list)
    parameters: list[FunctionParameter] = field(default_factory=list)
    subcommands: list[SubCommand] = field(default_factory=list)
    struct_name: str = ""
    parent: SubCommand | None = field(default=None, repr=False)
    command: Command | None = field(default=None, repr=False)

    @property
    def is_synthetic(self) -> bool:
        return self.function is None

    @property
    def has_subcommands(self) -> bool:
        return bool(self.subcommands)

    @property
    def function_name(self) -> str:
        return self.function.function_name if self.function else ""

    def ancestors(self) -> list[SubCommand]:
        """Ancestor subcommands, nearest first; the root command is not included."""
        result = []
        current = self.parent
        while current is not None:
            result.append(current)
            current = current.parent
        return result

    def sequence(self) -> list[str]:
        """Path segments below the root command."""
        return [ancestor.name for ancestor in reversed(self.ancestors())] + [self.name]

    def path(self) -> list[str]:
        """Full command path including the root command name."""
        prefix = [self.command.name] if self.command else []
        return prefix + self.sequence()

    def prog_name(self) -> str:
        return " ".join(self.path())

    def parameter(self, name: str) -> FunctionParameter | None:
        """Own parameter by name."""
        for parameter in self.parameters:
            if parameter.name == name:
                return parameter
        return None

    def all_parameters(self) -> list[FunctionParameter]:
        """
        Parameters visible to this command.

        Own parameters first, then the inheritable parameters of each ancestor
        from the nearest up to the root command. A name already seen hides
        the same name further up.

        Returns:
            Deduplicated list of parameters
        """
        seen: set[str] = set()
        result: list[FunctionParameter] = []

        def add(parameters: list[FunctionParameter], inheritable_only: bool):
            for parameter in parameters:
                if inheritable_only and not parameter.inherited:
                    continue
                if parameter.name not in seen:
                    seen.add(parameter.name)
                    result.append(parameter)

        add(self.parameters, inheritable_only=False)
        for ancestor in self.ancestors():
            add(ancestor.parameters, inheritable_only=True)
        if self.command:
            add(self.command.parameters, inheritable_only=True)
        return result

    def parameter_groups(self) -> list[ParameterGroup]:
        """
        Group the visible flag parameters by declaring command.

        Returns:
            Groups ordered from the root command down to this command
        """
        grouped: dict[str, list[FunctionParameter]] = {}
        for parameter in self.all_parameters():
            if parameter.is_positional:
                continue
            grouped.setdefault(parameter.declared_in, []).append(parameter)

        levels: list[tuple[str, str]] = []
        if self.command:
            levels.append((self.command.name, self.command.name))
        for node in [*reversed(self.ancestors()), self]:
            levels.append((node.prog_name(), node.name))

        groups = []
        for declared_in, label in levels:
            if declared_in in grouped:
                groups.append(ParameterGroup(label, declared_in, grouped.pop(declared_in)))
        for declared_in in sorted(grouped):
            groups.append(
                ParameterGroup(declared_in.rsplit(" ", 1)[-1] or "unknown", declared_in, grouped[declared_in])
            )
        return groups

    def full_usage(self) -> str:
        """
        One-line usage synopsis.

        Examples:
            "app [flags...] remote add [flags...] <name> [urls...]"
        """
        parts = []
        if self.command:
            parts.append(self.command.name)
            if _has_flags(self.command.parameters):
                parts.append("[flags...]")

        for node in [*reversed(self.ancestors()), self]:
            parts.append(node.name)
            if _has_flags(node.parameters):
                parts.append("[flags...]")

        positionals = sorted(
            (parameter for parameter in self.parameters if parameter.is_positional),
            key=lambda parameter: (parameter.is_vararg, parameter.positional_index),
        )
        for parameter in positionals:
            if parameter.is_vararg:
                parts.append(f"[{parameter.name}...]")
            else:
                parts.append(f"<{parameter.name}>")

        if self.has_subcommands:
            parts.append("<subcommand>")
        return " ".join(parts)


@dataclass(eq=False)
class Command:
    """
    One root CLI program.

    `function` is None when no declaration defines the root command itself
    and it only exists as the parent of its subcommands.
    """

    name: str
    function: FunctionBinding | None = None
    import_path: str = ""
    package_name: str = ""
    description: str = ""
    extended_help: str = ""
    parameters: list[FunctionParameter] = field(default_factory=list)
    subcommands: list[SubCommand] = field(default_factory=list)
    model: DataModel | None = field(default=None, repr=False)

    @property
    def is_synthetic(self) -> bool:
        return self.function is None

    @property
    def function_name(self) -> str:
        return self.function.function_name if self.function else ""

    def parameter(self, name: str) -> FunctionParameter | None:
        for parameter in self.parameters:
            if parameter.name == name:
                return parameter
        return None

    def walk(self) -> Iterator[SubCommand]:
        """Yield every subcommand depth-first, in child order."""
        stack = list(reversed(self.subcommands))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.subcommands))

    def find(self, path: str | list[str]) -> SubCommand | None:
        """
        Find a subcommand by its path below the root command.

        Params:
            path: Segments as a list or a space separated string

        Returns:
            The subcommand, or None if the path does not exist
        """
        segments = path.split() if isinstance(path, str) else list(path)
        if not segments:
            return None

        children = self.subcommands
        node = None
        for segment in segments:
            node = next((child for child in children if child.name == segment), None)
            if node is None:
                return None
            children = node.subcommands
        return node


@dataclass
class DataModel:
    """Top-level container, commands ordered by name."""

    commands: list[Command] = field(default_factory=list)

    def command(self, name: str) -> Command | None:
        for command in self.commands:
            if command.name == name:
                return command
        return None

    def walk(self) -> Iterator[SubCommand]:
        """Yield every subcommand of every command, depth-first."""
        for command in self.commands:
            yield from command.walk()
