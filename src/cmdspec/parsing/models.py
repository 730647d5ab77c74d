"""
Intermediate records produced by the comment parser.

`ParsedParam` is the source-agnostic result of parsing one parameter
description, before candidates from different comment positions are merged.
`FuncRef` identifies a parser or generator override function.
"""

from dataclasses import dataclass, field

from attrs import frozen


@frozen
class FuncRef:
    """Reference to a function, optionally qualified by an import path.

    Params:
        function_name: Name of the function (may carry call syntax, e.g. "myfunc(true)")
        import_path: Import path of the defining package, empty for local functions
        package_name: Last segment of the import path
        quoted: True when the import path was written as a quoted string
    """

    function_name: str
    import_path: str = ""
    package_name: str = ""
    quoted: bool = False

    @property
    def is_local(self) -> bool:
        return not self.import_path

    @property
    def qualified(self) -> str:
        """Render the reference the way it is written in a comment."""
        if self.is_local:
            return self.function_name
        if self.quoted or "/" in self.import_path:
            return f'"{self.import_path}".{self.function_name}'
        return f"{self.import_path}.{self.function_name}"

    def __str__(self) -> str:
        return self.qualified


@dataclass
class ParsedParam:
    """Parameter metadata extracted from one description string.

    Params:
        flags: Flag aliases without leading dashes
        default: Raw default value text (quotes stripped)
        description: Remaining human readable description
        required: Parameter must be provided
        inherited: Parameter is visible to all descendant commands
        from_parent: Parameter defers to an ancestor's declaration of the same name
        is_positional: Parameter is a positional argument
        positional_index: 1-based position when positional
        is_vararg: Parameter captures remaining arguments
        vararg_min: Minimum argument count (0 = unspecified)
        vararg_max: Maximum argument count (0 = unspecified)
        parser: Custom value parser reference
        generator: Value generator reference
        env_var: Environment variable providing the default
        env_fallback: Literal fallback when the environment variable is unset
    """

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

    def is_empty(self) -> bool:
        """Check whether no field carries information."""
        return self == ParsedParam()
