"""
Command model builder.

`ModelBuilder` is the entry point of cmdspec: it takes function declarations,
scans their documentation comments, builds their parameters and inserts them
into one `CommandTree`. `build()` then flattens the tree into a `DataModel`,
assigns generated names and resolves parameter inheritance.
"""

import logging
import threading
from collections.abc import Iterable

from cmdspec.config import BuilderConfig
from cmdspec.core.naming import to_kebab_case
from cmdspec.core.types import parse_type_tag
from cmdspec.exceptions import (
    ErrorContext,
    MultipleReturnValuesError,
    StyleWarningsError,
    UnsupportedTypeError,
)
from cmdspec.parsing.comments import CommentScanner, ParsedComment
from cmdspec.parsing.merge import merge_parameter
from cmdspec.structure.declarations import FunctionDeclaration
from cmdspec.structure.models import (
    Command,
    DataModel,
    FunctionBinding,
    FunctionParameter,
    SubCommand,
)
from cmdspec.structure.registry import (
    WARNING_INCONSISTENT_PARAMETER_DESCRIPTIONS,
    WARNING_MISSING_DESCRIPTION,
    WARNING_UNRESOLVED_PARENT_PARAMETER,
    WarningRegistry,
)
from cmdspec.structure.tree import CommandTree

logger = logging.getLogger(__name__)

# Fields filled from an ancestor's declaration when the child leaves them unset
_PARENT_FIELDS = ("description", "default", "flags", "env_var", "env_fallback", "parser", "generator")


class ModelBuilder:
    """Builder of a `DataModel` from function declarations.

    Responsibilities:
    - Scan each declaration's comment and merge its parameter candidates
    - Reject unsupported parameter types and return arities
    - Insert declarations into the command tree, surfacing conflicts
    - Flatten the tree, allocate struct names and resolve inheritance
    - Collect style warnings for the whole run

    `add` may be called from several threads: parsing happens outside the
    lock, only the tree insertion is serialized.
    """

    def __init__(
        self,
        config: BuilderConfig | None = None,
        warnings: WarningRegistry | None = None,
    ):
        self.config = config or BuilderConfig()
        self.warnings = warnings if warnings is not None else WarningRegistry()
        self.tree = CommandTree()
        self._scanner = CommentScanner(
            warn_space_indentation=self.config.warn_space_indentation,
            warn_flags_block_spacing=self.config.warn_flags_block_spacing,
        )
        self._lock = threading.Lock()

    def add(self, declaration: FunctionDeclaration) -> bool:
        """
        Parse one declaration and insert it into the command tree.

        Params:
            declaration: Function declaration from the source walker

        Returns:
            True if the declaration defines a command, False if its comment
            carries no command declaration

        Raises:
            MultipleReturnValuesError: If the function returns more than one value besides an error
            UnsupportedTypeError: If a parameter type is outside the supported vocabulary
            DefinitionConflictError: If another function already defines the same command path
        """
        parsed = self._scanner.scan(declaration.doc)
        if not parsed.declared:
            logger.debug("Skipping %s: no command declaration", declaration.function_name)
            return False

        command_name = parsed.command_name
        sequence = list(parsed.sequence)
        if not command_name:
            command_name = to_kebab_case(declaration.function_name)
            sequence = []
        path = [command_name, *sequence]
        command_path = " ".join(path)

        context = ErrorContext(
            function_name=declaration.function_name,
            command_path=command_path,
            definition_file=declaration.definition_file or None,
            doc_line=declaration.doc_start,
        )

        if declaration.value_return_count > 1:
            raise MultipleReturnValuesError(
                declaration.function_name, declaration.return_count, context
            )

        for scan_warning in parsed.warnings:
            self.warnings.record(
                scan_warning.kind,
                scan_warning.message,
                declaration.function_name,
                command_path,
            )

        if sequence and not parsed.description:
            self.warnings.record(
                WARNING_MISSING_DESCRIPTION,
                f"Subcommand '{command_path}' (function {declaration.function_name}) is missing a short description.",
                declaration.function_name,
                command_path,
            )

        parameters = self._build_parameters(declaration, parsed, context)
        self._check_parameter_descriptions(declaration, parameters, command_path)

        payload = self._build_payload(declaration, parsed, command_name, sequence, parameters)

        with self._lock:
            self.tree.insert(path, payload)

        logger.debug("Registered `%s` from %s", command_path, declaration.function_name)
        return True

    def add_all(self, declarations: Iterable[FunctionDeclaration]) -> int:
        """
        Add several declarations.

        Returns:
            Number of declarations that defined a command
        """
        return sum(1 for declaration in declarations if self.add(declaration))

    def build(self) -> DataModel:
        """
        Flatten the command tree into the final model.

        Returns:
            DataModel with ordered commands, allocated names and resolved inheritance

        Raises:
            StyleWarningsError: In strict mode, if any style warning was recorded
        """
        with self._lock:
            model = self.tree.flatten(
                self.config.reserved_names, self.config.fallback_identifier
            )

        for command in model.commands:
            for parameter in command.parameters:
                parameter.declared_in = command.name
            for node in command.walk():
                node_path = node.prog_name()
                for parameter in node.parameters:
                    parameter.declared_in = node_path
                self._resolve_parent_parameters(node)

        logger.debug(
            "Built model with %d command(s) and %d subcommand(s)",
            len(model.commands),
            sum(1 for _ in model.walk()),
        )

        if self.config.strict and self.warnings:
            raise StyleWarningsError(self.warnings.messages())
        return model

    def _build_parameters(
        self,
        declaration: FunctionDeclaration,
        parsed: ParsedComment,
        context: ErrorContext,
    ) -> list[FunctionParameter]:
        parameters = []
        for declared in declaration.parameters:
            param_type = parse_type_tag(declared.type_tag, declared.is_variadic)
            if param_type is None:
                raise UnsupportedTypeError(
                    declaration.function_name,
                    declared.name,
                    declared.type_tag,
                    ErrorContext(
                        function_name=context.function_name,
                        command_path=context.command_path,
                        parameter_name=declared.name,
                        definition_file=context.definition_file,
                        doc_line=context.doc_line,
                    ),
                )

            merged = merge_parameter(
                declared.name,
                declared.is_variadic,
                parsed.params.get(declared.name),
                declared.inline_comment,
                declared.preceding_comment,
            )
            parameters.append(
                FunctionParameter(
                    name=declared.name,
                    type=param_type,
                    flags=merged.flags,
                    default=merged.default,
                    description=merged.description,
                    required=merged.required,
                    inherited=merged.inherited,
                    from_parent=merged.from_parent,
                    is_positional=merged.is_positional,
                    positional_index=merged.positional_index,
                    is_vararg=merged.is_vararg,
                    vararg_min=merged.vararg_min,
                    vararg_max=merged.vararg_max,
                    parser=merged.parser,
                    generator=merged.generator,
                    env_var=merged.env_var,
                    env_fallback=merged.env_fallback,
                )
            )

        declared_names = {declared.name for declared in declaration.parameters}
        for name in parsed.params:
            if name not in declared_names:
                logger.debug(
                    "Comment of %s describes unknown parameter %s",
                    declaration.function_name,
                    name,
                )
        return parameters

    def _check_parameter_descriptions(
        self,
        declaration: FunctionDeclaration,
        parameters: list[FunctionParameter],
        command_path: str,
    ):
        """Warn when only some of a function's parameters are described."""
        has_description = any(parameter.description for parameter in parameters)
        missing = [
            parameter.name
            for parameter in parameters
            if not parameter.description and not parameter.from_parent
        ]
        if has_description and missing:
            self.warnings.record(
                WARNING_INCONSISTENT_PARAMETER_DESCRIPTIONS,
                f"In command '{command_path}' (function {declaration.function_name}), "
                f"the following parameters are missing descriptions while others have them: {', '.join(missing)}",
                declaration.function_name,
                command_path,
            )

    def _build_payload(
        self,
        declaration: FunctionDeclaration,
        parsed: ParsedComment,
        command_name: str,
        sequence: list[str],
        parameters: list[FunctionParameter],
    ) -> Command | SubCommand:
        binding = FunctionBinding(
            function_name=declaration.function_name,
            import_path=declaration.import_path,
            package_name=declaration.package_name,
            definition_file=declaration.definition_file,
            doc_start=declaration.doc_start,
            doc_end=declaration.doc_end,
            parameter_names=[declared.name for declared in declaration.parameters],
            return_count=declaration.return_count,
            returns_error=declaration.returns_error,
        )

        if not sequence:
            return Command(
                name=command_name,
                function=binding,
                import_path=declaration.import_path,
                package_name=declaration.package_name,
                description=parsed.description,
                extended_help=parsed.extended_help,
                parameters=parameters,
            )

        return SubCommand(
            name=sequence[-1],
            function=binding,
            description=parsed.description,
            extended_help=parsed.extended_help,
            aliases=list(parsed.aliases),
            parameters=parameters,
        )

    def _resolve_parent_parameters(self, node: SubCommand):
        """Fill `from: parent` parameters from the nearest declaring ancestor."""
        for parameter in node.parameters:
            if not parameter.from_parent:
                continue

            source = None
            for ancestor in node.ancestors():
                source = ancestor.parameter(parameter.name)
                if source is not None:
                    break
            if source is None and node.command is not None:
                source = node.command.parameter(parameter.name)

            if source is None:
                self.warnings.record(
                    WARNING_UNRESOLVED_PARENT_PARAMETER,
                    f"Parameter '{parameter.name}' of '{node.prog_name()}' defers to its parent, "
                    "but no ancestor declares it",
                    node.function_name,
                    node.prog_name(),
                )
                if not parameter.flags and to_kebab_case(parameter.name) != parameter.name:
                    parameter.flags = [to_kebab_case(parameter.name)]
                continue

            for name in _PARENT_FIELDS:
                value = getattr(source, name)
                if value and not getattr(parameter, name):
                    setattr(parameter, name, list(value) if isinstance(value, list) else value)
            parameter.declared_in = source.declared_in
