"""
Exception classes for command specification processing.

This module defines specific exception types for the structural errors that
abort building a command model. Style problems are not exceptions; they are
collected as warnings (see `cmdspec.structure.registry`).
"""

from dataclasses import dataclass
from enum import Enum


class ErrorLevel(Enum):
    """Error message detail level for end users vs developers."""

    USER = "user"  # Command path and function only
    DEVELOPER = "developer"  # Adds source file locations


@dataclass
class ErrorContext:
    """
    Context information for error messages.

    Captures where an error occurred both in command terms (command path,
    parameter) and in source terms (function, file, documentation line).

    Params:
        function_name: Function whose declaration caused the error
        command_path: Space separated command path (e.g. "app remote add")
        parameter_name: Parameter name if the error concerns one parameter
        definition_file: Source file where the function is defined
        doc_line: Line number within the documentation comment
    """

    function_name: str | None = None
    command_path: str | None = None
    parameter_name: str | None = None
    definition_file: str | None = None
    doc_line: int | None = None

    def format_location(self, error_level: ErrorLevel) -> str:
        """
        Format location information based on error level.

        Params:
            error_level: Whether to show USER or DEVELOPER level details

        Returns:
            Formatted location string with appropriate detail level
        """
        lines = []

        if self.command_path:
            lines.append(f"  in command `{self.command_path}`")

        if self.function_name:
            if self.parameter_name:
                lines.append(
                    f"  in function {self.function_name}, parameter {self.parameter_name}"
                )
            else:
                lines.append(f"  in function {self.function_name}")

        if error_level == ErrorLevel.DEVELOPER:
            if self.definition_file:
                lines.append(f"  defined in {self.definition_file}")
            if self.doc_line is not None:
                lines.append(f"  at comment line {self.doc_line}")

        return "\n".join(lines)


class CommandSpecError(Exception):
    """Base exception for all command specification errors."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        self.message = message
        self.context = context
        self.error_level = error_level
        super().__init__(self.describe(error_level))

    def describe(self, error_level: ErrorLevel) -> str:
        """
        Render the message with location details for the given audience.

        Params:
            error_level: USER for command and function, DEVELOPER to add source locations

        Returns:
            The message followed by the formatted location, if any
        """
        if not self.context:
            return self.message
        location_info = self.context.format_location(error_level)
        return f"{self.message}\n{location_info}" if location_info else self.message


class UnsupportedTypeError(CommandSpecError):
    """Raised when a parameter uses a type outside the supported vocabulary."""

    def __init__(
        self,
        function_name: str,
        parameter_name: str,
        type_tag: str,
        context: ErrorContext | None = None,
    ):
        """
        Initialize the exception.

        Params:
            function_name: Function declaring the parameter
            parameter_name: The offending parameter
            type_tag: The unsupported type tag
            context: Optional source location information
        """
        self.function_name = function_name
        self.parameter_name = parameter_name
        self.type_tag = type_tag
        super().__init__(
            f"Parameter '{parameter_name}' of function {function_name} has unsupported type '{type_tag}'",
            context,
        )


class MultipleReturnValuesError(CommandSpecError):
    """Raised when a command function returns more than one non-error value."""

    def __init__(
        self,
        function_name: str,
        return_count: int,
        context: ErrorContext | None = None,
    ):
        """
        Initialize the exception.

        Params:
            function_name: The offending function
            return_count: Number of declared return values
            context: Optional source location information
        """
        self.function_name = function_name
        self.return_count = return_count
        super().__init__(
            f"Function {function_name} has multiple return values ({return_count}), which is not implemented",
            context,
        )


class DefinitionConflictError(CommandSpecError):
    """Raised when two functions declare the same command path."""

    def __init__(
        self,
        command_path: str,
        existing_function: str,
        new_function: str,
        context: ErrorContext | None = None,
    ):
        """
        Initialize the exception.

        Params:
            command_path: The command path declared twice
            existing_function: Function that declared the path first
            new_function: Function that declared it again
            context: Optional source location information
        """
        self.command_path = command_path
        self.existing_function = existing_function
        self.new_function = new_function
        super().__init__(
            f"Command `{command_path}` is already defined (existing: {existing_function}, new: {new_function})",
            context,
        )


class StyleWarningsError(CommandSpecError):
    """Raised in strict mode when a build recorded style warnings."""

    def __init__(self, warnings: list[str]):
        """
        Initialize the exception.

        Params:
            warnings: Rendered warning messages
        """
        self.warnings = warnings
        summary = "\n".join(f"  - {warning}" for warning in warnings)
        super().__init__(f"{len(warnings)} style warning(s) in strict mode:\n{summary}")
