"""
Tests for error context and formatting system.

This module tests ErrorContext, ErrorLevel enum, and how the structural
exceptions format their messages.
"""

from cmdspec.exceptions import (
    CommandSpecError,
    DefinitionConflictError,
    ErrorContext,
    ErrorLevel,
    MultipleReturnValuesError,
    StyleWarningsError,
    UnsupportedTypeError,
)


class TestErrorContext:
    """Tests for ErrorContext dataclass."""

    def test_create_minimal_context(self):
        """Test creating ErrorContext with minimal information."""
        ctx = ErrorContext(function_name="Add")
        assert ctx.function_name == "Add"
        assert ctx.command_path is None
        assert ctx.doc_line is None

    def test_user_level_hides_source_location(self):
        """Test that USER level shows command and function only."""
        ctx = ErrorContext(
            function_name="Add",
            command_path="app remote add",
            definition_file="remote/add.go",
            doc_line=3,
        )
        location = ctx.format_location(ErrorLevel.USER)
        assert "app remote add" in location
        assert "in function Add" in location
        assert "remote/add.go" not in location

    def test_developer_level_shows_source_location(self):
        """Test that DEVELOPER level adds file and comment line."""
        ctx = ErrorContext(
            function_name="Add",
            definition_file="remote/add.go",
            doc_line=3,
        )
        location = ctx.format_location(ErrorLevel.DEVELOPER)
        assert "defined in remote/add.go" in location
        assert "at comment line 3" in location

    def test_parameter_is_named(self):
        """Test that the parameter is included with the function."""
        ctx = ErrorContext(function_name="Add", parameter_name="opts")
        assert "parameter opts" in ctx.format_location(ErrorLevel.USER)


class TestExceptions:
    """Tests for structural exception messages."""

    def test_all_errors_share_base_class(self):
        """Test that every structural error is a CommandSpecError."""
        assert issubclass(UnsupportedTypeError, CommandSpecError)
        assert issubclass(MultipleReturnValuesError, CommandSpecError)
        assert issubclass(DefinitionConflictError, CommandSpecError)
        assert issubclass(StyleWarningsError, CommandSpecError)

    def test_unsupported_type_message(self):
        """Test that the message names function, parameter and type."""
        error = UnsupportedTypeError("Add", "opts", "map[string]string")
        assert "Add" in str(error)
        assert "opts" in str(error)
        assert "map[string]string" in str(error)
        assert error.type_tag == "map[string]string"

    def test_multiple_return_values_message(self):
        """Test that the message names the function and arity."""
        error = MultipleReturnValuesError("Compute", 3)
        assert "Compute" in str(error)
        assert "3" in str(error)

    def test_definition_conflict_carries_both_functions(self):
        """Test that the conflict error keeps the path and both functions."""
        error = DefinitionConflictError("app add", "AddOne", "AddTwo")
        assert error.command_path == "app add"
        assert error.existing_function == "AddOne"
        assert error.new_function == "AddTwo"
        assert "app add" in str(error)

    def test_context_is_appended(self):
        """Test that context location lines follow the message."""
        error = CommandSpecError("Broken", ErrorContext(command_path="app"))
        assert str(error).startswith("Broken\n")
        assert "in command `app`" in str(error)

    def test_style_warnings_error_lists_warnings(self):
        """Test that strict mode errors list every warning."""
        error = StyleWarningsError(["first", "second"])
        assert error.warnings == ["first", "second"]
        assert "2 style warning(s)" in str(error)
        assert "  - second" in str(error)

    def test_describe_by_error_level(self):
        """Test rendering the same error for users and developers."""
        error = UnsupportedTypeError(
            "Set",
            "values",
            "map[string]string",
            ErrorContext(function_name="Set", definition_file="cmds/set.go", doc_line=7),
        )
        assert "cmds/set.go" not in str(error)
        assert "cmds/set.go" not in error.describe(ErrorLevel.USER)
        assert "defined in cmds/set.go" in error.describe(ErrorLevel.DEVELOPER)
        assert error.describe(ErrorLevel.DEVELOPER).startswith(error.message)

    def test_describe_without_context(self):
        """Test that an error without context is just its message."""
        error = CommandSpecError("plain")
        assert error.describe(ErrorLevel.DEVELOPER) == "plain"
