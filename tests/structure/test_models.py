"""
Tests for the command data model helpers.
"""

from cmdspec.core.types import parse_type_tag
from cmdspec.structure.models import FunctionParameter


def parameter(type_tag: str, **kwargs) -> FunctionParameter:
    return FunctionParameter(name="value", type=parse_type_tag(type_tag), **kwargs)


class TestFunctionParameter:
    """Test parameter renderings."""

    def test_type_description(self):
        """Test the readable names of parameter types."""
        assert parameter("int").type_description() == "integer"
        assert parameter("time.Duration").type_description() == "duration"
        assert parameter("float64").type_description() == "float64"

    def test_flag_string(self):
        """Test the flag column, with the type omitted for booleans."""
        assert parameter("string", flags=["name", "n"]).flag_string() == "--name, -n string"
        assert parameter("bool", flags=["v"]).flag_string() == "-v"
        assert parameter("[]bool").flag_string() == "--value []bool"

    def test_default_string(self):
        """Test that string defaults are quoted."""
        assert parameter("string", default="guest").default_string() == '(default: "guest")'
        assert parameter("int", default="3").default_string() == "(default: 3)"
        assert parameter("int").default_string() == ""

    def test_vararg_is_positional(self):
        """Test that a vararg parameter is always positional."""
        assert parameter("[]string", is_vararg=True).is_positional


class TestSubCommand:
    """Test subcommand helpers."""

    def test_has_subcommands(self, builder, remote_declarations):
        """Test the child check on inner and leaf nodes."""
        builder.add_all(remote_declarations)
        app = builder.build().command("app")

        assert app.find("remote").has_subcommands
        assert not app.find("remote add").has_subcommands
        assert app.find("remote add").sequence() == ["remote", "add"]
        assert app.find("remote add").path() == ["app", "remote", "add"]
