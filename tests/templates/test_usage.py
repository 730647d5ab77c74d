"""
Tests for usage text rendering.

Focus Areas:
1. Section layout of the help view
2. Flag grouping by declaring command
3. Column alignment of flags and defaults
"""

import pytest

from cmdspec.templates import render_usage


@pytest.fixture
def app(builder, remote_declarations):
    builder.add_all(remote_declarations)
    return builder.build().command("app")


class TestRenderUsage:
    """Test the rendered help view."""

    def test_full_view(self, app):
        """Test every section for a concrete subcommand."""
        expected = (
            "Usage: app [flags...] remote add [flags...] <name>\n"
            "\n"
            "registers a remote\n"
            "\n"
            "Registers a new remote under a short name.\n"
            "\n"
            "`app` Flags:\n"
            "  --verbose, -v     Verbose output\n"
            "\n"
            "`add` Flags:\n"
            "  --url, -u string  Remote location (required)\n"
            "\n"
            "Arguments:\n"
            "  <name>  Short name of the remote\n"
        )
        assert render_usage(app.find("remote add")) == expected

    def test_synthetic_node_lists_subcommands(self, app):
        """Test that a placeholder node shows its children."""
        text = render_usage(app.find("remote"))

        assert text.startswith("Usage: app [flags...] remote <subcommand>\n")
        assert "Subcommands:\n  add     registers a remote\n  remove  removes a remote\n" in text
        assert "Arguments:" not in text

    def test_inherited_flags_under_declaring_command(self, app):
        """Test that a global root flag is listed under the root label."""
        text = render_usage(app.find("status"))

        assert "`app` Flags:\n  --verbose, -v" in text
        assert "`status` Flags:\n  -s" in text

    def test_default_column(self, builder, make_declaration):
        """Test that defaults get their own aligned column."""
        builder.add(
            make_declaration(
                "Log",
                "Log is a subcommand `app log` that shows the log\n\n"
                "Flags:\n\n"
                '\tformat: --format Output format (default: "text")\n'
                "\tlimit: --limit Maximum entries\n",
                [("format", "string"), ("limit", "int")],
            )
        )
        text = render_usage(builder.build().command("app").find("log"))

        assert '  --format string  (default: "text")  Output format\n' in text
        assert "  --limit int                         Maximum entries\n" in text

    def test_ends_with_newline(self, app):
        """Test the trailing newline."""
        assert render_usage(app.find("remote remove")).endswith("\n")
