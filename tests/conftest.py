"""
Shared test fixtures and utilities for the cmdspec test suite.
"""

import pytest

from cmdspec.structure import DeclaredParameter, FunctionDeclaration, ModelBuilder


def _declaration(
    function_name: str,
    doc: str,
    parameters: list[tuple[str, str]] | None = None,
    **kwargs,
) -> FunctionDeclaration:
    """Build a FunctionDeclaration from (name, type_tag) pairs.

    Usage:
        _declaration("Add", "Add is a subcommand `app add` that adds", [("name", "string")])
    """
    return FunctionDeclaration(
        function_name=function_name,
        doc=doc,
        parameters=[
            DeclaredParameter(name=name, type_tag=type_tag)
            for name, type_tag in (parameters or [])
        ],
        **kwargs,
    )


@pytest.fixture
def make_declaration():
    """Factory fixture building FunctionDeclarations from (name, type_tag) pairs.

    Usage:
        def test_something(make_declaration):
            decl = make_declaration("Add", "Add is a subcommand `app add`", [("name", "string")])
    """
    return _declaration


@pytest.fixture
def builder():
    """Fresh ModelBuilder with default configuration."""
    return ModelBuilder()


@pytest.fixture
def remote_declarations() -> list[FunctionDeclaration]:
    """A small `app` command tree with a root command and nested subcommands.

    app (verbose: global)
    ├── remote            (synthetic)
    │   ├── add
    │   └── remove
    └── status
    """
    return [
        _declaration(
            "App",
            "App is a subcommand `app` that manages things\n\n"
            "Flags:\n\n"
            "\tverbose: --verbose, -v Verbose output (global)\n",
            [("verbose", "bool")],
        ),
        _declaration(
            "RemoteAdd",
            "RemoteAdd is a subcommand `app remote add` that registers a remote\n\n"
            "Registers a new remote under a short name.\n\n"
            "aliases: new, a\n\n"
            "Flags:\n\n"
            "\tname: @1 Short name of the remote\n"
            "\turl: --url, -u Remote location (required)\n",
            [("name", "string"), ("url", "string")],
        ),
        _declaration(
            "RemoteRemove",
            "RemoteRemove is a subcommand `app remote remove` that removes a remote\n\n"
            "Flags:\n\n"
            "\tname: @1 Short name of the remote\n",
            [("name", "string")],
        ),
        _declaration(
            "Status",
            "Status is a subcommand `app status` that shows the status\n\n"
            "Flags:\n\n"
            "\tshort: -s Short output\n",
            [("short", "bool")],
        ),
    ]
