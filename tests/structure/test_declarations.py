"""
Tests for declaration input models and manifest loading.
"""

import tempfile
from pathlib import Path

import pytest
from pydantic import ValidationError

from cmdspec.structure.declarations import (
    DeclarationManifest,
    DeclaredParameter,
    FunctionDeclaration,
)


class TestFunctionDeclaration:
    """Test validation of function declarations."""

    def test_minimal(self):
        """Test a declaration with only a function name."""
        declaration = FunctionDeclaration(function_name="Run")
        assert declaration.parameters == []
        assert declaration.return_count == 0
        assert not declaration.returns_error

    def test_function_name_must_be_identifier(self):
        """Test that invalid function names are rejected."""
        with pytest.raises(ValidationError):
            FunctionDeclaration(function_name="not a name")

    def test_parameter_name_must_be_identifier(self):
        """Test that invalid parameter names are rejected."""
        with pytest.raises(ValidationError):
            DeclaredParameter(name="1st", type_tag="string")

    def test_negative_return_count_rejected(self):
        """Test that return counts cannot be negative."""
        with pytest.raises(ValidationError):
            FunctionDeclaration(function_name="Run", return_count=-1)

    def test_error_requires_return_value(self):
        """Test that returns_error needs at least one return value."""
        with pytest.raises(ValidationError):
            FunctionDeclaration(function_name="Run", returns_error=True)

    def test_value_return_count(self):
        """Test that the trailing error is not counted as a value."""
        declaration = FunctionDeclaration(function_name="Run", return_count=2, returns_error=True)
        assert declaration.value_return_count == 1


class TestDeclarationManifest:
    """Test manifest loading."""

    def test_from_dict(self):
        """Test validating a manifest from plain data."""
        manifest = DeclarationManifest.from_dict(
            {
                "declarations": [
                    {
                        "function_name": "Add",
                        "doc": "Add is a subcommand `app add`",
                        "parameters": [{"name": "name", "type_tag": "string"}],
                    }
                ]
            }
        )
        assert manifest.declarations[0].parameters[0].name == "name"

    def test_from_yaml(self):
        """Test loading a manifest from a YAML file."""
        yaml_content = """
declarations:
  - function_name: Add
    package_name: remote
    doc: "Add is a subcommand `app remote add` that adds a remote"
    parameters:
      - {name: name, type_tag: string, inline_comment: "@1 The name"}
    return_count: 1
    returns_error: true
"""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            f.write(yaml_content)
            yaml_path = f.name

        try:
            manifest = DeclarationManifest.from_yaml(yaml_path)
            declaration = manifest.declarations[0]
            assert declaration.package_name == "remote"
            assert declaration.parameters[0].inline_comment == "@1 The name"
            assert declaration.returns_error
        finally:
            Path(yaml_path).unlink()

    def test_empty_yaml(self):
        """Test that an empty file is an empty manifest."""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            f.write("")
            yaml_path = f.name

        try:
            assert DeclarationManifest.from_yaml(yaml_path).declarations == []
        finally:
            Path(yaml_path).unlink()
