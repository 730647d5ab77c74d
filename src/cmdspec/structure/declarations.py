"""
Declaration input models.

The source walker is external: it hands over, per function, the name, the
defining unit, the raw documentation comment, the ordered parameter list and
the return arity. These pydantic models validate that hand-over and load it
from a YAML manifest.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator


def _check_identifier(value: str) -> str:
    if not value.isidentifier():
        raise ValueError(f"'{value}' is not a valid identifier")
    return value


class DeclaredParameter(BaseModel):
    """One parameter of a function signature, with its adjacent comments."""

    name: str
    type_tag: str
    is_variadic: bool = False
    inline_comment: str = Field(default="", description="Trailing comment on the parameter line")
    preceding_comment: str = Field(default="", description="Comment on the line above the parameter")

    @field_validator("name")
    @classmethod
    def _name_is_identifier(cls, value: str) -> str:
        return _check_identifier(value)


class FunctionDeclaration(BaseModel):
    """
    One function declaration handed over by the source walker.

    Params:
        function_name: Function identifier
        import_path: Import path of the defining package
        package_name: Package name of the defining unit
        definition_file: Source file containing the function
        doc: Raw documentation comment, comment markers removed
        doc_start: First line of the comment in the source file
        doc_end: Last line of the comment in the source file
        parameters: Ordered signature parameters
        return_count: Number of declared return values
        returns_error: The last return value is an error indicator
    """

    function_name: str
    import_path: str = ""
    package_name: str = ""
    definition_file: str = ""
    doc: str = ""
    doc_start: int | None = None
    doc_end: int | None = None
    parameters: list[DeclaredParameter] = Field(default_factory=list)
    return_count: int = Field(default=0, ge=0)
    returns_error: bool = False

    @field_validator("function_name")
    @classmethod
    def _function_name_is_identifier(cls, value: str) -> str:
        return _check_identifier(value)

    @model_validator(mode="after")
    def _error_needs_return_value(self) -> FunctionDeclaration:
        if self.returns_error and self.return_count < 1:
            raise ValueError("returns_error requires at least one return value")
        return self

    @property
    def value_return_count(self) -> int:
        """Number of return values that are not the trailing error."""
        return self.return_count - (1 if self.returns_error else 0)


class DeclarationManifest(BaseModel):
    """A list of declarations, as read by the command line front end."""

    declarations: list[FunctionDeclaration] = Field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DeclarationManifest:
        """Validate a manifest from plain data."""
        return cls.model_validate(data)

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> DeclarationManifest:
        """Load and validate a manifest from a YAML file.

        Example YAML:
            declarations:
              - function_name: Add
                package_name: remote
                doc: "Add is a subcommand `app remote add` that adds a remote"
                parameters:
                  - {name: name, type_tag: string}
        """
        path = Path(yaml_path)
        with path.open() as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)
