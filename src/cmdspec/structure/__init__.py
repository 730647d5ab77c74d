"""
Command model structure.

This package provides the declaration input models, the command data model,
the path-keyed command tree and the builder that assembles them.
"""

from cmdspec.structure.builder import ModelBuilder
from cmdspec.structure.declarations import (
    DeclarationManifest,
    DeclaredParameter,
    FunctionDeclaration,
)
from cmdspec.structure.models import (
    Command,
    DataModel,
    FunctionBinding,
    FunctionParameter,
    ParameterGroup,
    SubCommand,
)
from cmdspec.structure.registry import StyleWarning, WarningRegistry
from cmdspec.structure.tree import CommandTree, TreeSlot

__all__ = [
    "Command",
    "CommandTree",
    "DataModel",
    "DeclarationManifest",
    "DeclaredParameter",
    "FunctionBinding",
    "FunctionDeclaration",
    "FunctionParameter",
    "ModelBuilder",
    "ParameterGroup",
    "StyleWarning",
    "SubCommand",
    "TreeSlot",
    "WarningRegistry",
]
