"""
cmdspec - Command models from documentation comments

cmdspec reads command declarations written in function documentation
comments and assembles them into a deterministic tree of commands,
subcommands and flags, ready for code generation.
"""

from importlib.metadata import version

from cmdspec.config import BuilderConfig
from cmdspec.structure import DataModel, FunctionDeclaration, ModelBuilder

__version__ = version("cmdspec")

__all__ = [
    "__version__",
    "BuilderConfig",
    "DataModel",
    "FunctionDeclaration",
    "ModelBuilder",
]
