"""
Text renderings of a built command model.

This package renders the help view of a subcommand and the canonical
documentation comment of a command.
"""

from cmdspec.templates.comments import format_comment, format_parameter
from cmdspec.templates.usage import render_usage

__all__ = [
    "format_comment",
    "format_parameter",
    "render_usage",
]
