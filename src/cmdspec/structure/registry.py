"""
Style warning registry.

Style problems never abort a build. They are recorded here as they are found,
logged once, and handed back to the caller after the build completes.
"""

import logging
import threading
from collections.abc import Iterator
from dataclasses import dataclass

logger = logging.getLogger(__name__)

WARNING_MISSING_DESCRIPTION = "missing-description"
WARNING_INCONSISTENT_PARAMETER_DESCRIPTIONS = "inconsistent-parameter-descriptions"
WARNING_SPACE_INDENTATION = "space-indentation"
WARNING_FLAGS_BLOCK_SPACING = "flags-block-spacing"
WARNING_UNRESOLVED_PARENT_PARAMETER = "unresolved-parent-parameter"

WARNING_KINDS = frozenset(
    {
        WARNING_MISSING_DESCRIPTION,
        WARNING_INCONSISTENT_PARAMETER_DESCRIPTIONS,
        WARNING_SPACE_INDENTATION,
        WARNING_FLAGS_BLOCK_SPACING,
        WARNING_UNRESOLVED_PARENT_PARAMETER,
    }
)


@dataclass(frozen=True)
class StyleWarning:
    """A non-fatal style problem found while building the command model."""

    kind: str
    message: str
    function_name: str = ""
    command_path: str = ""

    def __str__(self) -> str:
        location = f" [{self.command_path}]" if self.command_path else ""
        return f"{self.kind}{location}: {self.message}"


class WarningRegistry:
    """Registry of style warnings recorded during one build.

    Recording is guarded by a lock so declarations may be parsed from
    several threads.
    """

    def __init__(self):
        self._warnings: list[StyleWarning] = []
        self._lock = threading.Lock()

    def record(
        self,
        kind: str,
        message: str,
        function_name: str = "",
        command_path: str = "",
    ) -> StyleWarning:
        """
        Record and log a style warning.

        Params:
            kind: One of the WARNING_* kinds
            message: Human readable description of the problem
            function_name: Function whose declaration caused the warning
            command_path: Space separated command path, if known

        Returns:
            The recorded StyleWarning

        Raises:
            ValueError: If kind is not a known warning kind
        """
        if kind not in WARNING_KINDS:
            raise ValueError(f"Unknown warning kind '{kind}'")

        warning = StyleWarning(kind, message, function_name, command_path)
        with self._lock:
            self._warnings.append(warning)
        logger.warning("%s", warning)
        return warning

    def by_kind(self, kind: str) -> list[StyleWarning]:
        """Get all warnings of one kind, in recording order."""
        return [warning for warning in self._warnings if warning.kind == kind]

    def messages(self) -> list[str]:
        """Render every warning as one line of text."""
        return [str(warning) for warning in self._warnings]

    def clear(self):
        with self._lock:
            self._warnings.clear()

    def __iter__(self) -> Iterator[StyleWarning]:
        return iter(list(self._warnings))

    def __len__(self) -> int:
        return len(self._warnings)

    def __bool__(self) -> bool:
        return bool(self._warnings)
