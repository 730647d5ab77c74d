"""
Path-keyed command tree.

Declarations arrive in any order. Each one is inserted at its command path;
missing intermediate segments get synthetic placeholder nodes. Once every
declaration is in, `flatten` turns the tree into an ordered `DataModel`,
visiting each level alphabetically so the result never depends on
insertion order.
"""

import logging
from dataclasses import dataclass, field

from cmdspec.core.naming import DEFAULT_FALLBACK_IDENTIFIER, DEFAULT_RESERVED_NAMES, NameAllocator
from cmdspec.exceptions import DefinitionConflictError, ErrorContext
from cmdspec.structure.models import Command, DataModel, SubCommand

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class TreeSlot:
    """One path segment of the command tree.

    `payload` is None while the slot is synthetic. It holds a `Command` at
    the root level and a `SubCommand` below it.
    """

    segment: str
    payload: Command | SubCommand | None = None
    children: dict[str, "TreeSlot"] = field(default_factory=dict)

    @property
    def is_synthetic(self) -> bool:
        return self.payload is None


class CommandTree:
    """Map-of-maps of declared commands keyed by path segment."""

    def __init__(self):
        self.roots: dict[str, TreeSlot] = {}

    def insert(self, path: list[str], payload: Command | SubCommand) -> TreeSlot:
        """
        Insert a concrete declaration at a path.

        A synthetic slot at the path is promoted in place and keeps its
        children. A concrete slot is never replaced.

        Params:
            path: Root command name followed by the subcommand segments
            payload: Command for a one-segment path, SubCommand otherwise

        Returns:
            The slot now holding the payload

        Raises:
            ValueError: If the path is empty
            DefinitionConflictError: If the path already has a concrete definition
        """
        if not path:
            raise ValueError("Command path must not be empty")

        slot = self._slot(path)
        if slot.payload is not None:
            command_path = " ".join(path)
            raise DefinitionConflictError(
                command_path,
                slot.payload.function_name,
                payload.function_name,
                ErrorContext(function_name=payload.function_name, command_path=command_path),
            )

        if slot.children:
            logger.debug("Promoting synthetic node `%s`", " ".join(path))
        slot.payload = payload
        return slot

    def get(self, path: list[str]) -> TreeSlot | None:
        """Look up the slot at a path without creating anything."""
        if not path:
            return None
        slot = self.roots.get(path[0])
        for segment in path[1:]:
            if slot is None:
                return None
            slot = slot.children.get(segment)
        return slot

    def _slot(self, path: list[str]) -> TreeSlot:
        slot = self.roots.get(path[0])
        if slot is None:
            slot = self.roots[path[0]] = TreeSlot(path[0])
        for segment in path[1:]:
            child = slot.children.get(segment)
            if child is None:
                child = slot.children[segment] = TreeSlot(segment)
            slot = child
        return slot

    def flatten(
        self,
        reserved_names: tuple[str, ...] = DEFAULT_RESERVED_NAMES,
        fallback_identifier: str = DEFAULT_FALLBACK_IDENTIFIER,
    ) -> DataModel:
        """
        Build the ordered data model.

        Every level is visited in alphabetical order. Subcommands get their
        struct names from one allocator per root command, seeded with the
        function name of concrete nodes and the segment of synthetic ones.
        Parent and command back-references are wired on the way.

        Params:
            reserved_names: Names the allocator never hands out
            fallback_identifier: Allocator fallback word

        Returns:
            DataModel with commands sorted by name
        """
        model = DataModel()
        for name in sorted(self.roots):
            slot = self.roots[name]
            command = slot.payload if slot.payload is not None else Command(name=name)
            command.model = model
            allocator = NameAllocator(reserved_names, fallback_identifier)
            command.subcommands = self._flatten_children(slot, command, None, allocator)
            model.commands.append(command)
        return model

    def _flatten_children(
        self,
        slot: TreeSlot,
        command: Command,
        parent: SubCommand | None,
        allocator: NameAllocator,
    ) -> list[SubCommand]:
        result = []
        for segment in sorted(slot.children):
            child_slot = slot.children[segment]
            node = child_slot.payload if child_slot.payload is not None else SubCommand(name=segment)
            node.parent = parent
            node.command = command
            node.struct_name = allocator.allocate(node.function_name or segment)
            node.subcommands = self._flatten_children(child_slot, command, node, allocator)
            result.append(node)
        return result
