"""
Builder configuration for cmdspec.

This module provides the settings of one model build: which identifiers
generated code reserves, how strictly style warnings are treated and which
of the optional style checks run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from dataclasses import fields as dataclass_fields
from pathlib import Path
from typing import Any

import yaml

from cmdspec.core.naming import DEFAULT_FALLBACK_IDENTIFIER, DEFAULT_RESERVED_NAMES


@dataclass
class BuilderConfig:
    """Configuration for `ModelBuilder`.

    Can be created from dict or YAML with partial overrides.
    Only specified values override defaults.

    Examples:
        # All defaults
        config = BuilderConfig()

        # Partial override from dict
        config = BuilderConfig.from_dict({"strict": True})

        # From YAML file
        config = BuilderConfig.from_yaml("cmdspec.yaml")
    """

    # Identifiers the name allocator never hands out
    reserved_names: tuple[str, ...] = field(default=DEFAULT_RESERVED_NAMES)
    # Word used for empty identifiers and prefixed to leading digits
    fallback_identifier: str = DEFAULT_FALLBACK_IDENTIFIER

    # Turn recorded style warnings into a StyleWarningsError at build time
    strict: bool = False

    warn_space_indentation: bool = True
    warn_flags_block_spacing: bool = True

    def __post_init__(self):
        self.reserved_names = tuple(self.reserved_names)

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> BuilderConfig:
        """Create from dict, only overriding specified values.

        Args:
            config: Dictionary with partial overrides. Only keys matching
                   dataclass fields will be used.

        Returns:
            BuilderConfig instance with specified overrides
        """
        valid_fields = {f.name for f in dataclass_fields(cls)}
        filtered = {k: v for k, v in config.items() if k in valid_fields}
        return cls(**filtered)

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> BuilderConfig:
        """Create from YAML file with partial overrides.

        Args:
            yaml_path: Path to YAML file containing configuration

        Returns:
            BuilderConfig instance with YAML overrides

        Example YAML:
            strict: true
            reserved_names: [Cmd, RootCmd, Config]
        """
        path = Path(yaml_path)
        with path.open() as f:
            config = yaml.safe_load(f) or {}

        return cls.from_dict(config)
