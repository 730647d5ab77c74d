"""
Tests for builder configuration loading.
"""

import tempfile
from pathlib import Path

from cmdspec.config import BuilderConfig
from cmdspec.core.naming import DEFAULT_RESERVED_NAMES
from cmdspec.structure import ModelBuilder


class TestBuilderConfig:
    """Test BuilderConfig defaults and overrides."""

    def test_defaults(self):
        """Test the default settings."""
        config = BuilderConfig()
        assert config.reserved_names == DEFAULT_RESERVED_NAMES
        assert config.fallback_identifier == "Cmd"
        assert not config.strict
        assert config.warn_space_indentation
        assert config.warn_flags_block_spacing

    def test_from_dict_partial_override(self):
        """Test that only given keys override defaults."""
        config = BuilderConfig.from_dict({"strict": True})
        assert config.strict
        assert config.reserved_names == DEFAULT_RESERVED_NAMES

    def test_from_dict_ignores_unknown_keys(self):
        """Test that unknown keys are dropped."""
        config = BuilderConfig.from_dict({"strict": True, "colour": "blue"})
        assert config.strict

    def test_reserved_names_become_tuple(self):
        """Test that list input is normalized."""
        config = BuilderConfig.from_dict({"reserved_names": ["Cmd", "Status"]})
        assert config.reserved_names == ("Cmd", "Status")

    def test_from_yaml(self):
        """Test loading configuration from a YAML file."""
        yaml_content = """
strict: true
warn_space_indentation: false
reserved_names:
  - Cmd
  - Status
"""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            f.write(yaml_content)
            yaml_path = f.name

        try:
            config = BuilderConfig.from_yaml(yaml_path)
            assert config.strict
            assert not config.warn_space_indentation
            assert config.warn_flags_block_spacing
            assert config.reserved_names == ("Cmd", "Status")
        finally:
            Path(yaml_path).unlink()

    def test_empty_yaml_gives_defaults(self):
        """Test that an empty file yields the defaults."""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            yaml_path = f.name

        try:
            assert BuilderConfig.from_yaml(yaml_path) == BuilderConfig()
        finally:
            Path(yaml_path).unlink()

    def test_reserved_names_used_by_builder(self, make_declaration):
        """Test that configured reserved names reach the name allocator."""
        builder = ModelBuilder(BuilderConfig(reserved_names=("Status",)))
        builder.add(make_declaration("Status", "Status is a subcommand `app status` that shows status"))
        assert builder.build().command("app").find("status").struct_name == "Status2"
