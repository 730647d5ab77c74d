"""
Tests for naming helpers and the NameAllocator.
"""

from cmdspec.core.naming import (
    DEFAULT_RESERVED_NAMES,
    NameAllocator,
    sanitize_identifier,
    to_kebab_case,
)


class TestToKebabCase:
    """Test conversion of parameter identifiers to flag names."""

    def test_camel_case(self):
        """Test that camelCase words are split with hyphens."""
        assert to_kebab_case("userName") == "user-name"

    def test_acronym(self):
        """Test that a leading acronym stays one word."""
        assert to_kebab_case("JSONData") == "json-data"

    def test_snake_case(self):
        """Test that underscores become hyphens."""
        assert to_kebab_case("dry_run") == "dry-run"

    def test_single_lowercase_word_unchanged(self):
        """Test that a plain lowercase identifier keeps its form."""
        assert to_kebab_case("name") == "name"


class TestSanitizeIdentifier:
    """Test PascalCase sanitization of arbitrary seeds."""

    def test_hyphen_and_underscore_are_boundaries(self):
        """Test that hyphenated and underscored seeds give the same token."""
        assert sanitize_identifier("foo-bar") == "FooBar"
        assert sanitize_identifier("foo_bar") == "FooBar"

    def test_spaces_are_boundaries(self):
        """Test that spaces separate words."""
        assert sanitize_identifier("list items") == "ListItems"

    def test_existing_capitals_kept(self):
        """Test that inner capitals of a word are preserved."""
        assert sanitize_identifier("RemoteAdd") == "RemoteAdd"

    def test_leading_digit_gets_fallback_prefix(self):
        """Test that a leading digit is prefixed with the fallback word."""
        assert sanitize_identifier("2fa") == "Cmd2fa"

    def test_empty_result_uses_fallback(self):
        """Test that seeds without letters or digits map to the fallback."""
        assert sanitize_identifier("---") == "Cmd"
        assert sanitize_identifier("") == "Cmd"

    def test_custom_fallback(self):
        """Test that a custom fallback word is used."""
        assert sanitize_identifier("9lives", fallback="X") == "X9lives"


class TestNameAllocator:
    """Test collision-free identifier allocation."""

    def test_first_allocation_is_unsuffixed(self):
        """Test that a fresh seed yields its sanitized form."""
        allocator = NameAllocator()
        assert allocator.allocate("remote") == "Remote"

    def test_collision_gets_numeric_suffix_from_two(self):
        """Test that colliding seeds receive suffixes 2, 3, ..."""
        allocator = NameAllocator()
        assert allocator.allocate("foo-bar") == "FooBar"
        assert allocator.allocate("foo_bar") == "FooBar2"
        assert allocator.allocate("foo bar") == "FooBar3"

    def test_reserved_names_are_never_allocated(self):
        """Test that the default reserved set is pre-seeded."""
        allocator = NameAllocator()
        assert allocator.is_allocated("RootCmd")
        assert allocator.allocate("cmd") == "Cmd2"
        assert allocator.allocate("root cmd") == "RootCmd2"

    def test_empty_seed_collides_with_reserved_fallback(self):
        """Test that the fallback word itself is reserved by default."""
        allocator = NameAllocator()
        assert allocator.allocate("") == "Cmd2"

    def test_custom_reserved_set(self):
        """Test that a custom reserved set replaces the default one."""
        allocator = NameAllocator(reserved=["Status"])
        assert allocator.allocate("status") == "Status2"
        assert allocator.allocate("cmd") == "Cmd"

    def test_allocation_is_a_function_of_order(self):
        """Test that two allocators fed the same seeds agree."""
        seeds = ["a-b", "a_b", "ab", "AB", "1"]
        first_allocator = NameAllocator()
        second_allocator = NameAllocator()
        first = [first_allocator.allocate(seed) for seed in seeds]
        second = [second_allocator.allocate(seed) for seed in seeds]
        assert first == second
        assert first == ["AB", "AB2", "Ab", "AB3", "Cmd1"]

    def test_default_reserved_names(self):
        """Test the reserved names used by generated code."""
        assert "UserError" in DEFAULT_RESERVED_NAMES
        assert "main" in DEFAULT_RESERVED_NAMES
