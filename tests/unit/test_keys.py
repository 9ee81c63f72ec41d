"""Tests for key descriptors and the key registry."""

import dataclasses

import pytest

from confhound import ConfigKey, KeyDescriptor, KeyRegistry, Range, Required
from confhound.keys import as_key


class TestConfigKey:
    """Tests for ConfigKey."""

    def test_defaults(self):
        """Test a bare key has no default and is not sensitive."""
        key = ConfigKey("app.name")
        assert key.default is None
        assert key.sensitive is False
        assert key.rules == ()

    def test_immutable(self):
        """Test descriptors cannot be mutated."""
        key = ConfigKey("app.name", default="demo")
        with pytest.raises(dataclasses.FrozenInstanceError):
            key.default = "other"

    def test_empty_name_rejected(self):
        """Test empty names are rejected."""
        with pytest.raises(ValueError):
            ConfigKey("")

    def test_equality_ignores_rules(self):
        """Test two descriptors with the same metadata are equal."""
        assert ConfigKey("a", "1") == ConfigKey("a", "1", rules=(Required(),))

    def test_satisfies_protocol(self):
        """Test ConfigKey conforms to KeyDescriptor."""
        assert isinstance(ConfigKey("a"), KeyDescriptor)

    def test_structural_key(self):
        """Test any object with name/default/sensitive works as a key."""

        class InlineKey:
            name = "inline.key"
            default = "x"
            sensitive = True

        key = as_key(InlineKey())
        assert key.name == "inline.key"
        assert isinstance(key, KeyDescriptor)

    def test_string_key(self):
        """Test a bare string becomes a descriptor without default."""
        key = as_key("database.url")
        assert key == ConfigKey("database.url")


class TestKeyRegistry:
    """Tests for KeyRegistry."""

    def test_registration_order(self):
        """Test iteration follows registration order."""
        registry = KeyRegistry(keys=[ConfigKey("b"), ConfigKey("a"), ConfigKey("c")])
        assert registry.names() == ["b", "a", "c"]
        assert len(registry) == 3

    def test_reregister_replaces_in_place(self):
        """Test registering an existing name replaces it without moving it."""
        registry = KeyRegistry(keys=[ConfigKey("a", "1"), ConfigKey("b")])
        registry.register(ConfigKey("a", "2"))
        assert registry.names() == ["a", "b"]
        assert registry.get("a").default == "2"

    def test_tags(self):
        """Test tagged lookup."""
        registry = KeyRegistry("app")
        registry.register(ConfigKey("db.url"), tags=["database"])
        registry.register(ConfigKey("app.name"))

        assert [k.name for k in registry.tagged("database")] == ["db.url"]
        assert [k.name for k in registry.tagged("app")] == ["db.url", "app.name"]

    def test_sensitive(self):
        """Test listing sensitive keys."""
        registry = KeyRegistry(keys=[
            ConfigKey("db.password", sensitive=True),
            ConfigKey("db.url"),
        ])
        assert [k.name for k in registry.sensitive()] == ["db.password"]

    def test_contains(self):
        """Test membership by name and by descriptor."""
        registry = KeyRegistry(keys=[ConfigKey("a", rules=(Range(1, 2),))])
        assert "a" in registry
        assert ConfigKey("a") in registry
        assert "b" not in registry
