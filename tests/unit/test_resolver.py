"""Tests for precedence-ordered resolution."""

from confhound import ConfigKey, MapSource, Resolver, SourceRegistry
from confhound.sources import ConfigSource


class _LookupOnlySource(ConfigSource):
    """A source that cannot enumerate its keys."""

    def __init__(self, values, name="lookup-only", priority=10):
        super().__init__(name, priority)
        self.values = values

    def lookup(self, key):
        return self.values.get(key)


def _resolver(*sources):
    return Resolver(SourceRegistry(list(sources)))


class TestResolve:
    """Tests for Resolver.resolve."""

    def test_default_when_no_source(self):
        """Test the default is used and flagged."""
        resolved = _resolver().resolve(ConfigKey("app.name", default="demo"))

        assert resolved.value == "demo"
        assert resolved.found is True
        assert resolved.is_from_default is True
        assert resolved.source_name is None

    def test_not_found(self):
        """Test no source and no default."""
        resolved = _resolver().resolve(ConfigKey("app.name"))
        assert resolved.found is False
        assert resolved.value is None
        assert resolved.is_from_default is False

    def test_highest_priority_wins(self):
        """Test the highest-priority holder wins regardless of others."""
        a = MapSource({"app.name": "X"}, name="A", priority=30)
        b = MapSource({"app.name": "Y"}, name="B", priority=50)
        resolved = _resolver(a, b).resolve(ConfigKey("app.name", default="Z"))

        assert resolved.value == "Y"
        assert resolved.source_name == "B"
        assert resolved.is_from_default is False

    def test_remove_falls_back(self):
        """Test removing the winning source exposes the next one."""
        registry = SourceRegistry([
            MapSource({"app.name": "X"}, name="A", priority=30),
            MapSource({"app.name": "Y"}, name="B", priority=50),
        ])
        resolver = Resolver(registry)
        assert resolver.resolve("app.name").value == "Y"

        registry.remove("B")
        resolved = resolver.resolve("app.name")
        assert resolved.value == "X"
        assert resolved.source_name == "A"

    def test_lower_priority_fills_gaps(self):
        """Test keys missing in a high source come from a lower one."""
        high = MapSource({"a": "1"}, name="high", priority=50)
        low = MapSource({"b": "2"}, name="low", priority=10)
        resolver = _resolver(high, low)

        assert resolver.resolve("b").source_name == "low"

    def test_empty_string_does_not_fall_through(self):
        """Test an empty value is found and beats the default."""
        resolver = _resolver(MapSource({"app.name": ""}, name="A", priority=10))
        resolved = resolver.resolve(ConfigKey("app.name", default="demo"))

        assert resolved.found is True
        assert resolved.value == ""
        assert resolved.source_name == "A"

    def test_no_caching(self):
        """Test changes in a source are visible on the next call."""
        values = {"a": "1"}
        resolver = _resolver(MapSource(values, name="M"))
        assert resolver.resolve("a").value == "1"
        values["a"] = "2"
        assert resolver.resolve("a").value == "2"

    def test_idempotent(self):
        """Test repeated resolution yields identical results."""
        resolver = _resolver(MapSource({"a": "1"}, name="M"))
        assert resolver.resolve("a") == resolver.resolve("a")

    def test_resolve_from_sources_ignores_default(self):
        """Test source-only resolution."""
        resolved = _resolver().resolve_from_sources("app.name")
        assert resolved.found is False

    def test_source_for(self):
        """Test finding the supplying source."""
        b = MapSource({"a": "1"}, name="B", priority=5)
        resolver = _resolver(MapSource({}, name="A", priority=9), b)
        assert resolver.source_for("a") is b
        assert resolver.source_for("zzz") is None


class TestResolveIgnoreCase:
    """Tests for case-insensitive probing."""

    def test_enumerable_source(self):
        """Test any casing of the key matches."""
        resolver = _resolver(MapSource({"App_Env": "uat"}, name="M"))
        for probe in ("APP_ENV", "app_env", "App_Env"):
            assert resolver.resolve_ignore_case(probe).value == "uat"

    def test_exact_match_preferred(self):
        """Test the exact key beats a case variant in the same source."""
        resolver = _resolver(MapSource({"app_env": "lower", "APP_ENV": "upper"}, name="M"))
        assert resolver.resolve_ignore_case("APP_ENV").value == "upper"

    def test_priority_still_applies(self):
        """Test a higher-priority source wins even with a case variant."""
        resolver = _resolver(
            MapSource({"APP_ENV": "low"}, name="low", priority=1),
            MapSource({"app_env": "high"}, name="high", priority=9),
        )
        resolved = resolver.resolve_ignore_case("APP_ENV")
        assert resolved.value == "high"
        assert resolved.source_name == "high"

    def test_lookup_only_source(self):
        """Test non-enumerable sources are tried with upper and lower case."""
        resolver = _resolver(_LookupOnlySource({"app_env": "qa"}))
        assert resolver.resolve_ignore_case("APP_ENV").value == "qa"
