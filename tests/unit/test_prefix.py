"""Tests for prefix queries."""

from confhound import ConfigKey, MapSource, PrefixIndex, Resolver, SourceRegistry
from confhound.masking import MASK
from confhound.sources import ConfigSource, EnvironmentSource


class _Opaque(ConfigSource):
    """Answers lookups but cannot list its keys."""

    def __init__(self, values, priority=100):
        super().__init__("opaque", priority)
        self.values = values

    def lookup(self, key):
        return self.values.get(key)


def _index(*extra):
    registry = SourceRegistry([
        MapSource(
            {"database.url": "jdbc:low", "database.user": "app", "server.port": "8080"},
            name="low",
            priority=10,
        ),
        MapSource(
            {"database.url": "jdbc:high", "database.password": "hunter2"},
            name="high",
            priority=50,
        ),
        *extra,
    ])
    return PrefixIndex(Resolver(registry))


class TestPrefixIndex:
    """Tests for PrefixIndex."""

    def test_by_prefix_merges_by_priority(self):
        """Test the highest-priority value wins per key."""
        assert _index().by_prefix("database.") == {
            "database.password": "hunter2",
            "database.url": "jdbc:high",
            "database.user": "app",
        }

    def test_result_is_sorted(self):
        """Test keys come back sorted."""
        assert list(_index().by_prefix("database.")) == [
            "database.password",
            "database.url",
            "database.user",
        ]

    def test_environment_variable_outranks_file(self):
        """Test a translated env var wins exactly as resolve() would."""
        env = EnvironmentSource({"DATABASE_URL": "jdbc:env"})
        file_like = MapSource({"database.url": "jdbc:file"}, name="file", priority=30)
        resolver = Resolver(SourceRegistry([env, file_like]))

        assert resolver.resolve("database.url").value == "jdbc:env"
        assert PrefixIndex(resolver).by_prefix("database.") == {"database.url": "jdbc:env"}

    def test_non_enumerable_sources_add_no_keys(self):
        """Test lookup-only sources never introduce new key names."""
        index = _index(_Opaque({"database.hidden": "x"}))
        assert "database.hidden" not in index.by_prefix("database.")

    def test_non_enumerable_sources_still_win_values(self):
        """Test a lookup-only source supplies the value of a listed key."""
        index = _index(_Opaque({"database.url": "jdbc:opaque"}))
        assert index.by_prefix("database.")["database.url"] == "jdbc:opaque"

    def test_keys_with_prefix(self):
        """Test key-set query."""
        assert _index().keys_with_prefix("server.") == {"server.port"}
        assert _index().keys_with_prefix("nothing.") == set()

    def test_empty_prefix_returns_everything(self):
        """Test every enumerable key matches the empty prefix."""
        assert len(_index().by_prefix("")) == 4

    def test_display_masks_by_name_heuristic(self):
        """Test credential-looking names are masked without a descriptor."""
        display = _index().by_prefix_for_display("database.")
        assert display["database.password"] == MASK
        assert display["database.url"] == "jdbc:high"

    def test_display_respects_descriptors(self):
        """Test descriptors override the heuristic either way."""
        display = _index().by_prefix_for_display(
            "database.",
            keys=[
                ConfigKey("database.user", sensitive=True),
                ConfigKey("database.password", sensitive=False),
            ],
        )
        assert display["database.user"] == MASK
        assert display["database.password"] == "hunter2"
