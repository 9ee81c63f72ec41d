"""Tests for file decoders and value rendering."""

from datetime import date

from confhound.sources.decoders import (
    decode_json,
    decode_properties,
    decode_yaml,
    decoder_for,
    flatten,
    stringify,
)


class TestPropertiesDecoder:
    """Tests for the .properties decoder."""

    def test_separators(self):
        """Test '=', ':' and whitespace separators."""
        data = decode_properties("a=1\nb: 2\nc 3\nd = 4\n")
        assert data == {"a": "1", "b": "2", "c": "3", "d": "4"}

    def test_comments_and_blank_lines(self):
        """Test '#' and '!' comments are skipped."""
        data = decode_properties("# comment\n! also comment\n\n  \nkey=value\n")
        assert data == {"key": "value"}

    def test_continuation_lines(self):
        """Test trailing backslash joins lines."""
        data = decode_properties("browsers=chrome, \\\n    firefox, \\\n    edge\n")
        assert data == {"browsers": "chrome, firefox, edge"}

    def test_escapes(self):
        """Test escaped separators and unicode escapes."""
        data = decode_properties("path\\=key=a\\tb\ngreeting=caf\\u00e9\n")
        assert data == {"path=key": "a\tb", "greeting": "café"}

    def test_empty_value(self):
        """Test a key without value maps to the empty string."""
        assert decode_properties("empty=\nbare\n") == {"empty": "", "bare": ""}

    def test_value_keeps_inner_separators(self):
        """Test only the first separator splits."""
        data = decode_properties("database.url=jdbc:h2:mem:test;MODE=PostgreSQL\n")
        assert data == {"database.url": "jdbc:h2:mem:test;MODE=PostgreSQL"}


class TestOtherDecoders:
    """Tests for JSON and YAML decoders."""

    def test_empty_json(self):
        """Test an empty JSON file decodes to an empty mapping."""
        assert decode_json("   ") == {}

    def test_empty_yaml(self):
        """Test an empty YAML file decodes to an empty mapping."""
        assert decode_yaml("") == {}

    def test_decoder_for_suffix(self):
        """Test suffix lookup is case-insensitive."""
        assert decoder_for("a.YAML") is decode_yaml
        assert decoder_for("a.yml") is decode_yaml
        assert decoder_for("a.ini") is None


class TestValueHelpers:
    """Tests for flatten and stringify."""

    def test_flatten(self):
        """Test nested mappings flatten to dot notation."""
        assert flatten({"a": {"b": {"c": 1}}, "d": 2}) == {"a.b.c": 1, "d": 2}

    def test_flatten_drops_empty_tables(self):
        """Test empty nested mappings produce no keys."""
        assert flatten({"a": {}, "b": 1}) == {"b": 1}

    def test_stringify(self):
        """Test leaf rendering."""
        assert stringify(True) == "true"
        assert stringify(False) == "false"
        assert stringify(10) == "10"
        assert stringify(1.5) == "1.5"
        assert stringify(["a", 1, None]) == "a,1"
        assert stringify(date(2024, 1, 2)) == "2024-01-02"
        assert stringify({"b": 1, "a": 2}) == '{"a": 2, "b": 1}'
