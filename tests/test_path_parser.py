"""Tests for the path parser."""

import pytest
from json_reshaper.models.path import Field, Index, Path
from json_reshaper.path_parser import PathParser, parse_path
from json_reshaper.types import MalformedPathError


class TestPathParser:
    """Tests for PathParser class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.parser = PathParser()

    def test_parse_single_field(self):
        """Test parsing a single field name."""
        path = self.parser.parse("name")

        assert path.elements == (Field("name"),)
        assert str(path) == "name"

    def test_parse_dotted_fields(self):
        """Test parsing nested field names."""
        path = self.parser.parse("location.city")

        assert path.elements == (Field("location"), Field("city"))

    def test_parse_attached_index(self):
        """Test parsing an index attached to a field name."""
        path = self.parser.parse("items[1].name")

        assert path.elements == (Field("items"), Index(1), Field("name"))

    def test_parse_leading_index(self):
        """Test parsing a path that starts with an index."""
        path = self.parser.parse("[0].name")

        assert path.elements == (Index(0), Field("name"))

    def test_parse_index_after_dot(self):
        """Test parsing an index written as its own segment."""
        path = self.parser.parse("items.[2]")

        assert path.elements == (Field("items"), Index(2))

    def test_parse_chained_indexes(self):
        """Test parsing several indexes in one segment."""
        path = self.parser.parse("matrix[1][0]")

        assert path.elements == (Field("matrix"), Index(1), Index(0))

    def test_parse_empty_string_is_root(self):
        """Test that the empty string is the root path."""
        path = self.parser.parse("")

        assert path.is_root()
        assert len(path) == 0

    def test_parse_returns_existing_path(self):
        """Test that an already parsed path passes through."""
        path = Path((Field("a"),), "a")

        assert self.parser.parse(path) is path

    @pytest.mark.parametrize("text", [
        "a..b",
        ".a",
        "a.",
        "items[1",
        "items]1[",
        "items[x]",
        "items[-1]",
        "items[]",
        "items[1]name",
        "items[[1]]",
        "na]me",
    ])
    def test_parse_malformed(self, text):
        """Test that malformed paths are rejected with the raw path attached."""
        with pytest.raises(MalformedPathError) as exc_info:
            self.parser.parse(text)

        assert exc_info.value.path == text

    def test_parse_non_string(self):
        """Test that non-string input is rejected."""
        with pytest.raises(MalformedPathError):
            self.parser.parse(12)

    def test_is_valid(self):
        """Test non-raising syntax check."""
        assert self.parser.is_valid("a[0].b")
        assert not self.parser.is_valid("a[")

    def test_render_round_trip(self):
        """Test that a parsed path renders back to canonical syntax."""
        assert parse_path("items[1].name").render() == "items[1].name"
        assert parse_path("[0].name").render() == "[0].name"

    def test_module_parser_is_cached(self):
        """Test that parsing the same text twice yields the same object."""
        assert parse_path("a.b[3]") is parse_path("a.b[3]")


class TestPathModel:
    """Tests for Path element models."""

    def test_negative_index_rejected(self):
        """Test that Index refuses negative positions."""
        with pytest.raises(ValueError):
            Index(-1)

    def test_empty_field_rejected(self):
        """Test that Field refuses empty names."""
        with pytest.raises(ValueError):
            Field("")

    def test_field_names_and_index_detection(self):
        """Test helpers used by translation."""
        path = parse_path("a.b[0].c")

        assert path.field_names() == ("a", "b", "c")
        assert path.has_index()
        assert not parse_path("a.b").has_index()

