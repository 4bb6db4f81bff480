"""Tests for path resolution and inspection."""

import pytest
from json_reshaper.path_parser import parse_path
from json_reshaper.resolver import PathResolver
from json_reshaper.types import MalformedPathError, TypeMismatchError
from json_reshaper.value import ABSENT


class TestPathResolver:
    """Tests for PathResolver class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.resolver = PathResolver()

    def test_resolve_nested_field(self, customer_data):
        """Test resolving a nested field."""
        assert self.resolver.resolve(customer_data, "location.city") == "Vilnius"

    def test_resolve_index(self, customer_data):
        """Test resolving through an array index."""
        assert self.resolver.resolve(customer_data, "items[1].name") == "snickers"

    def test_resolve_leading_index_on_array_root(self, customer_data):
        """Test resolving a path that starts with an index against an array."""
        items = customer_data["items"]

        assert self.resolver.resolve(items, "[0].name") == "tomatoes"

    def test_resolve_root(self, customer_data):
        """Test that the root path returns the value itself."""
        assert self.resolver.resolve(customer_data, "") is customer_data

    @pytest.mark.parametrize("path", [
        "location.postCode",
        "items[5]",
        "items.name",
        "name.first",
        "location[0]",
        "mobile.number",
    ])
    def test_resolve_missing_is_absent(self, customer_data, path):
        """Test that missing or mistyped lookups yield ABSENT without raising."""
        assert self.resolver.resolve(customer_data, path) is ABSENT

    def test_resolve_malformed_path_raises(self, customer_data):
        """Test that malformed paths are rejected before resolution."""
        with pytest.raises(MalformedPathError):
            self.resolver.resolve(customer_data, "items[")

    def test_resolve_broadcast(self, customer_data):
        """Test broadcasting a field over an array."""
        assert self.resolver.resolve(customer_data, "items.sale", broadcast=True) == [True, False]

    def test_resolve_broadcast_all_missing(self, customer_data):
        """Test that broadcasting a field no element has yields ABSENT."""
        assert self.resolver.resolve(customer_data, "items.price", broadcast=True) is ABSENT

    def test_resolve_broadcast_empty_array(self):
        """Test that broadcasting over an empty array yields an empty list."""
        assert self.resolver.resolve({"items": []}, "items.sale", broadcast=True) == []

    def test_resolve_broadcast_skips_missing_elements(self):
        """Test that elements without the field are left out."""
        data = {"items": [{"sale": True}, {}, {"sale": False}]}

        assert self.resolver.resolve(data, "items.sale", broadcast=True) == [True, False]

    def test_exists_matches_resolution(self, customer_data):
        """Test that exists agrees with resolve for a range of paths."""
        for path in ["id", "mobile", "location.city", "location.zip", "items[1]", "items[2]", ""]:
            expected = self.resolver.resolve(customer_data, path) is not ABSENT
            assert self.resolver.exists(customer_data, path) == expected

    def test_exists_includes_null(self, customer_data):
        """Test that an explicit null exists."""
        assert self.resolver.exists(customer_data, "mobile")

    def test_is_null(self, customer_data):
        """Test null inspection."""
        assert self.resolver.is_null(customer_data, "mobile")
        assert not self.resolver.is_null(customer_data, "id")
        assert not self.resolver.is_null(customer_data, "missing")

    def test_contains_scalar(self, customer_data):
        """Test containment of an equal scalar."""
        assert self.resolver.contains(customer_data, "snickers", "items[1].name")
        assert not self.resolver.contains(customer_data, "tomatoes", "items[1].name")

    def test_contains_array_member(self):
        """Test containment inside an array."""
        data = {"tags": ["a", "b"]}

        assert self.resolver.contains(data, "b", "tags")
        assert not self.resolver.contains(data, "c", "tags")

    def test_contains_is_strict_about_booleans(self):
        """Test that True does not match 1."""
        assert not self.resolver.contains({"flag": 1}, True, "flag")

    def test_contains_missing_path(self, customer_data):
        """Test that containment on a missing path is False."""
        assert not self.resolver.contains(customer_data, "x", "nope")


class TestPathResolverWrite:
    """Tests for writing into output trees."""

    def setup_method(self):
        """Set up test fixtures."""
        self.resolver = PathResolver()

    def test_write_creates_intermediate_objects(self):
        """Test that missing intermediate objects are created."""
        target = {}
        self.resolver.write(target, "media.pictures.headerBackground", "x")

        assert target == {"media": {"pictures": {"headerBackground": "x"}}}

    def test_write_keeps_existing_siblings(self):
        """Test that writing into an existing object keeps its fields."""
        target = {"media": {"logo": "l"}}
        self.resolver.write(target, "media.banner", "b")

        assert target == {"media": {"logo": "l", "banner": "b"}}

    def test_write_replaces_scalar_intermediate(self):
        """Test that a scalar in the way is replaced by an object."""
        target = {"media": "old"}
        self.resolver.write(target, "media.banner", "b")

        assert target == {"media": {"banner": "b"}}

    def test_write_index_append_and_replace(self):
        """Test writing array elements by index."""
        target = {}
        self.resolver.write(target, "tags[0]", "a")
        self.resolver.write(target, "tags[1]", "b")
        self.resolver.write(target, "tags[0]", "c")

        assert target == {"tags": ["c", "b"]}

    def test_write_index_gap_rejected(self):
        """Test that an index past the end is rejected."""
        with pytest.raises(TypeMismatchError):
            self.resolver.write({}, "tags[2]", "a")

    def test_write_root_rejected(self):
        """Test that the root path cannot be written."""
        with pytest.raises(MalformedPathError):
            self.resolver.write({}, "", "a")

    def test_write_accepts_parsed_path(self):
        """Test writing with a pre-parsed path."""
        target = {}
        self.resolver.write(target, parse_path("a.b"), 1)

        assert target == {"a": {"b": 1}}
