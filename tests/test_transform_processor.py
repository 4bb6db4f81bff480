"""Tests for the transformation executor."""

import pytest
from json_reshaper.mappers import FunctionMapper, HttpsAppender
from json_reshaper.models.rules import (
    TransformationConfig,
    copy,
    copy_array_of_objects,
    copy_field,
    copy_fields,
    merge_object,
)
from json_reshaper.processors.transform_processor import TransformProcessor
from json_reshaper.types import TypeMismatchError, ValidationError
from json_reshaper.validators import FunctionValidator, NonEmptyString, Required


class TestTransformProcessor:
    """Tests for TransformProcessor class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.processor = TransformProcessor()

    def test_basic_transformation(self, gym_data):
        """Test copying fields, renaming and copying a subtree."""
        config = (TransformationConfig()
                  .add(copy_fields("id", "slug"))
                  .add(copy_field("name", "title"))
                  .add(copy("images")))

        result = self.processor.process(gym_data, config)

        assert result == {
            "id": 1,
            "slug": "raw-metal",
            "title": "Raw Metal Gym",
            "images": {
                "top": "//images/top.jpg",
                "background": "//images/background.png"
            }
        }

    def test_output_order_follows_rules(self, gym_data):
        """Test that field order is rule order, not source order."""
        config = (TransformationConfig()
                  .add(copy("images"))
                  .add(copy_field("name", "title"))
                  .add(copy_field("id")))

        result = self.processor.process(gym_data, config)

        assert list(result) == ["images", "title", "id"]

    def test_advanced_transformation(self, gym_data):
        """Test object merge plus a validated, mapped copy into a new nesting."""
        config = (TransformationConfig()
                  .add(copy_field("id"))
                  .add(merge_object("texts"))
                  .add(copy_field("images.top", "media.pictures.headerBackground")
                       .with_validators(NonEmptyString)
                       .with_mapper(HttpsAppender)))

        result = self.processor.process(gym_data, config)

        assert result == {
            "id": 1,
            "name": "Raw metal gym",
            "description": "The best gym in town. Come and visit us today!",
            "media": {
                "pictures": {
                    "headerBackground": "https://images/top.jpg"
                }
            }
        }

    def test_missing_source_is_skipped(self, gym_data):
        """Test that a copy from a missing path writes nothing."""
        config = TransformationConfig().add(copy_field("phone")).add(copy_field("id"))

        assert self.processor.process(gym_data, config) == {"id": 1}

    def test_required_validator_rejects_missing(self, gym_data):
        """Test that a presence validator turns a missing field into an error."""
        config = (TransformationConfig()
                  .add(copy_field("id"))
                  .add(copy_field("phone").with_validators(Required)))

        with pytest.raises(ValidationError) as exc_info:
            self.processor.process(gym_data, config)

        assert exc_info.value.path == "phone"
        assert exc_info.value.rule_index == 1
        assert exc_info.value.validator == "required"

    def test_validator_rejects_empty_string(self):
        """Test that the first failing validator aborts the transform."""
        config = TransformationConfig().add(copy_field("name").with_validators(NonEmptyString))

        with pytest.raises(ValidationError) as exc_info:
            self.processor.process({"name": "  "}, config)

        assert "name" in str(exc_info.value)
        assert "rule #0" in str(exc_info.value)

    def test_validators_run_in_order(self):
        """Test that validators after the first failure are not consulted."""
        seen = []

        def record(name, result):
            def check(node, path):
                seen.append(name)
                return result
            return FunctionValidator(check, name=name)

        config = TransformationConfig().add(
            copy_field("a").with_validators(record("first", False), record("second", True))
        )

        with pytest.raises(ValidationError):
            self.processor.process({"a": 1}, config)
        assert seen == ["first"]

    def test_later_rule_overwrites(self, gym_data):
        """Test last-write-wins between rules."""
        config = (TransformationConfig()
                  .add(copy_field("name", "title"))
                  .add(copy_field("slug", "title")))

        assert self.processor.process(gym_data, config) == {"title": "raw-metal"}

    def test_mapper_receives_copy(self, gym_data):
        """Test that mappers receive a copy and never touch the source."""
        config = TransformationConfig().add(
            copy_field("images").with_mapper(FunctionMapper(lambda node: node.pop("top")))
        )

        result = self.processor.process(gym_data, config)

        assert result == {"images": "//images/top.jpg"}
        assert "top" in gym_data["images"]

    def test_merge_object_type_mismatch(self, gym_data):
        """Test that merging a non-object fails with the rule index."""
        config = TransformationConfig().add(copy_field("id")).add(merge_object("name"))

        with pytest.raises(TypeMismatchError) as exc_info:
            self.processor.process(gym_data, config)

        assert exc_info.value.rule_index == 1
        assert exc_info.value.path == "name"

    def test_merge_missing_object_skipped(self, gym_data):
        """Test that merging a missing object writes nothing."""
        config = TransformationConfig().add(merge_object("extras"))

        assert self.processor.process(gym_data, config) == {}

    def test_array_reconcile_transform(self, gym_data):
        """Test re-copying an array of objects element by element."""
        features = TransformationConfig().add(copy_field("description", "text"))
        config = TransformationConfig().add(copy_array_of_objects("features", features, "id"))

        result = self.processor.process(gym_data, config)

        assert result == {
            "features": [
                {"id": 1, "text": "Convenient location"},
                {"id": 2, "text": "Lots of space"}
            ]
        }

    def test_array_reconcile_requires_array(self, gym_data):
        """Test that a non-array source fails."""
        config = TransformationConfig().add(
            copy_array_of_objects("images", TransformationConfig(), "id")
        )

        with pytest.raises(TypeMismatchError):
            self.processor.process(gym_data, config)

    def test_array_reconcile_requires_objects(self):
        """Test that array elements must be objects."""
        config = TransformationConfig().add(
            copy_array_of_objects("tags", TransformationConfig(), "id")
        )

        with pytest.raises(TypeMismatchError):
            self.processor.process({"tags": ["a"]}, config)

    def test_nested_failure_reports_rule_chain(self):
        """Test that a failing nested rule reports the top-level rule and the element path."""
        nested = (TransformationConfig()
                  .add(copy_field("id"))
                  .add(copy_field("name").with_validators(NonEmptyString)))
        config = (TransformationConfig()
                  .add(copy_field("title"))
                  .add(copy_field("subtitle"))
                  .add(copy_array_of_objects("rows", nested, "id")))

        with pytest.raises(ValidationError) as exc_info:
            self.processor.process({"title": "t", "rows": [{"id": 1, "name": ""}]}, config)

        assert exc_info.value.rule_index == 2
        assert exc_info.value.rule_path == (2, 1)
        assert exc_info.value.path == "rows[0].name"
        assert "rule #2.1" in str(exc_info.value)

    def test_source_is_not_mutated(self, gym_data):
        """Test that transforming leaves the source untouched."""
        snapshot = repr(gym_data)
        config = TransformationConfig().add(copy("images")).add(merge_object("texts"))

        result = self.processor.process(gym_data, config)
        result["images"]["top"] = "changed"

        assert repr(gym_data) == snapshot

    def test_empty_config(self, gym_data):
        """Test that no rules yield an empty object."""
        assert self.processor.process(gym_data, TransformationConfig()) == {}

    def test_rejects_non_config(self, gym_data):
        """Test that a plain list is not accepted as configuration."""
        with pytest.raises(TypeError):
            self.processor.process(gym_data, [copy_field("id")])

    def test_nested_failure_differs_from_top_level(self):
        """Test that a nested failure is not reported like a top-level one."""
        nested = TransformationConfig().add(copy_field("name").with_validators(NonEmptyString))
        config = (TransformationConfig()
                  .add(copy_field("name").with_validators(NonEmptyString))
                  .add(copy_array_of_objects("rows", nested, "id")))
        source = {"name": "ok", "rows": [{"id": 1, "name": "ok"}, {"id": 2, "name": ""}]}

        with pytest.raises(ValidationError) as exc_info:
            self.processor.process(source, config)

        assert exc_info.value.rule_index == 1
        assert exc_info.value.rule_path == (1, 0)
        assert exc_info.value.path == "rows[1].name"

    def test_doubly_nested_failure_path(self):
        """Test path qualification through two reconciled arrays."""
        items = TransformationConfig().add(copy_field("t").with_validators(NonEmptyString))
        sections = TransformationConfig().add(copy_array_of_objects("items", items, "id"))
        config = TransformationConfig().add(copy_array_of_objects("sections", sections, "id"))
        source = {"sections": [{"id": "s1", "items": [{"id": 1, "t": ""}]}]}

        with pytest.raises(ValidationError) as exc_info:
            self.processor.process(source, config)

        assert exc_info.value.rule_path == (0, 0, 0)
        assert exc_info.value.path == "sections[0].items[0].t"

    def test_presence_validator_accepting_absence_writes_nothing(self):
        """Test that an accepted missing value is never written."""
        always = FunctionValidator(lambda node, path: True, name="always", requires_presence=True)
        config = TransformationConfig().add(copy_field("x").with_validators(always))

        assert self.processor.process({}, config) == {}

    def test_mapper_error_is_wrapped(self, gym_data):
        """Test that a failing mapper surfaces as TypeMismatchError with context."""
        def explode(node):
            raise ValueError("bad")

        config = (TransformationConfig()
                  .add(copy_field("id"))
                  .add(copy_field("name").with_mapper(FunctionMapper(explode))))

        with pytest.raises(TypeMismatchError) as exc_info:
            self.processor.process(gym_data, config)

        assert exc_info.value.rule_index == 1
        assert exc_info.value.path == "name"
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_validator_error_is_wrapped(self, gym_data):
        """Test that a validator raising on odd input surfaces as ValidationError."""
        def shorter_than_five(node, path):
            return len(node) < 5

        config = TransformationConfig().add(
            copy_field("id").with_validators(FunctionValidator(shorter_than_five))
        )

        with pytest.raises(ValidationError) as exc_info:
            self.processor.process(gym_data, config)

        assert exc_info.value.rule_index == 0
        assert exc_info.value.validator == "shorter_than_five"
        assert isinstance(exc_info.value.__cause__, TypeError)
