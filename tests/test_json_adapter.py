import pytest

from formtree._errors import ValidationError
from formtree.adapters import dump_tree, load_tree, tree_from_json, tree_to_json
from formtree.generic.element import Element


class TestJsonAdapter:
    def test_dump_shape(self, sample_tree):
        data = dump_tree(sample_tree)
        assert data[0] == {
            "id": "1",
            "type": "text",
            "label": "Name",
            "required": False,
            "properties": {},
        }
        assert [c["id"] for c in data[1]["children"]] == ["3", "4"]

    def test_round_trip(self, sample_tree):
        assert tree_from_json(tree_to_json(sample_tree)) == sample_tree
        assert load_tree(dump_tree(sample_tree)) == sample_tree

    def test_indent(self, sample_tree):
        assert "\n" in tree_to_json(sample_tree, indent=True)

    def test_load_none(self):
        assert load_tree(None) == []

    def test_invalid_json(self):
        with pytest.raises(ValidationError):
            tree_from_json("{not json")

    def test_json_object_is_not_a_tree(self):
        with pytest.raises(ValidationError):
            tree_from_json('{"id": "a", "type": "text"}')

    def test_invalid_element(self):
        with pytest.raises(ValidationError):
            tree_from_json('[{"id": "a"}]')

    def test_dump_accepts_mappings(self):
        assert dump_tree([{"id": "a", "type": "text"}])[0]["type"] == "text"

    def test_dump_elements(self):
        assert dump_tree([Element(id="a", kind="text")])[0]["id"] == "a"

    def test_null_extra_keys_survive_round_trip(self):
        data = dump_tree([{"id": "a", "type": "text", "hint": None, "order": 2}])
        assert data[0]["hint"] is None
        assert data[0]["order"] == 2
        assert "placeholder" not in data[0]
        assert dump_tree(load_tree(data)) == data
