import pytest

from formtree.generic.element import Element
from formtree.tree.drop import DropTarget, apply_drop
from formtree.tree.traversal import find_by_id


class TestParse:
    @pytest.mark.parametrize("over_id", [None, "form-canvas", "drop-zone-root", 42])
    def test_root_append(self, over_id):
        target = DropTarget.parse(over_id)
        assert target.is_root
        assert target.index is None

    def test_numbered_zone(self):
        assert DropTarget.parse("drop-zone-3") == DropTarget(index=3)

    def test_container_column_zone(self):
        assert DropTarget.parse("drop-zone-element_1_abc-col-2") == DropTarget(
            container_id="element_1_abc", column_index=2
        )

    def test_container_zone(self):
        assert DropTarget.parse("drop-zone-element_1_abc") == DropTarget(
            container_id="element_1_abc"
        )

    def test_container_id_containing_marker(self):
        target = DropTarget.parse("drop-zone-a-col-b-col-1")
        assert target.container_id == "a-col-b"
        assert target.column_index == 1

    def test_non_numeric_column_is_part_of_id(self):
        target = DropTarget.parse("drop-zone-box-col-x")
        assert target.container_id == "box-col-x"
        assert target.column_index is None

    def test_direct_element_drop(self):
        target = DropTarget.parse("element_9")
        assert not target.is_root
        assert target.container_id == "element_9"


class TestApplyDrop:
    def test_canvas_appends(self, sample_tree):
        result = apply_drop(sample_tree, "form-canvas", Element(id="n", kind="text"))
        assert result[-1].id == "n"

    def test_numbered_zone_inserts(self, sample_tree):
        result = apply_drop(sample_tree, "drop-zone-1", Element(id="n", kind="text"))
        assert [e.id for e in result] == ["1", "n", "2", "5"]

    def test_column_zone_appends_to_container(self, sample_tree):
        result = apply_drop(sample_tree, "drop-zone-2-col-1", Element(id="n", kind="text"))
        assert [e.id for e in find_by_id(result, "2").children] == ["3", "4", "n"]

    def test_direct_drop_on_nested_container(self, sample_tree):
        result = apply_drop(sample_tree, "6", Element(id="n", kind="text"))
        assert [e.id for e in find_by_id(result, "6").children] == ["7", "n"]

    def test_drop_on_leaf_is_noop(self, sample_tree):
        assert apply_drop(sample_tree, "1", Element(id="n", kind="text")) == sample_tree
