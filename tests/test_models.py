"""
Tests for layout_engine/models/ -- Panel and Container models, wire format.
"""

import pytest
from pydantic import ValidationError

from layout_engine.models.base import Container, Panel
from layout_builders import group, leaf, root


class TestPanel:
    def test_defaults(self):
        panel = Panel(id="a", kind="quick-stats")
        assert panel.size == 50
        assert panel.min_size == 0
        assert panel.max_size == 100
        assert panel.settings == {}
        assert panel.nested is None
        assert panel.is_leaf
        assert not panel.is_composite

    def test_camel_case_aliases_accepted(self):
        panel = Panel.model_validate(
            {"id": "a", "kind": "k", "size": 30, "minSize": 10, "maxSize": 60}
        )
        assert panel.min_size == 10
        assert panel.max_size == 60

    def test_min_above_max_rejected(self):
        with pytest.raises(ValidationError):
            Panel(id="a", kind="k", min_size=80, max_size=20)

    def test_panels_are_frozen(self):
        panel = leaf("a")
        with pytest.raises(ValidationError):
            panel.size = 10

    def test_composite_flag(self):
        g = group("g", "vertical", leaf("a"), leaf("b"))
        assert g.is_composite
        assert not g.is_leaf


class TestContainer:
    def test_invalid_axis_rejected(self):
        with pytest.raises(ValidationError):
            Container(axis="diagonal")

    def test_iter_panels_is_depth_first(self):
        tree = root(
            "vertical",
            leaf("a"),
            group("g", "horizontal", leaf("b"), group("h", "vertical", leaf("c"), leaf("d"))),
            leaf("e"),
        )
        assert tree.panel_ids() == ["a", "g", "b", "h", "c", "d", "e"]

    def test_find_nested_panel(self):
        tree = root("vertical", leaf("a"), group("g", "horizontal", leaf("b"), leaf("c")))
        assert tree.find("c").id == "c"
        assert tree.find("missing") is None

    def test_index_of_direct_child_only(self):
        tree = root("vertical", leaf("a"), group("g", "horizontal", leaf("b"), leaf("c")))
        assert tree.index_of("g") == 1
        assert tree.index_of("b") == -1


class TestWireFormat:
    def test_to_wire_uses_camel_case_and_omits_empty_nested(self):
        wire = leaf("a", 30, 10, 60, showHeader=True).to_wire()
        assert wire == {
            "id": "a",
            "kind": "quick-stats",
            "size": 30,
            "minSize": 10,
            "maxSize": 60,
            "settings": {"showHeader": True},
        }

    def test_roundtrip_preserves_tree(self, default_root):
        restored = Container.from_wire(default_root.to_wire())
        assert restored == default_root

    def test_from_wire_ignores_unknown_keys(self):
        tree = Container.from_wire({
            "axis": "horizontal",
            "children": [{"id": "a", "kind": "k", "legacy": 1}],
            "version": 3,
        })
        assert tree.children[0].id == "a"

    def test_from_wire_rejects_missing_id(self):
        with pytest.raises(ValidationError):
            Container.from_wire({"axis": "vertical", "children": [{"kind": "k"}]})
