"""
Tests for layout_engine/binding.py -- renderer bindings and the text outline.
"""

from layout_engine.binding import PanelBinding, format_tree, leaf_bindings, render_leaves


class _RecordingRenderer:
    def __init__(self):
        self.calls = []

    def render(self, kind, settings):
        self.calls.append((kind, settings))
        return f"<{kind}>"


class TestLeafBindings:
    def test_only_leaves_in_visual_order(self, default_root):
        bindings = leaf_bindings(default_root)
        assert [b.id for b in bindings] == [
            "collection-panel", "recommendations-panel", "activity-panel",
        ]
        assert bindings[0] == PanelBinding(
            "collection-panel",
            "collection-albums",
            {"showHeader": True, "headerTitle": "Your Collection"},
        )

    def test_settings_are_copies(self, default_root):
        binding = leaf_bindings(default_root)[0]
        binding.settings["headerTitle"] = "changed"
        assert default_root.find("collection-panel").settings["headerTitle"] == "Your Collection"

    def test_render_leaves(self, default_root):
        renderer = _RecordingRenderer()
        widgets = render_leaves(default_root, renderer)
        assert widgets == {
            "collection-panel": "<collection-albums>",
            "recommendations-panel": "<recommendations>",
            "activity-panel": "<activity-feed>",
        }
        assert len(renderer.calls) == 3


class TestFormatTree:
    def test_outline(self, default_root):
        lines = format_tree(default_root).splitlines()
        assert lines[0] == "root [vertical]"
        assert lines[1] == "  collection-panel  collection-albums  35 (25-50)"
        assert lines[2] == "  main-content-group  group  65 (50-100) [horizontal]"
        assert lines[3].startswith("    recommendations-panel")
        assert len(lines) == 5
