"""
layout_engine/binding.py -- What the engine hands to content renderers.

The engine never looks inside a panel's settings.  For every leaf panel it
exposes a :class:`PanelBinding` (id, kind, settings) and leaves the drawing
to whatever :class:`ContentRenderer` the host plugs in.
"""

from __future__ import annotations

from typing import Any, NamedTuple, Protocol

from layout_engine.models.base import Container


class PanelBinding(NamedTuple):
    id: str
    kind: str
    settings: dict[str, Any]


class ContentRenderer(Protocol):
    """Host-side widget factory for one or more panel kinds."""

    def render(self, kind: str, settings: dict[str, Any]) -> Any:
        ...


def leaf_bindings(root: Container) -> list[PanelBinding]:
    """Return a binding for every leaf panel, depth-first in visual order."""
    return [
        PanelBinding(panel.id, panel.kind, dict(panel.settings))
        for panel in root.iter_panels()
        if panel.is_leaf
    ]


def render_leaves(root: Container, renderer: ContentRenderer) -> dict[str, Any]:
    """Render every leaf with *renderer*; returns ``{panel_id: widget}``."""
    return {
        binding.id: renderer.render(binding.kind, binding.settings)
        for binding in leaf_bindings(root)
    }


def format_tree(root: Container) -> str:
    """Return an indented text outline of the layout.

    Example::

        root [vertical]
          collection-panel  collection-albums  35 (25-50)
          main-content-group  group  65 (50-100) [horizontal]
            recommendations-panel  recommendations  70 (50-100)
    """
    lines = [f"root [{root.axis}]"]
    _format_children(root, 1, lines)
    return "\n".join(lines)


def _format_children(container: Container, depth: int, lines: list[str]) -> None:
    indent = "  " * depth
    for panel in container.children:
        line = (
            f"{indent}{panel.id}  {panel.kind}  {panel.size:g} "
            f"({panel.min_size:g}-{panel.max_size:g})"
        )
        if panel.nested is not None:
            lines.append(f"{line} [{panel.nested.axis}]")
            _format_children(panel.nested, depth + 1, lines)
        else:
            lines.append(line)
