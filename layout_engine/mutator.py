"""
layout_engine/mutator.py -- Pure layout operations on the panel tree.

Every operation takes the current root container and returns a new one.
Nothing is modified in place: only the path from the root down to the
touched node is rebuilt, and untouched subtrees are shared between the old
and the new tree.  When an operation has nothing to do (unknown id, fewer
than two panels to group, ...) the input root is returned unchanged, so
callers can detect a no-op with ``new is old``.

Operations:
    add_panel                 new leaf from the registry, inserted at root level
    remove_panel              delete a panel anywhere, then cleanup
    update_panel_config       shallow-merge into a panel's settings
    resize_panel              set a panel's size, clamped to its bounds
    reorder_panels            move a panel to a sibling's index
    create_group              wrap root-level panels into a new group
    ungroup_panel             pull a panel out of its group back to root level
    change_layout_direction   set the axis of the root or of a nested group
    smart_drop                move a panel onto another, splitting or replacing it

Usage::

    from layout_engine import mutator

    root = mutator.create_group(root, ["p1", "p2"], "horizontal")
    root = mutator.smart_drop(root, "p3", "p1", "top")
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Mapping, Sequence

from layout_engine.cleanup import adopt_slot, cleanup
from layout_engine.models.base import GROUP_KIND, Axis, Container, DropZone, Panel
from layout_engine.registry import PanelRegistry
from layout_engine.utils import clamp, generate_panel_id

logger = logging.getLogger(__name__)

SPLIT_SIZE = 50.0

# zone -> (axis of the new group, dragged panel goes first)
_SPLIT_ZONES: dict[str, tuple[Axis, bool]] = {
    "top": ("vertical", True),
    "bottom": ("vertical", False),
    "left": ("horizontal", True),
    "right": ("horizontal", False),
}


# ------------------------------------------------------------------
# Tree helpers
# ------------------------------------------------------------------

def _with_children(container: Container, children: Iterable[Panel]) -> Container:
    return container.model_copy(update={"children": tuple(children)})


def _with_child(container: Container, index: int, child: Panel) -> Container:
    children = list(container.children)
    children[index] = child
    return _with_children(container, children)


def _resized(panel: Panel, size: float) -> Panel:
    size = clamp(size, panel.min_size, panel.max_size)
    if size == panel.size:
        return panel
    return panel.model_copy(update={"size": size})


def _replace_panel(
    container: Container,
    panel_id: str,
    fn: Callable[[Panel], Panel],
) -> Container:
    """Replace the panel with *panel_id* by ``fn(panel)``, rebuilding its path."""
    for i, child in enumerate(container.children):
        if child.id == panel_id:
            new_child = fn(child)
            if new_child is child:
                return container
            return _with_child(container, i, new_child)
        if child.nested is not None:
            nested = _replace_panel(child.nested, panel_id, fn)
            if nested is not child.nested:
                return _with_child(container, i, child.model_copy(update={"nested": nested}))
    return container


def _extract(
    container: Container,
    panel_id: str,
    *,
    collapse: bool,
) -> tuple[Container, Panel | None]:
    """Remove the panel with *panel_id* from wherever it sits.

    With ``collapse`` the group that held the panel is dissolved on the
    spot when it is left with one child (the survivor takes the group's
    slot) or with none.

    Returns the new container and the removed panel (None if not found).
    """
    index = container.index_of(panel_id)
    if index >= 0:
        children = list(container.children)
        removed = children.pop(index)
        return _with_children(container, children), removed

    for i, child in enumerate(container.children):
        if child.nested is None:
            continue
        nested, removed = _extract(child.nested, panel_id, collapse=collapse)
        if removed is None:
            continue
        children = list(container.children)
        if collapse and not nested.children:
            del children[i]
        elif collapse and len(nested.children) == 1:
            children[i] = adopt_slot(nested.children[0], child)
        else:
            children[i] = child.model_copy(update={"nested": nested})
        return _with_children(container, children), removed

    return container, None


def _insert_at_root(root: Container, panel: Panel, index: int) -> Container:
    children = list(root.children)
    children.insert(max(0, min(index, len(children))), panel)
    return _with_children(root, children)


def find_panel(root: Container, panel_id: str) -> Panel | None:
    return root.find(panel_id)


def find_parent(root: Container, panel_id: str) -> Container | None:
    """Return the container whose direct children include *panel_id*."""
    if root.index_of(panel_id) >= 0:
        return root
    for child in root.children:
        if child.nested is not None:
            parent = find_parent(child.nested, panel_id)
            if parent is not None:
                return parent
    return None


# ------------------------------------------------------------------
# Add / remove / configure / resize
# ------------------------------------------------------------------

def build_panel(
    registry: PanelRegistry,
    kind: str,
    settings: Mapping[str, Any] | None = None,
) -> Panel | None:
    """Create a new leaf panel of *kind* from its registry defaults.

    Returns None (and logs an error) when *kind* is not registered.
    """
    definition = registry.lookup(kind)
    if definition is None:
        logger.error("Panel kind '%s' not found in registry", kind)
        return None
    return Panel(
        id=generate_panel_id(),
        kind=kind,
        size=definition.default_size,
        min_size=definition.min_size,
        max_size=definition.max_size,
        settings={**definition.default_settings, **(settings or {})},
    )


def insert_panel(root: Container, panel: Panel, index: int | None = None) -> Container:
    """Insert *panel* into the root's children.

    Appends when *index* is omitted or outside ``0..len(children)``.
    """
    children = list(root.children)
    if index is not None and 0 <= index <= len(children):
        children.insert(index, panel)
    else:
        children.append(panel)
    return _with_children(root, children)


def add_panel(
    root: Container,
    registry: PanelRegistry,
    kind: str,
    settings: Mapping[str, Any] | None = None,
    index: int | None = None,
) -> Container:
    """Add a new panel of *kind* at root level.

    New panels always go into the root container, even when a nested
    group is the one being edited.
    """
    panel = build_panel(registry, kind, settings)
    if panel is None:
        return root
    return insert_panel(root, panel, index)


def add_panel_or_raise(
    root: Container,
    registry: PanelRegistry,
    kind: str,
    settings: Mapping[str, Any] | None = None,
    index: int | None = None,
) -> Container:
    """Like :func:`add_panel` but raises UnknownPanelKindError for unknown kinds."""
    registry.require(kind)
    return add_panel(root, registry, kind, settings, index)


def remove_panel(root: Container, panel_id: str) -> Container:
    """Delete *panel_id* from wherever it sits, then restore invariants."""
    new_root, removed = _extract(root, panel_id, collapse=False)
    if removed is None:
        return root
    return cleanup(new_root)


def update_panel_config(
    root: Container,
    panel_id: str,
    settings: Mapping[str, Any],
) -> Container:
    """Shallow-merge *settings* into the panel's existing settings."""
    if not settings:
        return root
    return _replace_panel(
        root, panel_id,
        lambda panel: panel.model_copy(update={"settings": {**panel.settings, **settings}}),
    )


def resize_panel(root: Container, panel_id: str, size: float) -> Container:
    """Set the panel's size, clamped to ``[min_size, max_size]``."""
    return _replace_panel(root, panel_id, lambda panel: _resized(panel, size))


# ------------------------------------------------------------------
# Reorder
# ------------------------------------------------------------------

def reorder_panels(root: Container, active_id: str, over_id: str) -> Container:
    """Move *active_id* to the index of *over_id* when both are siblings.

    Panels in different containers are never moved; the search descends
    into nested groups until it finds a container holding both.
    """
    if active_id == over_id:
        return root
    return _reorder_in(root, active_id, over_id)


def _reorder_in(container: Container, active_id: str, over_id: str) -> Container:
    old_index = container.index_of(active_id)
    new_index = container.index_of(over_id)
    if old_index >= 0 and new_index >= 0:
        children = list(container.children)
        children.insert(new_index, children.pop(old_index))
        return _with_children(container, children)

    for i, child in enumerate(container.children):
        if child.nested is None:
            continue
        nested = _reorder_in(child.nested, active_id, over_id)
        if nested is not child.nested:
            return _with_child(container, i, child.model_copy(update={"nested": nested}))
    return container


# ------------------------------------------------------------------
# Group / ungroup / direction
# ------------------------------------------------------------------

def create_group(
    root: Container,
    panel_ids: Iterable[str],
    axis: Axis,
    index: int = 0,
) -> Container:
    """Wrap root-level panels into a new group.

    The grouped panels share the group evenly (``100 / count`` each, within
    their own bounds) and the group's size is the sum of their original
    sizes.  The group is bounded by 0 and 100, widened to its size when the
    grouped panels add up to more.  Only direct children of the root are
    considered; fewer than two matches leaves the tree unchanged.
    """
    wanted = set(panel_ids)
    picked = [child for child in root.children if child.id in wanted]
    if len(picked) < 2:
        logger.debug("create_group needs at least two root panels, found %d", len(picked))
        return root

    share = 100.0 / len(picked)
    size = sum(panel.size for panel in picked)
    group = Panel(
        id=generate_panel_id(),
        kind=GROUP_KIND,
        size=size,
        min_size=0.0,
        # Sizes of root panels need not sum to 100
        max_size=max(100.0, size),
        nested=Container(axis=axis, children=tuple(_resized(p, share) for p in picked)),
    )
    remaining = [child for child in root.children if child.id not in wanted]
    return _insert_at_root(_with_children(root, remaining), group, index)


def ungroup_panel(root: Container, panel_id: str, index: int = 0) -> Container:
    """Move *panel_id* out of its group into the root at *index*.

    A group left with a single panel dissolves in place; that panel takes
    the group's slot size.  A group left empty disappears.
    """
    new_root, removed = _extract(root, panel_id, collapse=True)
    if removed is None:
        return root
    return _insert_at_root(new_root, removed, index)


def change_layout_direction(root: Container, path: Sequence[str], axis: Axis) -> Container:
    """Set the axis of the root (empty *path*) or of the group at the end of *path*.

    *path* lists group ids from the root down.  A path that does not lead to
    a group leaves the tree unchanged.
    """
    if not path:
        if root.axis == axis:
            return root
        return root.model_copy(update={"axis": axis})
    return _set_axis(root, list(path), axis)


def _set_axis(container: Container, path: list[str], axis: Axis) -> Container:
    index = container.index_of(path[0])
    if index < 0:
        return container
    child = container.children[index]
    if child.nested is None:
        return container

    if len(path) == 1:
        if child.nested.axis == axis:
            return container
        nested = child.nested.model_copy(update={"axis": axis})
    else:
        nested = _set_axis(child.nested, path[1:], axis)
        if nested is child.nested:
            return container
    return _with_child(container, index, child.model_copy(update={"nested": nested}))


# ------------------------------------------------------------------
# Smart drop
# ------------------------------------------------------------------

def smart_drop(root: Container, dragged_id: str, target_id: str, zone: DropZone) -> Container:
    """Drop *dragged_id* onto *target_id* at *zone*.

    ``center`` replaces the target with the dragged panel; the target is
    discarded and the dragged panel keeps its own size.  Edge zones replace
    the target with a new group in the target's slot: ``top``/``bottom``
    make a vertical group, ``left``/``right`` a horizontal one, and the
    dragged panel comes first for ``top`` and ``left``.  Both halves start
    at 50.
    """
    if zone != "center" and zone not in _SPLIT_ZONES:
        raise ValueError(f"Unknown drop zone: {zone!r}")
    if dragged_id == target_id:
        return root
    dragged = root.find(dragged_id)
    if dragged is None or root.find(target_id) is None:
        return root
    if dragged.nested is not None and dragged.nested.find(target_id) is not None:
        logger.debug("Ignoring drop of %s into its own subtree", dragged_id)
        return root

    extracted, _ = _extract(root, dragged_id, collapse=True)
    if extracted.find(target_id) is None:
        # The target was the group that dissolved during extraction.
        logger.debug("Drop target %s vanished during extraction", target_id)
        return root

    if zone == "center":
        inserted = _replace_panel(extracted, target_id, lambda target: dragged)
    else:
        axis, dragged_first = _SPLIT_ZONES[zone]

        def _split(target: Panel) -> Panel:
            pair = (_resized(dragged, SPLIT_SIZE), _resized(target, SPLIT_SIZE))
            if not dragged_first:
                pair = pair[::-1]
            return Panel(
                id=generate_panel_id(),
                kind=GROUP_KIND,
                size=target.size,
                min_size=target.min_size,
                max_size=target.max_size,
                nested=Container(axis=axis, children=pair),
            )

        inserted = _replace_panel(extracted, target_id, _split)

    return cleanup(inserted)
