"""
layout_engine/cleanup.py -- Invariant-restoring normalization pass.

Removing or moving a panel can leave a group with no children, or with a
single child.  ``cleanup`` walks the whole tree bottom-up and repairs both
cases:

    - a group whose container is empty is dropped from its parent
    - a group whose container holds one panel is replaced, at the same
      position, by that panel; the panel takes over the group's size and
      size bounds so the slot keeps its share of the parent

Containers with two or more children keep their order and count.  The
root container itself is never dissolved.

``normalize_layout`` is the entry point for whole trees that did not come
from the layout operations (a saved file, a ``set_layout`` action): it runs
``cleanup`` and rejects what cleanup cannot repair, such as duplicate ids
or sizes outside their bounds.
"""

from __future__ import annotations

import logging

from layout_engine.errors import InvalidLayoutError
from layout_engine.models.base import Container, Panel
from layout_engine.models.validators import validate_layout

logger = logging.getLogger(__name__)


def adopt_slot(panel: Panel, slot: Panel) -> Panel:
    """Return *panel* resized to occupy *slot*'s place in its parent."""
    return panel.model_copy(
        update={"size": slot.size, "min_size": slot.min_size, "max_size": slot.max_size}
    )


def cleanup(root: Container) -> Container:
    """Return *root* with empty and single-child groups collapsed.

    Returns the same object when nothing needed fixing.
    """
    children, changed = _clean_children(root.children)
    if not changed:
        return root
    return root.model_copy(update={"children": children})


def _clean_children(children: tuple[Panel, ...]) -> tuple[tuple[Panel, ...], bool]:
    result: list[Panel] = []
    changed = False

    for child in children:
        if child.nested is None:
            result.append(child)
            continue

        nested = cleanup(child.nested)
        count = len(nested.children)

        if count == 0:
            logger.debug("Dropping empty group %s", child.id)
            changed = True
        elif count == 1:
            logger.debug("Flattening single-child group %s", child.id)
            result.append(adopt_slot(nested.children[0], child))
            changed = True
        elif nested is not child.nested:
            result.append(child.model_copy(update={"nested": nested}))
            changed = True
        else:
            result.append(child)

    return tuple(result), changed


def normalize_layout(root: Container) -> Container:
    """Return *root* cleaned up, or raise InvalidLayoutError.

    Returns the same object when *root* already satisfies every invariant.
    """
    cleaned = cleanup(root)
    issues = validate_layout(cleaned)
    if issues:
        raise InvalidLayoutError(issues)
    return cleaned
