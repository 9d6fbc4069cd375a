"""
layout_engine/models/validators.py -- Structural invariant checks.

Pydantic validation only guarantees that each node is well formed.  These
validators look at the tree as a whole and report the invariants every
layout operation is expected to preserve:

    - panel ids are unique across the entire tree
    - no nested container is empty
    - no nested container holds a single child
    - every panel's size lies within [min_size, max_size]

The root container is exempt from the cardinality rules; it is allowed to
be empty or to hold one panel.

Usage::

    from layout_engine.models.validators import validate_layout

    issues = validate_layout(root)
    if issues:
        ...
"""

from __future__ import annotations

import logging
from collections import Counter

from layout_engine.models.base import Container

logger = logging.getLogger(__name__)


def find_duplicate_ids(root: Container) -> list[str]:
    """Return ids that occur more than once, in first-seen order."""
    counts = Counter(root.panel_ids())
    return [panel_id for panel_id, count in counts.items() if count > 1]


def validate_layout(root: Container, *, check_sizes: bool = True) -> list[str]:
    """Check the tree-wide invariants of *root*.

    With ``check_sizes=False`` only the structural rules (unique ids, group
    cardinality) are checked.

    Returns
    -------
    list[str]
        Human-readable messages, one per violation.  Empty when valid.
    """
    issues: list[str] = []

    for panel_id in find_duplicate_ids(root):
        issues.append(f"Panel id '{panel_id}' appears more than once in the layout.")

    for panel in root.iter_panels():
        if check_sizes and not (panel.min_size <= panel.size <= panel.max_size):
            issues.append(
                f"Panel '{panel.id}' has size {panel.size}, outside its bounds "
                f"[{panel.min_size}, {panel.max_size}]."
            )
        if panel.nested is None:
            continue
        count = len(panel.nested.children)
        if count == 0:
            issues.append(f"Group '{panel.id}' has an empty container.")
        elif count == 1:
            issues.append(
                f"Group '{panel.id}' wraps a single panel "
                f"('{panel.nested.children[0].id}') and should be flattened."
            )

    return issues


def is_valid_layout(root: Container) -> bool:
    return not validate_layout(root)
