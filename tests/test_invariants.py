"""
Invariant preservation under long random sequences of layout operations.

Each run starts from the default dashboard, applies a few hundred randomly
chosen operations with random arguments (including ids that do not exist)
and checks after every step that:

    - every id is unique
    - no group is empty or holds a single panel
    - every size lies within its panel's bounds
"""

import random

import pytest

from layout_engine import mutator
from layout_engine.models.validators import validate_layout

ZONES = ["top", "bottom", "left", "right", "center"]
AXES = ["horizontal", "vertical"]
KINDS = ["quick-stats", "recommendations", "activity-feed", "friend-activity", "unknown-kind"]


def _random_step(rng, tree, registry):
    ids = tree.panel_ids() + ["ghost"]
    root_ids = [child.id for child in tree.children]
    op = rng.choice([
        "add", "add", "remove", "config", "resize", "reorder",
        "group", "ungroup", "direction", "drop", "drop",
    ])

    if op == "add":
        return mutator.add_panel(tree, registry, rng.choice(KINDS), index=rng.randint(-1, len(root_ids) + 1))
    if op == "remove":
        return mutator.remove_panel(tree, rng.choice(ids))
    if op == "config":
        return mutator.update_panel_config(tree, rng.choice(ids), {"n": rng.randint(0, 9)})
    if op == "resize":
        return mutator.resize_panel(tree, rng.choice(ids), rng.uniform(-20, 140))
    if op == "reorder":
        return mutator.reorder_panels(tree, rng.choice(ids), rng.choice(ids))
    if op == "group":
        picked = rng.sample(root_ids, k=min(len(root_ids), rng.randint(1, 3))) if root_ids else []
        return mutator.create_group(tree, picked, rng.choice(AXES), rng.randint(0, len(root_ids)))
    if op == "ungroup":
        return mutator.ungroup_panel(tree, rng.choice(ids), rng.randint(0, len(root_ids)))
    if op == "direction":
        groups = [p.id for p in tree.children if p.is_composite]
        path = [rng.choice(groups)] if groups and rng.random() < 0.7 else []
        return mutator.change_layout_direction(tree, path, rng.choice(AXES))
    return mutator.smart_drop(tree, rng.choice(ids), rng.choice(ids), rng.choice(ZONES))


@pytest.mark.parametrize("seed", range(12))
def test_random_operation_sequences_preserve_invariants(seed, default_root, registry):
    rng = random.Random(seed)
    tree = default_root
    for step in range(250):
        tree = _random_step(rng, tree, registry)
        issues = validate_layout(tree)
        assert issues == [], f"seed={seed} step={step}: {issues}"


@pytest.mark.parametrize("seed", range(5))
def test_resize_always_within_bounds(seed, default_root):
    rng = random.Random(seed)
    tree = default_root
    ids = tree.panel_ids()
    for _ in range(100):
        panel_id = rng.choice(ids)
        tree = mutator.resize_panel(tree, panel_id, rng.uniform(-1000, 1000))
        panel = tree.find(panel_id)
        assert panel.min_size <= panel.size <= panel.max_size


def test_operations_never_mutate_their_input(default_root, registry):
    snapshot = default_root.to_wire()
    mutator.add_panel(default_root, registry, "quick-stats")
    mutator.remove_panel(default_root, "activity-panel")
    mutator.update_panel_config(default_root, "activity-panel", {"x": 1})
    mutator.resize_panel(default_root, "activity-panel", 45)
    mutator.reorder_panels(default_root, "activity-panel", "recommendations-panel")
    mutator.create_group(default_root, ["collection-panel", "main-content-group"], "horizontal")
    mutator.ungroup_panel(default_root, "activity-panel")
    mutator.change_layout_direction(default_root, ["main-content-group"], "vertical")
    mutator.smart_drop(default_root, "collection-panel", "activity-panel", "top")
    assert default_root.to_wire() == snapshot
