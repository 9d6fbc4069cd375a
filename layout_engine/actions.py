"""
layout_engine/actions.py -- Typed layout actions and the reducer.

Gesture sources and remote clients describe an edit as a small JSON
object whose ``type`` field names the operation::

    {"type": "smart_drop", "dragged_id": "p3", "target_id": "p1", "zone": "top"}

``parse_action`` validates such a dict into one of the action models
below (raising ``pydantic.ValidationError`` when malformed) and ``reduce``
applies it to a tree.

Usage::

    from layout_engine.actions import parse_action, reduce

    action = parse_action(payload)
    root = reduce(root, action, registry)
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from layout_engine import mutator
from layout_engine.cleanup import normalize_layout
from layout_engine.models.base import Axis, Container, DropZone
from layout_engine.registry import PanelRegistry

logger = logging.getLogger(__name__)


class _Action(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class AddPanelAction(_Action):
    type: Literal["add_panel"] = "add_panel"
    kind: str
    settings: Optional[dict[str, Any]] = None
    index: Optional[int] = None


class RemovePanelAction(_Action):
    type: Literal["remove_panel"] = "remove_panel"
    panel_id: str


class UpdatePanelConfigAction(_Action):
    type: Literal["update_panel_config"] = "update_panel_config"
    panel_id: str
    settings: dict[str, Any]


class ResizePanelAction(_Action):
    type: Literal["resize_panel"] = "resize_panel"
    panel_id: str
    size: float


class ReorderPanelsAction(_Action):
    type: Literal["reorder_panels"] = "reorder_panels"
    active_id: str
    over_id: str


class CreateGroupAction(_Action):
    type: Literal["create_group"] = "create_group"
    panel_ids: list[str]
    axis: Axis
    index: int = 0


class UngroupPanelAction(_Action):
    type: Literal["ungroup_panel"] = "ungroup_panel"
    panel_id: str
    index: int = 0


class ChangeLayoutDirectionAction(_Action):
    type: Literal["change_layout_direction"] = "change_layout_direction"
    path: list[str] = Field(default_factory=list)
    axis: Axis


class SmartDropAction(_Action):
    type: Literal["smart_drop"] = "smart_drop"
    dragged_id: str
    target_id: str
    zone: DropZone


class SetLayoutAction(_Action):
    type: Literal["set_layout"] = "set_layout"
    layout: Container


LayoutAction = Annotated[
    Union[
        AddPanelAction,
        RemovePanelAction,
        UpdatePanelConfigAction,
        ResizePanelAction,
        ReorderPanelsAction,
        CreateGroupAction,
        UngroupPanelAction,
        ChangeLayoutDirectionAction,
        SmartDropAction,
        SetLayoutAction,
    ],
    Field(discriminator="type"),
]

_ACTION_ADAPTER: TypeAdapter[LayoutAction] = TypeAdapter(LayoutAction)


def parse_action(data: dict[str, Any]) -> LayoutAction:
    """Validate a JSON-style dict into a layout action."""
    return _ACTION_ADAPTER.validate_python(data)


def reduce(
    root: Container,
    action: LayoutAction,
    registry: PanelRegistry | None = None,
) -> Container:
    """Apply *action* to *root* and return the resulting tree.

    A ``set_layout`` tree is cleaned up first; raises InvalidLayoutError
    when it still breaks the layout invariants.
    """
    if isinstance(action, AddPanelAction):
        if registry is None:
            raise ValueError("add_panel actions need a panel registry")
        return mutator.add_panel(root, registry, action.kind, action.settings, action.index)
    if isinstance(action, RemovePanelAction):
        return mutator.remove_panel(root, action.panel_id)
    if isinstance(action, UpdatePanelConfigAction):
        return mutator.update_panel_config(root, action.panel_id, action.settings)
    if isinstance(action, ResizePanelAction):
        return mutator.resize_panel(root, action.panel_id, action.size)
    if isinstance(action, ReorderPanelsAction):
        return mutator.reorder_panels(root, action.active_id, action.over_id)
    if isinstance(action, CreateGroupAction):
        return mutator.create_group(root, action.panel_ids, action.axis, action.index)
    if isinstance(action, UngroupPanelAction):
        return mutator.ungroup_panel(root, action.panel_id, action.index)
    if isinstance(action, ChangeLayoutDirectionAction):
        return mutator.change_layout_direction(root, action.path, action.axis)
    if isinstance(action, SmartDropAction):
        return mutator.smart_drop(root, action.dragged_id, action.target_id, action.zone)
    if isinstance(action, SetLayoutAction):
        return normalize_layout(action.layout)

    logger.warning("Ignoring unsupported action %r", action)
    return root
