"""
layout_engine/models/ -- Pydantic v2 models for the dashboard panel tree.

Submodules:
    base        Panel and Container models plus the wire round trip.
    validators  Structural invariant checks over a whole tree.
"""

from layout_engine.models.base import GROUP_KIND, Axis, Container, DropZone, Panel

__all__ = ["Axis", "Container", "DropZone", "GROUP_KIND", "Panel"]
