"""
layout_engine/models/base.py -- Pydantic v2 models for the panel tree.

The tree is made of two mutually recursive models:

    Container   an axis plus an ordered tuple of child panels
    Panel       a leaf (bound to one content renderer) or, when ``nested``
                is set, a composite wrapping another Container

Both models are frozen.  Every layout operation builds new instances along
the path it touches and shares the untouched subtrees, so a tree handed to
a renderer is never mutated behind its back.

The wire form (``to_wire`` / ``from_wire``) is plain nested dicts with
camelCase size-bound keys::

    {"axis": "vertical",
     "children": [{"id": "a", "kind": "quick-stats", "size": 50,
                   "minSize": 20, "maxSize": 80, "settings": {}}, ...]}
"""

from __future__ import annotations

from typing import Any, Iterator, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

Axis = Literal["horizontal", "vertical"]
DropZone = Literal["top", "bottom", "left", "right", "center"]

# Kind assigned to composite panels created by grouping or splitting.
GROUP_KIND = "group"


class Panel(BaseModel):
    """A node of the layout tree."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str
    kind: str
    size: float = 50.0
    min_size: float = Field(default=0.0, alias="minSize")
    max_size: float = Field(default=100.0, alias="maxSize")
    settings: dict[str, Any] = Field(default_factory=dict)
    nested: Optional[Container] = None

    @model_validator(mode="after")
    def _check_bounds(self) -> Panel:
        if self.min_size > self.max_size:
            raise ValueError(
                f"Panel '{self.id}': minSize {self.min_size} exceeds maxSize {self.max_size}"
            )
        return self

    @property
    def is_composite(self) -> bool:
        return self.nested is not None

    @property
    def is_leaf(self) -> bool:
        return self.nested is None

    def to_wire(self) -> dict[str, Any]:
        """Return the plain-dict wire representation of this panel."""
        data: dict[str, Any] = {
            "id": self.id,
            "kind": self.kind,
            "size": self.size,
            "minSize": self.min_size,
            "maxSize": self.max_size,
            "settings": dict(self.settings),
        }
        if self.nested is not None:
            data["nested"] = self.nested.to_wire()
        return data


class Container(BaseModel):
    """The ordered, axis-aligned children of the root or of a composite panel."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    axis: Axis = "vertical"
    children: tuple[Panel, ...] = ()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def iter_panels(self) -> Iterator[Panel]:
        """Yield every panel in the tree, depth-first, parents before children."""
        for child in self.children:
            yield child
            if child.nested is not None:
                yield from child.nested.iter_panels()

    def panel_ids(self) -> list[str]:
        return [panel.id for panel in self.iter_panels()]

    def find(self, panel_id: str) -> Panel | None:
        """Return the panel with *panel_id* anywhere in the tree, or None."""
        for panel in self.iter_panels():
            if panel.id == panel_id:
                return panel
        return None

    def index_of(self, panel_id: str) -> int:
        """Index of a direct child, or -1."""
        for i, child in enumerate(self.children):
            if child.id == panel_id:
                return i
        return -1

    # ------------------------------------------------------------------
    # Wire format
    # ------------------------------------------------------------------

    def to_wire(self) -> dict[str, Any]:
        return {
            "axis": self.axis,
            "children": [child.to_wire() for child in self.children],
        }

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> Container:
        """Validate a wire dict into a Container (raises pydantic.ValidationError)."""
        return cls.model_validate(data)


Panel.model_rebuild()
Container.model_rebuild()
