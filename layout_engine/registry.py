"""
layout_engine/registry.py -- Panel type registry.

Maps a panel ``kind`` to the defaults a new panel of that kind starts
with: its size, its size bounds, and its initial settings.  The layout
engine only ever asks the registry one question (``lookup(kind)``); the
content renderers that draw each kind live outside the engine.

Registries can be built in code or loaded from a JSON file shaped like::

    {"panels": [
        {"kind": "quick-stats", "display_name": "Quick Stats",
         "category": "analytics", "default_size": 30,
         "min_size": 20, "max_size": 60,
         "default_settings": {"showHeader": true}}
    ]}

Usage::

    from layout_engine.registry import default_registry

    registry = default_registry()
    definition = registry.lookup("recommendations")
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from layout_engine.errors import UnknownPanelKindError
from layout_engine.utils import safe_read_json

logger = logging.getLogger(__name__)

Category = Literal["music", "social", "analytics", "tools"]


class PanelDefinition(BaseModel):
    """Defaults for one panel kind."""

    model_config = ConfigDict(frozen=True)

    kind: str
    display_name: str = ""
    description: str = ""
    category: Category = "tools"
    default_size: float = 50.0
    min_size: float = 0.0
    max_size: float = 100.0
    default_settings: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_bounds(self) -> PanelDefinition:
        if not (self.min_size <= self.default_size <= self.max_size):
            raise ValueError(
                f"Panel kind '{self.kind}': default_size {self.default_size} "
                f"outside [{self.min_size}, {self.max_size}]"
            )
        return self


class PanelRegistry:
    """A keyed collection of :class:`PanelDefinition` objects."""

    def __init__(self, definitions: list[PanelDefinition] | None = None):
        self._definitions: dict[str, PanelDefinition] = {}
        for definition in definitions or []:
            self.register(definition)

    @classmethod
    def from_json_file(cls, path) -> PanelRegistry:
        """Build a registry from a JSON file.  A missing file gives an empty registry."""
        data = safe_read_json(path, default={})
        entries = data.get("panels", []) if isinstance(data, dict) else []
        registry = cls()
        for entry in entries:
            registry.register(PanelDefinition.model_validate(entry))
        logger.info("Loaded %d panel definitions from %s", len(registry), path)
        return registry

    def register(self, definition: PanelDefinition) -> None:
        if definition.kind in self._definitions:
            logger.warning("Replacing panel definition for kind '%s'", definition.kind)
        self._definitions[definition.kind] = definition

    def lookup(self, kind: str) -> PanelDefinition | None:
        return self._definitions.get(kind)

    def require(self, kind: str) -> PanelDefinition:
        """Like :meth:`lookup` but raises :class:`UnknownPanelKindError`."""
        definition = self._definitions.get(kind)
        if definition is None:
            raise UnknownPanelKindError(kind)
        return definition

    def kinds(self) -> list[str]:
        return list(self._definitions)

    def by_category(self, category: str) -> list[PanelDefinition]:
        return [d for d in self._definitions.values() if d.category == category]

    def __contains__(self, kind: object) -> bool:
        return kind in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    def __iter__(self) -> Iterator[PanelDefinition]:
        return iter(self._definitions.values())


# ------------------------------------------------------------------
# Built-in panel kinds
# ------------------------------------------------------------------

_BUILTIN_PANELS: list[dict[str, Any]] = [
    {
        "kind": "collection-albums",
        "display_name": "Collection Albums",
        "description": "Albums from your collections",
        "category": "music",
        "default_size": 35, "min_size": 25, "max_size": 50,
        "default_settings": {"showHeader": True, "headerTitle": "Your Collection"},
    },
    {
        "kind": "recommendations",
        "display_name": "Recommendations",
        "description": "Personalized music recommendations",
        "category": "music",
        "default_size": 70, "min_size": 50, "max_size": 100,
        "default_settings": {"showHeader": True, "headerTitle": "Recent Recommendations"},
    },
    {
        "kind": "activity-feed",
        "display_name": "Activity Feed",
        "description": "Activity from people you follow",
        "category": "social",
        "default_size": 30, "min_size": 25, "max_size": 50,
        "default_settings": {"showHeader": True, "headerTitle": "Recent Activity"},
    },
    {
        "kind": "quick-stats",
        "display_name": "Quick Stats",
        "description": "Overview of your music activity",
        "category": "analytics",
        "default_size": 25, "min_size": 15, "max_size": 40,
        "default_settings": {"showHeader": True},
    },
    {
        "kind": "recently-played",
        "display_name": "Recently Played",
        "description": "Your recently played albums",
        "category": "music",
        "default_size": 30, "min_size": 20, "max_size": 60,
        "default_settings": {"showHeader": True, "limit": 10},
    },
    {
        "kind": "friend-activity",
        "display_name": "Friend Activity",
        "description": "What your friends are listening to",
        "category": "social",
        "default_size": 30, "min_size": 20, "max_size": 50,
        "default_settings": {"showHeader": True},
    },
    {
        "kind": "friend-discovery",
        "display_name": "Friend Discovery",
        "description": "People with similar taste",
        "category": "social",
        "default_size": 30, "min_size": 20, "max_size": 50,
        "default_settings": {"showHeader": True},
    },
]


def default_registry() -> PanelRegistry:
    """Return a registry populated with the built-in dashboard panel kinds."""
    return PanelRegistry([PanelDefinition.model_validate(p) for p in _BUILTIN_PANELS])
