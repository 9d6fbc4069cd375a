"""
layout_engine/persistence.py -- Persistence gateways for the panel tree.

A gateway is the only thing the session store knows about storage::

    gateway.load()        -> Container | None   (None: nothing saved yet)
    gateway.save(root)

Layouts are stored in their wire form (nested dicts, see
``layout_engine.models.base``).  JSON files are written atomically through
``safe_write_json`` so a crash mid-save leaves the previous layout intact.

Usage::

    from layout_engine.persistence import JsonFileGateway

    gateway = JsonFileGateway("/home/me/.local/share/dashboard/layout.json")
    root = gateway.load() or default_layout()
    gateway.save(root)
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError

from layout_engine.errors import LayoutLoadError
from layout_engine.models.base import Container
from layout_engine.utils import safe_read_json, safe_write_json

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1

_UNREADABLE = object()


def _now_iso() -> str:
    """Return the current UTC time as an ISO 8601 string."""
    return datetime.now(timezone.utc).isoformat()


def layout_to_document(root: Container) -> dict[str, Any]:
    """Wrap a tree's wire form in the versioned document that gets stored."""
    return {
        "version": FORMAT_VERSION,
        "saved_at": _now_iso(),
        "layout": root.to_wire(),
    }


def layout_from_document(data: Any, source: str = "layout") -> Container:
    """Inverse of :func:`layout_to_document`.

    Bare container dicts (``{"axis": ..., "children": [...]}``) are accepted
    as well.  Raises :class:`LayoutLoadError` when the data is not a layout.
    """
    if not isinstance(data, dict):
        raise LayoutLoadError(f"{source}: expected a JSON object, got {type(data).__name__}")
    payload = data.get("layout", data)
    try:
        return Container.from_wire(payload)
    except ValidationError as exc:
        raise LayoutLoadError(f"{source}: invalid layout ({exc.error_count()} errors)") from exc


class LayoutGateway:
    """Interface for layout storage backends."""

    def load(self) -> Container | None:
        raise NotImplementedError

    def save(self, root: Container) -> None:
        raise NotImplementedError


class JsonFileGateway(LayoutGateway):
    """Stores the layout as a single JSON file.

    Parameters
    ----------
    path : str or pathlib.Path
        Location of the layout file.  Parent directories are created on save.
    """

    def __init__(self, path):
        self.path = str(path)

    def load(self) -> Container | None:
        if not os.path.exists(self.path):
            logger.info("No saved layout at %s", self.path)
            return None
        data = safe_read_json(self.path, default=_UNREADABLE)
        if data is _UNREADABLE:
            raise LayoutLoadError(f"{self.path}: file is not readable JSON")
        return layout_from_document(data, source=self.path)

    def save(self, root: Container) -> None:
        safe_write_json(self.path, layout_to_document(root))
        logger.debug("Saved layout to %s", self.path)


class MemoryGateway(LayoutGateway):
    """Keeps the last saved layout in memory.  Counts saves for inspection."""

    def __init__(self, initial: Container | None = None):
        self.document: dict[str, Any] | None = (
            layout_to_document(initial) if initial is not None else None
        )
        self.save_count = 0

    def load(self) -> Container | None:
        if self.document is None:
            return None
        return layout_from_document(self.document, source="memory")

    def save(self, root: Container) -> None:
        self.document = layout_to_document(root)
        self.save_count += 1
