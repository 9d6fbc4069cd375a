"""
dashboard/services/event_bus.py -- Application-wide event bus using Qt signals.

Singleton that provides typed signals for cross-component communication.
Renderers, toolbars and the layout store connect to the EventBus rather
than directly to each other.

Usage::

    from dashboard.services.event_bus import EventBus

    bus = EventBus.instance()
    bus.panel_selected.connect(my_handler)
    bus.panel_selected.emit("recommendations-panel")
"""

from __future__ import annotations

import threading

from PySide6.QtCore import QObject, Signal


class EventBus(QObject):
    """Application-wide signal bus.

    Signals
    -------
    panel_selected(str)
        Fired when the user selects a panel. Payload is the panel id
        (empty string when the selection is cleared).
    panel_added(str)
        Fired when a panel is added. Payload is the new panel id.
    panel_removed(str)
        Fired when a panel is removed. Payload is the panel id.
    layout_changed()
        Fired after any change to the layout tree.
    error_occurred(str)
        Fired when an error needs to be shown to the user.
    status_message(str)
        Fired to update the status bar message.
    """

    # Panel lifecycle
    panel_selected = Signal(str)
    panel_added = Signal(str)
    panel_removed = Signal(str)

    # Layout
    layout_changed = Signal()

    # Error and status
    error_occurred = Signal(str)
    status_message = Signal(str)

    # Singleton
    _instance: EventBus | None = None
    _lock = threading.Lock()

    @classmethod
    def instance(cls) -> EventBus:
        """Return the singleton EventBus instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton (for testing)."""
        with cls._lock:
            if cls._instance is not None:
                cls._instance.deleteLater()
            cls._instance = None
