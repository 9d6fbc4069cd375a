"""
dashboard/services/layout_store.py -- Session owner of the current layout tree.

The layout engine itself is stateless: every operation maps one tree to
another.  The LayoutStore is the single place that holds "the current
tree" for a dashboard session, together with the edit-mode flag and the
selected panel.  Every mutation goes through one of its methods, which
applies the pure operation, swaps in the new tree and emits Qt signals so
renderers can redraw.

Saving is debounced: each change restarts a single-shot timer, and the
tree is written through the persistence gateway only once the layout has
been quiet for ``save_delay_ms``.  A failed save is logged and reported
but never rolls back the in-memory tree.

Usage::

    from dashboard.services.layout_store import LayoutStore
    from layout_engine.persistence import JsonFileGateway

    store = LayoutStore(JsonFileGateway(path))
    store.load()
    store.layout_changed.connect(on_layout_changed)

    panel_id = store.add_panel("quick-stats")
    store.smart_drop(panel_id, "activity-panel", "top")
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Iterable, Mapping, Sequence

from PySide6.QtCore import QObject, QTimer, Signal

from dashboard.services.event_bus import EventBus
from layout_engine import mutator
from layout_engine.actions import AddPanelAction, LayoutAction, SetLayoutAction, reduce
from layout_engine.cleanup import normalize_layout
from layout_engine.errors import InvalidLayoutError
from layout_engine.defaults import default_layout
from layout_engine.models.base import Axis, Container, DropZone
from layout_engine.models.validators import validate_layout
from layout_engine.persistence import LayoutGateway
from layout_engine.registry import PanelRegistry, default_registry

logger = logging.getLogger(__name__)

DEFAULT_SAVE_DELAY_MS = 2000


class LayoutStore(QObject):
    """Reactive holder of the dashboard layout for one session.

    Signals
    -------
    layout_changed(object)
        Emitted with the new root Container after every effective change.
    edit_mode_changed(bool)
        Emitted when edit mode is switched on or off.
    selection_changed(str)
        Emitted with the selected panel id ("" when cleared).
    layout_saved()
        Emitted after the gateway accepted a save.
    layout_loaded()
        Emitted after a persisted layout replaced the current one.
    save_failed(str)
        Emitted with the error text when the gateway rejects a save.
    """

    layout_changed = Signal(object)
    edit_mode_changed = Signal(bool)
    selection_changed = Signal(str)
    layout_saved = Signal()
    layout_loaded = Signal()
    save_failed = Signal(str)

    _instance: LayoutStore | None = None
    _singleton_lock = threading.Lock()

    def __init__(
        self,
        gateway: LayoutGateway,
        registry: PanelRegistry | None = None,
        *,
        save_delay_ms: int = DEFAULT_SAVE_DELAY_MS,
        initial: Container | None = None,
        parent: QObject | None = None,
    ):
        super().__init__(parent)
        self._gateway = gateway
        self._registry = registry if registry is not None else default_registry()
        self._lock = threading.RLock()
        self._root: Container = initial if initial is not None else default_layout()
        self._edit_mode = False
        self._selected_panel_id: str | None = None
        self._dirty = False
        self._bus = EventBus.instance()

        # Debounced save: restarted on every change
        self._save_timer = QTimer(self)
        self._save_timer.setSingleShot(True)
        self._save_timer.setInterval(save_delay_ms)
        self._save_timer.timeout.connect(self._on_save_timeout)

    @classmethod
    def instance(
        cls,
        gateway: LayoutGateway | None = None,
        registry: PanelRegistry | None = None,
    ) -> LayoutStore:
        """Return the singleton LayoutStore instance."""
        if cls._instance is None:
            with cls._singleton_lock:
                if cls._instance is None:
                    if gateway is None:
                        raise RuntimeError("LayoutStore.instance() requires a gateway on first call.")
                    cls._instance = cls(gateway, registry)
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton (for testing)."""
        with cls._singleton_lock:
            if cls._instance is not None:
                cls._instance._save_timer.stop()
                cls._instance.deleteLater()
            cls._instance = None

    # ------------------------------------------------------------------
    # State access (thread-safe reads)
    # ------------------------------------------------------------------

    @property
    def layout(self) -> Container:
        with self._lock:
            return self._root

    @property
    def registry(self) -> PanelRegistry:
        return self._registry

    @property
    def is_edit_mode(self) -> bool:
        with self._lock:
            return self._edit_mode

    @property
    def selected_panel_id(self) -> str | None:
        with self._lock:
            return self._selected_panel_id

    @property
    def is_dirty(self) -> bool:
        with self._lock:
            return self._dirty

    @property
    def is_save_pending(self) -> bool:
        return self._save_timer.isActive()

    # ------------------------------------------------------------------
    # Layout operations
    # ------------------------------------------------------------------

    def add_panel(
        self,
        kind: str,
        settings: Mapping[str, Any] | None = None,
        index: int | None = None,
    ) -> str | None:
        """Add a panel of *kind* at root level.

        Returns the new panel id, or None when *kind* is not registered.
        """
        panel = mutator.build_panel(self._registry, kind, settings)
        if panel is None:
            self._bus.error_occurred.emit(f"Unknown panel type: {kind}")
            return None
        with self._lock:
            new_root = mutator.insert_panel(self._root, panel, index)
        self._commit(new_root)
        self._bus.panel_added.emit(panel.id)
        return panel.id

    def remove_panel(self, panel_id: str) -> bool:
        with self._lock:
            new_root = mutator.remove_panel(self._root, panel_id)
        changed = self._commit(new_root)
        if changed:
            self._bus.panel_removed.emit(panel_id)
        return changed

    def update_panel_config(self, panel_id: str, settings: Mapping[str, Any]) -> bool:
        with self._lock:
            new_root = mutator.update_panel_config(self._root, panel_id, settings)
        return self._commit(new_root)

    def resize_panel(self, panel_id: str, size: float) -> bool:
        with self._lock:
            new_root = mutator.resize_panel(self._root, panel_id, size)
        return self._commit(new_root)

    def reorder_panels(self, active_id: str, over_id: str) -> bool:
        with self._lock:
            new_root = mutator.reorder_panels(self._root, active_id, over_id)
        return self._commit(new_root)

    def create_group(self, panel_ids: Iterable[str], axis: Axis, index: int = 0) -> bool:
        with self._lock:
            new_root = mutator.create_group(self._root, panel_ids, axis, index)
        return self._commit(new_root)

    def ungroup_panel(self, panel_id: str, index: int = 0) -> bool:
        with self._lock:
            new_root = mutator.ungroup_panel(self._root, panel_id, index)
        return self._commit(new_root)

    def change_layout_direction(self, path: Sequence[str], axis: Axis) -> bool:
        with self._lock:
            new_root = mutator.change_layout_direction(self._root, path, axis)
        return self._commit(new_root)

    def smart_drop(self, dragged_id: str, target_id: str, zone: DropZone) -> bool:
        with self._lock:
            new_root = mutator.smart_drop(self._root, dragged_id, target_id, zone)
        return self._commit(new_root)

    def set_layout(self, root: Container) -> bool:
        """Replace the whole tree.  Trees that break the invariants are refused."""
        try:
            root = normalize_layout(root)
        except InvalidLayoutError as exc:
            logger.error("Refusing invalid layout: %s", exc)
            self._bus.error_occurred.emit("The new dashboard layout is invalid and was not applied.")
            return False
        return self._commit(root)

    def dispatch(self, action: LayoutAction) -> bool:
        """Apply a parsed action.  Returns True if the layout changed."""
        if isinstance(action, AddPanelAction):
            return self.add_panel(action.kind, action.settings, action.index) is not None
        if isinstance(action, SetLayoutAction):
            return self.set_layout(action.layout)
        with self._lock:
            new_root = reduce(self._root, action, self._registry)
        return self._commit(new_root)

    def _commit(self, new_root: Container) -> bool:
        with self._lock:
            if new_root is self._root:
                return False
            self._root = new_root
            self._dirty = True
            lost_selection = (
                self._selected_panel_id is not None
                and new_root.find(self._selected_panel_id) is None
            )
            if lost_selection:
                self._selected_panel_id = None

        self._save_timer.start()
        self.layout_changed.emit(new_root)
        self._bus.layout_changed.emit()
        if lost_selection:
            self._emit_selection()
        return True

    # ------------------------------------------------------------------
    # Edit mode and selection
    # ------------------------------------------------------------------

    def toggle_edit_mode(self) -> None:
        self.set_edit_mode(not self.is_edit_mode)

    def set_edit_mode(self, enabled: bool) -> None:
        """Switch edit mode.  Leaving edit mode clears the selection."""
        with self._lock:
            if self._edit_mode == enabled:
                return
            self._edit_mode = enabled
            cleared = not enabled and self._selected_panel_id is not None
            if cleared:
                self._selected_panel_id = None
        self.edit_mode_changed.emit(enabled)
        if cleared:
            self._emit_selection()

    def select_panel(self, panel_id: str | None) -> None:
        with self._lock:
            if panel_id is not None and self._root.find(panel_id) is None:
                logger.debug("Ignoring selection of unknown panel %s", panel_id)
                return
            if self._selected_panel_id == panel_id:
                return
            self._selected_panel_id = panel_id
        self._emit_selection()

    def _emit_selection(self) -> None:
        panel_id = self.selected_panel_id or ""
        self.selection_changed.emit(panel_id)
        self._bus.panel_selected.emit(panel_id)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self) -> bool:
        """Replace the current layout with the persisted one, if any.

        Returns True when a saved layout was loaded.  On failure the current
        layout is kept and the error is logged.
        """
        try:
            loaded = self._gateway.load()
        except Exception:
            logger.exception("Failed to load saved layout")
            self._bus.error_occurred.emit("Could not load your saved dashboard layout.")
            return False
        if loaded is None:
            return False

        issues = validate_layout(loaded)
        if issues:
            logger.warning("Saved layout has %d issue(s): %s", len(issues), "; ".join(issues))
            try:
                loaded = normalize_layout(loaded)
            except InvalidLayoutError:
                logger.error("Saved layout cannot be repaired; keeping the current layout")
                self._bus.error_occurred.emit("Could not load your saved dashboard layout.")
                return False

        with self._lock:
            self._root = loaded
            self._dirty = False
            self._selected_panel_id = None
        self._save_timer.stop()
        self.layout_loaded.emit()
        self.layout_changed.emit(loaded)
        self._bus.status_message.emit("Dashboard layout loaded")
        return True

    def save(self) -> bool:
        """Write the current layout through the gateway immediately."""
        self._save_timer.stop()
        with self._lock:
            root = self._root
            self._dirty = False

        try:
            self._gateway.save(root)
        except Exception as exc:
            logger.exception("Failed to save layout")
            with self._lock:
                self._dirty = True  # Saved again on the next change or flush
            self.save_failed.emit(str(exc))
            self._bus.error_occurred.emit("Could not save your dashboard layout.")
            return False

        self.layout_saved.emit()
        self._bus.status_message.emit("Dashboard layout saved")
        return True

    def flush(self) -> bool:
        """Save now if there are unsaved changes."""
        if self.is_dirty:
            return self.save()
        return True

    def _on_save_timeout(self) -> None:
        """Called by the debounce timer. Only writes if dirty."""
        if self.is_dirty:
            self.save()

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    def shutdown(self) -> None:
        """Stop the save timer and flush any pending changes."""
        self._save_timer.stop()
        self.flush()
