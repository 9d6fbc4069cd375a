"""
dashboard/paths.py -- Where the dashboard keeps its data.

Uses platformdirs for the per-user data directory.  The location can be
overridden with the ``DASHBOARD_DATA_DIR`` environment variable (handy for
tests and for running several profiles side by side).
"""

from __future__ import annotations

import os

from platformdirs import user_data_dir

_APP_NAME = "MusicDashboard"
_APP_AUTHOR = "MusicDashboard"

DATA_DIR_ENV = "DASHBOARD_DATA_DIR"


def get_data_dir() -> str:
    """Return the dashboard data directory, creating it if needed."""
    path = os.environ.get(DATA_DIR_ENV) or user_data_dir(_APP_NAME, _APP_AUTHOR)
    os.makedirs(path, exist_ok=True)
    return path


def get_layout_path() -> str:
    """Return the default location of the saved layout file."""
    return os.path.join(get_data_dir(), "dashboard", "layout.json")


def get_registry_path() -> str:
    """Return the optional panel registry override file."""
    return os.path.join(get_data_dir(), "dashboard", "panels.json")
