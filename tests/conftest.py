"""
Shared pytest fixtures for the dashboard layout test suite.

Provides:
    - project_root: path to the repository root
    - registry: the built-in panel registry
    - scenario_root: root [P1(40), P2(35), P3(25)], horizontal
    - default_root: the default dashboard layout
    - layout_file: a temp path for a JSON layout file
    - qapp_cls: QCoreApplication for pytest-qt (no widgets are needed)
"""

import sys
from pathlib import Path

import pytest
from PySide6.QtCore import QCoreApplication

# ---------------------------------------------------------------------------
# Ensure the packages are importable regardless of where pytest is invoked
# ---------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from layout_engine.defaults import default_layout  # noqa: E402
from layout_engine.registry import default_registry  # noqa: E402
from layout_builders import leaf, root  # noqa: E402


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def qapp_cls():
    """The store and bus need an event loop but no widgets."""
    return QCoreApplication


@pytest.fixture
def project_root():
    """Return the absolute path to the repository root."""
    return str(PROJECT_ROOT)


@pytest.fixture
def registry():
    return default_registry()


@pytest.fixture
def scenario_root():
    """Root with three leaves whose sizes add up to 100."""
    return root(
        "horizontal",
        leaf("P1", 40),
        leaf("P2", 35),
        leaf("P3", 25),
    )


@pytest.fixture
def default_root():
    return default_layout()


@pytest.fixture
def layout_file(tmp_path):
    """Path (not yet created) for a layout JSON file inside tmp_path."""
    return str(tmp_path / "data" / "layout.json")
