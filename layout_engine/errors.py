"""
layout_engine/errors.py -- Exceptions raised by the layout engine.

Most layout operations never raise: a missing panel id is a silent no-op.
These exceptions cover the few conditions a caller needs to tell apart.
"""


class LayoutError(Exception):
    """Base class for layout engine errors."""


class UnknownPanelKindError(LayoutError, KeyError):
    """Raised when a panel kind is not present in the registry."""

    def __init__(self, kind: str):
        super().__init__(kind)
        self.kind = kind

    def __str__(self) -> str:
        return f"Panel kind '{self.kind}' is not registered"


class LayoutLoadError(LayoutError):
    """Raised when a persisted layout exists but cannot be read back."""


class InvalidLayoutError(LayoutError):
    """Raised when a whole replacement tree breaks the layout invariants.

    ``issues`` holds the messages from ``validate_layout``.
    """

    def __init__(self, issues: list[str]):
        super().__init__("; ".join(issues))
        self.issues = list(issues)
