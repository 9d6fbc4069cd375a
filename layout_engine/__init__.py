"""
Dashboard panel layout engine.

A pure, copy-on-write tree of resizable, re-orderable, splittable panels.
Submodules:
    models       Panel / Container models and invariant validators
    mutator      the layout operations
    cleanup      collapse of empty and single-child groups
    actions      typed JSON actions and the reducer
    registry     panel kind defaults
    persistence  JSON-file and in-memory gateways
    sqlite_store per-user SQLite gateway
    binding      leaf bindings for content renderers
    defaults     the starting dashboard layout
    errors       exception types
"""

__version__ = "0.1.0"
