"""
Dashboard host -- session state, persistence wiring and tooling around
the layout engine.

Package layout:
    services/   Application services (event bus, layout store)
    paths.py    Data directory resolution
    main.py     Command-line entry point
"""
