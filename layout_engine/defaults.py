"""
layout_engine/defaults.py -- The layout a new dashboard session starts with.

Mirrors the classic home page: the collection on top, recommendations and
the activity feed side by side underneath.
"""

from layout_engine.models.base import GROUP_KIND, Container


def default_layout() -> Container:
    return Container.from_wire({
        "axis": "vertical",
        "children": [
            {
                "id": "collection-panel",
                "kind": "collection-albums",
                "size": 35,
                "minSize": 25,
                "maxSize": 50,
                "settings": {"showHeader": True, "headerTitle": "Your Collection"},
            },
            {
                "id": "main-content-group",
                "kind": GROUP_KIND,
                "size": 65,
                "minSize": 50,
                "maxSize": 100,
                "settings": {},
                "nested": {
                    "axis": "horizontal",
                    "children": [
                        {
                            "id": "recommendations-panel",
                            "kind": "recommendations",
                            "size": 70,
                            "minSize": 50,
                            "maxSize": 100,
                            "settings": {"showHeader": True, "headerTitle": "Recent Recommendations"},
                        },
                        {
                            "id": "activity-panel",
                            "kind": "activity-feed",
                            "size": 30,
                            "minSize": 25,
                            "maxSize": 50,
                            "settings": {"showHeader": True, "headerTitle": "Recent Activity"},
                        },
                    ],
                },
            },
        ],
    })
