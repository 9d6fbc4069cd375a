"""
Tests for layout_engine/persistence.py -- JSON file and in-memory gateways.
"""

import json
import os

import pytest

from layout_engine.errors import LayoutLoadError
from layout_engine.persistence import (
    FORMAT_VERSION,
    JsonFileGateway,
    MemoryGateway,
    layout_from_document,
    layout_to_document,
)
from layout_builders import leaf, root


class TestDocuments:
    def test_document_is_versioned(self, default_root):
        document = layout_to_document(default_root)
        assert document["version"] == FORMAT_VERSION
        assert "saved_at" in document
        assert document["layout"] == default_root.to_wire()

    def test_bare_container_accepted(self, default_root):
        assert layout_from_document(default_root.to_wire()) == default_root

    def test_non_object_rejected(self):
        with pytest.raises(LayoutLoadError):
            layout_from_document(["not", "a", "layout"])

    def test_invalid_layout_rejected(self):
        with pytest.raises(LayoutLoadError, match="invalid layout"):
            layout_from_document({"layout": {"axis": "sideways", "children": []}})


class TestJsonFileGateway:
    def test_missing_file_loads_none(self, layout_file):
        assert JsonFileGateway(layout_file).load() is None

    def test_save_then_load(self, layout_file, default_root):
        gateway = JsonFileGateway(layout_file)
        gateway.save(default_root)
        assert os.path.exists(layout_file)
        assert gateway.load() == default_root

    def test_file_is_plain_json(self, layout_file):
        JsonFileGateway(layout_file).save(root("horizontal", leaf("a", 30, 10, 60)))
        with open(layout_file, "r", encoding="utf-8") as fh:
            data = json.load(fh)
        assert data["layout"]["children"][0]["minSize"] == 10

    def test_no_temp_files_left_behind(self, layout_file, default_root):
        JsonFileGateway(layout_file).save(default_root)
        leftovers = [f for f in os.listdir(os.path.dirname(layout_file)) if f.endswith(".tmp")]
        assert leftovers == []

    def test_corrupt_file_raises(self, layout_file):
        os.makedirs(os.path.dirname(layout_file))
        with open(layout_file, "w", encoding="utf-8") as fh:
            fh.write("{not json")
        with pytest.raises(LayoutLoadError):
            JsonFileGateway(layout_file).load()


class TestMemoryGateway:
    def test_empty_by_default(self):
        assert MemoryGateway().load() is None

    def test_initial_layout(self, default_root):
        assert MemoryGateway(default_root).load() == default_root

    def test_counts_saves(self, default_root):
        gateway = MemoryGateway()
        gateway.save(default_root)
        gateway.save(default_root)
        assert gateway.save_count == 2
        assert gateway.load() == default_root
