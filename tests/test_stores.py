"""Tests for the JSON-backed stores."""

import json
import logging

import pytest

from tagger.exceptions import ConfigurationError
from tagger.stores import (
    InMemoryLabelCatalogStore,
    JsonDocumentStore,
    JsonLabelCatalogStore,
    parse_label_catalog,
)


class TestJsonDocumentStore:
    def test_get_resource(self, repository_file):
        store = JsonDocumentStore(repository_file)

        node = store.get_resource("/content/site/en/volt-x")

        assert node.name == "volt-x"
        assert [c.name for c in node.children()] == ["jcr:content"]

    def test_missing_resource(self, repository_file):
        store = JsonDocumentStore(repository_file)

        assert store.get_resource("/content/site/fr/volt-x") is None
        assert store.get_resource("/content/site/en/volt-x/jcr:primaryType") is None

    def test_apply_labels_targets_content_child(self, repository_file):
        store = JsonDocumentStore(repository_file)

        assert store.apply_labels("/content/site/en/volt-x", ["ns:topic/a", "ns:topic/b"])

        saved = json.loads(repository_file.read_text(encoding="utf-8"))
        page = saved["content"]["site"]["en"]["volt-x"]
        assert page["jcr:content"]["cq:tags"] == ["ns:topic/a", "ns:topic/b"]
        assert "cq:tags" not in page

    def test_apply_labels_without_content_child(self, tmp_path):
        path = tmp_path / "repo.json"
        path.write_text(json.dumps({"assets": {"logo": {"title": "Logo"}}}), encoding="utf-8")
        store = JsonDocumentStore(path, labels_property="tags")

        assert store.apply_labels("/assets/logo", ["ns:brand/logo"])

        saved = json.loads(path.read_text(encoding="utf-8"))
        assert saved["assets"]["logo"]["tags"] == ["ns:brand/logo"]

    def test_apply_no_labels_is_a_logged_no_op(self, repository_file, caplog):
        before = repository_file.read_text(encoding="utf-8")
        store = JsonDocumentStore(repository_file)

        with caplog.at_level(logging.WARNING, logger="tagger.stores"):
            assert store.apply_labels("/content/site/en/volt-x", []) is False

        assert repository_file.read_text(encoding="utf-8") == before
        assert any("No labels to apply" in r.getMessage() for r in caplog.records)

    def test_apply_labels_missing_resource(self, repository_file):
        store = JsonDocumentStore(repository_file)

        assert store.apply_labels("/content/nope", ["ns:topic/a"]) is False

    def test_non_object_file(self, tmp_path):
        path = tmp_path / "repo.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            JsonDocumentStore(path)


class TestParseLabelCatalog:
    def test_flat_mapping(self):
        assert parse_label_catalog({"ns:a/b": "B", "ns:c": "C"}) == {"ns:a/b": "B", "ns:c": "C"}

    def test_tag_tree_parents_first(self):
        tree = {
            "id": "ns:topic",
            "title": "Topic",
            "children": [
                {
                    "id": "ns:topic/automotive",
                    "title": "Automotive",
                    "children": [{"id": "ns:topic/automotive/suv", "title": "SUV"}],
                },
                {"id": "ns:topic/sustainability", "title": "Sustainability"},
            ],
        }

        catalog = parse_label_catalog(tree)

        assert list(catalog) == [
            "ns:topic",
            "ns:topic/automotive",
            "ns:topic/automotive/suv",
            "ns:topic/sustainability",
        ]
        assert catalog["ns:topic/automotive/suv"] == "SUV"

    def test_list_of_roots_and_missing_title(self):
        catalog = parse_label_catalog([{"id": "ns:a"}, {"children": [{"id": "ns:b", "title": "B"}]}])

        assert catalog == {"ns:a": "ns:a", "ns:b": "B"}

    def test_unsupported_shape(self):
        with pytest.raises(ConfigurationError):
            parse_label_catalog("ns:a")

    def test_non_object_tag_node(self):
        with pytest.raises(ConfigurationError):
            parse_label_catalog([{"id": "ns:a"}, "ns:b"])

    def test_non_list_children(self):
        with pytest.raises(ConfigurationError):
            parse_label_catalog({"id": "ns:a", "children": {"id": "ns:b"}})


class TestCatalogStores:
    def test_json_store_rereads_file(self, catalog_file):
        store = JsonLabelCatalogStore(catalog_file)
        first = store.get_all_available_labels()

        catalog_file.write_text(json.dumps({"ns:new/tag": "New"}), encoding="utf-8")

        assert "myaemproject:topic/automotive" in first
        assert store.get_all_available_labels() == {"ns:new/tag": "New"}

    def test_in_memory_store_returns_copies(self, catalog):
        store = InMemoryLabelCatalogStore(catalog)

        snapshot = store.get_all_available_labels()
        snapshot.clear()

        assert store.get_all_available_labels() == catalog
