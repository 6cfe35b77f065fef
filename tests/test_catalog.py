"""Tests for catalog categorization."""

from tagger.catalog import categorize_catalog, extract_category, format_category_heading


class TestExtractCategory:
    def test_first_segment_after_namespace(self):
        assert extract_category("myaemproject:content-type/article") == "content-type"

    def test_deep_label(self):
        assert extract_category("ns:topic/automotive/suv") == "topic"

    def test_no_slash_uses_remainder(self):
        assert extract_category("ns:featured") == "featured"

    def test_no_namespace_is_other(self):
        assert extract_category("plain-tag") == "other"


class TestCategorizeCatalog:
    def test_groups_in_first_seen_order(self):
        catalog = {"ns:topic/x": "X", "ns:topic/y": "Y", "ns:audience/z": "Z"}

        categorized = categorize_catalog(catalog)

        assert list(categorized) == ["topic", "audience"]
        assert categorized["topic"] == [("ns:topic/x", "X"), ("ns:topic/y", "Y")]
        assert categorized["audience"] == [("ns:audience/z", "Z")]

    def test_interleaved_categories_keep_catalog_order(self):
        catalog = {"ns:a/1": "1", "ns:b/1": "2", "ns:a/2": "3", "loose": "4"}

        categorized = categorize_catalog(catalog)

        assert list(categorized) == ["a", "b", "other"]
        assert [label for label, _ in categorized["a"]] == ["ns:a/1", "ns:a/2"]
        assert categorized["other"] == [("loose", "4")]

    def test_empty_catalog(self):
        assert categorize_catalog({}) == {}

    def test_does_not_mutate_catalog(self, catalog):
        before = dict(catalog)

        categorize_catalog(catalog)

        assert catalog == before


def test_format_category_heading():
    assert format_category_heading("content-type") == "CONTENT TYPE"
