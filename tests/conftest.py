"""Global test configuration and fixtures."""

import json

import pytest

from tagger.config import DEFAULT_CONCEPT_TABLE, TaggingConfig
from tagger.tree import DictResourceNode


@pytest.fixture
def catalog():
    """Small label catalog spanning several categories."""
    return {
        "myaemproject:content-type/article": "Article",
        "myaemproject:content-type/product-launch": "Product Launch",
        "myaemproject:topic/automotive": "Automotive",
        "myaemproject:topic/automotive/electric-vehicles": "Electric Vehicles",
        "myaemproject:audience/families": "Families",
        "myaemproject:audience/tech-enthusiasts": "Tech Enthusiasts",
        "myaemproject:feature/fast-charging": "Fast Charging",
    }


@pytest.fixture
def concept_table():
    return dict(DEFAULT_CONCEPT_TABLE)


@pytest.fixture
def config():
    return TaggingConfig()


@pytest.fixture
def page_data():
    """A page export with metadata noise and nested components."""
    return {
        "jcr:primaryType": "cq:Page",
        "jcr:created": "2024-01-01T00:00:00Z",
        "jcr:content": {
            "jcr:title": "Meet the Volt X",
            "jcr:description": "Our first electric SUV",
            "cq:lastModified": "2024-02-01T00:00:00Z",
            "cq:lastModifiedBy": "admin",
            "root": {
                "hero": {
                    "title": "Charge in 15 minutes",
                    "jcr:uuid": "abc-123",
                },
                "text": {
                    "text": "  Built for families who road-trip.  ",
                    "textIsRich": True,
                },
                "image": {
                    "alt": "The Volt X at sunset",
                    "fileReference": "/content/dam/volt.jpg",
                },
                "spacer": {
                    "jcr:uuid": "def-456",
                    "cq:lastReplicated": "2024-02-02T00:00:00Z",
                },
            },
        },
    }


@pytest.fixture
def page_node(page_data):
    return DictResourceNode("volt-x", page_data)


@pytest.fixture
def repository_file(tmp_path, page_data):
    """A JSON repository with one page and one empty page."""
    repo = {
        "content": {
            "site": {
                "en": {
                    "volt-x": page_data,
                    "blank": {
                        "jcr:content": {
                            "jcr:uuid": "zzz",
                            "cq:lastModified": "2024-02-01T00:00:00Z",
                        }
                    },
                }
            }
        }
    }
    path = tmp_path / "repo.json"
    path.write_text(json.dumps(repo), encoding="utf-8")
    return path


@pytest.fixture
def catalog_file(tmp_path, catalog):
    path = tmp_path / "tags.json"
    path.write_text(json.dumps(catalog), encoding="utf-8")
    return path
