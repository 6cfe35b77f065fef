"""Tests for configuration loading."""

import json

import pytest

from tagger.config import (
    DEFAULT_EXCLUDED_KEYS,
    DEFAULT_MAX_DEPTH,
    TaggingConfig,
    TransportConfig,
    load_tagging_config,
    load_transport_config,
)
from tagger.exceptions import ConfigurationError


def test_defaults():
    config = TaggingConfig()

    assert config.max_depth == DEFAULT_MAX_DEPTH == 10
    assert "jcr:uuid" in config.excluded_keys
    assert "jcr:title" in config.text_keys
    assert list(config.concept_table)[0] == "article"
    assert config.content_child == "jcr:content"


def test_concept_table_default_is_a_copy():
    first = TaggingConfig()
    first.concept_table["new"] = "ns:new"

    assert "new" not in TaggingConfig().concept_table


def test_load_tagging_config(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "text_keys": ["body", "headline"],
                "max_depth": 3,
                "concept_table": {"cars": "ns:topic/cars"},
                "transport": {"model_name": "local-model"},
            }
        ),
        encoding="utf-8",
    )

    config = load_tagging_config(path)

    assert config.text_keys == frozenset({"body", "headline"})
    assert config.max_depth == 3
    assert config.concept_table == {"cars": "ns:topic/cars"}
    assert config.excluded_keys == DEFAULT_EXCLUDED_KEYS


def test_load_transport_config(tmp_path, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "env-key")
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"transport": {"model_name": "local-model", "base_url": "http://localhost:9001/v1"}}),
        encoding="utf-8",
    )

    config = load_transport_config(path)

    assert config.model_name == "local-model"
    assert config.base_url == "http://localhost:9001/v1"
    assert config.api_key == "env-key"


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        load_tagging_config(tmp_path / "missing.json")


def test_invalid_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="not a valid JSON"):
        load_tagging_config(path)


def test_invalid_values(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"max_depth": -1}), encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_tagging_config(path)


def test_temperature_bounds(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"transport": {"temperature": 1.5}}), encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_transport_config(path)
