"""
Configuration for the tagging pipeline.

Holds the key sets that drive tree extraction and text flattening, the
backward-compatible concept table, and the settings for the model transport.
Defaults match a typical AEM-style content repository.
"""

import json
import os
from pathlib import Path
from typing import Dict, List

from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigurationError

# Constants
DEFAULT_MAX_DEPTH = 10
DEFAULT_CONTENT_CHILD = "jcr:content"
DEFAULT_LABELS_PROPERTY = "cq:tags"

DEFAULT_MODEL_NAME = "gpt-4o-mini"
DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_TEMPERATURE = 0.3
DEFAULT_MAX_TOKENS = 1000
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_RETRIES = 2

# System/metadata properties that carry nothing useful for tagging
DEFAULT_EXCLUDED_KEYS = frozenset(
    {
        "jcr:created",
        "jcr:createdBy",
        "jcr:lastModified",
        "jcr:lastModifiedBy",
        "cq:lastModified",
        "cq:lastModifiedBy",
        "cq:lastReplicated",
        "cq:lastReplicatedBy",
        "cq:lastReplicationAction",
        "cq:lastRolledout",
        "cq:lastRolledoutBy",
        "jcr:uuid",
        "jcr:baseVersion",
        "jcr:predecessors",
        "jcr:versionHistory",
        "jcr:isCheckedOut",
        "cq:lastPublished",
        "cq:lastPublishedBy",
    }
)

DEFAULT_TEXT_KEYS = frozenset(
    {
        "text",
        "jcr:title",
        "title",
        "jcr:description",
        "description",
        "alt",
        "heading",
        "subtitle",
        "caption",
        "label",
        "value",
        "content",
        "name",
    }
)

# Order matters: fuzzy matching takes the first entry that matches
DEFAULT_CONCEPT_TABLE: Dict[str, str] = {
    "article": "myaemproject:content-type/article",
    "product-launch": "myaemproject:content-type/product-launch",
    "blog-post": "myaemproject:content-type/blog-post",
    "tutorial": "myaemproject:content-type/tutorial",
    "automotive": "myaemproject:topic/automotive",
    "electric-vehicles": "myaemproject:topic/automotive/electric-vehicles",
    "suv": "myaemproject:topic/automotive/suv",
    "sustainability": "myaemproject:topic/sustainability",
    "clean-energy": "myaemproject:topic/sustainability/clean-energy",
    "eco-friendly": "myaemproject:topic/sustainability/eco-friendly",
    "families": "myaemproject:audience/families",
    "tech-enthusiasts": "myaemproject:audience/tech-enthusiasts",
    "professionals": "myaemproject:audience/professionals",
    "autopilot": "myaemproject:feature/autopilot",
    "long-range": "myaemproject:feature/long-range-battery",
    "fast-charging": "myaemproject:feature/fast-charging",
    "education": "myaemproject:intent/education",
    "conversion": "myaemproject:intent/conversion",
    "awareness": "myaemproject:intent/brand-awareness",
}

CONTENT_TYPES = [
    "article",
    "blog-post",
    "product-launch",
    "press-release",
    "tutorial",
    "landing-page",
    "case-study",
    "faq",
]


class TaggingConfig(BaseModel):
    """
    Settings for tree extraction, flattening and concept mapping.

    Attributes:
        excluded_keys: Property keys dropped from the extracted tree
        text_keys: Property keys whose string values are collected as text
        max_depth: Deepest tree level that is still extracted
        concept_table: Free-form concept -> label ID (iteration order is the fuzzy tie-break)
        content_types: Closed set used by content-type classification
        content_child: Name of the child holding page-level properties
        labels_property: Property that receives applied label IDs
    """

    excluded_keys: frozenset[str] = DEFAULT_EXCLUDED_KEYS
    text_keys: frozenset[str] = DEFAULT_TEXT_KEYS
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=0)
    concept_table: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_CONCEPT_TABLE))
    content_types: List[str] = Field(default_factory=lambda: list(CONTENT_TYPES))
    content_child: str = DEFAULT_CONTENT_CHILD
    labels_property: str = DEFAULT_LABELS_PROPERTY


class TransportConfig(BaseModel):
    """Generation settings and connection options for the model endpoint."""

    model_name: str = DEFAULT_MODEL_NAME
    base_url: str = DEFAULT_BASE_URL
    api_key: str = Field(default_factory=lambda: os.environ.get("OPENAI_API_KEY", ""))
    temperature: float = Field(default=DEFAULT_TEMPERATURE, ge=0.0, le=1.0)
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, gt=0)
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=0)


def _load_json(filepath: str | Path) -> dict:
    try:
        with open(str(filepath), "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"The file {filepath} was not found.")
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"The file {filepath} is not a valid JSON file: {e}")

    if not isinstance(data, dict):
        raise ConfigurationError(f"The file {filepath} must contain a JSON object.")
    return data


def load_tagging_config(filepath: str | Path) -> TaggingConfig:
    """
    Load a TaggingConfig from a JSON file.

    Keys left out of the file keep their defaults. The optional "transport"
    section is ignored here; use load_transport_config for it.

    Args:
        filepath: Path to the JSON configuration file

    Returns:
        Validated TaggingConfig

    Raises:
        ConfigurationError: If the file is missing, not JSON, or fails validation
    """
    data = _load_json(filepath)
    data.pop("transport", None)
    try:
        return TaggingConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid tagging configuration in {filepath}: {e}")


def load_transport_config(filepath: str | Path) -> TransportConfig:
    """Load the "transport" section of a JSON configuration file."""
    data = _load_json(filepath)
    try:
        return TransportConfig.model_validate(data.get("transport", {}))
    except ValidationError as e:
        raise ConfigurationError(f"Invalid transport configuration in {filepath}: {e}")
