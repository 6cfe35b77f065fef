"""
LLM-assisted Content Tagging Package
"""

from .catalog import categorize_catalog, extract_category
from .config import (
    CONTENT_TYPES,
    DEFAULT_CONCEPT_TABLE,
    DEFAULT_EXCLUDED_KEYS,
    DEFAULT_MAX_DEPTH,
    DEFAULT_TEXT_KEYS,
    TaggingConfig,
    TransportConfig,
    load_tagging_config,
    load_transport_config,
)
from .exceptions import (
    ConfigurationError,
    MalformedResponseError,
    TaggerError,
    TransportError,
)
from .models import SuggestionResult
from .pipeline import TaggingPipeline
from .prompts import concept_extraction_prompt, content_type_prompt, tag_suggestion_prompt
from .resolver import map_concepts_to_labels, parse_concepts, resolve_labels
from .stores import InMemoryLabelCatalogStore, JsonDocumentStore, JsonLabelCatalogStore
from .transport import LLMTransport, OpenAITransport
from .tree import DictResourceNode, ResourceNode, extract_clean_tree, flatten_text

__version__ = "1.0.0"

__all__ = [
    # Models
    "SuggestionResult",
    "ResourceNode",
    "DictResourceNode",
    # Configuration
    "TaggingConfig",
    "TransportConfig",
    "load_tagging_config",
    "load_transport_config",
    "DEFAULT_EXCLUDED_KEYS",
    "DEFAULT_TEXT_KEYS",
    "DEFAULT_MAX_DEPTH",
    "DEFAULT_CONCEPT_TABLE",
    "CONTENT_TYPES",
    # Errors
    "TaggerError",
    "ConfigurationError",
    "TransportError",
    "MalformedResponseError",
    # Tree
    "extract_clean_tree",
    "flatten_text",
    # Catalog
    "extract_category",
    "categorize_catalog",
    # Prompts
    "tag_suggestion_prompt",
    "concept_extraction_prompt",
    "content_type_prompt",
    # Resolution
    "resolve_labels",
    "parse_concepts",
    "map_concepts_to_labels",
    # Stores
    "JsonDocumentStore",
    "JsonLabelCatalogStore",
    "InMemoryLabelCatalogStore",
    # Transport
    "LLMTransport",
    "OpenAITransport",
    # Pipeline
    "TaggingPipeline",
]
