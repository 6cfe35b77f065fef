"""
Content-to-label suggestion pipeline.

Runs a document through extraction, flattening, prompting, the model
transport and response validation. Every failure is reported as a
SuggestionResult instead of an exception, so the host can decide whether
"no labels" is an error.

**Flow**:
1. Extract a clean tree (excluded keys dropped, depth bounded)
2. Flatten it to text; stop here if there is none
3. Categorize the catalog and build the prompt
4. Call the transport once
5. Keep only reply tokens that exist in the catalog
"""

import logging
from typing import List, Optional

from .catalog import categorize_catalog
from .config import TaggingConfig
from .exceptions import ConfigurationError, MalformedResponseError, TransportError
from .models import LabelCatalog, SuggestionResult
from .prompts import concept_extraction_prompt, content_type_prompt, tag_suggestion_prompt
from .resolver import map_concepts_to_labels, normalize_content_type, parse_concepts, resolve_labels
from .stores import DocumentStore, LabelCatalogStore, LabelSink
from .transport import LLMTransport
from .tree import ResourceNode, build_document_content, extract_clean_tree, flatten_text

logger = logging.getLogger(__name__)


class TaggingPipeline:
    """
    Suggests catalog labels for content documents.

    Args:
        transport: Model transport used for every LLM call
        config: Key sets, depth bound and concept table
    """

    def __init__(self, transport: LLMTransport, config: Optional[TaggingConfig] = None):
        self.transport = transport
        self.config = config or TaggingConfig()

    def _call_model(self, prompt: str) -> tuple[Optional[str], Optional[SuggestionResult]]:
        """Call the transport, returning (raw reply, None) or (None, failure)."""
        try:
            raw = self.transport.complete(prompt)
        except MalformedResponseError as e:
            logger.error("Malformed model response: %s", e)
            return None, SuggestionResult.failure("malformed_response", str(e))
        except TransportError as e:
            logger.error("Model transport failed: %s", e)
            return None, SuggestionResult.failure("transport_failure", str(e))

        if not raw or not raw.strip():
            logger.warning("Empty response from model")
            return None, SuggestionResult.failure("malformed_response", "Empty response", raw)

        return raw, None

    def prepare_content(self, node: Optional[ResourceNode]) -> str:
        """
        Turn a document tree into the text block sent to the model.

        Args:
            node: Document root

        Returns:
            Header plus flattened text, or "" when the document has no text
        """
        if node is None:
            return ""

        clean_tree = extract_clean_tree(node, self.config.excluded_keys, self.config.max_depth)
        text = flatten_text(clean_tree, self.config.text_keys)
        if not text:
            return ""

        logger.info("Extracted %d characters of text", len(text))
        return build_document_content(node, text, self.config.content_child)

    def suggest_labels(self, content: str, catalog: LabelCatalog) -> SuggestionResult:
        """
        Ask the model for catalog labels that fit the content.

        Args:
            content: Text to classify
            catalog: Valid label IDs -> titles for this request

        Returns:
            Success with validated labels, or a tagged failure
        """
        assert catalog is not None, "catalog must not be None"

        if not content or not content.strip():
            return SuggestionResult.failure("empty_content", "No text content to classify")

        if not catalog:
            logger.warning("No available labels provided to the model")
            return SuggestionResult.failure("no_valid_labels", "Label catalog is empty")

        prompt = tag_suggestion_prompt(content, categorize_catalog(catalog))
        logger.debug("Sending prompt to model with %d available labels", len(catalog))

        raw, failure = self._call_model(prompt)
        if failure is not None:
            return failure

        labels = resolve_labels(raw, catalog)
        if not labels:
            return SuggestionResult.failure(
                "no_valid_labels", "No suggested label exists in the catalog", raw
            )

        return SuggestionResult.success(labels, raw)

    def suggest_for_resource(
        self, node: Optional[ResourceNode], catalog: LabelCatalog
    ) -> SuggestionResult:
        """Extract, flatten and classify one document tree."""
        if node is None:
            return SuggestionResult.failure("input_absent", "Resource not found")

        content = self.prepare_content(node)
        if not content:
            logger.warning("No text content extracted from resource: %s", node.name)
            return SuggestionResult.failure(
                "empty_content", f"No text content in resource {node.name}"
            )

        return self.suggest_labels(content, catalog)

    def extract_concepts(self, content: str) -> List[str]:
        """
        Ask the model for free-form concepts describing the content.

        Returns:
            Concepts in reply order; empty if there was no content or the call failed
        """
        if not content or not content.strip():
            return []

        raw, failure = self._call_model(concept_extraction_prompt(content))
        if failure is not None:
            return []
        return parse_concepts(raw)

    def suggest_from_concepts(self, content: str) -> SuggestionResult:
        """
        Backward-compatible flow: extract concepts, then map them to labels.

        Labels come from the concept table rather than a catalog, so nothing
        here is validated against one.
        """
        if not content or not content.strip():
            return SuggestionResult.failure("empty_content", "No text content to classify")

        raw, failure = self._call_model(concept_extraction_prompt(content))
        if failure is not None:
            return failure

        labels = map_concepts_to_labels(parse_concepts(raw), self.config.concept_table)
        if not labels:
            logger.warning("No concept could be mapped to a label. Response was: %s", raw)
            return SuggestionResult.failure("no_valid_labels", "No concept matched a label", raw)

        return SuggestionResult.success(labels, raw)

    def classify_content_type(self, content: str) -> Optional[str]:
        """
        Classify content into one type from the configured closed set.

        Returns:
            The content type, or None if it could not be determined
        """
        if not content or not content.strip():
            return None

        raw, failure = self._call_model(content_type_prompt(content, self.config.content_types))
        if failure is not None:
            return None
        return normalize_content_type(raw, self.config.content_types)

    def process_document(
        self,
        path: str,
        store: DocumentStore,
        catalog_store: LabelCatalogStore,
        sink: Optional[LabelSink] = None,
    ) -> SuggestionResult:
        """
        Suggest labels for the document at path and apply them.

        Args:
            path: Document path in the store
            store: Source of the document tree
            catalog_store: Source of the current label catalog
            sink: Where labels are persisted; nothing is written when omitted

        Returns:
            The suggestion result; labels are applied only on success, and a
            sink that rejects them turns the result into an apply_failed failure
        """
        logger.info("Processing document: %s", path)

        node = store.get_resource(path)
        if node is None:
            logger.error("Resource not found: %s", path)
            return SuggestionResult.failure("input_absent", f"Resource not found: {path}")

        content = self.prepare_content(node)
        if not content:
            logger.warning("No text content extracted from: %s", path)
            return SuggestionResult.failure("empty_content", f"No text content in {path}")

        try:
            catalog = catalog_store.get_all_available_labels()
        except ConfigurationError as e:
            logger.error("Could not load label catalog: %s", e)
            return SuggestionResult.failure("catalog_unavailable", str(e))

        result = self.suggest_labels(content, catalog)

        if result.ok and sink is not None:
            if not sink.apply_labels(path, result.labels):
                logger.error("Labels could not be applied to: %s", path)
                result = result.model_copy(
                    update={
                        "status": "failure",
                        "failure_kind": "apply_failed",
                        "detail": f"Labels could not be applied to {path}",
                    }
                )

        logger.info("Finished document %s: %s", path, result.status)
        return result
