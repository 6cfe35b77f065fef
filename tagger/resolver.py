"""
Turning raw model replies into label IDs.

resolve_labels is strict: a token survives only if it is an exact catalog key.
map_concepts_to_labels is the lenient, backward-compatible path for replies
made of free-form concepts; it matches them against a concept table, exactly
first and then by substring.
"""

import logging
from typing import Iterable, List, Mapping, Optional, Sequence

from .catalog import NAMESPACE_DELIMITER
from .models import LabelCatalog

logger = logging.getLogger(__name__)

# Formatting artifacts models like to wrap their answers in
_ARTIFACTS = ("```", "`", '"', "'", "“", "”", "‘", "’")


def clean_response(raw_response: str) -> str:
    """Strip code fences, backticks and straight/curly quotes from a reply."""
    cleaned = raw_response
    for artifact in _ARTIFACTS:
        cleaned = cleaned.replace(artifact, "")
    return cleaned.strip()


def _split_tokens(text: str) -> List[str]:
    return [token.strip() for token in text.split(",") if token.strip()]


def _dedupe(items: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(items))


def parse_concepts(raw_response: Optional[str]) -> List[str]:
    """
    Split a concept-extraction reply into individual concepts.

    Args:
        raw_response: Raw model reply, possibly empty

    Returns:
        Trimmed, non-empty concepts in reply order
    """
    if not raw_response or not raw_response.strip():
        return []
    return _split_tokens(clean_response(raw_response))


def resolve_labels(raw_response: Optional[str], catalog: LabelCatalog) -> List[str]:
    """
    Parse a label-suggestion reply and keep only labels that exist.

    Never raises for bad input: an empty or unusable reply yields an empty
    list, and every rejected token is logged.

    Args:
        raw_response: Raw model reply
        catalog: Catalog the reply must be validated against

    Returns:
        Catalog label IDs in reply order, de-duplicated

    Example:
        >>> resolve_labels("`tagA`, tagA, tagZ", {"tagA": "A"})
        ["tagA"]
    """
    assert catalog is not None, "catalog must not be None"

    if not raw_response or not raw_response.strip():
        logger.warning("Empty response from model")
        return []

    valid: List[str] = []
    for token in _split_tokens(clean_response(raw_response)):
        if token in catalog:
            valid.append(token)
        else:
            logger.warning("Model suggested non-existent label: %s", token)

    labels = _dedupe(valid)

    if not labels:
        logger.warning("Model returned no valid labels. Response was: %s", raw_response)
    else:
        logger.info("Model suggested %d valid labels: %s", len(labels), labels)

    return labels


def _match_concept(normalized: str, concept_table: Mapping[str, str]) -> Optional[str]:
    label_id = concept_table.get(normalized)
    if label_id is not None:
        return label_id

    # First match in table order wins, not the closest one
    for key, value in concept_table.items():
        if key in normalized or normalized in key:
            return value

    return None


def map_concepts_to_labels(
    concepts: Optional[Sequence[str]], concept_table: Mapping[str, str]
) -> List[str]:
    """
    Map free-form concepts to label IDs.

    Each concept is lower-cased and trimmed, then:
    1. Passed through unchanged if it already looks like a label ID
       (contains the namespace delimiter)
    2. Looked up exactly in the concept table
    3. Matched against the first table key that contains it or is contained in it

    Args:
        concepts: Concepts suggested by the model
        concept_table: Concept -> label ID, iterated in order for fuzzy matching

    Returns:
        Label IDs in concept order, de-duplicated; unmatched concepts are dropped

    Example:
        >>> map_concepts_to_labels(["automotive-news"], {"automotive": "ns:topic/automotive"})
        ["ns:topic/automotive"]
    """
    if not concepts:
        return []

    labels: List[str] = []
    for concept in concepts:
        normalized = concept.lower().strip()
        if not normalized:
            continue

        if NAMESPACE_DELIMITER in normalized:
            labels.append(concept.strip())
            continue

        label_id = _match_concept(normalized, concept_table)
        if label_id is None:
            logger.debug("Could not map concept to label: %s", concept)
            continue
        labels.append(label_id)

    return _dedupe(labels)


def normalize_content_type(raw_response: Optional[str], content_types: Sequence[str]) -> Optional[str]:
    """
    Normalize a content-type reply and check it against the allowed set.

    Args:
        raw_response: Raw model reply
        content_types: Allowed content-type names

    Returns:
        The lower-cased content type, or None if the reply is empty or not in the set
    """
    if not raw_response or not raw_response.strip():
        return None

    candidate = clean_response(raw_response).lower().rstrip(".").strip()
    if candidate in content_types:
        return candidate

    logger.warning("Model returned unknown content type: %s", raw_response)
    return None
