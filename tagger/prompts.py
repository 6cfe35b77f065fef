"""
Prompt templates for content tagging.

This module contains the prompt generation functions used by the pipeline:
catalog-constrained label suggestion, free-text concept extraction, and
single-label content-type classification.
"""

from typing import Sequence

from .catalog import format_category_heading
from .config import CONTENT_TYPES
from .models import CategorizedCatalog


def format_catalog_block(categorized: CategorizedCatalog) -> str:
    """
    Render a categorized catalog as a prompt section.

    Args:
        categorized: Output of categorize_catalog

    Returns:
        One heading per category followed by "  - LABEL_ID (title)" lines
    """
    sections = []
    for category, labels in categorized.items():
        lines = [f"{format_category_heading(category)}:"]
        lines.extend(f"  - {label_id} ({title})" for label_id, title in labels)
        sections.append("\n".join(lines))
    return "\n\n".join(sections)


def tag_suggestion_prompt(text: str, categorized: CategorizedCatalog) -> str:
    """
    Generate a prompt asking the model to pick labels from a fixed catalog.

    The model must only return label IDs that appear in the catalog, as a
    single comma-separated line. The content is fenced with "---" lines so it
    cannot be confused with the instructions.

    Args:
        text: Document content to classify
        categorized: Catalog grouped by category

    Returns:
        Formatted prompt string for the LLM
    """
    catalog_block = format_catalog_block(categorized)

    return f"""You are a content tagging expert for a content management system.

AVAILABLE TAGS (you MUST return tag IDs from this list ONLY):

{catalog_block}

INSTRUCTIONS:
1. Analyze the content below
2. Select ONLY the most relevant tag IDs from the available tags list above
3. Return ONLY tag IDs, comma-separated, on a single line, nothing else
4. Do NOT invent new tags - use ONLY tags from the list
5. Select 3-8 tags that best describe the content
6. Prioritize content-type, topic, and audience tags

CONTENT TO ANALYZE:
---
{text}
---

Return format: tagid1,tagid2,tagid3"""


def concept_extraction_prompt(text: str) -> str:
    """Generate a prompt that extracts free-form concepts from content."""
    return f"""Analyze the following content and extract key concepts, topics, and themes.
Return ONLY a comma-separated list of concepts, no explanations.

CONTENT:
---
{text}
---"""


def content_type_prompt(text: str, content_types: Sequence[str] = CONTENT_TYPES) -> str:
    """
    Generate a prompt that classifies content into exactly one content type.

    Args:
        text: Document content to classify
        content_types: Closed set of allowed type names

    Returns:
        Formatted prompt string for the LLM
    """
    types_list = ", ".join(content_types)

    return f"""Classify this content into ONE of these types: {types_list}.
Return ONLY the type name, nothing else.

CONTENT:
---
{text}
---"""
