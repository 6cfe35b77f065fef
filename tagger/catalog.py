"""
Helpers for working with label catalogs.

Label IDs are namespace qualified, e.g. "myaemproject:topic/automotive". The
segment right after the namespace ("topic") is the label's category, which is
what the prompt groups labels by.
"""

from typing import Dict, List, Tuple

from .models import CategorizedCatalog, LabelCatalog

NAMESPACE_DELIMITER = ":"
PATH_SEPARATOR = "/"
OTHER_CATEGORY = "other"


def extract_category(label_id: str) -> str:
    """
    Get the category of a label ID.

    Args:
        label_id: Namespace-qualified label ID

    Returns:
        The first path segment after the namespace, or "other" if the ID has
        no namespace

    Example:
        >>> extract_category("myaemproject:content-type/article")
        "content-type"
        >>> extract_category("myaemproject:featured")
        "featured"
    """
    if NAMESPACE_DELIMITER not in label_id:
        return OTHER_CATEGORY

    after_namespace = label_id.split(NAMESPACE_DELIMITER, 1)[1]
    slash_index = after_namespace.find(PATH_SEPARATOR)
    if slash_index > 0:
        return after_namespace[:slash_index]
    return after_namespace


def categorize_catalog(catalog: LabelCatalog) -> CategorizedCatalog:
    """
    Group a catalog by category, keeping first-seen order.

    Categories appear in the order their first label appears in the catalog,
    and labels keep catalog order within each category.

    Args:
        catalog: Label ID -> display title

    Returns:
        Category -> list of (label ID, title) pairs
    """
    categorized: Dict[str, List[Tuple[str, str]]] = {}
    for label_id, title in catalog.items():
        categorized.setdefault(extract_category(label_id), []).append((label_id, title))
    return categorized


def format_category_heading(category: str) -> str:
    """Render a category name as a prompt heading ("content-type" -> "CONTENT TYPE")."""
    return category.upper().replace("-", " ")
