"""
Utilities for walking content trees.

This module provides the abstract node interface the pipeline reads documents
through, a dict-backed implementation of it, and the functions that turn a
document tree into clean nested data and then into plain text for prompting.
"""

import logging
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Protocol

from .config import DEFAULT_CONTENT_CHILD, DEFAULT_MAX_DEPTH
from .models import ContentNode

logger = logging.getLogger(__name__)

_TITLE_KEYS = ("jcr:title", "title")
_DESCRIPTION_KEYS = ("jcr:description", "description")


class ResourceNode(Protocol):
    """
    Protocol for one node of a hierarchical document.

    A node has a name, its own property map, and an ordered list of children.
    Any document store can be plugged into the pipeline by adapting its
    resources to this interface.
    """

    @property
    def name(self) -> str:
        ...

    def properties(self) -> Mapping[str, Any]:
        """Own properties of the node, in store order."""
        ...

    def children(self) -> Iterable["ResourceNode"]:
        """Child nodes, in store order."""
        ...


class DictResourceNode:
    """
    ResourceNode backed by a nested dictionary (e.g. a JSON export).

    Dictionary values become children; every other value is a property.

    Args:
        name: Node name
        data: Mapping of keys to property values or child mappings
    """

    def __init__(self, name: str, data: Mapping[str, Any]):
        self._name = name
        self._data = data

    @property
    def name(self) -> str:
        return self._name

    @property
    def data(self) -> Mapping[str, Any]:
        return self._data

    def properties(self) -> Dict[str, Any]:
        return {k: v for k, v in self._data.items() if not isinstance(v, Mapping)}

    def children(self) -> Iterator["DictResourceNode"]:
        for key, value in self._data.items():
            if isinstance(value, Mapping):
                yield DictResourceNode(key, value)

    def get_child(self, name: str) -> Optional["DictResourceNode"]:
        value = self._data.get(name)
        if isinstance(value, Mapping):
            return DictResourceNode(name, value)
        return None

    def __repr__(self) -> str:
        return f"DictResourceNode({self._name!r})"


def extract_clean_tree(
    node: Optional[ResourceNode],
    excluded_keys: Iterable[str],
    max_depth: int = DEFAULT_MAX_DEPTH,
    depth: int = 0,
) -> ContentNode:
    """
    Build a nested dictionary from a document tree, dropping excluded keys.

    Properties are copied first (value types preserved), then each child is
    walked with depth + 1. Children whose result is empty are omitted rather
    than kept as empty placeholders.

    Args:
        node: Root of the (sub)tree to extract; None yields an empty dict
        excluded_keys: Keys that must never appear in the output, whether they
            name a property or a child
        max_depth: Deepest level that is still extracted
        depth: Current depth (used internally for recursion)

    Returns:
        Clean nested dictionary; empty once depth exceeds max_depth

    Example:
        >>> root = DictResourceNode("page", {"jcr:uuid": "1", "title": "Hi", "c": {"jcr:uuid": "2"}})
        >>> extract_clean_tree(root, {"jcr:uuid"})
        {"title": "Hi"}
    """
    result: ContentNode = {}

    if node is None or depth > max_depth:
        return result

    excluded = excluded_keys if isinstance(excluded_keys, (set, frozenset)) else set(excluded_keys)

    for key, value in node.properties().items():
        if key not in excluded:
            result[key] = value

    for child in node.children():
        if child.name in excluded:
            continue
        child_tree = extract_clean_tree(child, excluded, max_depth, depth + 1)
        if child_tree:
            result[child.name] = child_tree

    return result


def flatten_text(tree: Mapping[str, Any], text_keys: Iterable[str]) -> str:
    """
    Collect the text-bearing values of a clean tree into one string.

    Walks depth first in the tree's own order. String values under a key in
    text_keys are trimmed and appended with a single space separator; nested
    dictionaries are always recursed into, whatever their key.

    Args:
        tree: Clean tree from extract_clean_tree
        text_keys: Keys whose values count as human-readable text

    Returns:
        Concatenated text, or an empty string when no text was found
    """
    keys = text_keys if isinstance(text_keys, (set, frozenset)) else set(text_keys)
    parts: list[str] = []
    _collect_text(tree, keys, parts)
    return " ".join(parts).strip()


def _collect_text(tree: Mapping[str, Any], text_keys, parts: list[str]) -> None:
    for key, value in tree.items():
        if key in text_keys and isinstance(value, str):
            stripped = value.strip()
            if stripped:
                parts.append(stripped)

        if isinstance(value, Mapping):
            _collect_text(value, text_keys, parts)


def _first_text(props: Mapping[str, Any], keys) -> str:
    for key in keys:
        value = props.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def _page_properties(node: ResourceNode, content_child: str) -> Mapping[str, Any]:
    for child in node.children():
        if child.name == content_child:
            return child.properties()
    return node.properties()


def build_document_content(
    node: ResourceNode, text: str, content_child: str = DEFAULT_CONTENT_CHILD
) -> str:
    """
    Prefix flattened text with the document's title, name and description.

    Page-level properties are read from the content child (e.g. "jcr:content")
    when the node has one, otherwise from the node itself.

    Args:
        node: Document root
        text: Flattened text of the document
        content_child: Name of the child holding page-level properties

    Returns:
        Text block handed to the prompt builder
    """
    props = _page_properties(node, content_child)
    title = _first_text(props, _TITLE_KEYS)
    description = _first_text(props, _DESCRIPTION_KEYS)

    lines = [f"Page Title: {title}", f"Page Name: {node.name}"]
    if description:
        lines.append(f"Description: {description}")
    lines.append("")
    lines.append("Page Content:")
    lines.append(text)
    return "\n".join(lines)
