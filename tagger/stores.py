"""
Document and label catalog stores.

The pipeline only depends on the protocols defined here. The JSON-backed
implementations let the CLI run against exported content and tag trees
without a content-management host.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Sequence

from .config import DEFAULT_CONTENT_CHILD, DEFAULT_LABELS_PROPERTY
from .exceptions import ConfigurationError
from .models import LabelCatalog
from .tree import DictResourceNode, ResourceNode

logger = logging.getLogger(__name__)


class DocumentStore(Protocol):
    """Protocol for stores that hand out document trees by path."""

    def get_resource(self, path: str) -> Optional[ResourceNode]:
        ...


class LabelCatalogStore(Protocol):
    """Protocol for stores that enumerate every valid label."""

    def get_all_available_labels(self) -> LabelCatalog:
        ...


class LabelSink(Protocol):
    """Protocol for stores that persist label assignments onto a document."""

    def apply_labels(self, path: str, label_ids: Sequence[str]) -> bool:
        ...


def _read_json(filepath: Path) -> Any:
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"The file {filepath} was not found.")
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"The file {filepath} is not a valid JSON file: {e}")


class JsonDocumentStore:
    """
    Document store backed by a single JSON file.

    The file holds one nested object; a path such as "/content/site/en"
    addresses the object found by following the keys "content", "site", "en".
    Labels are written to the document's content child when it has one,
    otherwise to the document itself, and the file is saved immediately.

    Args:
        filepath: Path to the JSON repository file
        content_child: Name of the child that receives labels
        labels_property: Property that holds the applied label IDs
    """

    def __init__(
        self,
        filepath: str | Path,
        content_child: str = DEFAULT_CONTENT_CHILD,
        labels_property: str = DEFAULT_LABELS_PROPERTY,
    ):
        self.filepath = Path(filepath)
        self.content_child = content_child
        self.labels_property = labels_property

        data = _read_json(self.filepath)
        if not isinstance(data, dict):
            raise ConfigurationError(f"The file {self.filepath} must contain a JSON object.")
        self._data: Dict[str, Any] = data

    def _resolve(self, path: str) -> Optional[tuple[str, Dict[str, Any]]]:
        name = ""
        current: Any = self._data
        for segment in (s for s in path.split("/") if s):
            current = current.get(segment)
            if not isinstance(current, dict):
                return None
            name = segment
        return name, current

    def get_resource(self, path: str) -> Optional[DictResourceNode]:
        resolved = self._resolve(path)
        if resolved is None:
            return None
        name, data = resolved
        return DictResourceNode(name, data)

    def apply_labels(self, path: str, label_ids: Sequence[str]) -> bool:
        if not label_ids:
            logger.warning("No labels to apply to resource: %s", path)
            return False

        resolved = self._resolve(path)
        if resolved is None:
            logger.error("Resource not found: %s", path)
            return False

        _, node = resolved
        target = node.get(self.content_child)
        if not isinstance(target, dict):
            target = node

        target[self.labels_property] = list(label_ids)
        self.save()

        logger.info("Applied %d labels to resource: %s", len(label_ids), path)
        return True

    def save(self) -> None:
        """Write the repository back to its JSON file."""
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(self.filepath, "w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2, ensure_ascii=False)


def _collect_labels(node: Any, catalog: LabelCatalog) -> None:
    if not isinstance(node, dict):
        raise ConfigurationError(f"Tag node must be a JSON object, got: {node!r}")

    label_id = node.get("id")
    if label_id:
        catalog[label_id] = node.get("title") or label_id

    children = node.get("children", [])
    if not isinstance(children, list):
        raise ConfigurationError(f"Tag node children must be a list: {label_id or node!r}")

    for child in children:
        _collect_labels(child, catalog)


def parse_label_catalog(data: Any) -> LabelCatalog:
    """
    Build a catalog from either supported JSON shape.

    Accepted shapes:
    - A flat object mapping label ID to title
    - A tag tree: a node (or list of nodes) with "id", "title" and "children",
      collected depth first, parents before their children

    Args:
        data: Parsed JSON

    Returns:
        Label ID -> title, in file order
    """
    catalog: LabelCatalog = {}

    if isinstance(data, list):
        for node in data:
            _collect_labels(node, catalog)
    elif isinstance(data, dict) and ("id" in data or "children" in data):
        _collect_labels(data, catalog)
    elif isinstance(data, dict):
        catalog.update({str(k): str(v) for k, v in data.items()})
    else:
        raise ConfigurationError("Label catalog must be a JSON object or a list of tag nodes.")

    return catalog


class JsonLabelCatalogStore:
    """
    Label catalog read from a JSON file.

    The file is re-read on every call so each request sees the current catalog.
    """

    def __init__(self, filepath: str | Path):
        self.filepath = Path(filepath)

    def get_all_available_labels(self) -> LabelCatalog:
        catalog = parse_label_catalog(_read_json(self.filepath))
        logger.debug("Found %d labels in %s", len(catalog), self.filepath)
        return catalog


class InMemoryLabelCatalogStore:
    """Label catalog held in memory; returns a fresh copy on every call."""

    def __init__(self, labels: LabelCatalog):
        self._labels = dict(labels)

    def get_all_available_labels(self) -> LabelCatalog:
        return dict(self._labels)
