"""Fake collaborator implementations for testing."""

from typing import Dict, List, Optional, Sequence, Union

from tagger.tree import DictResourceNode


class FakeTransport:
    """Scripted transport that records every prompt it receives."""

    def __init__(self, responses: Optional[List[Union[str, Exception]]] = None) -> None:
        self._responses = list(responses or [])
        self.prompts: List[str] = []

    @property
    def call_count(self) -> int:
        return len(self.prompts)

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self._responses:
            raise AssertionError("FakeTransport called more times than scripted")
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeDocumentStore:
    """In-memory document store keyed by path."""

    def __init__(self, documents: Dict[str, dict]) -> None:
        self._documents = documents

    def get_resource(self, path: str) -> Optional[DictResourceNode]:
        data = self._documents.get(path)
        if data is None:
            return None
        return DictResourceNode(path.rstrip("/").split("/")[-1], data)


class FakeLabelSink:
    """Records every apply_labels call; reports failure when accept is False."""

    def __init__(self, accept: bool = True) -> None:
        self.accept = accept
        self.applied: List[tuple] = []

    def apply_labels(self, path: str, label_ids: Sequence[str]) -> bool:
        self.applied.append((path, list(label_ids)))
        return self.accept and bool(label_ids)
