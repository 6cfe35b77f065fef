"""
Data models for content tagging.

This module defines the core data structures passed between the pipeline stages.
"""

from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel

# A clean document tree: property key -> scalar value or nested ContentNode
ContentNode = Dict[str, Any]

# Label ID (e.g. "myaemproject:topic/automotive") -> display title
LabelCatalog = Dict[str, str]

# Category name -> ordered (label ID, title) pairs
CategorizedCatalog = Dict[str, List[Tuple[str, str]]]

FailureKind = Literal[
    "input_absent",
    "empty_content",
    "transport_failure",
    "malformed_response",
    "no_valid_labels",
    "catalog_unavailable",
    "apply_failed",
]


class SuggestionResult(BaseModel):
    """
    Outcome of a single label suggestion request.

    Either a success carrying the validated label IDs, or a failure tagged with
    the kind of problem so callers can tell "nothing to tag" apart from
    "the model endpoint is down" without scraping logs.

    Attributes:
        status: "success" or "failure"
        labels: Validated, de-duplicated label IDs (empty on failure, except
            apply_failed, which keeps the labels that could not be written)
        failure_kind: Why the request failed (None on success)
        detail: Human-readable diagnostic for the failure
        raw_response: The model's raw reply, when one was received
    """

    status: Literal["success", "failure"]
    labels: List[str] = []
    failure_kind: Optional[FailureKind] = None
    detail: str = ""
    raw_response: Optional[str] = None

    @classmethod
    def success(cls, labels: List[str], raw_response: Optional[str] = None) -> "SuggestionResult":
        return cls(status="success", labels=list(labels), raw_response=raw_response)

    @classmethod
    def failure(
        cls, kind: FailureKind, detail: str = "", raw_response: Optional[str] = None
    ) -> "SuggestionResult":
        return cls(status="failure", failure_kind=kind, detail=detail, raw_response=raw_response)

    @property
    def ok(self) -> bool:
        return self.status == "success"
