"""Collaborator interfaces consumed by the context engine."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Sequence, Union

from .models.section import RawContext, Section

ContextLike = Union[RawContext, Mapping[str, Any]]


class GraphSource(ABC):
    """Builds raw context sections from an application's knowledge graph."""

    @abstractmethod
    def build_context(
        self,
        *,
        subject_id: Any,
        subject_type: str,
        intent: str,
        role: str,
    ) -> ContextLike:
        """Build context sections for a subject.

        Args:
            subject_id: ID of the subject entity
            subject_type: Type of the subject (e.g. "Patient", "Order")
            intent: Purpose of the context pack (e.g. "care_gap_analysis")
            role: Role of the requester (e.g. "provider")

        Returns:
            RawContext, or a mapping with a "sections" list
        """
        pass


class PIIShield(ABC):
    """Role- and intent-aware redaction of raw context."""

    @abstractmethod
    def redact(self, context: RawContext, *, role: str, intent: str) -> ContextLike:
        """Mask, alter or drop sections according to policy.

        Returns:
            Context of the same shape as the input
        """
        pass


class Tokenizer(ABC):
    """Token accounting and budget truncation."""

    @abstractmethod
    def count_tokens(self, obj: Any) -> int:
        """Count tokens in a string or a JSON-like structure."""
        pass

    @abstractmethod
    def truncate_sections(self, sections: Sequence[Section], *, budget_tokens: int) -> List[Section]:
        """Keep the longest prefix of pre-sorted sections that fits the budget.

        Walks the sections in order and stops at the first one that would
        push the running total over budget_tokens. Later, cheaper sections
        are never pulled forward.
        """
        pass


class SnapshotStore(ABC):
    """Persistence for context pack snapshots."""

    @abstractmethod
    def save(self, *, id: str, snapshot: Any, meta: Dict[str, Any]) -> None:
        """Persist a snapshot under its content-addressed id.

        Must be an idempotent upsert keyed by id: concurrent saves of the same
        id are safe and their order does not matter.
        """
        pass


class EventSink(ABC):
    """Optional lifecycle notifications."""

    @abstractmethod
    def emit(self, event_name: str, payload: Dict[str, Any]) -> None:
        """Fire-and-forget delivery of one event."""
        pass
