"""Explicit collaborator wiring for the context engine."""

from dataclasses import dataclass, fields
from typing import Any, List, Optional

from ..ports import EventSink, GraphSource, PIIShield, SnapshotStore, Tokenizer
from .parser import PackSettings

DEFAULT_POLICY_VERSION = "v1"

REQUIRED_COLLABORATORS = ("graph", "pii_shield", "tokenizer", "store")


@dataclass(frozen=True)
class EngineConfig:
    """
    Collaborators and policy for one ContextEngine.

    Built once before any build call and read-only afterwards. Engines with
    different wiring can run side by side. ``logger`` may be a structlog
    logger or a standard library ``logging.Logger``, which is wrapped so it
    accepts bound context; the module logger is used when it is None.

    Example:
        config = EngineConfig(
            graph=MyGraphSource(),
            pii_shield=PassThroughShield(),
            tokenizer=TiktokenTokenizer("gpt-4"),
            store=SQLiteSnapshotStore("packs.db"),
            events=LoggingEventSink(),
            policy_version="caregap-v1",
        )
    """

    graph: Optional[GraphSource] = None
    pii_shield: Optional[PIIShield] = None
    tokenizer: Optional[Tokenizer] = None
    store: Optional[SnapshotStore] = None
    events: Optional[EventSink] = None
    policy_version: Optional[str] = None
    logger: Any = None

    @property
    def resolved_policy_version(self) -> str:
        return self.policy_version or DEFAULT_POLICY_VERSION

    def missing_collaborators(self) -> List[str]:
        """Names of required collaborators that are not set."""
        return [name for name in REQUIRED_COLLABORATORS if getattr(self, name) is None]

    @classmethod
    def from_settings(cls, settings: PackSettings, **collaborators: Any) -> "EngineConfig":
        """
        Wire reference tokenizer and store from settings.

        Explicit collaborators win over the ones built from settings.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(collaborators) - known
        if unknown:
            raise TypeError(f"Unknown collaborator(s): {', '.join(sorted(unknown))}")

        wiring = {
            "tokenizer": build_tokenizer(settings),
            "store": build_store(settings),
            "policy_version": settings.policy_version,
        }
        wiring.update(collaborators)
        return cls(**wiring)


def build_tokenizer(settings: PackSettings) -> Tokenizer:
    """Create the reference tokenizer selected in settings."""
    from ..token_budget.tokenizers import CharRatioTokenizer, TiktokenTokenizer

    if settings.tokenizer.kind == "chars":
        return CharRatioTokenizer(settings.tokenizer.chars_per_token)
    return TiktokenTokenizer(settings.tokenizer.model)


def build_store(settings: PackSettings) -> SnapshotStore:
    """Create the reference snapshot store selected in settings."""
    from ..storage import InMemorySnapshotStore, SQLiteSnapshotStore

    if settings.store.kind == "sqlite":
        return SQLiteSnapshotStore(settings.store.db_path, tenant_id=settings.store.tenant_id)
    return InMemorySnapshotStore()
