"""gacs-pack - reproducible, access-controlled context packs."""

from typing import Any, Dict, Optional, Tuple

from .config import EngineConfig, PackSettings, load_settings
from .context_engine import ContextEngine
from .exceptions import CollaboratorNotConfigured, EventSinkFailure, GacsPackError
from .lineage import aggregate_lineage
from .logging import configure_logging
from .models import RawContext, Section
from .snapshot import Snapshot
from .token_budget import TokenBudgeter

__version__ = "0.1.0"

_default_config = EngineConfig()


def configure(**wiring: Any) -> EngineConfig:
    """Set the process-wide default wiring used by build().

    Call once at startup, before any concurrent builds.

    Example:
        gacs_pack.configure(
            graph=MyGraphSource(),
            pii_shield=PassThroughShield(),
            tokenizer=TiktokenTokenizer(),
            store=SQLiteSnapshotStore("packs.db"),
            policy_version="caregap-v1",
        )
    """
    global _default_config
    _default_config = EngineConfig(**wiring)
    return _default_config


def configure_from_settings(settings: Optional[PackSettings] = None, **collaborators: Any) -> EngineConfig:
    """Set up logging and the default wiring from loaded settings.

    Logging is configured at settings.log_level, then the reference tokenizer
    and store named in settings are wired in. Collaborators passed here win
    over the ones built from settings.

    Example:
        settings, _ = gacs_pack.load_settings("gacs_pack.yaml")
        gacs_pack.configure_from_settings(
            settings,
            graph=MyGraphSource(),
            pii_shield=PassThroughShield(),
        )
    """
    global _default_config
    if settings is None:
        settings, _ = load_settings()
    configure_logging(settings.log_level)
    _default_config = EngineConfig.from_settings(settings, **collaborators)
    return _default_config


def get_config() -> EngineConfig:
    """The current default wiring."""
    return _default_config


def build(**kwargs: Any) -> Tuple[str, Dict[str, Any]]:
    """Build a context pack with the default wiring.

    Takes subject_id, subject_type, intent, role and budget_tokens.
    """
    return ContextEngine(get_config()).build(**kwargs)


__all__ = [
    "CollaboratorNotConfigured",
    "ContextEngine",
    "EngineConfig",
    "EventSinkFailure",
    "GacsPackError",
    "PackSettings",
    "RawContext",
    "Section",
    "Snapshot",
    "TokenBudgeter",
    "aggregate_lineage",
    "build",
    "configure",
    "configure_from_settings",
    "get_config",
    "load_settings",
]
