"""
Context engine for gacs-pack.

Builds a context pack in a fixed sequence of stages and persists it under a
content-addressed id.
"""

import time
from typing import Any, Dict, Tuple

from .config.wiring import EngineConfig
from .exceptions import CollaboratorNotConfigured
from .logging import BuildContext, as_structlog, get_logger
from .models.section import RawContext
from .snapshot import Snapshot
from .token_budget.budgeter import TokenBudgeter

CONTEXT_BUILT = "context_built"

logger = get_logger(__name__)


class ContextEngine:
    """
    Orchestrates the collaborators that produce a context pack.

    Pipeline stages:
    1. Graph source builds raw context
    2. PII shield redacts it
    3. Token budgeter packs sections within the budget
    4. Snapshot is created and hashed into the context pack id
    5. Store persists the snapshot
    6. Event sink is notified, if one is configured

    Collaborator errors propagate unchanged and are never retried. A failed
    save means no event is emitted. A failed emit is logged and swallowed.

    The returned view and the event payload are computed before the store
    sees the snapshot, so nothing a collaborator does to its arguments
    changes what the caller gets back.

    Example:
        engine = ContextEngine(config)

        pack_id, view = engine.build(
            subject_id=123,
            subject_type="Patient",
            intent="care_gap_analysis",
            role="provider",
            budget_tokens=8000,
        )
    """

    def __init__(self, config: EngineConfig):
        """
        Initialize the context engine.

        Args:
            config: Collaborator wiring and policy version
        """
        self.config = config
        self.logger = as_structlog(config.logger) if config.logger is not None else logger

    def build(
        self,
        *,
        subject_id: Any,
        subject_type: str,
        intent: str,
        role: str,
        budget_tokens: int,
    ) -> Tuple[str, Dict[str, Any]]:
        """
        Build, persist and announce a context pack.

        Args:
            subject_id: ID of the subject entity
            subject_type: Type of the subject (e.g. "Patient")
            intent: Purpose of this context pack
            role: Role of the requester
            budget_tokens: Maximum tokens allowed

        Returns:
            Tuple of (context_pack_id, snapshot view)

        Raises:
            CollaboratorNotConfigured: If a required collaborator is missing
        """
        missing = self.config.missing_collaborators()
        if missing:
            raise CollaboratorNotConfigured(missing)

        cfg = self.config
        log = self.logger.bind(intent=intent, role=role, subject_type=subject_type)

        build = BuildContext()
        with build:
            start_time = time.time()
            log.debug("build_started", budget_tokens=budget_tokens)

            try:
                raw = cfg.graph.build_context(
                    subject_id=subject_id,
                    subject_type=subject_type,
                    intent=intent,
                    role=role,
                )
                raw = RawContext.coerce(raw)
                log.debug("graph_context_built", sections=len(raw.sections))

                redacted = RawContext.coerce(cfg.pii_shield.redact(raw, role=role, intent=intent))
                log.debug("context_redacted", sections=len(redacted.sections))

                packed = TokenBudgeter(cfg.tokenizer).pack(redacted, budget_tokens=budget_tokens)
                log.debug("sections_packed", kept=len(packed), offered=len(redacted.sections))

                snapshot = Snapshot(
                    sections=packed,
                    policy_version=cfg.resolved_policy_version,
                    meta={
                        "intent": intent,
                        "role": role,
                        "subject_id": subject_id,
                        "subject_type": subject_type,
                    },
                )
                context_pack_id = snapshot.stable_hash()
                build.bind_pack_id(context_pack_id)
                view = snapshot.to_view()
                payload = {"id": context_pack_id, **snapshot.to_view()["meta"]}

                cfg.store.save(id=context_pack_id, snapshot=snapshot, meta=snapshot.to_view()["meta"])
            except Exception as e:
                log.error("build_failed", error=str(e), error_type=type(e).__name__)
                raise

            self._emit(payload, log)

            log.info(
                "context_built",
                context_pack_id=context_pack_id,
                sections=len(view["sections"]),
                elapsed_ms=int((time.time() - start_time) * 1000),
            )

        return context_pack_id, view

    def _emit(self, payload: Dict[str, Any], log: Any) -> None:
        """Notify the event sink; failures never reach the caller."""
        if self.config.events is None:
            return

        try:
            self.config.events.emit(CONTEXT_BUILT, payload)
        except Exception as e:
            log.warning(
                "event_emit_failed",
                event_name=CONTEXT_BUILT,
                context_pack_id=payload["id"],
                error=str(e),
            )
