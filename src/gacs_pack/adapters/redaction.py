"""Reference redaction policies."""

from typing import Iterable

from ..models.section import RawContext
from ..ports import PIIShield

REDACTED = "[REDACTED]"


class PassThroughShield(PIIShield):
    """Return the context unchanged."""

    def redact(self, context: RawContext, *, role: str, intent: str) -> RawContext:
        return context


class KeyMaskingShield(PIIShield):
    """
    Mask the body of sensitive sections unless the role is privileged.

    Section order is preserved; masked sections stay in place.

    Example:
        shield = KeyMaskingShield(sensitive_keys=["ssn"], allowed_roles=["admin"])
        shield.redact(context, role="provider", intent="care_gap")
        # the "ssn" section body becomes "[REDACTED]"
    """

    def __init__(self, sensitive_keys: Iterable[str], allowed_roles: Iterable[str] = (), mask: str = REDACTED):
        self.sensitive_keys = frozenset(sensitive_keys)
        self.allowed_roles = frozenset(allowed_roles)
        self.mask = mask

    def redact(self, context: RawContext, *, role: str, intent: str) -> RawContext:
        context = RawContext.coerce(context)
        if role in self.allowed_roles:
            return context

        sections = [
            section.model_copy(update={"body": self.mask})
            if section.key in self.sensitive_keys
            else section
            for section in context.sections
        ]
        return RawContext(sections=sections)
