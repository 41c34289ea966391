"""Structured logging for gacs-pack builds.

Every log line written while a build is running carries the build's
correlation id, and once the snapshot is hashed, its context pack id too.
"""

import logging
import uuid
from typing import Any, Dict, Optional

import structlog
from structlog.contextvars import bind_contextvars, get_contextvars, reset_contextvars

BUILD_CONTEXT_KEYS = ("build_id", "context_pack_id")


def configure_logging(log_level: str = "INFO") -> None:
    """Render structlog output as JSON lines on stdout.

    Args:
        log_level: Minimum level name (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            unknown names fall back to INFO
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(level=numeric_level)

    structlog.configure(
        processors=[
            add_build_context,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=True,
    )


def add_build_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Copy the running build's ids from contextvars into the event."""
    context = get_contextvars()
    for key in BUILD_CONTEXT_KEYS:
        if key in context:
            event_dict.setdefault(key, context[key])
    return event_dict


def get_logger(name: str) -> Any:
    """Module logger; configured by configure_logging() when it has run."""
    return structlog.get_logger(name)


def as_structlog(logger: Any) -> Any:
    """Make a caller-supplied logger usable with bind().

    Standard library loggers are wrapped so each event reaches them as one
    JSON line; structlog loggers are returned unchanged.
    """
    if isinstance(logger, logging.Logger):
        return structlog.wrap_logger(
            logger,
            wrapper_class=structlog.stdlib.BoundLogger,
            processors=[
                add_build_context,
                structlog.processors.add_log_level,
                structlog.processors.JSONRenderer(),
            ],
        )
    return logger


def generate_build_id() -> str:
    """Unique id for correlating one build's log lines.

    Unrelated to the content-addressed context pack id.
    """
    return str(uuid.uuid4())


class BuildContext:
    """Binds build ids into the logging context for the duration of a build."""

    def __init__(self, build_id: Optional[str] = None):
        self.build_id = build_id or generate_build_id()
        self.tokens: Dict[str, Any] = {}

    def __enter__(self) -> str:
        self.tokens = bind_contextvars(build_id=self.build_id)
        return self.build_id

    def bind_pack_id(self, context_pack_id: str) -> None:
        """Tag the rest of the build's log lines with its context pack id."""
        self.tokens.update(bind_contextvars(context_pack_id=context_pack_id))

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.tokens:
            reset_contextvars(**self.tokens)
