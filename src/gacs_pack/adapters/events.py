"""Reference event sinks."""

from typing import Any, Dict, List, Tuple

from ..logging import get_logger
from ..ports import EventSink

logger = get_logger(__name__)


class LoggingEventSink(EventSink):
    """Write every event to the structured log."""

    def __init__(self, namespace: str = "gacs_pack"):
        self.namespace = namespace

    def emit(self, event_name: str, payload: Dict[str, Any]) -> None:
        logger.info(f"{self.namespace}.{event_name}", **payload)


class RecordingEventSink(EventSink):
    """Keep emitted events in memory, in emission order."""

    def __init__(self):
        self.events: List[Tuple[str, Dict[str, Any]]] = []

    def emit(self, event_name: str, payload: Dict[str, Any]) -> None:
        self.events.append((event_name, dict(payload)))

    def names(self) -> List[str]:
        return [name for name, _ in self.events]
