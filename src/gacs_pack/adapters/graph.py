"""Graph source serving fixed sections."""

from typing import Any, Dict, Iterable, Tuple

from ..models.section import RawContext, Section
from ..ports import GraphSource


class StaticGraphSource(GraphSource):
    """Serve pre-built sections per (subject_type, subject_id).

    Unknown subjects get an empty context. Intent and role are ignored.
    """

    def __init__(self, sections_by_subject: Dict[Tuple[str, Any], Iterable[Any]] | None = None):
        self._sections = {
            subject: [Section.model_validate(s) for s in sections]
            for subject, sections in (sections_by_subject or {}).items()
        }

    def add(self, subject_type: str, subject_id: Any, sections: Iterable[Any]) -> None:
        self._sections[(subject_type, subject_id)] = [Section.model_validate(s) for s in sections]

    def build_context(self, *, subject_id: Any, subject_type: str, intent: str, role: str) -> RawContext:
        return RawContext(sections=self._sections.get((subject_type, subject_id), []))
