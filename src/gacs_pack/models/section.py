"""Data models for context sections and raw graph output."""

from typing import Any, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict

DEFAULT_WEIGHT = 1.0


class Section(BaseModel):
    """Atomic unit of content in a context pack.

    Attributes:
        key: Identifier, unique within one build.
        title: Human-readable title.
        body: The content itself.
        weight: Optional priority; higher is more important. Absent means 1.0.
        lineage: Optional provenance trail back through the knowledge graph.
        refs: Optional entity references.

    Extension fields are allowed and travel with the section.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    key: str
    title: str = ""
    body: str = ""
    weight: Optional[float] = None
    lineage: Optional[Tuple[str, ...]] = None
    refs: Optional[Tuple[str, ...]] = None

    @property
    def effective_weight(self) -> float:
        """Weight used for priority ordering."""
        return DEFAULT_WEIGHT if self.weight is None else self.weight


class RawContext(BaseModel):
    """Output of a graph source, and of redaction: a list of sections."""

    model_config = ConfigDict(frozen=True)

    sections: Tuple[Section, ...] = ()

    @classmethod
    def coerce(cls, value: Any) -> "RawContext":
        """Accept a RawContext, a mapping of the same shape, or None."""
        if isinstance(value, cls):
            return value
        if value is None:
            return cls()
        return cls.model_validate(value)


def section_field(section: Any, name: str, default: Any = None) -> Any:
    """Read a field from a Section or a plain mapping."""
    if isinstance(section, Mapping):
        value = section.get(name, default)
    else:
        value = getattr(section, name, default)
    return default if value is None else value
