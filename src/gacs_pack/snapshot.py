"""Immutable snapshot of a packed context with a content-addressed id."""

import copy
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_serializer, field_validator

from .canonical import canonical_json, canonicalize, sha256_hex
from .lineage import aggregate_lineage
from .models.section import Section


class Snapshot(BaseModel):
    """Packed sections, the policy version they were built under, and metadata.

    A snapshot is built once per build and never mutated. Sections are held
    in a tuple, meta is a read-only copy of what was passed in, and the
    canonical serialization is fixed at construction. Its stable hash is the
    SHA-256 of that serialization, so equal content yields an equal id in
    every process, whatever the dict insertion order was, and a snapshot
    handed to a store hashes the same afterwards.

    Example:
        snapshot = Snapshot(
            sections=[Section(key="demographics", title="Demographics", body="...")],
            policy_version="v1",
            meta={"intent": "care_gap", "role": "provider"},
        )
        snapshot.stable_hash()  # => "a1b2c3d4..."
    """

    model_config = ConfigDict(frozen=True)

    sections: Tuple[Section, ...] = ()
    policy_version: str
    meta: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)

    _view: Dict[str, Any] = PrivateAttr(default_factory=dict)
    _canonical: str = PrivateAttr(default="")

    @field_validator("meta", mode="after")
    @classmethod
    def _freeze_meta(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(copy.deepcopy(dict(value)))

    @field_serializer("meta")
    def _serialize_meta(self, value: Mapping[str, Any]) -> Dict[str, Any]:
        return copy.deepcopy(dict(value))

    def model_post_init(self, __context: Any) -> None:
        self._view = canonicalize(
            {
                "sections": list(self.sections),
                "policy_version": self.policy_version,
                "meta": self.meta,
                "lineage": aggregate_lineage(self.sections),
            }
        )
        self._canonical = canonical_json(self._view)

    @property
    def lineage(self) -> List[str]:
        """Aggregated provenance of the packed sections."""
        return aggregate_lineage(self.sections)

    def to_view(self) -> Dict[str, Any]:
        """Plain dict view: sections, policy_version, meta, and lineage.

        Each call returns a fresh copy; changing it never touches the snapshot.
        """
        return copy.deepcopy(self._view)

    def canonical_serialize(self) -> str:
        """Canonical JSON text of the view."""
        return self._canonical

    def stable_hash(self) -> str:
        """64-character lowercase hex SHA-256 of the canonical serialization."""
        return sha256_hex(self._canonical)
