"""Provenance aggregation across context pack sections."""

from typing import Any, Iterable, List, Optional

from .models.section import section_field


def aggregate_lineage(sections: Optional[Iterable[Any]]) -> List[str]:
    """
    Combine per-section lineage into one deduplicated trail.

    Entries keep the order in which they first appear, walking the
    sections in their given order. Sections without lineage contribute
    nothing.

    Example:
        aggregate_lineage([
            {"key": "demographics", "lineage": ["patient:123", "demographics"]},
            {"key": "conditions", "lineage": ["patient:123", "conditions"]},
        ])
        # => ["patient:123", "demographics", "conditions"]

    Args:
        sections: Sections or section mappings, or None

    Returns:
        Unique lineage entries in first-seen order
    """
    if not sections:
        return []

    seen = set()
    trail = []
    for section in sections:
        for entry in section_field(section, "lineage", ()):
            if entry not in seen:
                seen.add(entry)
                trail.append(entry)
    return trail
