"""Data models for context pack content."""

from .section import RawContext, Section, section_field

__all__ = ["RawContext", "Section", "section_field"]
