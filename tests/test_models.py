"""Tests for section models."""

import pytest
from pydantic import ValidationError

from gacs_pack.models import RawContext, Section, section_field


class TestSection:
    def test_minimal_section(self):
        section = Section(key="a")

        assert section.title == ""
        assert section.body == ""
        assert section.weight is None
        assert section.lineage is None
        assert section.refs is None

    def test_effective_weight(self):
        assert Section(key="a").effective_weight == 1.0
        assert Section(key="a", weight=0.0).effective_weight == 0.0
        assert Section(key="a", weight=3.5).effective_weight == 3.5

    def test_key_required(self):
        with pytest.raises(ValidationError):
            Section(title="no key")

    def test_extension_fields_kept(self):
        section = Section(key="a", source="ehr")

        assert section.model_dump(exclude_none=True) == {"key": "a", "title": "", "body": "", "source": "ehr"}

    def test_frozen(self):
        section = Section(key="a")

        with pytest.raises(ValidationError):
            section.body = "changed"


class TestRawContext:
    def test_coerce_mapping(self):
        context = RawContext.coerce({"sections": [{"key": "a"}]})

        assert context.sections == (Section(key="a"),)

    def test_coerce_none_and_empty(self):
        assert RawContext.coerce(None).sections == ()
        assert RawContext.coerce({}).sections == ()

    def test_coerce_passes_instances_through(self):
        context = RawContext()

        assert RawContext.coerce(context) is context

    def test_coerce_rejects_bad_shape(self):
        with pytest.raises(ValidationError):
            RawContext.coerce({"sections": [{"title": "missing key"}]})


def test_section_field():
    assert section_field({"weight": 2.0}, "weight") == 2.0
    assert section_field({"weight": None}, "weight", 1.0) == 1.0
    assert section_field(Section(key="a"), "weight", 1.0) == 1.0
    assert section_field(Section(key="a", lineage=["x"]), "lineage") == ("x",)
