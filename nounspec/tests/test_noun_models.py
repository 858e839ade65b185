"""Tests for descriptor models."""

import pytest
from pydantic import ValidationError
from nounspec.ir.catalog import CatalogIR
from nounspec.ir.noun import (
    PROPERTY_TYPES,
    NounDescriptor,
    PropertyDescriptor,
    RelationshipDescriptor,
    format_relationship_type,
    parse_relationship_type,
)


def test_property_types_are_closed():
    """Exactly the eight recognized property kinds."""
    assert set(PROPERTY_TYPES) == {
        "string", "number", "boolean", "datetime", "date", "json", "url", "markdown",
    }


def test_property_defaults():
    """optional and array default to false when absent."""
    prop = PropertyDescriptor(type="string")
    assert prop.optional is False
    assert prop.array is False
    assert prop.examples is None


def test_property_rejects_unknown_type():
    """Unknown type values fail at construction."""
    with pytest.raises(ValidationError):
        PropertyDescriptor(type="email")


def test_property_rejects_unknown_keys():
    """Misspelled flags are not silently ignored."""
    with pytest.raises(ValidationError):
        PropertyDescriptor.model_validate({"type": "string", "optinal": True})


def test_parse_relationship_type():
    """Target name and to-many flag are split apart."""
    assert parse_relationship_type("AdGroup") == ("AdGroup", "one")
    assert parse_relationship_type("AdGroup[]") == ("AdGroup", "many")


@pytest.mark.parametrize("value", ["", "[]", "Ad[][]", " Ad", "Ad[", "Ad]"])
def test_parse_relationship_type_rejects_malformed(value):
    """Types that name no clean target are refused."""
    with pytest.raises(ValueError):
        parse_relationship_type(value)


def test_format_relationship_type():
    """Cardinality is re-encoded as the [] suffix."""
    assert format_relationship_type("Ad", "many") == "Ad[]"
    assert format_relationship_type("Ad", "one") == "Ad"


def test_relationship_from_wire_type():
    """The wire `type` string becomes a structured reference."""
    rel = RelationshipDescriptor.model_validate({"type": "Keyword[]", "backref": "adGroup"})
    assert rel.target == "Keyword"
    assert rel.cardinality == "many"
    assert rel.is_many
    assert rel.type == "Keyword[]"
    assert rel.required is True


def test_relationship_serializes_wire_type():
    """Dumping gives back the `type` key, not target/cardinality."""
    rel = RelationshipDescriptor(target="AdCampaign", required=False, description="Parent")
    dumped = rel.model_dump()
    assert dumped["type"] == "AdCampaign"
    assert "target" not in dumped
    assert "cardinality" not in dumped
    assert dumped["required"] is False


def test_relationship_rejects_malformed_type():
    """A malformed wire type is a validation error."""
    with pytest.raises(ValidationError):
        RelationshipDescriptor.model_validate({"type": "[]"})


def test_noun_descriptor(document_nouns):
    """NounDescriptor parses the catalog shape."""
    noun = NounDescriptor.model_validate(document_nouns["Document"])
    assert noun.singular == "document"
    assert noun.relationships["versions"].target == "DocumentVersion"
    assert noun.required_properties() == ["title"]
    assert noun.array_properties() == ["tags"]
    assert noun.related_nouns() == {"DocumentVersion"}
    assert noun.actions[0] == "create"


def test_noun_requires_display_names():
    """singular and plural must be non-empty."""
    with pytest.raises(ValidationError):
        NounDescriptor(singular="", plural="ads")
    with pytest.raises(ValidationError):
        NounDescriptor.model_validate({"plural": "ads"})


def test_noun_is_frozen():
    """Descriptors cannot be reassigned after construction."""
    noun = NounDescriptor(singular="ad", plural="ads", actions=["create"])
    with pytest.raises(ValidationError):
        noun.singular = "advert"
    with pytest.raises(AttributeError):
        noun.actions.append("pause")


def test_noun_to_wire(document_nouns):
    """to_wire() keeps the external field names and leaves defaults out."""
    wire = NounDescriptor.model_validate(document_nouns["Document"]).to_wire()
    assert wire["relationships"]["versions"] == {
        "type": "DocumentVersion[]",
        "backref": "document",
        "description": "Version history",
    }
    assert wire["properties"]["title"] == {"type": "string", "description": "Document title"}
    assert wire["properties"]["tags"] == {"type": "string", "optional": True, "array": True}
    assert "metadata" not in wire


def test_noun_to_wire_omits_empty_sections():
    """A bare noun serializes to just its names."""
    assert NounDescriptor(singular="label", plural="labels").to_wire() == {
        "singular": "label",
        "plural": "labels",
    }


def test_catalog_ir(catalog_data):
    """CatalogIR model."""
    catalog = CatalogIR.model_validate(catalog_data)
    assert catalog.domain == "document"
    assert set(catalog.nouns) == {"Document", "DocumentVersion"}
    assert catalog.categories["documents"] == ["Document", "DocumentVersion"]
    assert catalog.external == ["Contact"]

    wire = catalog.to_wire()
    assert list(wire) == ["domain", "description", "categories", "external", "nouns"]
    assert wire["nouns"]["DocumentVersion"]["relationships"]["document"]["type"] == "Document"
