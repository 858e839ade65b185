"""Noun descriptor models: the schema every catalog entry conforms to."""

from typing import Any, Dict, List, Literal, Optional, Set, Tuple, get_args
from pydantic import BaseModel, ConfigDict, Field, model_serializer, model_validator

PropertyType = Literal[
    "string",
    "number",
    "boolean",
    "datetime",
    "date",
    "json",
    "url",
    "markdown",
]

PROPERTY_TYPES: Tuple[str, ...] = get_args(PropertyType)

Cardinality = Literal["one", "many"]

MANY_SUFFIX = "[]"


def parse_relationship_type(value: str) -> Tuple[str, Cardinality]:
    """
    Split a wire relationship type into target noun and cardinality.

    Args:
        value: Relationship type, e.g. "AdGroup" or "AdGroup[]"

    Returns:
        (target, cardinality) tuple, e.g. ("AdGroup", "many")

    Raises:
        ValueError: If the type names no target
    """
    if not isinstance(value, str):
        raise ValueError(f"relationship type must be a string, got {type(value).__name__}")

    target = value
    cardinality: Cardinality = "one"
    if value.endswith(MANY_SUFFIX):
        target = value[: -len(MANY_SUFFIX)]
        cardinality = "many"

    if not target or target != target.strip() or "[" in target or "]" in target:
        raise ValueError(f"malformed relationship type '{value}'")
    return target, cardinality


def format_relationship_type(target: str, cardinality: Cardinality) -> str:
    """Join target and cardinality back into the wire form ("Ad" / "Ad[]")."""
    return f"{target}{MANY_SUFFIX}" if cardinality == "many" else target


class PropertyDescriptor(BaseModel):
    """A typed property of a noun."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: PropertyType
    optional: bool = False
    array: bool = False  # value is a sequence of `type`
    description: str = ""
    examples: Optional[Tuple[Any, ...]] = None
    default: Any = None


class RelationshipDescriptor(BaseModel):
    """
    A link from one noun to another.

    On the wire the target and cardinality share one string ("Ad[]"); here they
    are kept apart as `target` and `cardinality` and only re-joined when
    serializing.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    target: str = Field(min_length=1)
    cardinality: Cardinality = "one"
    required: bool = True
    backref: Optional[str] = None
    description: str = ""

    @model_validator(mode="before")
    @classmethod
    def _split_type(cls, data: Any) -> Any:
        if isinstance(data, dict) and "type" in data:
            data = dict(data)
            target, cardinality = parse_relationship_type(data.pop("type"))
            data.setdefault("target", target)
            data.setdefault("cardinality", cardinality)
        return data

    @model_serializer(mode="wrap")
    def _join_type(self, handler) -> Dict[str, Any]:
        data = handler(self)
        data.pop("target", None)
        data.pop("cardinality", None)
        return {"type": self.type, **data}

    @property
    def type(self) -> str:
        """Wire form of the reference, e.g. "AdGroup[]"."""
        return format_relationship_type(self.target, self.cardinality)

    @property
    def is_many(self) -> bool:
        return self.cardinality == "many"


class NounDescriptor(BaseModel):
    """A business entity type: names, properties, relationships, verbs and events."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    singular: str = Field(min_length=1)
    plural: str = Field(min_length=1)
    description: str = ""
    properties: Dict[str, PropertyDescriptor] = Field(default_factory=dict)
    relationships: Dict[str, RelationshipDescriptor] = Field(default_factory=dict)
    actions: Tuple[str, ...] = ()
    events: Tuple[str, ...] = ()
    metadata: Dict[str, Any] = Field(default_factory=dict)

    def required_properties(self) -> List[str]:
        """Names of properties that must be populated."""
        return [name for name, prop in self.properties.items() if not prop.optional]

    def array_properties(self) -> List[str]:
        return [name for name, prop in self.properties.items() if prop.array]

    def related_nouns(self) -> Set[str]:
        """Names of every noun this one links to."""
        return {rel.target for rel in self.relationships.values()}

    def to_wire(self) -> Dict[str, Any]:
        """Plain mapping in the catalog file shape, defaults left out."""
        data = self.model_dump(mode="json", exclude_defaults=True)
        for key in ("properties", "relationships", "actions", "events", "metadata"):
            if not data.get(key):
                data.pop(key, None)
        return data
