"""CatalogIR model: one domain's nouns plus their documentation grouping."""

from typing import Any, Dict, List
from pydantic import BaseModel, ConfigDict, Field
from .noun import NounDescriptor


class CatalogIR(BaseModel):
    """A catalog document, e.g. the advertising or shipping domain."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    domain: str = Field(min_length=1)
    description: str = ""
    nouns: Dict[str, NounDescriptor] = Field(default_factory=dict)  # keyed by noun name
    categories: Dict[str, List[str]] = Field(default_factory=dict)  # label -> noun names
    external: List[str] = Field(default_factory=list)  # nouns defined by other catalogs

    def to_wire(self) -> Dict[str, Any]:
        """Plain mapping in the catalog file shape."""
        data = self.model_dump(mode="json", exclude={"nouns"})
        data["nouns"] = {name: noun.to_wire() for name, noun in self.nouns.items()}
        return data
