from dataclasses import dataclass
from typing import Any

from tagsio.core.models.tag import AttributeTag


@dataclass(frozen=True)
class Attribute:
    """
    One decoded entry of an AttributeSequence, as seen without a schema.
    """
    name: str | None
    """
    Attribute name. None for the Custom entry, which is never named.
    """

    tag: AttributeTag

    value: Any
    """
    Decoded value: None for NULL, the variant name for ENUM, the raw
    region bytes for CUSTOM.
    """

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "tag": self.tag.name, "value": self.value}
