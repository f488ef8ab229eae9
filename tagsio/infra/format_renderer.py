import json
from enum import Enum
from typing import Any

import yaml

from tagsio.core.ports.render import Renderer


def normalize(obj: Any) -> Any:
    """
    Turn decoded attribute data into plain JSON/YAML friendly values.
    Raw bytes become lowercase hex strings, enums their names.
    """
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return bytes(obj).hex()

    if isinstance(obj, Enum):
        return obj.name

    if isinstance(obj, dict):
        return {normalize(k): normalize(v) for k, v in obj.items()}

    if isinstance(obj, (list, tuple)):
        return [normalize(x) for x in obj]

    return obj


class JsonRenderer(Renderer):
    def render(self, data: Any) -> str:
        return json.dumps(normalize(data), indent=2, sort_keys=False, ensure_ascii=False)


class YamlRenderer(Renderer):
    def render(self, data: Any) -> str:
        return yaml.safe_dump(normalize(data), sort_keys=False, allow_unicode=True)
