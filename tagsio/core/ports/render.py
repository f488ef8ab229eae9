from typing import Protocol, Any


class Renderer(Protocol):
    def render(self, data: Any) -> str:
        ...
