import json
from functools import lru_cache
from pathlib import Path

from pydantic import ValidationError

from tagsio.bootstrap.config.settings import CodecSettings
from tagsio.core.ports.render import Renderer
from tagsio.infra.format_renderer import JsonRenderer, YamlRenderer


@lru_cache
def get_settings(configfile: Path | None = None) -> CodecSettings:
    try:
        return CodecSettings.from_file(configfile)
    except ValidationError as ex:
        msg = ["Configuration validation failed:"]
        errs = json.loads(ex.json())
        for err in errs:
            msg.append(f"  {'.'.join(str(part) for part in err['loc'])}: {err['msg']}")
        raise SystemExit("\n".join(msg))


def get_renderer(fmt: str) -> Renderer:
    renderers: dict[str, type[Renderer]] = {
        "json": JsonRenderer,
        "yaml": YamlRenderer,
    }
    try:
        return renderers[fmt]()
    except KeyError:
        raise SystemExit(f"Unknown output format '{fmt}'") from None
