import dataclasses
import logging
import sys
from typing import Any, Sequence

from tagsio.bootstrap.config.loader import get_cli_args, get_configfile
from tagsio.bootstrap.deps import get_renderer, get_settings
from tagsio.core.codec.reader import SReader
from tagsio.core.helpers.utils import setup_logging
from tagsio.core.models.attribute import Attribute
from tagsio.core.models.config import CodecConfig
from tagsio.core.models.errors import DecodeError
from tagsio.core.models.tag import AttributeTag

logger = logging.getLogger("bootstrap.cli")


def expand(attribute: Attribute, config: CodecConfig, depth: int = 0) -> dict[str, Any]:
    """
    Render one attribute as a dict. A Custom block that decodes cleanly
    as a nested attribute sequence (and nothing more) is expanded in place.
    """
    entry = attribute.to_dict()

    if attribute.tag is not AttributeTag.CUSTOM or not attribute.value:
        return entry
    if depth >= config.max_depth:
        return entry

    reader = SReader.from_bytes(attribute.value, config)
    try:
        nested = reader.read_attributes()
        complete = reader.at_end()
    except DecodeError as exc:
        logger.debug(f"Custom block is not an attribute sequence: {exc}")
        return entry

    if complete:
        entry["value"] = [expand(item, config, depth + 1) for item in nested]
    return entry


def main(argv: Sequence[str] | None = None) -> int:
    args = get_cli_args(argv)
    setup_logging(args.log_level)

    config = get_settings(get_configfile(args.config)).to_codec_config()
    if args.string_encoding is not None:
        config = dataclasses.replace(config, string_encoding=args.string_encoding)

    renderer = get_renderer(args.format)

    try:
        if args.file == "-":
            attributes = SReader(sys.stdin.buffer, config).read_attributes()
        else:
            with SReader(open(args.file, "rb"), config) as reader:
                attributes = reader.read_attributes()
    except DecodeError as exc:
        logger.error(f"Cannot decode {args.file}: {exc}")
        return 1
    except OSError as exc:
        logger.error(f"Cannot read {args.file}: {exc}")
        return 1

    if args.nested:
        entries = [expand(attribute, config) for attribute in attributes]
    else:
        entries = [attribute.to_dict() for attribute in attributes]

    print(renderer.render({"attributes": entries}))
    return 0


if __name__ == "__main__":
    sys.exit(main())
