import argparse
import os
from pathlib import Path
from typing import Sequence

from tagsio.core.models.tag import StringEncoding


def get_cli_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tagsio-dump",
        description=(
            "Decode one tagged attribute sequence and print it.\n\n"
            "The stream is decoded without a schema: every attribute is shown\n"
            "with its name, wire tag and value, and the Custom block as raw bytes."
        ),
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument(
        "file",
        nargs="?",
        default="-",
        help="Encoded file to inspect, '-' for stdin (default)."
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        help="Path to a tagsio configuration file"
    )

    parser.add_argument(
        "-f", "--format",
        type=str,
        default="json",
        choices=["json", "yaml"],
        help="Output format (default: json)."
    )

    parser.add_argument(
        "-e", "--string-encoding",
        type=StringEncoding,
        choices=list(StringEncoding),
        help=(
            "Override the configured string layout.\n"
            "utf8  → canonical ByteArray framed UTF-8.\n"
            "utf16 → legacy UTF-16 code units."
        )
    )

    parser.add_argument(
        "--nested",
        action="store_true",
        help="Expand Custom blocks that decode as nested attribute sequences."
    )

    parser.add_argument(
        "-l", "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=(
            "Logging verbosity.\n"
            "DEBUG shows skipped attributes and custom block sizes.\n\n"
            "Example:\n"
            "  --log-level DEBUG"
        ),
    )

    return parser.parse_args(argv)


def get_configfile(raw: str | None = None) -> Path | None:
    # Priority: CLI > ENV > default file in current working directory
    raw = raw or os.getenv("TAGSIO_CONFIG")

    if raw is None:
        file = Path.cwd() / "tagsio.yaml"
        return file if file.is_file() else None

    file = Path(raw)
    if not file.is_file():
        raise SystemExit(
            f"[config] Configuration file not found: '{file}'.\n"
            "  - Use --config <file.yaml>\n"
            "  - Or set the TAGSIO_CONFIG environment variable\n"
            "  - Or place a 'tagsio.yaml' file in the current working directory."
        )

    return file
