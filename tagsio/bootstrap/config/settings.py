from pathlib import Path
from typing import Annotated

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from tagsio.core.models.config import CodecConfig
from tagsio.core.models.tag import StringEncoding


class CodecSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TAGSIO_", extra="ignore")

    string_encoding: Annotated[
        StringEncoding,
        Field(
            description=(
                "Wire layout of strings and attribute names.\n"
                "'utf8' frames the UTF-8 bytes as a ByteArray (canonical).\n"
                "'utf16' writes UTF-16 code units and only exists to exchange data\n"
                "with old producers. Both ends of a stream must use the same value."
            ),
            default=StringEncoding.utf8
        )
    ]

    max_array_length: Annotated[
        int,
        Field(
            description=(
                "Largest ByteArray or String length accepted when decoding.\n"
                "Length prefixes above this value abort the decode before any\n"
                "memory is allocated."
            ),
            default=16 * 1024 * 1024,
            gt=0
        )
    ]

    max_depth: Annotated[
        int,
        Field(
            description="Maximum nesting of Custom blocks, on encode and decode.",
            default=32,
            ge=0
        )
    ]

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, env_settings, YamlConfigSettingsSource(settings_cls))

    @classmethod
    def from_file(cls, file: Path | None) -> "CodecSettings":
        """
        Load settings with `file` as the YAML source. Environment variables
        (TAGSIO_*) still take precedence over the file.
        """
        if file is None:
            return cls()

        class FileSettings(cls):  # type: ignore[valid-type, misc]
            model_config = SettingsConfigDict(yaml_file=file)

        return FileSettings()

    def to_codec_config(self) -> CodecConfig:
        return CodecConfig(
            string_encoding=self.string_encoding,
            max_array_length=self.max_array_length,
            max_depth=self.max_depth,
        )
