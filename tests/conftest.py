import io

import pytest

from tagsio.core.codec.reader import SReader
from tagsio.core.codec.writer import SWriter
from tagsio.core.models.config import CodecConfig
from tagsio.core.models.tag import StringEncoding


@pytest.fixture
def config() -> CodecConfig:
    return CodecConfig()


@pytest.fixture
def legacy_config() -> CodecConfig:
    return CodecConfig(string_encoding=StringEncoding.utf16)


@pytest.fixture
def buffer() -> io.BytesIO:
    return io.BytesIO()


@pytest.fixture
def writer(buffer, config) -> SWriter:
    return SWriter(buffer, config)


@pytest.fixture
def reader_for(config):
    def factory(data: bytes, cfg: CodecConfig | None = None) -> SReader:
        return SReader.from_bytes(data, cfg or config)

    return factory
