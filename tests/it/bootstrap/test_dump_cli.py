import io
import json
import logging

import pytest
import yaml

from tagsio.bootstrap.cli import main
from tagsio.bootstrap.deps import get_settings
from tagsio.core.models.config import CodecConfig
from tagsio.core.models.tag import StringEncoding
from tests.helpers import Color, Gadget, Person, Team, chain, encode, encode_with


@pytest.fixture(autouse=True)
def isolated(monkeypatch, tmp_path):
    for name in ("TAGSIO_CONFIG", "TAGSIO_STRING_ENCODING", "TAGSIO_MAX_ARRAY_LENGTH", "TAGSIO_MAX_DEPTH"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def dump(tmp_path):
    def factory(data: bytes) -> str:
        file = tmp_path / "input.sio"
        file.write_bytes(data)
        return str(file)

    return factory


@pytest.mark.it
def test_dump_as_json(dump, capsys):
    path = dump(encode(Person(id=42, name="judi")))

    assert main([path]) == 0

    output = json.loads(capsys.readouterr().out)
    assert output == {"attributes": [
        {"name": "id", "tag": "INT32", "value": 42},
        {"name": "name", "tag": "STRING", "value": "judi"},
        {"name": "active", "tag": "NULL", "value": None},
    ]}


@pytest.mark.it
def test_dump_as_yaml(dump, capsys):
    path = dump(encode(Gadget(color=Color.BLUE, letter="q")))

    assert main(["--format", "yaml", path]) == 0

    attributes = yaml.safe_load(capsys.readouterr().out)["attributes"]
    by_name = {entry["name"]: entry for entry in attributes}
    assert by_name["color"] == {"name": "color", "tag": "ENUM", "value": "BLUE"}
    assert by_name["letter"]["value"] == "q"


@pytest.mark.it
def test_dump_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(encode(Person(id=1)))))

    assert main([]) == 0
    assert json.loads(capsys.readouterr().out)["attributes"][0]["value"] == 1


@pytest.mark.it
def test_custom_block_is_hex_without_nested(dump, capsys):
    root = chain(2)
    payload = encode(root.child)

    assert main([dump(encode(root))]) == 0

    attributes = json.loads(capsys.readouterr().out)["attributes"]
    assert attributes[1] == {"name": None, "tag": "CUSTOM", "value": payload.hex()}


@pytest.mark.it
def test_nested_expands_custom_sequences(dump, capsys):
    assert main(["--nested", dump(encode(chain(2)))]) == 0

    attributes = json.loads(capsys.readouterr().out)["attributes"]
    assert attributes == [
        {"name": "value", "tag": "INT32", "value": 0},
        {"name": None, "tag": "CUSTOM", "value": [
            {"name": "value", "tag": "INT32", "value": 1},
        ]},
    ]


@pytest.mark.it
def test_nested_keeps_opaque_custom_blocks(dump, capsys):
    team = Team(name="t", members=[Person(id=1)])
    payload = encode_with(lambda w: (w.write_int(1), w.write_object(Person(id=1))))

    assert main(["--nested", dump(encode(team))]) == 0

    attributes = json.loads(capsys.readouterr().out)["attributes"]
    assert attributes[1]["value"] == payload.hex()


@pytest.mark.it
def test_string_encoding_override(dump, capsys):
    legacy = CodecConfig(string_encoding=StringEncoding.utf16)
    path = dump(encode(Person(name="ü"), legacy))

    assert main(["-e", "utf16", path]) == 0
    assert json.loads(capsys.readouterr().out)["attributes"][1]["value"] == "ü"


@pytest.mark.it
def test_config_file_is_applied(dump, tmp_path, capsys):
    config = tmp_path / "codec.yaml"
    config.write_text("string_encoding: utf16\n")
    path = dump(encode(Person(name="legacy"), CodecConfig(string_encoding=StringEncoding.utf16)))

    assert main(["--config", str(config), path]) == 0
    assert json.loads(capsys.readouterr().out)["attributes"][1]["value"] == "legacy"


@pytest.mark.it
def test_decode_error_returns_one(dump, capsys, caplog):
    caplog.set_level(logging.ERROR, logger="bootstrap.cli")

    assert main([dump(b"\x63")]) == 1
    assert capsys.readouterr().out == ""
    assert "Invalid attribute tag" in caplog.text


@pytest.mark.it
def test_truncated_input_returns_one(dump):
    assert main([dump(encode(Person(id=1))[:-2])]) == 1


@pytest.mark.it
def test_missing_config_file_exits(dump, tmp_path):
    with pytest.raises(SystemExit):
        main(["--config", str(tmp_path / "nope.yaml"), dump(encode(Person()))])


@pytest.mark.it
def test_missing_input_file_returns_one(tmp_path, capsys, caplog):
    caplog.set_level(logging.ERROR, logger="bootstrap.cli")

    assert main([str(tmp_path / "absent.sio")]) == 1
    assert capsys.readouterr().out == ""
    assert "Cannot read" in caplog.text


@pytest.mark.it
def test_directory_as_input_returns_one(tmp_path):
    assert main([str(tmp_path)]) == 1
