import json

import py.path
import pytest

from exiftool_tools import config, constants
from exiftool_tools.commands.__main__ import main


@pytest.fixture
def config_path(tmpdir: py.path.local, monkeypatch, reset_logger) -> str:
    path = str(tmpdir.join("configs", "config.ini"))
    monkeypatch.setattr(constants, "CONFIG_PATH", path)
    return path


def test_version(fake_exiftool: str, config_path: str, capsys):
    main(["version", "--exiftool_path", fake_exiftool])
    assert capsys.readouterr().out.strip() == "12.40"


@pytest.mark.parametrize("stay_open", ["--stay_open", "--no-stay_open"])
def test_write_then_read(
    fake_exiftool: str, image: py.path.local, config_path: str, capsys, stay_open
):
    main(
        [
            "write",
            str(image),
            "--exiftool_path",
            fake_exiftool,
            stay_open,
            "--set",
            "Artist=Jane Doe",
            "--set",
            "ISO=200",
        ]
    )
    capsys.readouterr()

    main(
        [
            "read",
            str(image),
            "--exiftool_path",
            fake_exiftool,
            stay_open,
            "--tags",
            "ARTIST",
            "ISO",
            "GPSLatitude",
        ]
    )
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["Artist: Jane Doe", "ISO: 200"]


def test_read_json(
    fake_exiftool: str, tmpdir: py.path.local, config_path: str, capsys
):
    photos = tmpdir.mkdir("photos")
    for name in ["a.jpg", "b.jpg"]:
        photos.join(name).write_binary(b"")
        py.path.local(str(photos.join(name)) + ".json").write(json.dumps({"ISO": "100"}))

    main(
        [
            "read",
            str(photos),
            "--exiftool_path",
            fake_exiftool,
            "--tags",
            "ISO",
            "FileName",
            "--json",
        ]
    )

    descs = json.loads(capsys.readouterr().out)
    assert descs == [
        {"SourceFile": str(photos.join("a.jpg")), "FileName": "a.jpg", "ISO": 100},
        {"SourceFile": str(photos.join("b.jpg")), "FileName": "b.jpg", "ISO": 100},
    ]


def test_read_uses_profile(
    fake_exiftool: str, image: py.path.local, config_path: str, capsys
):
    main(
        [
            "configure",
            "--profile",
            "fake",
            "--exiftool_path",
            fake_exiftool,
            "--stay_open",
        ]
    )
    assert config.load_profile("fake", config_path=config_path) == {
        "exiftool_path": fake_exiftool,
        "stay_open": "YES",
    }

    main(["read", str(image), "--profile", "fake", "--tags", "FileName"])
    assert capsys.readouterr().out.splitlines() == ["FileName: image.jpg"]


def test_read_missing_file(
    fake_exiftool: str, tmpdir: py.path.local, config_path: str
):
    with pytest.raises(SystemExit) as exc_info:
        main(
            [
                "read",
                str(tmpdir.join("missing.jpg")),
                "--exiftool_path",
                fake_exiftool,
            ]
        )
    assert exc_info.value.code == 3


def test_unknown_tag(fake_exiftool: str, image: py.path.local, config_path: str):
    with pytest.raises(SystemExit) as exc_info:
        main(
            [
                "write",
                str(image),
                "--exiftool_path",
                fake_exiftool,
                "--set",
                "NotATag=1",
            ]
        )
    assert exc_info.value.code == 2


def test_exiftool_not_found(
    tmpdir: py.path.local, image: py.path.local, config_path: str
):
    with pytest.raises(SystemExit) as exc_info:
        main(["version", "--exiftool_path", str(tmpdir.join("not_exiftool"))])
    assert exc_info.value.code == 8
