from pathlib import Path

import py.path

from exiftool_tools import utils


def test_find_images(tmpdir: py.path.local):
    tmpdir.join("a.jpg").write_binary(b"")
    tmpdir.join("b.TIF").write_binary(b"")
    tmpdir.join("notes.txt").write("")
    tmpdir.join(".hidden.jpg").write_binary(b"")
    tmpdir.mkdir("sub").join("c.jpeg").write_binary(b"")
    tmpdir.mkdir(".cache").join("d.jpg").write_binary(b"")

    root = Path(tmpdir)

    images = utils.find_images([root])
    assert images == [root / "a.jpg", root / "b.TIF", root / "sub" / "c.jpeg"]

    images = utils.find_images([root], skip_subfolders=True)
    assert images == [root / "a.jpg", root / "b.TIF"]


def test_find_images_keeps_explicit_files(tmpdir: py.path.local):
    tmpdir.join("a.jpg").write_binary(b"")
    root = Path(tmpdir)

    images = utils.find_images(
        [root / "notes.txt", root / "a.jpg", root, root / "missing.jpg"]
    )
    assert images == [root / "notes.txt", root / "a.jpg", root / "missing.jpg"]


def test_is_image_file():
    assert utils.is_image_file(Path("foo/bar.JPG"))
    assert utils.is_image_file(Path("foo/bar.heic"))
    assert not utils.is_image_file(Path("foo/bar.mp4"))
