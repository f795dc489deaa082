import logging
import os
import stat
import sys

import py.path
import pytest


# A stand-in for exiftool: answers -ver, reads "-S -Tag" and writes "-Tag=value"
# (stored in a JSON sidecar next to the image), with arguments from argv or
# "-@ -", in one-shot or -stay_open mode
FAKE_EXIFTOOL = r'''
import json
import os
import sys
import time

VERSION = os.environ.get("FAKE_EXIFTOOL_VERSION", "12.40")
FLAGS = ("-S", "-n", "-overwrite_original")

for stream in (sys.stdin, sys.stdout, sys.stderr):
    stream.reconfigure(encoding="utf-8")


def _sidecar(path):
    return path + ".json"


def _load(path):
    try:
        with open(_sidecar(path)) as fp:
            return json.load(fp)
    except FileNotFoundError:
        return {}


def _drop_charset(args):
    kept = []
    skip = False
    for arg in args:
        if skip:
            skip = False
        elif arg == "-charset":
            skip = True
        else:
            kept.append(arg)
    return kept


def run(args):
    args = _drop_charset(args)
    if "-ver" in args:
        print(VERSION)
        sys.stdout.flush()
        return 0

    paths = [a for a in args if not a.startswith("-")]
    options = [a for a in args if a.startswith("-") and a not in FLAGS]
    writes = dict(a[1:].split("=", 1) for a in options if "=" in a)
    reads = [a[1:] for a in options if "=" not in a]

    status = 0
    for path in paths:
        name = os.path.basename(path)
        if name == "crash.jpg":
            os._exit(3)
        if name == "sleep.jpg":
            time.sleep(30)
        if not os.path.exists(path):
            print("Error: File not found - " + path, file=sys.stderr)
            status = 1
            continue
        tags = _load(path)
        tags.setdefault("FileName", name)
        if writes:
            tags.update(writes)
            with open(_sidecar(path), "w") as fp:
                json.dump(tags, fp)
            print("    1 image files updated")
        else:
            print("Warning: [minor] Fake warning - " + path, file=sys.stderr)
            print("======== " + path)
            for tag in reads:
                if tag in tags:
                    print(tag + ": " + tags[tag])
    sys.stdout.flush()
    return status


def stay_open():
    args = []
    for line in sys.stdin:
        arg = line.rstrip("\n")
        if arg.startswith("-execute"):
            run(args)
            sys.stderr.flush()
            print("{ready" + arg[len("-execute"):] + "}")
            sys.stdout.flush()
            args = []
        elif args[-1:] == ["-stay_open"] and arg == "False":
            return 0
        else:
            args.append(arg)
    return 0


if __name__ == "__main__":
    argv = sys.argv[1:]
    if argv[:2] == ["-stay_open", "True"]:
        sys.exit(stay_open())
    if argv == ["-@", "-"]:
        argv = [line.rstrip("\n") for line in sys.stdin]
    sys.exit(run(argv))
'''


@pytest.fixture
def fake_exiftool(tmpdir: py.path.local) -> str:
    if sys.platform == "win32":
        pytest.skip("the fake exiftool relies on a shebang line")
    script = tmpdir.mkdir("bin").join("exiftool")
    script.write(f"#!{sys.executable}\n" + FAKE_EXIFTOOL)
    os.chmod(str(script), os.stat(str(script)).st_mode | stat.S_IXUSR)
    return str(script)


@pytest.fixture
def image(tmpdir: py.path.local) -> py.path.local:
    image = tmpdir.join("image.jpg")
    image.write_binary(b"\xff\xd8\xff\xd9")
    return image


@pytest.fixture
def reset_logger():
    yield
    logger = logging.getLogger("exiftool_tools")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)

