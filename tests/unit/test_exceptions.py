import inspect

from exiftool_tools import exceptions
from exiftool_tools.executor import Result


def _all_exceptions() -> list:
    return [
        exc
        for _, exc in inspect.getmembers(exceptions, inspect.isclass)
        if issubclass(exc, exceptions.ExifToolError)
        and exc is not exceptions.ExifToolError
        and not exc.__name__.startswith("_")
    ]


def test_all():
    all_excs = _all_exceptions()
    assert len(all_excs) == 8

    kinds = set()
    for exc in all_excs:
        assert isinstance(exc.kind, exceptions.ErrorKind)
        assert isinstance(exc.exit_code, int)
        kinds.add(exc.kind)

    assert kinds == set(exceptions.ErrorKind)


def test_file_errors():
    ex = exceptions.UnreadableFileError("/foo.png", "Unable to read [/foo.png]")
    assert str(ex) == "Unable to read [/foo.png]"
    assert ex.path == "/foo.png"
    assert ex.value == "/foo.png"


def test_execution_error():
    ex = exceptions.ExecutionError("failed")
    assert str(ex) == "failed"

    ex = exceptions.ExecutionError("failed", Result("", 1, error="x" * 5000))
    assert ex.result is not None
    msg = str(ex)
    assert msg.startswith("failed\nEXIT STATUS: 1\nOUTPUT: ...")
    assert len(msg) < 2200

    ex = exceptions.ExifToolNotFoundError("not found")
    assert isinstance(ex, exceptions.ExecutionError)
    assert ex.kind is exceptions.ErrorKind.EXECUTION_FAILURE
    assert ex.exit_code == 8
