"""
Argument guards shared by the public entry points.

Every guard returns its argument unchanged (the same instance, never a copy)
so it can be used inline:

    image = preconditions.is_readable(image, "Unable to read the image")
"""

from __future__ import annotations

import os
import typing as T
from pathlib import Path

from . import exceptions


_V = T.TypeVar("_V")
_S = T.TypeVar("_S", bound=T.Sized)
_P = T.TypeVar("_P", str, os.PathLike)


def not_null(value: _V | None, message: str) -> _V:
    if value is None:
        raise exceptions.NullArgumentError(message)
    return value


def not_blank(value: str | None, message: str) -> str:
    value = not_null(value, message)
    if not value.strip():
        raise exceptions.InvalidArgumentError(message, value=value)
    return value


def not_empty(value: _S | None, message: str) -> _S:
    value = not_null(value, message)
    if len(value) == 0:
        raise exceptions.InvalidArgumentError(message, value=value)
    return value


def is_readable(path: _P | None, message: str) -> _P:
    path = not_null(path, message)
    if not Path(path).exists() or not os.access(path, os.R_OK):
        raise exceptions.UnreadableFileError(path, message)
    return path


def is_writable(path: _P | None, message: str) -> _P:
    path = not_null(path, message)
    if not Path(path).exists() or not os.access(path, os.W_OK):
        raise exceptions.UnwritableFileError(path, message)
    return path
