# ruff: noqa: F401
from . import configure, read, version, write
