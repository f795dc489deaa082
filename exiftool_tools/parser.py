from __future__ import annotations

import logging
import re
import types
import typing as T

from . import exceptions, tags as tag_registry
from .executor import Result
from .tags import Tag


LOG = logging.getLogger(__name__)

_VERSION_PATTERN = re.compile(r"^\d+(\.\d+)*")
# exiftool -S prints "TagName: Value"
_DELIMITER = ":"


def parse_version(result: Result) -> str:
    if not result.success:
        raise exceptions.ExecutionError("Failed to query the exiftool version", result)

    version = result.output.strip()
    if not _VERSION_PATTERN.match(version):
        raise exceptions.ExecutionError(
            f"Unexpected exiftool version output: {version!r}", result
        )

    return version


def version_tuple(version: str) -> tuple[int, ...]:
    """
    >>> version_tuple("12.40")
    (12, 40)
    >>> version_tuple("10.0.1 [Beta]")
    (10, 0, 1)
    """
    matched = _VERSION_PATTERN.match(version.strip())
    if not matched:
        raise ValueError(f"Invalid version {version!r}")
    return tuple(int(part) for part in matched.group(0).split("."))


def parse_tags(result: Result, tags: T.Iterable[Tag]) -> T.Mapping[Tag, str]:
    if not result.success:
        raise exceptions.ExecutionError("Failed to read tags with exiftool", result)

    requested = set(tags)
    meta: dict[Tag, str] = {}

    for line in result.output.splitlines():
        name, found, value = line.partition(_DELIMITER)
        if not found:
            continue

        tag = tag_registry.TAGS_BY_NAME.get(name.strip())
        if tag is None or tag not in requested:
            continue

        # Only the separator space after the colon; the value itself is kept as is
        meta[tag] = value[1:] if value.startswith(" ") else value

    return types.MappingProxyType(meta)


def parse_values(meta: T.Mapping[Tag, str]) -> dict[Tag, T.Any]:
    values: dict[Tag, T.Any] = {}
    for tag, raw in meta.items():
        try:
            values[tag] = tag.parse(raw)
        except ValueError:
            LOG.debug("Keeping %s as string: %r is not %s", tag, raw, tag.type.value)
            values[tag] = raw
    return values
