from __future__ import annotations

import json
import logging
import typing as T
from pathlib import Path

from tqdm import tqdm

from . import constants, exceptions, parser, tags as tag_registry, utils
from .exiftool import ExifTool
from .tags import Format, Tag


LOG = logging.getLogger(__name__)


def open_exiftool(
    profile: str = constants.DEFAULT_PROFILE,
    exiftool_path: str | None = None,
    stay_open: bool | None = None,
) -> ExifTool:
    return ExifTool.from_profile(
        profile,
        exiftool_executable=exiftool_path,
        # None keeps what the profile says
        stay_open=stay_open,
    )


def resolve_tags(tag_names: T.Sequence[str] | None) -> list[Tag]:
    if not tag_names:
        return tag_registry.values()

    resolved: list[Tag] = []
    for name in tag_names:
        tag = tag_registry.lookup(name)
        if tag is None:
            raise exceptions.InvalidArgumentError(f"Unknown tag: {name}", value=name)
        resolved.append(tag)
    return resolved


def parse_assignments(assignments: T.Sequence[str]) -> dict[Tag, str]:
    """
    Parse TAG=VALUE pairs. The value may itself contain "=".
    """
    values: dict[Tag, str] = {}
    for assignment in assignments:
        name, found, value = assignment.partition("=")
        if not found:
            raise exceptions.InvalidArgumentError(
                f"Expect TAG=VALUE but got {assignment}", value=assignment
            )
        [tag] = resolve_tags([name.strip()])
        values[tag] = value
    return values


def _progress_disabled(total: int) -> bool:
    return total <= 1 or LOG.getEffectiveLevel() <= logging.DEBUG


def show_version(
    profile: str = constants.DEFAULT_PROFILE,
    exiftool_path: str | None = None,
) -> None:
    with open_exiftool(profile, exiftool_path) as exiftool:
        print(exiftool.get_version())


def read_metadata(
    import_path: T.Sequence[Path],
    tags: T.Sequence[str] | None = None,
    format: str = Format.HUMAN_READABLE.value,
    json_output: bool = False,
    skip_subfolders: bool = False,
    profile: str = constants.DEFAULT_PROFILE,
    exiftool_path: str | None = None,
    stay_open: bool | None = None,
) -> None:
    image_paths = utils.find_images(import_path, skip_subfolders=skip_subfolders)
    if not image_paths:
        raise exceptions.InvalidArgumentError(
            f"No images found in {', '.join(str(p) for p in import_path)}",
            value=import_path,
        )
    LOG.debug("Found %d images", len(image_paths))

    requested = resolve_tags(tags)
    output_format = Format(format)
    descs: list[dict[str, T.Any]] = []

    with open_exiftool(profile, exiftool_path, stay_open) as exiftool:
        for image_path in tqdm(
            image_paths,
            desc="Reading metadata",
            unit="images",
            disable=_progress_disabled(len(image_paths)),
        ):
            meta = exiftool.get_image_meta(image_path, output_format, requested)
            if json_output:
                desc: dict[str, T.Any] = {"SourceFile": str(image_path)}
                desc.update(
                    (tag.name, value)
                    for tag, value in parser.parse_values(meta).items()
                )
                descs.append(desc)
            else:
                if 1 < len(image_paths):
                    tqdm.write(f"======== {image_path}")
                for tag, value in meta.items():
                    tqdm.write(f"{tag.name}: {value}")

    if json_output:
        print(json.dumps(descs, indent=2))


def write_metadata(
    import_path: T.Sequence[Path],
    set_values: T.Sequence[str],
    skip_subfolders: bool = False,
    profile: str = constants.DEFAULT_PROFILE,
    exiftool_path: str | None = None,
    stay_open: bool | None = None,
) -> None:
    values = parse_assignments(set_values)
    image_paths = utils.find_images(import_path, skip_subfolders=skip_subfolders)
    if not image_paths:
        raise exceptions.InvalidArgumentError(
            f"No images found in {', '.join(str(p) for p in import_path)}",
            value=import_path,
        )

    with open_exiftool(profile, exiftool_path, stay_open) as exiftool:
        for image_path in tqdm(
            image_paths,
            desc="Writing metadata",
            unit="images",
            disable=_progress_disabled(len(image_paths)),
        ):
            exiftool.set_image_meta(image_path, values)

    LOG.info("Updated %d images", len(image_paths))
