from __future__ import annotations

import logging
import os
import typing as T
from pathlib import Path


def get_app_name() -> str:
    return "exiftool_tools"


def configure_logger(
    logger: logging.Logger, level: int = logging.INFO, stream=None
) -> None:
    """Configure the given logger."""
    formatter = logging.Formatter("%(asctime)s - %(levelname)-7s - %(message)s")
    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(level)


def is_image_file(path: Path) -> bool:
    return path.suffix.lower() in (
        ".jpg",
        ".jpeg",
        ".jpe",
        ".tif",
        ".tiff",
        ".png",
        ".heic",
        ".heif",
        ".webp",
        ".dng",
        ".cr2",
        ".cr3",
        ".nef",
        ".arw",
        ".orf",
        ".rw2",
    )


def iterate_files(
    root: Path, recursive: bool = False, follow_hidden_dirs: bool = False
) -> T.Generator[Path, None, None]:
    for dirpath, dirnames, files in os.walk(root, topdown=True):
        if not recursive:
            dirnames.clear()
        else:
            if not follow_hidden_dirs:
                dirnames[:] = [name for name in dirnames if not name.startswith(".")]
        for file in files:
            if file.startswith("."):
                continue
            yield Path(dirpath).joinpath(file)


def deduplicate_paths(paths: T.Iterable[Path]) -> T.Generator[Path, None, None]:
    resolved_paths: set[Path] = set()
    for p in paths:
        resolved = p.resolve()
        if resolved not in resolved_paths:
            resolved_paths.add(resolved)
            yield p


def find_images(
    import_paths: T.Iterable[Path],
    skip_subfolders: bool = False,
) -> list[Path]:
    """
    Expand directories into the image files they contain. Paths given
    explicitly are kept whatever their extension.
    """
    image_paths: list[Path] = []
    for path in import_paths:
        if path.is_dir():
            image_paths.extend(
                sorted(
                    file
                    for file in iterate_files(path, not skip_subfolders)
                    if is_image_file(file)
                )
            )
        else:
            image_paths.append(path)
    return list(deduplicate_paths(image_paths))
