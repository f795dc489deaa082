from __future__ import annotations

import logging
import os
import threading
import typing as T

from . import config, constants, exceptions, parser, preconditions
from .command import CommandBuilder
from .executor import Executor, ExiftoolRunner, StayOpenRunner
from .tags import Format, Tag


LOG = logging.getLogger(__name__)

_P = T.TypeVar("_P", str, os.PathLike)


class ExifTool:
    """
    Read and write image metadata with the exiftool executable.

    Every operation validates its arguments before any process is spawned,
    builds an exiftool command, runs it and parses the output:

        with ExifTool(stay_open=True) as exiftool:
            meta = exiftool.get_image_meta(
                Path("photo.jpg"), Format.NUMERIC, [tags.MAKE, tags.GPS_LATITUDE]
            )

    In stay-open mode a single exiftool process is reused for all reads and
    writes; calls from different threads are serialized by the executor.

    After close(), further operations raise ClosedResourceError, unless the
    instance was created with reopen_after_close=True, in which case the next
    operation simply starts a new exiftool process when one is needed.
    """

    def __init__(
        self,
        exiftool_executable: str = constants.EXIFTOOL_PATH,
        stay_open: bool = constants.STAY_OPEN,
        executor: Executor | None = None,
        reopen_after_close: bool = constants.REOPEN_AFTER_CLOSE,
        overwrite_original: bool = constants.OVERWRITE_ORIGINAL,
    ) -> None:
        self.exiftool_executable = preconditions.not_blank(
            exiftool_executable, "Path to exiftool executable cannot be blank."
        )
        self.stay_open = stay_open
        self.reopen_after_close = reopen_after_close
        self.overwrite_original = overwrite_original

        if executor is None:
            if stay_open:
                executor = StayOpenRunner(
                    exiftool_executable, reopen_after_close=reopen_after_close
                )
            else:
                executor = ExiftoolRunner()
        self._executor = executor
        self._builder = CommandBuilder(exiftool_executable, stay_open=stay_open)

        self._version: str | None = None
        self._version_lock = threading.Lock()
        self._closed = False

    @classmethod
    def from_profile(
        cls,
        profile_name: str = constants.DEFAULT_PROFILE,
        config_path: str | None = None,
        **overrides: T.Any,
    ) -> "ExifTool":
        """
        Create an instance from a configuration profile, falling back to the
        environment defaults for anything the profile does not set
        """
        profile = config.load_profile(profile_name, config_path=config_path) or {}
        LOG.debug("Loaded profile %s: %s", profile_name, profile)

        kwargs: dict[str, T.Any] = {}
        if "exiftool_path" in profile:
            kwargs["exiftool_executable"] = profile["exiftool_path"]
        for key in ["stay_open", "reopen_after_close", "overwrite_original"]:
            if key in profile:
                kwargs[key] = constants._yes_or_no(T.cast(str, profile[key]))
        kwargs.update({k: v for k, v in overrides.items() if v is not None})

        return cls(**kwargs)

    @property
    def closed(self) -> bool:
        return self._closed

    def get_version(self) -> str:
        self._ensure_open()
        version = self._version
        if version is None:
            with self._version_lock:
                if self._version is None:
                    result = self._executor.execute(self._builder.version())
                    self._version = parser.parse_version(result)
                    LOG.debug("Detected exiftool version %s", self._version)
                version = self._version
        return version

    def get_image_meta(
        self, image: _P | None, format: Format | None, tags: T.Sequence[Tag] | None
    ) -> T.Mapping[Tag, str]:
        preconditions.not_null(
            image, "Image cannot be null and must be a valid stream of image data."
        )
        format = preconditions.not_null(format, "Format cannot be null.")
        tags = preconditions.not_empty(
            tags,
            "Tags cannot be null and must contain 1 or more Tag to query the image for.",
        )
        image = preconditions.is_readable(
            image,
            f"Unable to read the given image [{image}], ensure that the image exists at the given path and that the executing process has permissions to read it.",
        )

        self._ensure_ready()

        command = self._builder.read(image, tags, format)
        result = self._executor.execute(command)
        return parser.parse_tags(result, tags)

    def get_image_values(
        self, image: _P | None, format: Format | None, tags: T.Sequence[Tag] | None
    ) -> dict[Tag, T.Any]:
        return parser.parse_values(self.get_image_meta(image, format, tags))

    def set_image_meta(
        self, image: _P | None, values: T.Mapping[Tag, T.Any] | None
    ) -> None:
        preconditions.not_null(
            image, "Image cannot be null and must be a valid stream of image data."
        )
        values = preconditions.not_empty(
            values,
            "Tag values cannot be null and must contain 1 or more tag to write to the image.",
        )
        image = preconditions.is_writable(
            image,
            f"Unable to write the given image [{image}], ensure that the image exists at the given path and that the executing process has permissions to write to it.",
        )

        self._ensure_ready()

        command = self._builder.write(
            image, values, overwrite_original=self.overwrite_original
        )
        result = self._executor.execute(command)
        if not result.success:
            raise exceptions.ExecutionError(
                f"Failed to write tags to the image [{image}]", result
            )
        LOG.debug("Wrote %d tags to %s", len(values), image)

    def close(self) -> None:
        if self._closed:
            return
        LOG.debug("Closing exiftool (stay_open=%s)", self.stay_open)
        # Set before the executor closes, so a racing request fails instead of
        # starting a new process
        if not self.reopen_after_close:
            self._closed = True
        self._executor.close()

    def __enter__(self) -> "ExifTool":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def _ensure_open(self) -> None:
        if self._closed:
            raise exceptions.ClosedResourceError(
                "This ExifTool instance has been closed"
            )

    def _ensure_ready(self) -> None:
        version = self.get_version()
        if self.stay_open:
            if parser.version_tuple(version) < parser.version_tuple(
                constants.STAY_OPEN_MIN_VERSION
            ):
                raise exceptions.UnsupportedFeatureError(
                    f"exiftool {version} does not support -stay_open, {constants.STAY_OPEN_MIN_VERSION} or later is required",
                    version=version,
                    required=constants.STAY_OPEN_MIN_VERSION,
                )
