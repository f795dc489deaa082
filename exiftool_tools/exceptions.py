from __future__ import annotations

import enum
import os
import typing as T

if T.TYPE_CHECKING:
    from .executor import Result


_MAX_OUTPUT_LENGTH = 2048


class ErrorKind(enum.Enum):
    NULL_ARGUMENT = "null_argument"
    INVALID_ARGUMENT = "invalid_argument"
    UNREADABLE_RESOURCE = "unreadable_resource"
    UNWRITABLE_RESOURCE = "unwritable_resource"
    EXECUTION_FAILURE = "execution_failure"
    CLOSED_RESOURCE = "closed_resource"
    UNSUPPORTED_FEATURE = "unsupported_feature"


def _truncate_begin(s: str) -> str:
    if _MAX_OUTPUT_LENGTH < len(s):
        return "..." + s[-_MAX_OUTPUT_LENGTH:]
    else:
        return s


class ExifToolError(Exception):
    """
    Base exception of exiftool_tools. Callers can match on the class or on `kind`.
    """

    kind: ErrorKind
    exit_code: int

    def __init__(self, message: str, value: T.Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.value = value


class NullArgumentError(ExifToolError):
    kind = ErrorKind.NULL_ARGUMENT
    exit_code = 2


class InvalidArgumentError(ExifToolError):
    kind = ErrorKind.INVALID_ARGUMENT
    exit_code = 2


class _FileError(ExifToolError):
    def __init__(self, path: os.PathLike | str, message: str) -> None:
        super().__init__(message, value=path)
        self.path = path


class UnreadableFileError(_FileError):
    kind = ErrorKind.UNREADABLE_RESOURCE
    exit_code = 3


class UnwritableFileError(_FileError):
    kind = ErrorKind.UNWRITABLE_RESOURCE
    exit_code = 4


class ExecutionError(ExifToolError):
    kind = ErrorKind.EXECUTION_FAILURE
    exit_code = 6

    def __init__(self, message: str, result: Result | None = None) -> None:
        super().__init__(message, value=result)
        self.result = result

    def __str__(self) -> str:
        msg = self.message
        if self.result is not None:
            msg += f"\nEXIT STATUS: {self.result.exit_status}"
            details = self.result.error or self.result.output
            if details:
                msg += f"\nOUTPUT: {_truncate_begin(details)}"
        return msg


class ExifToolNotFoundError(ExecutionError):
    exit_code = 8


class ClosedResourceError(ExifToolError):
    kind = ErrorKind.CLOSED_RESOURCE
    exit_code = 9


class UnsupportedFeatureError(ExifToolError):
    kind = ErrorKind.UNSUPPORTED_FEATURE
    exit_code = 10

    def __init__(
        self, message: str, version: str | None = None, required: str | None = None
    ) -> None:
        super().__init__(message, value=version)
        self.version = version
        self.required = required
