from __future__ import annotations

import dataclasses
import itertools
import os
import typing as T

from . import exceptions
from .tags import Format, Tag


# Lets exiftool decode file names as UTF-8; see https://exiftool.org/faq.html#Q18
_CHARSET_ARGS = ("-charset", "filename=utf8")

# Tokens must be numeric: exiftool echoes -execute<NUM> as {ready<NUM>}
_EXECUTE_TOKENS = itertools.count(1)


@dataclasses.dataclass(frozen=True)
class Command:
    executable: str
    args: tuple[str, ...]
    # Set only for commands sent to a stay-open process
    token: str | None = None

    @property
    def sentinel(self) -> str | None:
        if self.token is None:
            return None
        return f"{{ready{self.token}}}"

    def to_list(self) -> list[str]:
        return [self.executable, *self.args]

    def __str__(self) -> str:
        return " ".join(self.to_list())


def _format_value(value: T.Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def _check_single_line(arg: str) -> str:
    # Arguments are passed to exiftool through an argfile, one per line
    if "\n" in arg or "\r" in arg:
        raise exceptions.InvalidArgumentError(
            f"Argument must not contain line breaks: {arg!r}", value=arg
        )
    return arg


class CommandBuilder:
    """
    Build exiftool invocations for the version probe, tag reads and tag writes
    """

    def __init__(self, exiftool_executable: str = "exiftool", stay_open: bool = False):
        self.exiftool_executable = exiftool_executable
        self.stay_open = stay_open

    def version(self) -> Command:
        # Always run in a fresh process, so stay-open support can be checked
        # before the persistent process starts
        return Command(self.exiftool_executable, ("-ver",))

    def read(
        self, path: os.PathLike | str, tags: T.Iterable[Tag], format: Format
    ) -> Command:
        args: list[str] = [
            *_CHARSET_ARGS,
            # Short output: "TagName: Value"
            "-S",
            *format.flags,
        ]
        # dict keeps the first-seen order
        args.extend(f"-{tag.name}" for tag in dict.fromkeys(tags))
        args.append(_check_single_line(str(path)))
        return self._finish(args)

    def write(
        self,
        path: os.PathLike | str,
        values: T.Mapping[Tag, T.Any],
        overwrite_original: bool = False,
    ) -> Command:
        args: list[str] = [*_CHARSET_ARGS]
        if overwrite_original:
            args.append("-overwrite_original")
        for tag, value in values.items():
            args.append(_check_single_line(f"-{tag.name}={_format_value(value)}"))
        args.append(_check_single_line(str(path)))
        return self._finish(args)

    def _finish(self, args: list[str]) -> Command:
        if not self.stay_open:
            return Command(self.exiftool_executable, tuple(args))
        token = str(next(_EXECUTE_TOKENS))
        args.append(f"-execute{token}")
        return Command(self.exiftool_executable, tuple(args), token=token)
