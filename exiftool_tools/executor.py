from __future__ import annotations

import abc
import dataclasses
import logging
import subprocess
import threading
import typing as T

from . import constants, exceptions
from .command import Command


LOG = logging.getLogger(__name__)

# exiftool prefixes error messages with "Error"; warnings with "Warning"
_ERROR_PREFIX = "Error"


@dataclasses.dataclass(frozen=True)
class Result:
    output: str
    exit_status: int
    error: str = ""

    @property
    def success(self) -> bool:
        return self.exit_status == 0


class Executor(abc.ABC):
    @abc.abstractmethod
    def execute(self, command: Command) -> Result:
        raise NotImplementedError

    def close(self) -> None:
        pass


class ExiftoolRunner(Executor):
    """
    Run each command in a new exiftool subprocess
    """

    def execute(self, command: Command) -> Result:
        LOG.debug("Running: %s", command)

        # To handle non-latin1 filenames under Windows, the arguments are
        # passed via stdin. See https://exiftool.org/faq.html#Q18
        args = [command.executable, "-@", "-"]
        stdin = "".join(f"{arg}\n" for arg in command.args)

        try:
            # Exit status is not checked here: the parser decides what a failure is
            process = subprocess.run(
                args,
                capture_output=True,
                input=stdin,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError as ex:
            raise exceptions.ExifToolNotFoundError(
                f"exiftool not found at {command.executable}: {ex}"
            ) from ex
        except OSError as ex:
            raise exceptions.ExecutionError(
                f"Failed to start {command.executable}: {ex}"
            ) from ex

        LOG.debug("%s exited with status %d", command.executable, process.returncode)

        return Result(
            output=process.stdout,
            exit_status=process.returncode,
            error=process.stderr,
        )


class StayOpenRunner(Executor):
    """
    Forward commands to a long-lived "exiftool -stay_open True -@ -" process.

    Each command is written to the process stdin, one argument per line, and
    terminated by "-execute<token>". The response is everything exiftool prints
    until the "{ready<token>}" line. Only one command is in flight at a time.

    If the process dies mid-request, the request fails with ExecutionError and
    a new process is started by the next request. Commands without a token
    (e.g. the version probe) run in a one-shot process instead.

    After close(), the next request starts a new process, or raises
    ClosedResourceError when the runner was created with
    reopen_after_close=False.
    """

    def __init__(
        self,
        exiftool_executable: str = "exiftool",
        stop_timeout: float = constants.STOP_TIMEOUT,
        one_shot: Executor | None = None,
        reopen_after_close: bool = True,
    ) -> None:
        self.exiftool_executable = exiftool_executable
        self.stop_timeout = stop_timeout
        self.reopen_after_close = reopen_after_close
        self._one_shot = one_shot if one_shot is not None else ExiftoolRunner()
        self._lock = threading.Lock()
        self._process: subprocess.Popen | None = None
        self._closed = False
        self._close_requested = False

    @property
    def running(self) -> bool:
        process = self._process
        return process is not None and process.poll() is None

    @property
    def pid(self) -> int | None:
        process = self._process
        return None if process is None else process.pid

    def execute(self, command: Command) -> Result:
        if command.token is None:
            self._ensure_open()
            return self._one_shot.execute(command)

        if command.executable != self.exiftool_executable:
            raise exceptions.InvalidArgumentError(
                f"Command targets {command.executable} but the stay-open process runs {self.exiftool_executable}",
                value=command.executable,
            )

        with self._lock:
            self._ensure_open()
            process = self._ensure_started()
            return self._send(process, command)

    def close(self) -> None:
        # A request in flight holds the lock while blocked on reading; killing
        # the process closes its stdout, which fails that request
        if not self._lock.acquire(blocking=False):
            # Checked by a request that is still starting the process
            self._close_requested = True
            process = self._process
            if process is not None:
                LOG.debug("Killing exiftool process %d with a request in flight", process.pid)
                process.kill()
            self._lock.acquire()

        try:
            self._close_requested = False
            if not self.reopen_after_close:
                self._closed = True
            process, self._process = self._process, None
            if process is not None:
                self._stop(process)
        finally:
            self._lock.release()

    def _ensure_open(self) -> None:
        if self._closed:
            raise exceptions.ClosedResourceError(
                f"The exiftool stay-open runner for {self.exiftool_executable} has been closed"
            )

    def _ensure_started(self) -> subprocess.Popen:
        process = self._process
        if process is not None and process.poll() is None:
            return process

        if process is not None:
            LOG.warning(
                "exiftool process %d exited with status %s, restarting",
                process.pid,
                process.returncode,
            )
            self._reap(process)

        args = [
            self.exiftool_executable,
            *["-stay_open", "True"],
            *["-@", "-"],
            # Applied to every -execute command; see https://exiftool.org/faq.html#Q18
            *["-common_args", "-charset", "filename=utf8"],
        ]
        LOG.debug("Starting: %s", " ".join(args))
        try:
            process = subprocess.Popen(
                args,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                # Errors and warnings go to the same stream, before the {ready} line
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError as ex:
            raise exceptions.ExifToolNotFoundError(
                f"exiftool not found at {self.exiftool_executable}: {ex}"
            ) from ex
        except OSError as ex:
            raise exceptions.ExecutionError(
                f"Failed to start {self.exiftool_executable}: {ex}"
            ) from ex

        LOG.debug("Started exiftool process %d", process.pid)
        self._process = process
        if self._close_requested:
            self._invalidate(process)
            raise exceptions.ExecutionError(
                f"exiftool process {process.pid} was closed while starting"
            )
        return process

    def _send(self, process: subprocess.Popen, command: Command) -> Result:
        assert process.stdin is not None and process.stdout is not None
        sentinel = T.cast(str, command.sentinel)

        LOG.debug("Sending to exiftool process %d: %s", process.pid, command)
        try:
            process.stdin.write("".join(f"{arg}\n" for arg in command.args))
            process.stdin.flush()
        except (OSError, ValueError) as ex:
            self._invalidate(process)
            raise exceptions.ExecutionError(
                f"Failed to send command to exiftool process {process.pid}: {ex}"
            ) from ex

        lines: list[str] = []
        exit_status = 0
        while True:
            try:
                line = process.stdout.readline()
            except (OSError, ValueError) as ex:
                self._invalidate(process)
                raise exceptions.ExecutionError(
                    f"Failed to read from exiftool process {process.pid}: {ex}"
                ) from ex

            if not line:
                self._invalidate(process)
                raise exceptions.ExecutionError(
                    f"exiftool process {process.pid} closed its output before {sentinel}",
                    result=Result("\n".join(lines), exit_status=-1),
                )

            line = line.rstrip("\r\n")
            head, found, _ = line.partition(sentinel)
            if found:
                if head:
                    lines.append(head)
                break

            if line.startswith(_ERROR_PREFIX):
                exit_status = 1
            lines.append(line)

        output = "\n".join(lines)
        if lines:
            output += "\n"
        return Result(output=output, exit_status=exit_status)

    def _invalidate(self, process: subprocess.Popen) -> None:
        LOG.warning("Discarding exiftool process %d", process.pid)
        if process.poll() is None:
            process.kill()
        self._reap(process)
        if self._process is process:
            self._process = None

    def _stop(self, process: subprocess.Popen) -> None:
        if process.poll() is None:
            LOG.debug("Stopping exiftool process %d", process.pid)
            try:
                assert process.stdin is not None
                process.stdin.write("-stay_open\nFalse\n")
                process.stdin.flush()
                process.wait(timeout=self.stop_timeout)
            except (OSError, ValueError, subprocess.TimeoutExpired) as ex:
                LOG.warning(
                    "exiftool process %d did not stop (%s), killing it", process.pid, ex
                )
                process.kill()
        self._reap(process)

    def _reap(self, process: subprocess.Popen) -> None:
        for stream in (process.stdin, process.stdout):
            if stream is None:
                continue
            try:
                stream.close()
            except OSError:
                # Broken pipe when flushing a stdin nobody reads anymore
                pass
        process.wait()
