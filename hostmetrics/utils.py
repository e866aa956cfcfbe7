"""
Utility Functions for hostmetrics collectors.

This module provides shared utility functions used by both collectors,
including:

- JSON encoding with custom type handling
- UTC timestamp helpers
- Command execution with a deadline and concurrent pipe draining

Classes:
    HMJsonEncoder: Custom JSON encoder for hostmetrics types.
    CommandResult: Output and exit status of one external command.
    CommandExecutor: Execute external commands with an optional timeout.

Functions:
    utc_now: Current time as an aware UTC datetime.
    format_iso8601: Timestamp string embedded in metric documents.
    format_file_timestamp: Timestamp string used for metric file names.
    is_valid_file_timestamp: Check a metric file name stem.
"""

import enum
import io
import json
import logging
import shlex
import subprocess
import threading
import time
from dataclasses import asdict, dataclass, is_dataclass
from datetime import datetime, timezone
from typing import Any, List, Optional, Union

from hostmetrics.config import COMMAND_POLL_SECONDS, FILE_TIMESTAMP_FORMAT, ISO8601_FORMAT, OUTPUT_ENCODING
from hostmetrics.error_messages import format_error
from hostmetrics.errors import CommandExecutionError, CommandTimeoutError, ErrorCode


class HMJsonEncoder(json.JSONEncoder):
    """Custom JSON encoder for hostmetrics types.

    Handles serialization of special types that the standard JSON encoder
    cannot process:
    - Sets are converted to sorted lists
    - Enums are converted to their values
    - Datetimes are converted to ISO 8601 UTC strings
    - Dataclasses are converted to dictionaries

    Example:
        >>> import json
        >>> json.dumps({'type': MetricType.SYSTEM_CPU}, cls=HMJsonEncoder)
        '{"type": "system_cpu"}'
    """

    def default(self, obj: Any) -> Any:
        if isinstance(obj, set):
            return sorted(obj)
        elif isinstance(obj, enum.Enum):
            return obj.value
        elif isinstance(obj, datetime):
            return format_iso8601(obj)
        elif is_dataclass(obj) and not isinstance(obj, type):
            return asdict(obj)
        return super().default(obj)


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def format_iso8601(timestamp: datetime) -> str:
    """Format a datetime as ``YYYY-MM-DDTHH:MM:SSZ`` in UTC.

    Example:
        >>> format_iso8601(datetime(2025, 1, 15, 14, 30, 22, tzinfo=timezone.utc))
        '2025-01-15T14:30:22Z'
    """
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(timezone.utc)
    return timestamp.strftime(ISO8601_FORMAT)


def format_file_timestamp(timestamp: datetime) -> str:
    """Format a datetime as ``YYYYMMDDTHHMMSSZ`` in UTC for use as a file name.

    Example:
        >>> format_file_timestamp(datetime(2025, 1, 15, 14, 30, 22, tzinfo=timezone.utc))
        '20250115T143022Z'
    """
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(timezone.utc)
    return timestamp.strftime(FILE_TIMESTAMP_FORMAT)


def is_valid_file_timestamp(value: str) -> bool:
    """Check if a string is a metric file timestamp in the format "YYYYMMDDTHHMMSSZ"."""
    try:
        if len(value) != 16 or value[8] != 'T' or value[-1] != 'Z':
            return False
        datetime.strptime(value, FILE_TIMESTAMP_FORMAT)
        return True
    except ValueError:
        return False


@dataclass(frozen=True)
class CommandResult:
    """Captured result of one external command.

    Attributes:
        command: Command line as executed.
        stdout: Full standard output.
        stderr: Full standard error.
        return_code: Exit status of the process.
        pid: Process ID the command ran as.
    """
    command: str
    stdout: str
    stderr: str
    return_code: int
    pid: Optional[int] = None

    @property
    def succeeded(self) -> bool:
        return self.return_code == 0


class CommandExecutor:
    """
    Execute external commands and capture their output.

    stdout and stderr are drained by two reader threads so a chatty command
    cannot block on a full pipe. Completion is checked with a non-blocking
    poll and a short sleep between checks, so a deadline can be enforced
    without blocking on ``wait()``.

    On timeout the process is sent SIGTERM and left to exit on its own; the
    caller gets a CommandTimeoutError immediately.
    The deadline also covers draining the pipes, which a background child
    of the command can keep open after the command itself has exited.
    """

    def __init__(self, logger: logging.Logger, debug: bool = False,
                 poll_interval: float = COMMAND_POLL_SECONDS):
        """
        Initialize the CommandExecutor.

        Args:
            logger: Logger for command tracing.
            debug: If True, log captured output of every command.
            poll_interval: Seconds to sleep between completion checks.
        """
        self.logger = logger
        self.debug = debug
        self.poll_interval = poll_interval

    def execute(self,
                command: Union[str, List[str]],
                timeout: Optional[float] = None,
                check: bool = True) -> CommandResult:
        """
        Execute a command and return its captured output.

        Args:
            command: The command to execute (string or list of strings).
            timeout: Seconds to wait for completion. None waits indefinitely.
            check: If True, a non-zero exit raises CommandExecutionError. If
                False, the result is returned whatever the exit status, which
                is what capability probes want.

        Returns:
            CommandResult with stdout, stderr and return code.

        Raises:
            CommandTimeoutError: If the command did not finish within ``timeout``.
            CommandExecutionError: If the command could not be started, or
                exited non-zero while ``check`` is True.
        """
        if isinstance(command, str):
            cmd_args = shlex.split(command)
            command_line = command
        else:
            cmd_args = [str(arg) for arg in command]
            command_line = shlex.join(cmd_args)

        self.logger.debug(f"Executing command: {command_line}")

        try:
            process = subprocess.Popen(
                cmd_args,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding=OUTPUT_ENCODING,
                errors='replace',
            )
        except OSError as e:
            raise CommandExecutionError(
                format_error('COMMAND_NOT_STARTED', command=command_line, error=e),
                command=command_line,
                exit_code=127,
                stderr=str(e),
                code=ErrorCode.COMMAND_NOT_STARTED,
            ) from e

        stdout_buffer = io.StringIO()
        stderr_buffer = io.StringIO()
        drain_errors: List[BaseException] = []
        readers = [
            threading.Thread(target=self._drain, args=(process.stdout, stdout_buffer, drain_errors),
                             name=f"stdout-{process.pid}", daemon=True),
            threading.Thread(target=self._drain, args=(process.stderr, stderr_buffer, drain_errors),
                             name=f"stderr-{process.pid}", daemon=True),
        ]
        for reader in readers:
            reader.start()

        deadline = time.monotonic() + timeout if timeout is not None else None
        while process.poll() is None:
            if deadline is not None and time.monotonic() >= deadline:
                self.logger.debug(f"Command timed out after {timeout}s, terminating pid {process.pid}")
                process.terminate()
                raise self._timeout_error(command_line, timeout)
            time.sleep(self.poll_interval)

        # A background child of the command can hold the pipes open after it exits
        for reader in readers:
            reader.join(None if deadline is None else max(deadline - time.monotonic(), 0))
        if any(reader.is_alive() for reader in readers):
            self.logger.debug(f"Output of pid {process.pid} still open after {timeout}s")
            raise self._timeout_error(command_line, timeout)

        if drain_errors:
            raise drain_errors[0]

        result = CommandResult(
            command=command_line,
            stdout=stdout_buffer.getvalue(),
            stderr=stderr_buffer.getvalue(),
            return_code=process.returncode,
            pid=process.pid,
        )
        self.logger.debug(f"Command exited with {result.return_code}: {command_line}")
        if self.debug:
            self.logger.debug(f"stdout:\n{result.stdout}")
            if result.stderr:
                self.logger.debug(f"stderr:\n{result.stderr}")

        if check and not result.succeeded:
            raise CommandExecutionError(
                format_error('COMMAND_FAILED', command=command_line, exit_code=result.return_code),
                command=command_line,
                exit_code=result.return_code,
                stderr=result.stderr,
            )

        return result

    @staticmethod
    def _timeout_error(command_line: str, timeout: float) -> CommandTimeoutError:
        return CommandTimeoutError(
            format_error('COMMAND_TIMEOUT', command=command_line, timeout=timeout),
            command=command_line,
            timeout=timeout,
        )

    @staticmethod
    def _drain(stream, buffer: io.StringIO, errors: List[BaseException]) -> None:
        """Copy a pipe into a buffer until EOF, recording any read failure."""
        try:
            for chunk in iter(lambda: stream.read(4096), ''):
                buffer.write(chunk)
        except Exception as e:
            errors.append(e)
        finally:
            stream.close()
