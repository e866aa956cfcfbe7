"""
Custom exceptions for hostmetrics collectors.

This module provides custom exception classes with structured fields that
include:
- Machine-readable error codes
- The raw facts of the failure (command, exit code, stderr, timeout, output)
- Actionable suggestions for resolution

Collectors convert command, timeout and parse failures into an error document
instead of crashing without an artifact. Dependency and configuration errors
abort before any output file is attempted.
"""

from dataclasses import dataclass, field
from typing import Optional, List, Any
from enum import Enum


class ErrorCode(Enum):
    """Machine-readable error codes for hostmetrics errors."""
    # Configuration errors (1xx)
    CONFIG_MISSING_REQUIRED = "E101"
    CONFIG_INVALID_VALUE = "E102"
    CONFIG_FILE_NOT_FOUND = "E103"
    CONFIG_PARSE_ERROR = "E104"
    CONFIG_INCOMPATIBLE = "E105"

    # Command execution errors (2xx)
    COMMAND_FAILED = "E201"
    COMMAND_TIMEOUT = "E202"
    COMMAND_NOT_STARTED = "E203"

    # Output parsing errors (3xx)
    OUTPUT_MISSING_MARKERS = "E301"
    OUTPUT_INVALID_JSON = "E302"

    # File system errors (4xx)
    FS_WRITE_FAILED = "E401"

    # Dependency errors (5xx)
    DEPENDENCY_MISSING = "E501"

    # Internal errors (9xx)
    INTERNAL_ERROR = "E901"


@dataclass
class HMError:
    """
    Structured error information for hostmetrics.

    Attributes:
        code: Machine-readable error code.
        message: User-facing error message.
        details: Technical details for debugging.
        suggestion: How to fix the issue.
        context: Structured fields describing the failure.
    """
    code: ErrorCode
    message: str
    details: str = ""
    suggestion: str = ""
    context: dict = field(default_factory=dict)

    def __str__(self) -> str:
        """Format error for display."""
        lines = [f"[{self.code.value}] {self.message}"]
        if self.details:
            lines.append(f"  Details: {self.details}")
        if self.suggestion:
            lines.append(f"  Suggestion: {self.suggestion}")
        return "\n".join(lines)


class HostMetricsException(Exception):
    """
    Base exception class for hostmetrics.

    All custom exceptions inherit from this class and provide
    structured error information.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INTERNAL_ERROR,
                 details: str = "", suggestion: str = "", **context):
        self.error = HMError(
            code=code,
            message=message,
            details=details,
            suggestion=suggestion,
            context=context
        )
        super().__init__(str(self.error))

    @property
    def code(self) -> ErrorCode:
        return self.error.code

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def suggestion(self) -> str:
        return self.error.suggestion

    @property
    def context(self) -> dict:
        return self.error.context


class ConfigurationError(HostMetricsException):
    """
    Raised when configuration is invalid or missing.

    Examples:
        - Unknown metric type
        - Polling interval not smaller than the file interval
        - Configuration file not found or not valid YAML
    """

    def __init__(self, message: str, parameter: str = None,
                 expected: Any = None, actual: Any = None,
                 suggestion: str = None,
                 code: ErrorCode = ErrorCode.CONFIG_INVALID_VALUE):
        details_parts = []
        if parameter:
            details_parts.append(f"Parameter: {parameter}")
        if expected is not None:
            details_parts.append(f"Expected: {expected}")
        if actual is not None:
            details_parts.append(f"Actual: {actual}")

        super().__init__(
            message=message,
            code=code,
            details="; ".join(details_parts) if details_parts else "",
            suggestion=suggestion or self._default_suggestion(code),
            parameter=parameter,
            expected=expected,
            actual=actual
        )

    @property
    def parameter(self) -> Optional[str]:
        return self.context.get('parameter')

    @staticmethod
    def _default_suggestion(code: ErrorCode) -> str:
        suggestions = {
            ErrorCode.CONFIG_MISSING_REQUIRED: "Provide the required parameter via command line or config file",
            ErrorCode.CONFIG_INVALID_VALUE: "Check the parameter value and correct it",
            ErrorCode.CONFIG_FILE_NOT_FOUND: "Verify the config file path exists",
            ErrorCode.CONFIG_PARSE_ERROR: "Check config file syntax (YAML format)",
            ErrorCode.CONFIG_INCOMPATIBLE: "Use a polling interval smaller than the file interval",
        }
        return suggestions.get(code, "Check the configuration and try again")


class CommandError(HostMetricsException):
    """Base class for failures of an external command."""

    @property
    def command(self) -> Optional[str]:
        return self.context.get('command')


class CommandExecutionError(CommandError):
    """
    Raised when an external command exits non-zero or cannot be started.

    The exit code and captured stderr are kept as structured fields so
    callers can inspect them without parsing the message.
    """

    def __init__(self, message: str, command: str = None,
                 exit_code: int = None, stderr: str = None,
                 suggestion: str = None,
                 code: ErrorCode = ErrorCode.COMMAND_FAILED):
        details_parts = []
        if command:
            # Truncate long commands
            cmd_display = command[:200] + "..." if len(command) > 200 else command
            details_parts.append(f"Command: {cmd_display}")
        if exit_code is not None:
            details_parts.append(f"Exit code: {exit_code}")
        if stderr:
            stderr_display = stderr[:500] + "..." if len(stderr) > 500 else stderr
            details_parts.append(f"Error output: {stderr_display.strip()}")

        super().__init__(
            message=message,
            code=code,
            details="; ".join(details_parts) if details_parts else "",
            suggestion=suggestion or self._default_suggestion(code, exit_code),
            command=command,
            exit_code=exit_code,
            stderr=stderr
        )

    @property
    def exit_code(self) -> Optional[int]:
        return self.context.get('exit_code')

    @property
    def stderr(self) -> Optional[str]:
        return self.context.get('stderr')

    @staticmethod
    def _default_suggestion(code: ErrorCode, exit_code: int = None) -> str:
        suggestion = "Check command output for specific errors"

        # Add exit code specific hints
        if exit_code == 127 or code == ErrorCode.COMMAND_NOT_STARTED:
            suggestion = "Command not found - check that the tool is installed and in PATH"
        elif exit_code == 137:
            suggestion = "Process killed (possibly OOM) - check system memory"

        return suggestion


class CommandTimeoutError(CommandError):
    """
    Raised when an external command does not finish within its deadline.

    The process has already been sent a termination signal when this is
    raised; nobody waits for it to exit.
    """

    def __init__(self, message: str, command: str = None,
                 timeout: float = None, suggestion: str = None):
        details_parts = []
        if command:
            details_parts.append(f"Command: {command}")
        if timeout is not None:
            details_parts.append(f"Timeout: {timeout}s")

        super().__init__(
            message=message,
            code=ErrorCode.COMMAND_TIMEOUT,
            details="; ".join(details_parts),
            suggestion=suggestion or "Increase the timeout or check whether the tool is hung",
            command=command,
            timeout=timeout
        )

    @property
    def timeout(self) -> Optional[float]:
        return self.context.get('timeout')


class OutputParseError(HostMetricsException):
    """
    Raised when the output of an external tool does not have the expected shape.

    The full raw output is always part of the details so the error document
    can be diagnosed without re-running the tool.
    """

    def __init__(self, message: str, tool: str = None, output: str = None,
                 missing: List[str] = None, suggestion: str = None,
                 code: ErrorCode = ErrorCode.OUTPUT_MISSING_MARKERS):
        details_parts = []
        if tool:
            details_parts.append(f"Tool: {tool}")
        if missing:
            details_parts.append(f"Missing: {', '.join(missing)}")
        if output is not None:
            details_parts.append(f"Output:\n{output}")

        super().__init__(
            message=message,
            code=code,
            details="; ".join(details_parts) if details_parts else "",
            suggestion=suggestion or "Check that the installed tool version produces the expected report format",
            tool=tool,
            output=output,
            missing=missing
        )

    @property
    def output(self) -> Optional[str]:
        return self.context.get('output')


class OutputWriteError(HostMetricsException):
    """Raised when the output document cannot be written."""

    def __init__(self, message: str, path: str = None,
                 operation: str = None, suggestion: str = None):
        details_parts = []
        if path:
            details_parts.append(f"Path: {path}")
        if operation:
            details_parts.append(f"Operation: {operation}")

        super().__init__(
            message=message,
            code=ErrorCode.FS_WRITE_FAILED,
            details="; ".join(details_parts) if details_parts else "",
            suggestion=suggestion or "Check file/directory permissions and free disk space",
            path=path,
            operation=operation
        )


class DependencyError(HostMetricsException):
    """
    Raised when a required external tool is missing.

    Examples:
        - sysstat (sar, pidstat) not installed
        - VMware guest tools not installed
    """

    def __init__(self, message: str, dependency: str = None,
                 install_cmd: str = None, suggestion: str = None,
                 code: ErrorCode = ErrorCode.DEPENDENCY_MISSING):
        details_parts = []
        if dependency:
            details_parts.append(f"Missing: {dependency}")
        if install_cmd:
            details_parts.append(f"Install with: {install_cmd}")

        super().__init__(
            message=message,
            code=code,
            details="; ".join(details_parts) if details_parts else "",
            suggestion=suggestion or f"Install the required dependency: {dependency}",
            dependency=dependency,
            install_cmd=install_cmd
        )

    @property
    def dependency(self) -> Optional[str]:
        return self.context.get('dependency')
