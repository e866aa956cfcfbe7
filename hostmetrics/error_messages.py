"""
Centralized error message templates for hostmetrics.

This module provides:
- Consistent error message templates
- Actionable suggestions
- Terminal formatting for errors that abort before collection starts

Usage:
    from hostmetrics.error_messages import format_error, ERROR_MESSAGES

    # Format a known error
    msg = format_error('COMMAND_TIMEOUT', command='vmware-toolbox-cmd stat raw', timeout=10)
"""

from typing import Dict, Any


# Error message templates with placeholders
ERROR_MESSAGES: Dict[str, str] = {
    # Configuration Errors
    'CONFIG_INVALID_VALUE': (
        "Invalid value for parameter '{param}': {actual}\n"
        "Expected: {expected}"
    ),

    'CONFIG_INVALID_CHOICE': (
        "Invalid choice for '{param}': '{actual}'\n"
        "Valid options: {choices}"
    ),

    'CONFIG_INTERVAL_ORDER': (
        "The polling interval ({polling_interval}s) must be smaller than "
        "the file interval ({file_interval}s)"
    ),

    'CONFIG_FILE_NOT_FOUND': (
        "Configuration file not found: {path}"
    ),

    'CONFIG_PARSE_ERROR': (
        "Failed to parse configuration file: {path}\n"
        "Error: {error}"
    ),

    # Command Errors
    'COMMAND_FAILED': (
        "Command '{command}' failed with exit code {exit_code}"
    ),

    'COMMAND_NOT_STARTED': (
        "Command '{command}' could not be started: {error}"
    ),

    'COMMAND_TIMEOUT': (
        "Command '{command}' timed out after {timeout} seconds"
    ),

    # Output Errors
    'OUTPUT_MISSING_MARKERS': (
        "Could not find the {missing} in {tool} output"
    ),

    'OUTPUT_INVALID_JSON': (
        "{tool} returned output that is not valid JSON: {error}"
    ),

    'OUTPUT_WRITE_FAILED': (
        "Failed to write metrics file {path}: {error}"
    ),

    # Dependency Errors
    'DEPENDENCY_SYSSTAT_MISSING': (
        "The '{executable}' command from the sysstat package is required for {metric_type} metrics.\n"
        "Install with: {install_cmd}"
    ),

    'DEPENDENCY_PROCPS_MISSING': (
        "The '{executable}' command is required to discover processes.\n"
        "Install with: {install_cmd}"
    ),

    'DEPENDENCY_VMWARE_TOOLS_MISSING': (
        "The '{executable}' command was not found in PATH. VMware guest tools are "
        "required to collect virtualization metrics.\n"
        "Install with: {install_cmd}"
    ),
}


def format_error(error_key: str, **kwargs) -> str:
    """
    Format an error message with the given parameters.

    Args:
        error_key: Key for the error message template.
        **kwargs: Parameters to substitute in the template.

    Returns:
        Formatted error message string.

    Example:
        >>> format_error('COMMAND_FAILED', command='sar 1 300', exit_code=1)
        "Command 'sar 1 300' failed with exit code 1"
    """
    template = ERROR_MESSAGES.get(error_key)
    if template is None:
        return f"Unknown error: {error_key}\nContext: {kwargs}"

    try:
        return template.format(**kwargs)
    except KeyError as e:
        # Return template with available substitutions and note missing ones
        return f"{template}\n(Missing format parameter: {e})"


class ErrorFormatter:
    """
    Helper class for formatting errors with consistent styling.

    Used for the errors that abort a run before any output file exists,
    which only ever reach the operator's terminal or the scheduler's mail.
    """

    # ANSI color codes
    COLORS = {
        'reset': '\033[0m',
        'bold': '\033[1m',
        'red': '\033[91m',
        'cyan': '\033[96m',
    }

    def __init__(self, use_colors: bool = True):
        self.use_colors = use_colors

    def _color(self, text: str, color: str) -> str:
        """Apply color to text if enabled."""
        if self.use_colors and color in self.COLORS:
            return f"{self.COLORS[color]}{text}{self.COLORS['reset']}"
        return text

    def format_error_header(self, code: str, title: str) -> str:
        header = f"[{code}] {title}"
        return self._color(header, 'red')

    def format_suggestion(self, suggestion: str) -> str:
        prefix = self._color("Suggestion:", 'cyan')
        return f"{prefix} {suggestion}"

    def format_details(self, details: Dict[str, Any]) -> str:
        lines = []
        for key, value in details.items():
            key_styled = self._color(f"{key}:", 'bold')
            lines.append(f"  {key_styled} {value}")
        return "\n".join(lines)

    def format_exception(self, exc) -> str:
        """
        Format a HostMetricsException for terminal display.

        Args:
            exc: Exception carrying an ``error`` attribute (HMError).

        Returns:
            Fully formatted error string.
        """
        error = exc.error
        parts = [self.format_error_header(error.code.value, error.message)]

        details = {k: v for k, v in error.context.items() if v is not None}
        if details:
            parts.append(self.format_details(details))

        if error.suggestion:
            parts.append("")
            parts.append(self.format_suggestion(error.suggestion))

        return "\n".join(parts)
