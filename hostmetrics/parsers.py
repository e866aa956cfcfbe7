"""
Parsers for the tabular text reports of sar, pidstat and ps.

The reports are loosely structured: whitespace separated columns, label
tokens mixed into data rows ("Average:", "all", "-") and header lines that
may carry more leading columns than the rows under them. Every numeric value
that reaches a metric document has passed ``is_numeric`` and been coerced to
float; everything else is dropped.
"""

import re
from typing import Any, Dict, List, Optional

from hostmetrics.config import SAR_BIN
from hostmetrics.error_messages import format_error
from hostmetrics.errors import OutputParseError


NUMERIC_PATTERN = re.compile(r'^[-+]?\d+\.?\d*$')

AVERAGE_MARKER = 'Average:'

# A sar header carries one of these column labels. kbmemfree marks a memory
# report (sar -r), CPU marks a CPU utilization report.
SAR_HEADER_MARKERS = ('kbmemfree', 'CPU')

PIDSTAT_HEADER_PATTERN = re.compile(r'^Average:\s+UID\s+')
PIDSTAT_ROW_PATTERN = re.compile(r'^Average:\s+\d+\s+')

# Leading pidstat columns that are not metrics: "Average:", UID, PID
PIDSTAT_LEADING_COLUMNS = 3

COMMAND_PIDSTAT_FIELD = 'command_pidstat'


def is_numeric(token: str) -> bool:
    """Check if a report token is a plain decimal number.

    Example:
        >>> is_numeric('99.33'), is_numeric('-1'), is_numeric('all'), is_numeric('-')
        (True, True, False, False)
    """
    return bool(NUMERIC_PATTERN.match(token))


def split_lines(content: str) -> List[str]:
    """Split a report into its non-empty lines."""
    return [line for line in content.splitlines() if line.strip()]


def _find_line(lines: List[List[str]], markers) -> Optional[List[str]]:
    for tokens in lines:
        if any(marker in tokens for marker in markers):
            return tokens
    return None


def parse_sar_output(content: str) -> Dict[str, float]:
    """
    Parse the averaged values out of a sar CPU or memory report.

    The header and the ``Average:`` row are matched column by column from
    the right. The header has leading time columns the average row lacks,
    and those are labels rather than numbers, so they fall away in the
    numeric filter along with "Average:" and "all".

    Args:
        content: Full stdout of ``sar [-r] <interval> <count>``.

    Returns:
        Dictionary mapping column name to averaged value.

    Raises:
        OutputParseError: If the header or the average line is missing. The
            error carries the full raw output.

    Example:
        >>> parse_sar_output(
        ...     "12:00:01 AM CPU %user %nice %system %iowait %steal %idle\\n"
        ...     "Average: all 0.58 0.00 0.08 0.00 0.00 99.33\\n")
        {'%user': 0.58, '%nice': 0.0, '%system': 0.08, '%iowait': 0.0, '%steal': 0.0, '%idle': 99.33}
    """
    lines = [line.split() for line in split_lines(content)]
    header = _find_line(lines, SAR_HEADER_MARKERS)
    average = _find_line(lines, (AVERAGE_MARKER,))

    missing = []
    if header is None:
        missing.append('header line')
    if average is None:
        missing.append('average line')
    if missing:
        raise OutputParseError(
            format_error('OUTPUT_MISSING_MARKERS', missing=' and '.join(missing), tool=SAR_BIN),
            tool=SAR_BIN,
            output=content,
            missing=missing,
        )

    pairs = list(zip(reversed(header), reversed(average)))
    return {name: float(value) for name, value in reversed(pairs) if is_numeric(value)}


def parse_pidstat_output(content: str) -> Dict[int, Dict[str, Any]]:
    """
    Parse the averaged per-process values out of a pidstat report.

    pidstat prints one table per statistic group (CPU, memory, I/O), each
    with its own ``Average: UID PID ...`` header. The field list is replaced
    at every header and each data row is merged into the record of its PID,
    so a PID tracked in several tables ends up with the union of their
    fields.

    Args:
        content: Full stdout of ``pidstat -u -r -d -p <pids> <interval> <count>``.

    Returns:
        Dictionary mapping PID to a record of metric name to value. Each
        record also carries the command name pidstat reported under
        ``command_pidstat``.

    Example:
        >>> parse_pidstat_output(
        ...     "Average:      UID       PID    %usr  %CPU   CPU  Command\\n"
        ...     "Average:      999      1234    1.00  1.50     -  java\\n")
        {1234: {'%usr': 1.0, '%CPU': 1.5, 'command_pidstat': 'java'}}
    """
    records: Dict[int, Dict[str, Any]] = {}
    fields: Optional[List[str]] = None

    for line in split_lines(content):
        if PIDSTAT_HEADER_PATTERN.match(line):
            fields = line.split()[PIDSTAT_LEADING_COLUMNS:]
            continue

        if fields is None or not PIDSTAT_ROW_PATTERN.match(line):
            continue

        tokens = line.split()
        if len(tokens) <= PIDSTAT_LEADING_COLUMNS or not tokens[2].isdigit():
            continue
        pid = int(tokens[2])
        values = tokens[PIDSTAT_LEADING_COLUMNS:]

        # The last field is always the command name
        command_index = len(fields) - 1
        record = {
            name: float(value)
            for name, value in zip(fields[:command_index], values[:command_index])
            if is_numeric(value)
        }
        command = ' '.join(values[command_index:])
        if command:
            record[COMMAND_PIDSTAT_FIELD] = command

        records.setdefault(pid, {}).update(record)

    return records


def parse_ps_output(content: str) -> Dict[int, str]:
    """
    Parse ``ps -e -o pid,args`` output.

    Args:
        content: Full stdout of ps.

    Returns:
        Dictionary mapping PID to its full command line.

    Example:
        >>> parse_ps_output("  PID COMMAND\\n    1 /sbin/init splash\\n")
        {1: '/sbin/init splash'}
    """
    processes: Dict[int, str] = {}
    for line in split_lines(content):
        parts = line.strip().split(None, 1)
        if not parts or not parts[0].isdigit():
            # Header line
            continue
        processes[int(parts[0])] = parts[1] if len(parts) > 1 else ''
    return processes
