"""
Metric snapshot assembly and output.

A MetricSnapshot is built once per collection cycle, serialized and written
to ``<root>/<metric_type>/<hostname>/<YYYYMMDDTHHMMSSZ>.json``. Successful and
failed cycles produce the same document shape; a failure just carries an
``{"error": ...}`` payload.
"""

import json
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from hostmetrics.error_messages import format_error
from hostmetrics.errors import OutputWriteError
from hostmetrics.utils import HMJsonEncoder, format_file_timestamp, format_iso8601


@dataclass(frozen=True)
class MetricSnapshot:
    """
    One collection cycle's worth of metrics for one host.

    Attributes:
        timestamp: When the collection finished (UTC).
        hostname: Local hostname; used as-is for the output directory.
        metric_type: Metric category, e.g. ``system_cpu`` or ``vmware``.
        data: Payload: metrics, a warning or an error.
    """
    timestamp: datetime
    hostname: str
    metric_type: str
    data: Mapping[str, Any]

    @property
    def host_key(self) -> str:
        """Hostname with dots replaced by dashes, as used in the document."""
        return self.hostname.replace('.', '-')

    @property
    def is_error(self) -> bool:
        return 'error' in self.data

    @property
    def file_name(self) -> str:
        return f"{format_file_timestamp(self.timestamp)}.json"

    def output_path(self, root: Union[str, Path]) -> Path:
        return Path(root) / self.metric_type / self.hostname / self.file_name

    def to_document(self) -> Dict[str, Any]:
        return {
            'timestamp': format_iso8601(self.timestamp),
            'servers': {
                self.host_key: {
                    self.metric_type: dict(self.data),
                },
            },
        }

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_document(), cls=HMJsonEncoder, indent=indent)


def error_payload(exc: BaseException) -> Dict[str, str]:
    """Payload recorded in place of metrics when collection fails.

    Example:
        >>> error_payload(ValueError("bad value"))
        {'error': 'ValueError: bad value'}
    """
    return {'error': f"{type(exc).__name__}: {exc}"}


def write_snapshot(snapshot: MetricSnapshot, root: Union[str, Path], logger=None) -> Path:
    """
    Write a snapshot under its metric type and hostname directory.

    Args:
        snapshot: Snapshot to write.
        root: Metrics root directory. Missing directories are created.
        logger: Optional logger for status output.

    Returns:
        Path of the written file.

    Raises:
        OutputWriteError: If the directory or the file cannot be written.
    """
    path = snapshot.output_path(root)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            f.write(snapshot.to_json())
    except OSError as e:
        raise OutputWriteError(
            format_error('OUTPUT_WRITE_FAILED', path=path, error=e),
            path=str(path),
            operation='write',
        ) from e

    if logger:
        logger.status(f"Wrote {snapshot.metric_type} metrics to {path}")
    return path
