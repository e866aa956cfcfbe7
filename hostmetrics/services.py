"""
Service-name inference for monitored processes.

pidstat reports a short command name ("java", "puma") that is ambiguous on
its own. Combined with the full command line from ps it maps to a stable
service identifier, which is what process-mode documents are keyed by.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

UNKNOWN_SERVICE = "unknown"


@dataclass(frozen=True)
class ServiceSignature:
    """
    One row of the service signature table.

    Attributes:
        command: Prefix of the short command name reported by pidstat.
        service: Service identifier returned on a match.
        command_contains: Substring the full command line must contain, if any.
    """
    command: str
    service: str
    command_contains: Optional[str] = None

    def matches(self, command_pidstat: str, command_full: str) -> bool:
        if not command_pidstat.startswith(self.command):
            return False
        return self.command_contains is None or self.command_contains in command_full


# Checked in order, first match wins
SERVICE_SIGNATURES = (
    ServiceSignature('java', 'puppetserver', 'puppetserver'),
    ServiceSignature('java', 'puppetdb', 'puppetdb'),
    ServiceSignature('java', 'console-services', 'console-services'),
    ServiceSignature('java', 'orchestration-services', 'orchestration-services'),
    ServiceSignature('postgres', 'postgres'),
    ServiceSignature('nginx', 'nginx'),
    ServiceSignature('puma', 'ace', 'ace-server'),
    ServiceSignature('puma', 'bolt', 'bolt-server'),
    ServiceSignature('pxp-agent', 'pxp-agent'),
    ServiceSignature('ruby', 'puppet-agent', 'puppet agent'),
)


def infer_service_name(command_pidstat: str, command_full: str) -> str:
    """
    Map a process to a service identifier.

    Args:
        command_pidstat: Short command name as reported by pidstat.
        command_full: Full command line as reported by ps.

    Returns:
        The service identifier, or ``"unknown"`` if no signature matches.

    Example:
        >>> infer_service_name('java', '/opt/puppetlabs/server/apps/puppetserver/bin/java ...')
        'puppetserver'
    """
    for signature in SERVICE_SIGNATURES:
        if signature.matches(command_pidstat or '', command_full or ''):
            return signature.service
    return UNKNOWN_SERVICE


def key_records_by_service(
    records: Mapping[int, Mapping[str, Any]],
    command_lines: Mapping[int, str]
) -> Dict[str, Dict[str, Any]]:
    """
    Build the process-mode payload keyed by service identifier.

    A fresh mapping is returned; the input records are left untouched. Each
    record gains ``command_full`` and ``pid`` (a string, like the
    other identifiers in the record). Repeated identifiers get
    ``_1``, ``_2``, ... suffixes in PID order so every key is unique: the
    first unmatched process is ``unknown``, the next ``unknown_1``.

    Args:
        records: Parsed pidstat records keyed by PID.
        command_lines: Full command lines keyed by PID.

    Returns:
        Dictionary mapping unique service identifier to record.
    """
    seen: Counter = Counter()
    payload: Dict[str, Dict[str, Any]] = {}

    for pid in sorted(records):
        record = records[pid]
        command_full = command_lines.get(pid, '')
        service = infer_service_name(record.get('command_pidstat', ''), command_full)

        key = service if seen[service] == 0 else f"{service}_{seen[service]}"
        seen[service] += 1

        payload[key] = {**record, 'command_full': command_full, 'pid': str(pid)}

    return payload
