"""
Sample data for testing.

Provides realistic sample reports from sar, pidstat, ps and
vmware-toolbox-cmd for use in parser and collector tests.
"""

import json


# Sample `sar 1 3` output (12-hour locale)
SAMPLE_SAR_CPU = """\
Linux 5.15.0-91-generic (pe-primary.example.com) \t01/15/2025 \t_x86_64_\t(4 CPU)

02:30:01 PM     CPU     %user     %nice   %system   %iowait    %steal     %idle
02:30:02 PM     all      0.75      0.00      0.25      0.00      0.00     99.00
02:30:03 PM     all      0.50      0.00      0.00      0.00      0.00     99.50
02:30:04 PM     all      0.61      0.00      0.11      0.00      0.00     99.28
Average:        all      0.62      0.00      0.12      0.00      0.00     99.26
"""

SAMPLE_SAR_CPU_PARSED = {
    '%user': 0.62,
    '%nice': 0.0,
    '%system': 0.12,
    '%iowait': 0.0,
    '%steal': 0.0,
    '%idle': 99.26,
}

# Sample `sar -r 1 2` output (24-hour locale, one leading time column)
SAMPLE_SAR_MEMORY = """\
Linux 5.15.0-91-generic (pe-primary.example.com) \t01/15/2025 \t_x86_64_\t(4 CPU)

14:30:01    kbmemfree   kbavail kbmemused  %memused kbbuffers  kbcached  kbcommit   %commit  kbactive   kbinact   kbdirty
14:30:02      5243788  11524880   9951704     60.81    391528   5858076  12388288     50.01   6328016   3779860       212
14:30:03      5242620  11523720   9952872     60.82    391528   5858076  12388288     50.01   6328712   3779868       184
Average:      5243204  11524300   9952288     60.81    391528   5858076  12388288     50.01   6328364   3779864       198
"""

SAMPLE_SAR_MEMORY_PARSED = {
    'kbmemfree': 5243204.0,
    'kbavail': 11524300.0,
    'kbmemused': 9952288.0,
    '%memused': 60.81,
    'kbbuffers': 391528.0,
    'kbcached': 5858076.0,
    'kbcommit': 12388288.0,
    '%commit': 50.01,
    'kbactive': 6328364.0,
    'kbinact': 3779864.0,
    'kbdirty': 198.0,
}

# sar output cut short before the summary line
SAMPLE_SAR_NO_AVERAGE = """\
Linux 5.15.0-91-generic (pe-primary.example.com) \t01/15/2025 \t_x86_64_\t(4 CPU)

02:30:01 PM     CPU     %user     %nice   %system   %iowait    %steal     %idle
02:30:02 PM     all      0.75      0.00      0.25      0.00      0.00     99.00
"""

# Sample `pidstat -u -r -d -p 1234,2345,3456 1 2` output
SAMPLE_PIDSTAT = """\
Linux 5.15.0-91-generic (pe-primary.example.com) \t01/15/2025 \t_x86_64_\t(4 CPU)

02:30:01 PM   UID       PID    %usr %system  %guest   %wait    %CPU   CPU  Command
02:30:02 PM   999      1234    2.00    1.00    0.00    0.00    3.00     1  java
02:30:02 PM   999      2345    1.00    0.00    0.00    0.00    1.00     0  postgres

02:30:01 PM   UID       PID  minflt/s  majflt/s     VSZ     RSS   %MEM  Command
02:30:02 PM   999      1234      1.00      0.00 4567890 1234567   7.54  java

Average:      UID       PID    %usr %system  %guest   %wait    %CPU   CPU  Command
Average:      999      1234    1.50    0.50    0.00    0.00    2.00     -  java
Average:      999      2345    0.50    0.00    0.00    0.00    0.50     -  postgres
Average:        0      3456    0.00    0.00    0.00    0.00    0.00     -  ruby

Average:      UID       PID  minflt/s  majflt/s     VSZ     RSS   %MEM  Command
Average:      999      1234      0.50      0.00 4567890 1234567   7.54  java
Average:      999      2345      0.00      0.00  345678   45678   0.28  postgres
Average:        0      3456      2.00      0.00  567890   98765   0.60  ruby

Average:      UID       PID   kB_rd/s   kB_wr/s kB_ccwr/s iodelay  Command
Average:      999      1234      0.00     12.00      0.00       0  java
Average:      999      2345      0.00      4.00      0.00       1  postgres
"""

SAMPLE_PIDSTAT_JAVA_RECORD = {
    '%usr': 1.5,
    '%system': 0.5,
    '%guest': 0.0,
    '%wait': 0.0,
    '%CPU': 2.0,
    'minflt/s': 0.5,
    'majflt/s': 0.0,
    'VSZ': 4567890.0,
    'RSS': 1234567.0,
    '%MEM': 7.54,
    'kB_rd/s': 0.0,
    'kB_wr/s': 12.0,
    'kB_ccwr/s': 0.0,
    'iodelay': 0.0,
    'command_pidstat': 'java',
}

PUPPETSERVER_COMMAND = (
    "/opt/puppetlabs/server/apps/java/bin/java -Xms2g -Xmx2g "
    "-jar /opt/puppetlabs/server/apps/puppetserver/puppet-server-release.jar"
)
POSTGRES_COMMAND = "/opt/puppetlabs/server/bin/postgres -D /opt/puppetlabs/server/data/postgresql/14/data"
PUPPET_AGENT_COMMAND = "/opt/puppetlabs/puppet/bin/ruby /opt/puppetlabs/puppet/bin/puppet agent --no-daemonize"

# PID of the shell that launched the collector; carries the expression on its command line
LAUNCHER_PID = 6789

# Sample `ps -e -o pid,args` output
SAMPLE_PS = f"""\
    PID COMMAND
      1 /sbin/init splash
   1234 {PUPPETSERVER_COMMAND}
   2345 {POSTGRES_COMMAND}
   3456 {PUPPET_AGENT_COMMAND}
   4567 /usr/sbin/sshd -D
   {LAUNCHER_PID} /bin/sh -c hostmetrics-system --metric_type system_processes --process_expression puppet
"""

SAMPLE_PS_NO_MATCH = """\
    PID COMMAND
      1 /sbin/init splash
   4567 /usr/sbin/sshd -D
"""

# Sample `vmware-toolbox-cmd stat raw` listing
SAMPLE_VMWARE_LIST = """\
session
host
resources
vscsi scsi0:0
vscsi scsi0:1
vnet 4000
"""

SAMPLE_VMWARE_STATS = {
    ('session', None): {'version': 1, 'session': '4a7d0b8e', 'vm-uuid': '564d5e2b'},
    ('host', None): {'version': 1, 'cpu-speed': 2600, 'host-cpus': 16},
    ('resources', None): {'version': 1, 'cpu-used': 1825364, 'mem-target': 4194304},
    ('vscsi', 'scsi0:0'): {'version': 1, 'read-ios': 1024, 'write-ios': 4096},
    ('vscsi', 'scsi0:1'): {'version': 1, 'read-ios': 12, 'write-ios': 0},
    ('vnet', '4000'): {'version': 1, 'rx-packets': 98765, 'tx-packets': 43210},
}


def vmware_stat_responses():
    """
    Build MockCommandExecutor responses for the sample VMware stats.

    Returns:
        Dictionary of command pattern to (stdout, stderr, exit_code).
    """
    responses = {r'^sh -c': ('/usr/bin/vmware-toolbox-cmd\n', '', 0)}
    for (category, instance), stats in SAMPLE_VMWARE_STATS.items():
        pattern = rf'stat raw json {category}'
        pattern += rf' {instance}$' if instance else '$'
        responses[pattern] = (json.dumps(stats), '', 0)
    responses[r'stat raw$'] = (SAMPLE_VMWARE_LIST, '', 0)
    return responses
