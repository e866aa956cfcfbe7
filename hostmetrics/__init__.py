"""
Host metrics collectors.

Polling agents that drive external reporting tools (sar, pidstat, ps and the
VMware guest tools), parse their tabular output and write one normalized JSON
snapshot per collection cycle.
"""

VERSION = "1.2.0"
__version__ = VERSION
