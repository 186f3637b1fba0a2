"""
Parser for traditional BSD syslog files.
"""

import re
import time
from datetime import datetime
from typing import Any, Dict, Optional

from logstream.parsers.apache import MONTHS
from logstream.parsers.base import ParseStream, Record

SYSLOG_REGEX = re.compile(r"""
    \A
    (\w{3}) \s+ (\d{1,2})           # month and day (1, 2)
    \s (\d{2}):(\d{2}):(\d{2})      # time of day (3, 4, 5)
    \s (\S+)                        # host (6)
    \s ([^\s:\[]+)                  # program (7)
    (?: \[ (\d+) \] )?              # optional pid (8)
    : \s? (.*)                      # message (9)
    \Z
""", re.VERBOSE | re.DOTALL)


def parse_syslog_time(month: str, day: str, hour: str, minute: str, second: str,
                      year: Optional[int] = None) -> Optional[int]:
    """Convert syslog time fields (local time, no year) to seconds since epoch."""
    if year is None:
        year = datetime.now().year
    try:
        moment = datetime(year, MONTHS[month], int(day),
                          int(hour), int(minute), int(second))
        return int(time.mktime(moment.timetuple()))
    except (KeyError, ValueError, OverflowError):
        return None


def parse_syslog(line: str) -> Record:
    """
    Parse a syslog line such as "Feb  3 23:45:07 host sshd[123]: message".

    Returns:
        Record with timestamp, host, program, message and (if present) pid,
        or an empty dict if the line does not parse
    """
    match = SYSLOG_REGEX.match(line)
    if not match:
        return {}
    month, day, hour, minute, second, host, program, pid, message = match.groups()

    timestamp = parse_syslog_time(month, day, hour, minute, second)
    if timestamp is None:
        return {}

    result: Dict[str, Any] = {
        "timestamp": timestamp,
        "host": host,
        "program": program,
        "message": message,
    }
    if pid is not None:
        result["pid"] = int(pid)
    return result


class SyslogStream(ParseStream):
    """Stream of records parsed from a syslog file."""

    def parse(self, line: str) -> Record:
        return parse_syslog(line)
