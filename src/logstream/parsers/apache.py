"""
Parsers for Apache access and error logs.
"""

import re
import time
import functools
from datetime import datetime
from typing import Any, Dict, Optional

from logstream.parsers.base import ParseStream, Record

# Quoted string with backslash escapes
_STRING = r'"((?:\\.|[^"\\])+)"'

APACHE_ACCESS_REGEX = re.compile(r"""
    \A
    (?: ([\w.:-]+) \s )?            # optional virtual host (1)
    ([0-9A-Fa-f.:]+)                # client IP address (2)
    \s (\S+)                        # ident information (3)
    \s (\S+)                        # authenticated user (4)
    \s \[ ([^\]]+) \]               # timestamp (5)
    \s """ + _STRING + r"""         # query (6)
    \s (\d+)                        # HTTP status (7)
    \s (\d+)                        # size (8)
    (?:                             # referrer and user agent (optional)
      \s """ + _STRING + r"""       # referrer (9)
      \s """ + _STRING + r"""       # user agent (10)
    )?
    \s* \Z
""", re.VERBOSE)

QUERY_STRING_REGEX = re.compile(r"""
    \A
    ([A-Z]+) \s+                    # method (1)
    (\S+)                           # query itself (2)
    (?: \s+ (HTTP/[\d.]+) )?        # optional protocol (3)
    \Z
""", re.VERBOSE)

APACHE_ERROR_REGEX = re.compile(r"""
    \A
    \[ \w{3} \s+                    # day of the week
      ( \w{3} \s+ \d+               # month and day (1)
        \s+ \d{2}:\d{2}:\d{2}       # time of day
        \s+ \d{4} )                 # year
    \]
    \s+ \[ (\w+) \]                 # log level (2)
    (?: \s+ \[ client \s+ ([0-9A-Fa-f.:]+) \] )?   # client IP address (3)
    \s+ (.+)                        # rest of the line (4)
    \Z
""", re.VERBOSE | re.DOTALL)

MONTHS = {
    name: number for number, name in enumerate(
        ['Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
         'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec'], start=1)
}

_ESCAPE = re.compile(r'\\(.)', re.DOTALL)


def _unescape(value: str) -> str:
    return _ESCAPE.sub(r'\1', value)


@functools.lru_cache(maxsize=4096)
def parse_access_time(timestamp: str) -> Optional[int]:
    """Convert an access log time like 10/Oct/2000:13:55:36 -0700 to seconds since epoch."""
    try:
        day, month, rest = timestamp.split('/', 2)
        year, hour, minute, second_zone = rest.split(':', 3)
        second, zone = second_zone.split()
        sign = -1 if zone[0] == '-' else 1
        offset = sign * (int(zone[1:3]) * 3600 + int(zone[3:5]) * 60)
        moment = datetime(int(year), MONTHS[month], int(day),
                          int(hour), int(minute), int(second))
    except (KeyError, IndexError, ValueError):
        return None
    epoch = (moment - datetime(1970, 1, 1)).total_seconds()
    return int(epoch) - offset


# Logs are read in order, so remember only the last converted timestamp
_last_error_time = ("", None)


def parse_error_time(timestamp: str) -> Optional[int]:
    """Convert an error log time like "Feb 03 23:45:07 2013" (local time) to seconds since epoch."""
    global _last_error_time
    if timestamp == _last_error_time[0]:
        return _last_error_time[1]

    try:
        month, day, hour, minute, second, year = re.split(r'[ :]+', timestamp)
        moment = datetime(int(year), MONTHS[month], int(day),
                          int(hour), int(minute), int(second))
        result = int(time.mktime(moment.timetuple()))
    except (KeyError, ValueError, OverflowError):
        return None

    _last_error_time = (timestamp, result)
    return result


def parse_apache_combined(line: str) -> Record:
    """
    Parse a line of an Apache access log in common or combined format.

    Returns:
        Record with timestamp (None if the date does not convert), client,
        status and size, plus vhost, user, ident_user, referrer, user_agent,
        method, query, base_query and protocol where available, or an empty
        dict if the line does not parse
    """
    match = APACHE_ACCESS_REGEX.match(line)
    if not match:
        return {}
    (vhost, client, ident_user, user, timestamp, query_string,
     status, size, referrer, user_agent) = match.groups()

    timestamp = parse_access_time(timestamp)

    # A date that does not convert leaves the timestamp as None
    result: Dict[str, Any] = {
        "timestamp": timestamp,
        "client": client,
        "status": int(status),
        "size": int(size),
    }

    # Only add optional keys with a useful value
    if vhost is not None:
        result["vhost"] = vhost
    if user != '-':
        result["user"] = user
    if ident_user != '-':
        result["ident_user"] = ident_user
    if referrer is not None and referrer != '-':
        result["referrer"] = _unescape(referrer)
    if user_agent is not None and user_agent != '-':
        result["user_agent"] = _unescape(user_agent)

    query_string = _unescape(query_string)
    query_match = QUERY_STRING_REGEX.match(query_string)
    if query_match:
        method, query, protocol = query_match.groups()
        result["method"] = method
        result["query"] = query
        result["base_query"] = query.split('?', 1)[0]
        if protocol is not None:
            result["protocol"] = protocol
    else:
        result["query"] = query_string

    return result


def parse_apache_error(line: str) -> Record:
    """
    Parse a line of an Apache error log.

    Returns:
        Record with timestamp, level, data and (if present) client, or an
        empty dict if the line does not parse
    """
    match = APACHE_ERROR_REGEX.match(line)
    if not match:
        return {}
    timestamp, level, client, data = match.groups()

    timestamp = parse_error_time(timestamp)
    if timestamp is None:
        return {}

    result: Dict[str, Any] = {
        "timestamp": timestamp,
        "level": level,
        "data": data,
    }
    if client is not None:
        result["client"] = client
    return result


class ApacheCombinedStream(ParseStream):
    """Stream of records parsed from an Apache access log."""

    def parse(self, line: str) -> Record:
        return parse_apache_combined(line)


class ApacheErrorStream(ParseStream):
    """Stream of records parsed from an Apache error log."""

    def parse(self, line: str) -> Record:
        return parse_apache_error(line)
