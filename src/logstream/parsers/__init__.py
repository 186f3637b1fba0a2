"""Parsers turning lines of log text into records."""

from logstream.parsers.base import ParseStream, Record, is_record
from logstream.parsers.apache import (
    ApacheCombinedStream,
    ApacheErrorStream,
    parse_apache_combined,
    parse_apache_error,
)
from logstream.parsers.webkdc import WebKDCStream, parse_webkdc
from logstream.parsers.syslog import SyslogStream, parse_syslog

__all__ = [
    "ParseStream",
    "Record",
    "is_record",
    "ApacheCombinedStream",
    "ApacheErrorStream",
    "WebKDCStream",
    "SyslogStream",
    "parse_apache_combined",
    "parse_apache_error",
    "parse_webkdc",
    "parse_syslog",
]
