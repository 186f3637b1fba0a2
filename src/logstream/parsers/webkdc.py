"""
Parser for WebKDC event logs, carried in the Apache error log.
"""

import re

from logstream.parsers.apache import parse_apache_error
from logstream.parsers.base import ParseStream, Record

WEBKDC_PREFIX_REGEX = re.compile(r'\Amod_webkdc:\s+')
EVENT_REGEX = re.compile(r'\Aevent=(\S+)\s+')

# A key/value pair; the value is either bare or double-quoted with backslash escapes
PAIR_REGEX = re.compile(r"""
    ([^=\s]+)                       # key (1)
    =
    (?:
      ([^"\s]*)                     # unquoted value (2)
      (?: \s+ | \Z )
      |
      "((?:\\.|[^\\"])*)"           # quoted value (3)
      (?: \s+ | \Z )
    )
""", re.VERBOSE)


def parse_webkdc(line: str) -> Record:
    """
    Parse a mod_webkdc line of an Apache error log.

    Lines from anything other than mod_webkdc produce an empty dict.  Event
    lines produce an event key plus one key per key=value pair; other
    messages are returned under message.
    """
    result = parse_apache_error(line)
    data = result.pop("data", None)
    if not data:
        return {}
    prefix = WEBKDC_PREFIX_REGEX.match(data)
    if not prefix:
        return {}
    data = data[prefix.end():]

    event = EVENT_REGEX.match(data)
    if not event:
        result["message"] = data
        return result

    result["event"] = event.group(1)
    position = event.end()
    while True:
        pair = PAIR_REGEX.match(data, position)
        if not pair or pair.end() == position:
            break
        key, bare, quoted = pair.groups()
        result[key] = bare if bare is not None else quoted
        position = pair.end()
    return result


class WebKDCStream(ParseStream):
    """Stream of WebKDC records parsed from an Apache error log."""

    def parse(self, line: str) -> Record:
        return parse_webkdc(line)
