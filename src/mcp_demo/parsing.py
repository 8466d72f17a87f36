"""
Tool call extraction from free-form model output.

A model asks for a tool by embedding a call marker in its reply::

    [TOOL_CALL:Add(a=42, b=17)]

The identifier is made of ASCII letters, digits and underscores. The argument
list is a comma separated list of ``name=value`` pairs. Values are coerced to
a number, then a boolean, then fall back to a string with one layer of quotes
removed.

Parsing is permissive: a segment without ``=`` is dropped and a reply without
a marker is plain conversation. Nothing in this module raises on bad input.
"""

import logging
import re
from typing import Dict, List, Optional

from .models import ArgumentValue, ExtractedCall

logger = logging.getLogger(__name__)

# The body ends at the first ")]", so nested parentheses are not supported.
TOOL_CALL_PATTERN = re.compile(r"\[TOOL_CALL:([A-Za-z0-9_]+)\((.*?)\)\]", re.DOTALL)

# A value that opens with a quote right after "=" is consumed through its
# closing quote, so commas inside it do not split the segment. Quotes anywhere
# else, and unterminated quotes, are ordinary characters.
_SEGMENT_PATTERN = re.compile(r"""[^=,]*=\s*(?:"[^"]*"|'[^']*')[^,]*|[^,]+""")

_NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def split_segments(raw: str) -> List[str]:
    """Split an argument list on commas that are not inside quotes."""
    return _SEGMENT_PATTERN.findall(raw)


def parse_value(raw: str) -> ArgumentValue:
    """Coerce a single raw value: number, then boolean, then string."""
    value = raw.strip()

    if _NUMBER_PATTERN.fullmatch(value):
        return float(value)

    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False

    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def parse_arguments(raw: str) -> Dict[str, ArgumentValue]:
    """Parse the text between a call marker's parentheses."""
    arguments: Dict[str, ArgumentValue] = {}

    for segment in split_segments(raw):
        name, sep, value = segment.partition("=")
        name = name.strip()
        if not sep or not name:
            if segment.strip():
                logger.debug(f"Skipping malformed argument segment: {segment!r}")
            continue
        arguments[name] = parse_value(value)

    return arguments


def extract_tool_call(text: str) -> Optional[ExtractedCall]:
    """Return the first tool call in a model reply, or None."""
    match = TOOL_CALL_PATTERN.search(text)
    if match is None:
        return None

    tool_name, body = match.groups()
    call = ExtractedCall(tool_name=tool_name, arguments=parse_arguments(body))
    logger.debug(f"Extracted tool call {call.tool_name} with arguments {call.arguments}")
    return call
