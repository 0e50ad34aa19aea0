"""
Calldata Parser

garaga prints calldata in one of several shapes depending on version and
flags. Each strategy below takes the raw stdout and returns the felt list,
or None when the output is not in its shape. Strategies are tried in order.
"""

import json
import re
from typing import Callable, List, Optional, Tuple

_BRACKETED = re.compile(r"\[([^\]]+)\]", re.DOTALL)
_FELT = re.compile(r"^(0x[0-9a-fA-F]+|[0-9]+)$")

CalldataParser = Callable[[str], Optional[List[str]]]


def parse_json_array(output: str) -> Optional[List[str]]:
    """A JSON array of numbers or strings."""
    try:
        parsed = json.loads(output.strip())
    except ValueError:
        return None
    if not isinstance(parsed, list) or not parsed:
        return None
    if any(isinstance(v, (list, dict, bool)) or v is None for v in parsed):
        return None
    return [str(v) for v in parsed]


def parse_bracketed_list(output: str) -> Optional[List[str]]:
    """A comma separated list inside square brackets, possibly surrounded by prose."""
    match = _BRACKETED.search(output)
    if not match:
        return None
    values = [s.strip().strip('"\'') for s in match.group(1).split(',')]
    values = [v for v in values if v]
    return values or None


def parse_newline_tokens(output: str) -> Optional[List[str]]:
    """One felt per line, every line a decimal or 0x-hex number."""
    tokens = [line.strip() for line in output.strip().splitlines() if line.strip()]
    if not tokens or not all(_FELT.match(t) for t in tokens):
        return None
    return tokens


CALLDATA_PARSERS: Tuple[CalldataParser, ...] = (
    parse_json_array,
    parse_bracketed_list,
    parse_newline_tokens,
)


def parse_calldata(output: str) -> Optional[List[str]]:
    """Returns the result of the first strategy that recognizes the output."""
    for parser in CALLDATA_PARSERS:
        calldata = parser(output)
        if calldata:
            return calldata
    return None
