from __future__ import annotations

import re


_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

# Longest units first so "ms" is not read as "m" followed by "s".
_PART = re.compile(
    r"(\d+(?:\.\d*)?|\.\d+)(%s)" % "|".join(sorted(map(re.escape, _UNITS), key=len, reverse=True))
)


def parse_duration(text: str) -> float:
    """Parse a duration string such as ``100ms``, ``1.5s`` or ``1h30m``.

    Returns the duration in seconds. A bare ``0`` is accepted; any other
    number needs a unit. Raises ``ValueError`` on malformed input.
    """
    raw = (text or "").strip()
    if not raw:
        raise ValueError("empty duration")

    sign = 1.0
    body = raw
    if body[0] in "+-":
        sign = -1.0 if body[0] == "-" else 1.0
        body = body[1:]

    if body == "0":
        return 0.0
    if not body:
        raise ValueError(f"invalid duration {text!r}")

    total = 0.0
    pos = 0
    while pos < len(body):
        match = _PART.match(body, pos)
        if match is None:
            raise ValueError(f"invalid duration {text!r}")
        value, unit = match.groups()
        total += float(value) * _UNITS[unit]
        pos = match.end()
    return sign * total
