"""Header-driven response delays.

A request passes through two independent stages before its body is built:

* fixed delay: ``X-Delay`` (duration), applied with probability
  ``X-Delay-Percent`` / 100 (default 100).
* slowdown: ``X-Slowdown`` (duration), applied when the server started after
  the ``X-Slowdown-From`` instant (RFC 3339).

Each stage returns the seconds it wants to wait; ``simulate`` sums them and
suspends the request task once.
"""

import asyncio
import logging
import random
import re
from datetime import datetime, timedelta, timezone
from typing import Mapping, NamedTuple, Optional

from .errors import InvalidFormat

logger = logging.getLogger("upstream")

DELAY_HEADER = "X-Delay"
DELAY_PERCENT_HEADER = "X-Delay-Percent"
SLOWDOWN_HEADER = "X-Slowdown"
SLOWDOWN_FROM_HEADER = "X-Slowdown-From"

_DURATION_TERM = re.compile(r"([0-9]+(?:\.[0-9]*)?|\.[0-9]+)(ns|us|µs|μs|ms|s|m|h)")
_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,  # U+00B5 micro sign
    "μs": 1e-6,  # U+03BC greek mu
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

# Largest duration an int64 nanosecond count can hold (about 292 years).
MAX_DURATION = (2 ** 63 - 1) / 1e9

_RFC3339 = re.compile(
    r"([0-9]{4})-([0-9]{2})-([0-9]{2})T([0-9]{2}):([0-9]{2}):([0-9]{2})(?:\.([0-9]+))?(Z|[+-][0-9]{2}:[0-9]{2})"
)


def parse_duration(text: str) -> float:
    """Parse a duration such as '300ms', '1.5s' or '1h30m' into seconds."""
    s = text
    sign = 1.0
    if s[:1] in ("-", "+"):
        sign = -1.0 if s[0] == "-" else 1.0
        s = s[1:]
    if s == "0":
        return 0.0
    if not s:
        raise InvalidFormat("duration", text)

    total = 0.0
    pos = 0
    while pos < len(s):
        m = _DURATION_TERM.match(s, pos)
        if not m:
            raise InvalidFormat("duration", text)
        total += float(m.group(1)) * _UNIT_SECONDS[m.group(2)]
        pos = m.end()
    if not total <= MAX_DURATION:
        raise InvalidFormat("duration", text)
    return sign * total


def parse_timestamp(text: str) -> datetime:
    """Parse an RFC 3339 timestamp; an explicit offset or 'Z' is required."""
    m = _RFC3339.fullmatch(text)
    if not m:
        raise InvalidFormat("timestamp", text)
    year, month, day, hour, minute, second = (int(g) for g in m.groups()[:6])
    fraction, offset = m.group(7), m.group(8)
    micros = int((fraction or "0")[:6].ljust(6, "0"))
    try:
        if offset == "Z":
            tz = timezone.utc
        else:
            delta = timedelta(hours=int(offset[1:3]), minutes=int(offset[4:6]))
            tz = timezone(-delta if offset[0] == "-" else delta)
        return datetime(year, month, day, hour, minute, second, micros, tzinfo=tz)
    except ValueError:
        raise InvalidFormat("timestamp", text) from None


def parse_percent(text: Optional[str]) -> int:
    """Delay probability in percent; missing or unparsable means 100."""
    try:
        percent = int(text)
    except (TypeError, ValueError):
        return 100
    return max(0, min(100, percent))


class DelayDirective(NamedTuple):
    fixed_delay: Optional[float] = None
    delay_percent: int = 100
    slowdown_delay: Optional[float] = None
    slowdown_from: Optional[datetime] = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str], slowdown: bool = True) -> "DelayDirective":
        """Read the delay headers; raises InvalidFormat on a malformed value.

        Slowdown headers are only read when ``slowdown`` is true, and only
        take effect when both of them are present.
        """
        fixed, percent = None, 100
        raw_delay = headers.get(DELAY_HEADER)
        if raw_delay:
            fixed = parse_duration(raw_delay)
            percent = parse_percent(headers.get(DELAY_PERCENT_HEADER))

        slow, slow_from = None, None
        if slowdown:
            raw_slow = headers.get(SLOWDOWN_HEADER)
            raw_from = headers.get(SLOWDOWN_FROM_HEADER)
            if raw_slow and raw_from:
                slow_from = parse_timestamp(raw_from)
                slow = parse_duration(raw_slow)

        return cls(fixed, percent, slow, slow_from)


def fixed_delay(directive: DelayDirective, rng: Optional[random.Random] = None) -> float:
    if directive.fixed_delay is None:
        return 0.0
    draw = (rng or random).randrange(100)
    if draw < directive.delay_percent:
        return directive.fixed_delay
    return 0.0


def slowdown_delay(directive: DelayDirective, started_at: datetime) -> float:
    if directive.slowdown_delay is None or directive.slowdown_from is None:
        return 0.0
    if started_at > directive.slowdown_from:
        return directive.slowdown_delay
    return 0.0


async def simulate(
    headers: Mapping[str, str],
    started_at: datetime,
    slowdown: bool = True,
    rng: Optional[random.Random] = None,
) -> float:
    """Sleep for whatever the request headers ask for and return the seconds slept."""
    directive = DelayDirective.from_headers(headers, slowdown=slowdown)
    total = max(0.0, fixed_delay(directive, rng)) + max(0.0, slowdown_delay(directive, started_at))
    if total > 0:
        logger.debug("delaying response by %.3fs", total)
        await asyncio.sleep(total)
    return total
