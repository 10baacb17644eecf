import re

from .errors import InvalidFormat

# A space is only allowed between the number and a unit.
_SIZE_RE = re.compile(r"([0-9]+(?:\.[0-9]+)?|\.[0-9]+)(?: ?([kmgtpe]b?|b))?", re.IGNORECASE)

# Binary multipliers: 1K == 1KB == 1024 bytes.
MULTIPLIERS = {
    "": 1,
    "b": 1,
    "k": 1 << 10,
    "m": 1 << 20,
    "g": 1 << 30,
    "t": 1 << 40,
    "p": 1 << 50,
    "e": 1 << 60,
}


def parse_size(text: str) -> int:
    """Parse a human size string like '6G' or '6GB' into bytes (6442450944)."""
    m = _SIZE_RE.fullmatch(text)
    if not m:
        raise InvalidFormat("size", text)
    number, unit = m.group(1), (m.group(2) or "").lower()
    multiplier = MULTIPLIERS[unit[:1]]
    if "." in number:
        return int(float(number) * multiplier)
    return int(number) * multiplier
