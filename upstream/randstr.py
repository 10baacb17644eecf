"""Random alphabetic payloads.

Each call draws 63 random bits at a time and slices them into 6-bit letter
indices, so one ``getrandbits`` call yields up to ten letters.
"""

import random
from typing import Optional

LETTERS = b"abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
LETTER_IDX_BITS = 6
LETTER_IDX_MASK = (1 << LETTER_IDX_BITS) - 1
LETTER_IDX_MAX = 63 // LETTER_IDX_BITS  # letter indices per 63-bit draw


def generate(length: int, source: Optional[random.Random] = None) -> str:
    """Return ``length`` letters drawn uniformly from [a-zA-Z].

    Indices >= 52 are skipped without drawing again. Without an explicit
    ``source`` a new ``random.Random`` is seeded for this call only.
    """
    if length < 0:
        raise ValueError(f"length must be >= 0, got {length}")
    if source is None:
        source = random.Random()

    buf = bytearray(length)
    n_letters = len(LETTERS)
    i = length - 1
    cache, remain = source.getrandbits(63), LETTER_IDX_MAX
    while i >= 0:
        if remain == 0:
            cache, remain = source.getrandbits(63), LETTER_IDX_MAX
        idx = cache & LETTER_IDX_MASK
        if idx < n_letters:
            buf[i] = LETTERS[idx]
            i -= 1
        cache >>= LETTER_IDX_BITS
        remain -= 1
    return buf.decode("ascii")
