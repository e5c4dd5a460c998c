"""
Identifier generation.
"""

import random
import string
import time


_ALPHABET = string.ascii_lowercase + string.digits


def generate_id() -> str:
    """
    Generate a unique id: epoch milliseconds plus 9 random base-36 chars.

    Examples:
        >>> generate_id()  # doctest: +SKIP
        '1736499600000-k3j9x0a1b'
    """
    suffix = "".join(random.choices(_ALPHABET, k=9))
    return f"{int(time.time() * 1000)}-{suffix}"


def generate_sequential_id(prefix: str, index: int) -> str:
    """
    Generate a fixture id with a zero-padded counter.

    Examples:
        >>> generate_sequential_id("booking", 7)
        'booking-0007'
    """
    return f"{prefix}-{index:04d}"
