"""
A weak positional checksum used to catch accidental token corruption.

Not a cryptographic hash: different payloads can collide and anyone can
recompute it.
"""
from typing import Tuple

CHECKSUM_DELIMITER = "#"
CHECKSUM_MODULUS = 9973
BASE36_CHARS = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(n: int) -> str:
    """Converts a non-negative integer into a lowercase base-36 string."""
    if n < 0:
        raise ValueError("Input must be a non-negative integer")
    if n == 0:
        return "0"
    result = []
    while n > 0:
        n, remainder = divmod(n, 36)
        result.append(BASE36_CHARS[remainder])
    return "".join(reversed(result))


def calculate_checksum(payload: str) -> str:
    total = sum(ord(char) * (i + 1) for i, char in enumerate(payload))
    return to_base36(total % CHECKSUM_MODULUS)


def append_checksum(payload: str) -> str:
    return f"{payload}{CHECKSUM_DELIMITER}{calculate_checksum(payload)}"


def verify_checksum(value: str) -> Tuple[str, bool]:
    """
    Checks a payload produced by `append_checksum`.

    The checksum is read after the last '#' (base-36 never contains one), so
    ids may themselves contain '#'.
    Returns (payload, True) on a match and (value, False) otherwise.
    """
    payload, sep, checksum = value.rpartition(CHECKSUM_DELIMITER)
    if not sep or not checksum:
        return value, False
    if checksum != calculate_checksum(payload):
        return value, False
    return payload, True
