"""
Wraps a raw id with its length and a coarse timestamp fragment:

    <id>|<len(id)>:<coarse-time>

The time fragment only varies the payload between calls; it is never checked.
"""
import time
from typing import Optional, Tuple

ID_DELIMITER = "|"
LENGTH_DELIMITER = ":"
TIME_MODULUS = 100000


def coarse_time() -> int:
    return int(time.time() * 1000) % TIME_MODULUS


def pack_metadata(raw_id: str) -> str:
    return f"{raw_id}{ID_DELIMITER}{len(raw_id)}{LENGTH_DELIMITER}{coarse_time()}"


def unpack_metadata(packed: str) -> Optional[Tuple[str, int]]:
    """
    Splits a packed payload back into (id, declared_length).

    The metadata section never contains '|', so the last one is the delimiter
    and the id itself may contain any character. Returns None when a delimiter
    is missing or the declared length is not a plausible number.
    """
    raw_id, sep, metadata = packed.rpartition(ID_DELIMITER)
    if not sep:
        return None

    length_str, sep, _ = metadata.partition(LENGTH_DELIMITER)
    if not sep or not (length_str.isascii() and length_str.isdigit()):
        return None
    # a declared length can never have more digits than the payload length
    if len(length_str) > len(str(len(packed))):
        return None

    return raw_id, int(length_str)
