"""
The reversible mixing stages of the identifier codec.

A repeating-key XOR stream and a salt-seeded position shuffle followed by a
rotation of every odd position. Both are exactly invertible given the same key
and salt. Neither is cryptographically secure; they only make record ids look
random in links.

All characters are treated as single bytes (code points 0-255).
"""
from typing import List

ROTATION = 13
BYTE_RANGE = 256


def xor_cipher(text: str, key: str) -> str:
    """XORs `text` against `key` repeated to its length. Applying it twice is a no-op."""
    if not key:
        raise ValueError("Cipher key must not be empty")
    key_len = len(key)
    return "".join(chr(ord(char) ^ ord(key[i % key_len])) for i, char in enumerate(text))


def build_permutation(length: int, salt_round: str) -> List[int]:
    """
    Deterministic salt-seeded shuffle of positions [0, length).

    Not a uniform shuffle; it only has to be reproduced identically on decode.
    """
    if not salt_round:
        raise ValueError("Scramble salt must not be empty")
    permutation = list(range(length))
    for i in range(length):
        swap_index = (i + ord(salt_round[i % len(salt_round)])) % length
        permutation[i], permutation[swap_index] = permutation[swap_index], permutation[i]
    return permutation


def scramble(text: str, salt_round: str) -> str:
    permutation = build_permutation(len(text), salt_round)

    scrambled = [""] * len(text)
    for i, char in enumerate(text):
        scrambled[permutation[i]] = char

    return "".join(
        chr((ord(char) + ROTATION) % BYTE_RANGE) if i % 2 == 1 else char
        for i, char in enumerate(scrambled)
    )


def unscramble(text: str, salt_round: str) -> str:
    """Reverses `scramble`: undoes the odd-index rotation, then the shuffle."""
    rotated_back = [
        chr((ord(char) - ROTATION) % BYTE_RANGE) if i % 2 == 1 else char
        for i, char in enumerate(text)
    ]

    permutation = build_permutation(len(text), salt_round)
    return "".join(rotated_back[position] for position in permutation)
