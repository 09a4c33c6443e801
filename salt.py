"""
Random salt generation for identifier tokens.

The salt only needs to be uniformly distributed so that repeated encodes of the
same id produce different tokens; it is not a secret.
"""
import secrets
import string

SALT_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits


def generate_salt(length: int) -> str:
    """Returns `length` characters drawn uniformly from [A-Za-z0-9]."""
    if length <= 0:
        raise ValueError("Salt length must be a positive integer")
    return "".join(secrets.choice(SALT_ALPHABET) for _ in range(length))
