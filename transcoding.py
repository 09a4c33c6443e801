"""
URL-safe, padding-free base64 for the byte-per-character payload.
"""
import base64
import re

URL_SAFE_PATTERN = re.compile(r"[A-Za-z0-9_-]*")


def to_url_safe_base64(raw: str) -> str:
    """
    Encodes a string whose characters are all single bytes.

    Raises ValueError (UnicodeEncodeError) for any character above U+00FF.
    """
    data = raw.encode("latin-1")
    return (
        base64.b64encode(data).decode("ascii")
        .replace("+", "-")
        .replace("/", "_")
        .rstrip("=")
    )


def from_url_safe_base64(token: str) -> str:
    """
    Decodes a token produced by `to_url_safe_base64`.

    Raises ValueError for characters outside the URL-safe alphabet or an
    impossible length (binascii.Error is a ValueError).
    """
    if not URL_SAFE_PATTERN.fullmatch(token):
        raise ValueError("Token contains characters outside the URL-safe base64 alphabet")

    padded = token.replace("-", "+").replace("_", "/")
    padded += "=" * (-len(padded) % 4)
    return base64.b64decode(padded, validate=True).decode("latin-1")
