"""
Handles the encoding and decoding of record IDs into opaque, URL-safe and
reversible tokens, so internal IDs never appear verbatim in shareable links.

Pipeline for encode:

    pack metadata -> append checksum -> (xor cipher -> scramble) x iterations
    -> prepend salt -> url-safe base64

Decode runs the stages backwards and rejects anything that does not validate.
This is obfuscation with accidental-tamper detection, not encryption.
"""
from typing import Any, Mapping, Optional, Union
from functools import lru_cache

import config
from checksum import append_checksum, verify_checksum
from core_logic import logger, EncodingFailure
from metadata import pack_metadata, unpack_metadata
from models import EncoderConfig
from obfuscation import xor_cipher, scramble, unscramble
from salt import generate_salt
from transcoding import to_url_safe_base64, from_url_safe_base64

ConfigLike = Union[EncoderConfig, Mapping[str, Any], None]

DEFAULT_CONFIG = EncoderConfig()


def resolve_config(overrides: ConfigLike = None) -> EncoderConfig:
    """
    Merges caller overrides with the defaults.
    Raises pydantic.ValidationError for an invalid config.
    """
    if overrides is None:
        return DEFAULT_CONFIG
    if isinstance(overrides, EncoderConfig):
        return overrides
    return EncoderConfig(**overrides)


@lru_cache()
def get_service_encoder_config() -> EncoderConfig:
    """
    Returns a cached config built from the application settings.
    This is what the HTTP service and the view-details links use.
    """
    return EncoderConfig(
        salt_length=config.ID_SALT_LENGTH,
        iterations=config.ID_ITERATIONS,
        include_checksum=config.ID_INCLUDE_CHECKSUM,
        custom_key=config.ID_CUSTOM_KEY,
    )


def encode_id(record_id: Union[str, int], config: ConfigLike = None) -> str:
    """Encodes a record id into an opaque token. Raises EncodingFailure on any error."""
    final_config = resolve_config(config)

    if isinstance(record_id, bool) or not isinstance(record_id, (str, int)):
        raise EncodingFailure(f"Unsupported id type: {type(record_id).__name__}")

    try:
        id_str = str(record_id)
        # every stage works on single bytes
        id_str.encode("latin-1")

        salt = generate_salt(final_config.salt_length)
        encoded = pack_metadata(id_str)
        if final_config.include_checksum:
            encoded = append_checksum(encoded)

        key = final_config.custom_key + salt
        for i in range(final_config.iterations):
            encoded = xor_cipher(encoded, key)
            encoded = scramble(encoded, f"{salt}{i}")

        return to_url_safe_base64(salt + encoded)
    except ValueError as e:
        logger.error(f"Error encoding ID: {e}")
        raise EncodingFailure("Failed to encode ID") from e


def decode_id(token: str, config: ConfigLike = None) -> Optional[str]:
    """
    Decodes a token back into the original record id.

    Returns None for any malformed, tampered or foreign token; stale and edited
    links are expected, so this never raises for bad input.
    """
    final_config = resolve_config(config)

    if not isinstance(token, str):
        logger.warning(f"Rejected token of type {type(token).__name__}")
        return None

    try:
        combined = from_url_safe_base64(token)
    except ValueError as e:
        logger.warning(f"Token is not valid url-safe base64: {e}")
        return None

    if len(combined) < final_config.salt_length:
        logger.warning("Token is shorter than its salt")
        return None

    salt = combined[:final_config.salt_length]
    encoded = combined[final_config.salt_length:]

    key = final_config.custom_key + salt
    for i in range(final_config.iterations - 1, -1, -1):
        encoded = unscramble(encoded, f"{salt}{i}")
        encoded = xor_cipher(encoded, key)

    if final_config.include_checksum:
        encoded, ok = verify_checksum(encoded)
        if not ok:
            logger.warning("Checksum validation failed")
            return None

    unpacked = unpack_metadata(encoded)
    if unpacked is None:
        logger.warning("Metadata is malformed")
        return None

    original_id, expected_length = unpacked
    if len(original_id) != expected_length:
        logger.warning("Length validation failed")
        return None

    return original_id
