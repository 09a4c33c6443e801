"""
Builds and parses the shareable view-details links that carry an encoded id.
"""
from typing import Mapping, Optional, Union

import config
from core_logic import logger
from encoding import encode_id, decode_id, get_service_encoder_config, ConfigLike
from models import ViewDetailsParams


def build_view_details_url(token: str, entity_type: str) -> str:
    return f"{config.VIEW_DETAILS_PATH}?ref={token}&type={entity_type}"


def create_view_details_url(
    record_id: Union[str, int],
    entity_type: str,
    encoder_config: ConfigLike = None,
) -> str:
    """
    Creates a view details URL with an encoded id and entity type,
    e.g. /view-details?ref=<token>&type=booking
    """
    if entity_type not in config.VIEW_DETAILS_TYPES:
        raise ValueError(f"Unknown view details type: {entity_type}")

    token = encode_id(str(record_id), encoder_config or get_service_encoder_config())
    return build_view_details_url(token, entity_type)


def parse_view_details_params(
    params: Mapping[str, str],
    encoder_config: ConfigLike = None,
) -> Optional[ViewDetailsParams]:
    """Returns the decoded id and type, or None if the link is incomplete or invalid."""
    token = params.get("ref")
    entity_type = params.get("type")

    if not token or not entity_type:
        return None

    if entity_type not in config.VIEW_DETAILS_TYPES:
        logger.warning(f"Unknown view details type: {entity_type}")
        return None

    decoded_id = decode_id(token, encoder_config or get_service_encoder_config())
    # an empty id never identifies a record
    if not decoded_id:
        return None

    return ViewDetailsParams(id=decoded_id, type=entity_type)
