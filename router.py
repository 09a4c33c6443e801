import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request, Query
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address

import config
from core_logic import EncodingFailure, ValidationException, ResourceNotFoundException
from encoding import encode_id, decode_id, get_service_encoder_config
from models import (
    EncodeRequest, EncodeResponse, DecodeRequest, DecodeResponse,
    ViewDetailsParams, ViewDetailsLinkResponse, ErrorResponse
)
from view_details import build_view_details_url, create_view_details_url, parse_view_details_params

# --- Router Setup ---

# API Router for versioning and organization.
api_router = APIRouter(
    prefix="/api/v1",
    tags=["IDs"],  # Group endpoints in the docs
)

# Routes consumed by shared links and monitoring.
web_router = APIRouter(
    tags=["Links"],
)

limiter = Limiter(key_func=get_remote_address)

# --- Constants and Logger ---

logger = logging.getLogger(__name__)

# --- Web Routes ---

@web_router.get("/health", summary="Health Check", tags=["Monitoring"])
async def health_check():
    """Round-trips a few sample ids through the codec with the service config."""
    health_status = {"status": "ok", "services": {}, "timestamp": datetime.now(timezone.utc).isoformat()}
    status_code = 200

    try:
        encoder_config = get_service_encoder_config()
        for sample_id in config.HEALTH_CHECK_IDS:
            decoded = decode_id(encode_id(sample_id, encoder_config), encoder_config)
            if decoded != sample_id:
                raise RuntimeError(f"Round trip mismatch for {sample_id!r}: got {decoded!r}")
        health_status["services"]["codec"] = "ok"
    except Exception as e:
        logger.error(f"Codec health check failed: {e}")
        health_status["services"]["codec"] = "error"
        health_status["status"] = "error"
        status_code = 503

    return JSONResponse(content=health_status, status_code=status_code)


@web_router.get(
    config.VIEW_DETAILS_PATH,
    response_model=ViewDetailsParams,
    summary="Resolve a view details link",
    responses={404: {"model": ErrorResponse, "description": "Not Found: The link is incomplete, tampered or stale."}}
)
async def resolve_view_details(request: Request):
    """Decodes the `ref` and `type` query parameters of a shared link."""
    params = parse_view_details_params(request.query_params)
    if params is None:
        raise ResourceNotFoundException("Link is invalid or has expired")
    return params


# --- API Routes ---

@api_router.post(
    "/ids/encode",
    response_model=EncodeResponse,
    status_code=201,
    summary="Obfuscate a record id",
    responses={
        400: {"model": ErrorResponse, "description": "Bad Request: The id contains unsupported characters."},
        422: {"model": ErrorResponse, "description": "Validation Error: The request body is malformed."},
    }
)
@limiter.limit(config.RATE_LIMIT_ENCODE)
async def encode_record_id(payload: EncodeRequest, request: Request):
    """
    Turns a record id into an opaque token. When `type` is given the
    matching view details URL is returned as well.
    """
    try:
        token = encode_id(payload.id, get_service_encoder_config())
    except EncodingFailure as e:
        logger.warning(f"Rejected id for encoding: {e.__cause__ or e}")
        raise ValidationException("The id contains characters that cannot be encoded.")

    view_details_url = build_view_details_url(token, payload.type) if payload.type else None
    return EncodeResponse(token=token, view_details_url=view_details_url)


@api_router.post(
    "/ids/decode",
    response_model=DecodeResponse,
    summary="Resolve a token to its record id",
    responses={404: {"model": ErrorResponse, "description": "Not Found: The token is malformed, tampered or foreign."}}
)
@limiter.limit(config.RATE_LIMIT_DECODE)
async def decode_record_id(payload: DecodeRequest, request: Request):
    """Returns the record id behind a token."""
    record_id = decode_id(payload.token, get_service_encoder_config())
    if record_id is None:
        raise ResourceNotFoundException("Token could not be decoded")
    return DecodeResponse(id=record_id)


@api_router.get(
    "/view-details/link",
    response_model=ViewDetailsLinkResponse,
    summary="Build a view details link",
    responses={400: {"model": ErrorResponse, "description": "Bad Request: Unknown type or unencodable id."}}
)
@limiter.limit(config.RATE_LIMIT_ENCODE)
async def view_details_link(
    request: Request,
    id: str = Query(..., min_length=1, max_length=256),
    type: str = Query(...),
):
    """Creates the shareable view details URL for an entity."""
    try:
        url = create_view_details_url(id, type)
    except EncodingFailure as e:
        logger.warning(f"Rejected id for view details link: {e.__cause__ or e}")
        raise ValidationException("The id contains characters that cannot be encoded.")
    except ValueError as e:
        raise ValidationException(str(e))
    return ViewDetailsLinkResponse(url=url)


@api_router.get("/view-details/types", summary="List view details types")
async def view_details_types():
    return {"types": list(config.VIEW_DETAILS_TYPES)}
