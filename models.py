from typing import Optional, Literal, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

import config

DEFAULT_CUSTOM_KEY = "SecureKey2024"

ViewDetailsType = Literal[config.VIEW_DETAILS_TYPES]


class EncoderConfig(BaseModel):
    """
    Parameters shared by encode and decode. A token only decodes with the same
    effective config it was encoded with.

    Fields accept either snake_case or camelCase names (salt_length / saltLength).
    """
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    salt_length: int = Field(8, gt=0)
    iterations: int = Field(3, gt=0)
    include_checksum: bool = True
    custom_key: str = Field(DEFAULT_CUSTOM_KEY, min_length=1)

    @field_validator('custom_key')
    def validate_custom_key(cls, value):
        """The cipher works byte by byte, so the key must stay within Latin-1."""
        try:
            value.encode("latin-1")
        except UnicodeEncodeError:
            raise ValueError("custom_key must only contain characters in the range U+0000-U+00FF")
        return value


class EncodeRequest(BaseModel):
    """Request model for obfuscating a record id."""
    id: Union[int, str]
    type: Optional[ViewDetailsType] = None

    @field_validator('id')
    def validate_id(cls, v):
        if isinstance(v, str) and len(v) > 256:
            raise ValueError("id must be at most 256 characters")
        return v


class EncodeResponse(BaseModel):
    token: str
    view_details_url: Optional[str] = None


class DecodeRequest(BaseModel):
    """Request model for resolving a token back to its record id."""
    token: str = Field(..., min_length=1, max_length=1024)


class DecodeResponse(BaseModel):
    id: str


class ViewDetailsParams(BaseModel):
    """The decoded id and entity type carried by a view-details link."""
    id: str
    type: ViewDetailsType


class ViewDetailsLinkResponse(BaseModel):
    url: str


class ErrorResponse(BaseModel):
    error: str
