"""Pydantic schemas for API requests and responses."""

from gateway.schemas.files import ExistsResponse, ShareEntryResponse
from gateway.schemas.common import ErrorResponse

__all__ = [
    "ExistsResponse",
    "ShareEntryResponse",
    "ErrorResponse",
]
