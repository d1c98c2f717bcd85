"""Pydantic schemas for API requests and responses."""

from app.schemas.common import ErrorResponse, SuccessResponse
from app.schemas.note import Note

__all__ = [
    "SuccessResponse",
    "ErrorResponse",
    "Note",
]
