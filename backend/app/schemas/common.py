"""Common schemas for API responses."""

from typing import Any, Dict, Optional

from pydantic import BaseModel


class SuccessResponse(BaseModel):
    """Mutation acknowledgement: {"success": true}."""

    success: bool = True


class ErrorResponse(BaseModel):
    """Error response."""

    success: bool = False
    error: str
    code: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
