"""
Common API schemas.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error response schema."""

    error: str
    message: str
    type: str
    errors: Optional[Dict[str, str]] = None
    details: Optional[Dict[str, Any]] = None
