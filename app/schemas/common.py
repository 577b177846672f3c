"""
Shared schema pieces: the response envelope and camelCase model configuration.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Optional


class CamelModel(BaseModel):
    """Accepts camelCase keys on the wire and snake_case names in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(BaseModel):
    """Envelope for failed requests."""

    success: bool = Field(False, examples=[False])
    message: str = Field(..., examples=["Validation failed"])
    errors: Optional[Dict[str, List[str]]] = Field(
        None,
        examples=[{"password": ["Password must contain at least one number"]}]
    )


def envelope(message: str, data: Any = None) -> Dict[str, Any]:
    """Build a success body; data is omitted when None."""
    body: Dict[str, Any] = {"success": True, "message": message}
    if data is not None:
        body["data"] = data
    return body


ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid input"},
    401: {"model": ErrorResponse, "description": "Missing or invalid credentials"},
    403: {"model": ErrorResponse, "description": "Not allowed"},
    404: {"model": ErrorResponse, "description": "Not found"},
    409: {"model": ErrorResponse, "description": "Conflict with existing data"},
}
