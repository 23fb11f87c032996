"""Schemas shared by several route modules."""

from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    error_code: str
    message: str
    details: Any | None = None


class MessageResponse(BaseModel):
    """Acknowledgement for operations that return no resource."""

    message: str


NOT_AUTHENTICATED = {401: {"model": ErrorResponse, "description": "Missing or bad token"}}
