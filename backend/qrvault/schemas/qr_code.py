"""
QRVault Backend — Pydantic Request/Response Schemas
=====================================================

What:  Pydantic models defining the JSON contract of the API.
How:   FastAPI validates request bodies against these models, serializes
       responses through them, and builds the OpenAPI document from them.

The HTML listing and the raw PNG endpoint do not go through these models;
only the JSON endpoints (label update, delete, health, errors) do.
"""

from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class LabelUpdate(BaseModel):
    """
    What:  Body of PUT /qr/{id}.
    A missing `label` key or a null label clears the label.
    """
    label: Optional[str] = Field(default="", description="New free-text label for the QR code")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class StatusResponse(BaseModel):
    """Acknowledgement returned by successful mutations: {"status": "ok"}."""
    status: str = Field(default="ok", description="Always 'ok' on success")


class HealthResponse(BaseModel):
    """
    What:  Liveness response for GET /health.
    Does not probe the database: the endpoint answers as long as the process
    can serve HTTP.
    """
    status: str = Field(default="healthy", description="Always 'healthy'")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error body for every 4xx/5xx JSON response.

    Example:
        {
            "error": "not_found",
            "message": "QR code with ID '42' was not found",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")
