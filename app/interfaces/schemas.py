"""
Pydantic schemas shared by the interface layer.

No business logic belongs here.
"""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str
