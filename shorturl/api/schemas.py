"""
API Request and Response Schemas

This module defines all Pydantic models for API responses.
Separated from endpoints to keep concerns separated and enable reuse.

Submissions are read straight from the request (form or JSON body) rather
than through a request model: any malformed body must still produce the
{"error": "invalid url"} payload with status 200.
"""

from pydantic import BaseModel, Field


class ShortenResponse(BaseModel):
    """Response model for URL shortening endpoint."""
    original_url: str = Field(..., description="The URL exactly as submitted")
    short_url: int = Field(..., description="Numeric identifier of the short URL")


class ErrorResponse(BaseModel):
    """Error payload. Always returned with HTTP 200."""
    error: str = Field(..., description="Human readable error message")


class HelloResponse(BaseModel):
    greeting: str
