"""
Pydantic schemas for API request/response validation
"""

from .zeus_credentials import (
    ZeusCredentialsIn, ZeusCredentialsOut, FieldError,
    CredentialsReadResponse, CredentialsSaveResponse, MessageResponse, ErrorResponse,
    field_errors,
)

__all__ = [
    "ZeusCredentialsIn", "ZeusCredentialsOut", "FieldError",
    "CredentialsReadResponse", "CredentialsSaveResponse", "MessageResponse", "ErrorResponse",
    "field_errors",
]
