"""
Pydantic schemas for Zeus ERP credential validation and responses
"""

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Optional
from datetime import datetime
from uuid import UUID

PORT_ERROR = "Port must be a positive number up to 65535"
MAX_PORT = 65535


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys, matching the settings page payloads"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ZeusCredentialsIn(CamelModel):
    """Payload for creating or updating a tenant's Zeus credentials"""

    host: str = Field(
        ...,
        description="IP address or hostname of the Zeus database server",
        examples=["192.168.0.1"]
    )

    port: int = Field(
        ...,
        description="Database server port (number or numeric string)",
        examples=[3050]
    )

    database_name: str = Field(
        ...,
        description="Database name or path",
        examples=["C:\\Zeus\\DB.FDB"]
    )

    username: str = Field(
        ...,
        description="Database user",
        examples=["SYSDBA"]
    )

    password: Optional[str] = Field(
        None,
        description="New password; empty or absent keeps the stored one"
    )

    @field_validator('host', 'database_name', 'username', mode='before')
    @classmethod
    def validate_required_text(cls, v, info):
        """Required text fields must be non-blank strings"""
        if not isinstance(v, str):
            raise ValueError(f"{info.field_name} must be a string")
        v = v.strip()
        if not v:
            raise ValueError(f"{info.field_name} is required")
        return v

    @field_validator('port', mode='before')
    @classmethod
    def coerce_port(cls, v):
        """Accept 3050 or "3050"; reject anything that is not a positive integer"""
        if isinstance(v, bool):
            raise ValueError(PORT_ERROR)
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("Port is required")
            # ASCII digits only; int() also takes "5_432" and non-ASCII digits
            if not (v.isascii() and v.isdigit()):
                raise ValueError(PORT_ERROR)
            v = int(v, 10)
        if isinstance(v, float):
            if not v.is_integer():
                raise ValueError(PORT_ERROR)
            v = int(v)
        if not isinstance(v, int) or v <= 0 or v > MAX_PORT:
            raise ValueError(PORT_ERROR)
        return v

    @field_validator('password', mode='before')
    @classmethod
    def validate_password(cls, v):
        if v is None:
            return None
        if not isinstance(v, str):
            raise ValueError("password must be a string")
        return v

    @property
    def has_new_password(self) -> bool:
        return bool(self.password)


class ZeusCredentialsOut(CamelModel):
    """Credentials as returned across the API boundary; never carries the password"""

    id: UUID
    tenant_id: UUID
    host: str
    port: int
    database_name: str
    username: str
    has_password: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, credentials) -> "ZeusCredentialsOut":
        """Build the redacted representation of a stored ZeusCredentials row"""
        return cls(
            id=credentials.id,
            tenant_id=credentials.tenant_id,
            host=credentials.host,
            port=credentials.port,
            database_name=credentials.database_name,
            username=credentials.username,
            has_password=credentials.has_password,
            created_at=credentials.created_at,
            updated_at=credentials.updated_at,
        )


class FieldError(BaseModel):
    """Single field-level validation message"""

    field: str
    message: str


class CredentialsReadResponse(BaseModel):
    success: bool = True
    data: Optional[ZeusCredentialsOut] = None


class CredentialsSaveResponse(BaseModel):
    success: bool = True
    message: str
    data: ZeusCredentialsOut


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    errors: Optional[List[FieldError]] = None


def field_errors(exc: ValidationError) -> List[Dict[str, Any]]:
    """
    Flatten a pydantic ValidationError into [{"field", "message"}] items.
    Locations use the camelCase names the client sent.
    """
    errors = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ())) or "body"
        message = error.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        errors.append({"field": field, "message": message})
    return errors
