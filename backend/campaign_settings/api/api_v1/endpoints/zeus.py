"""
Zeus ERP credential endpoints
"""

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional
import logging

from campaign_settings.api.deps import get_request_context
from campaign_settings.core.context import RequestContext
from campaign_settings.core.database import get_db
from campaign_settings.schemas.zeus_credentials import (
    CredentialsReadResponse,
    CredentialsSaveResponse,
    ErrorResponse,
    MessageResponse,
    ZeusCredentialsIn,
    ZeusCredentialsOut,
    field_errors,
)
from campaign_settings.services.zeus_credentials import zeus_credentials_service

logger = logging.getLogger(__name__)

router = APIRouter()

INTERNAL_ERROR = "Internal server error"

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def error_response(status_code: int, message: str,
                   errors: Optional[List[Dict[str, Any]]] = None) -> JSONResponse:
    """Build the {success: false, message, errors?} envelope"""
    content: Dict[str, Any] = {"success": False, "message": message}
    if errors is not None:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content)


@router.get("/credentials", response_model=CredentialsReadResponse, responses=ERROR_RESPONSES)
async def get_credentials(
    ctx: RequestContext = Depends(get_request_context),
    db: Session = Depends(get_db),
):
    """
    Get the tenant's Zeus credentials (password replaced by hasPassword)
    """
    try:
        credentials = zeus_credentials_service.get_credentials(db, ctx)
        return CredentialsReadResponse(success=True, data=credentials)
    except Exception as e:
        logger.error(f"Error loading Zeus credentials ({ctx}): {e}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)


@router.post("/credentials", response_model=CredentialsSaveResponse, responses=ERROR_RESPONSES)
async def save_credentials(
    payload: Any = Body(None),
    ctx: RequestContext = Depends(get_request_context),
    db: Session = Depends(get_db),
):
    """
    Create or update the tenant's Zeus credentials

    Expected payload:
    {
        "host": "10.0.0.1",
        "port": 3050,
        "databaseName": "C:\\Zeus\\DB.FDB",
        "username": "SYSDBA",
        "password": "optional, blank keeps the current one"
    }
    """
    if not isinstance(payload, dict):
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "Invalid data",
            [{"field": "body", "message": "Expected a JSON object"}],
        )

    try:
        data = ZeusCredentialsIn.model_validate(payload)
    except ValidationError as e:
        return error_response(status.HTTP_400_BAD_REQUEST, "Invalid data", field_errors(e))

    try:
        credentials = zeus_credentials_service.upsert_credentials(db, ctx, data)
        return CredentialsSaveResponse(
            success=True,
            message="Credentials saved successfully",
            data=ZeusCredentialsOut.from_model(credentials),
        )
    except Exception as e:
        logger.error(f"Error saving Zeus credentials ({ctx}): {e}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)


@router.delete("/credentials", response_model=MessageResponse, responses=ERROR_RESPONSES)
async def delete_credentials(
    ctx: RequestContext = Depends(get_request_context),
    db: Session = Depends(get_db),
):
    """
    Remove the tenant's Zeus credentials. Succeeds whether or not a record existed.
    """
    try:
        zeus_credentials_service.delete_credentials(db, ctx)
        return MessageResponse(success=True, message="Credentials removed successfully")
    except Exception as e:
        logger.error(f"Error removing Zeus credentials ({ctx}): {e}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)
