"""
Shared API dependencies
"""

from fastapi import Request
from typing import Optional
from uuid import UUID, uuid4
import logging

from campaign_settings.core.context import RequestContext, TenantNotResolvedError

logger = logging.getLogger(__name__)


def parse_tenant_id(raw: Optional[str]) -> Optional[UUID]:
    """
    Parse the tenant identifier attached by the authenticating gateway

    Returns:
        The tenant UUID, or None when missing or malformed
    """
    if not raw:
        return None
    try:
        return UUID(raw.strip())
    except ValueError:
        logger.warning(f"Ignoring malformed tenant identifier: {raw!r}")
        return None


def get_request_context(request: Request) -> RequestContext:
    """
    Dependency building the explicit per-request context.
    Raises TenantNotResolvedError before any persistence work happens.
    """
    tenant_id = getattr(request.state, "tenant_id", None)
    if tenant_id is None:
        raise TenantNotResolvedError("Tenant not identified")

    request_id = getattr(request.state, "request_id", None) or uuid4().hex
    return RequestContext(tenant_id=tenant_id, request_id=request_id)
