"""
Request context passed explicitly from the API layer into services
"""

from pydantic import BaseModel
from uuid import UUID


class TenantNotResolvedError(Exception):
    """Raised when the request carries no usable tenant identifier"""
    pass


class RequestContext(BaseModel):
    """
    Per-request context. The tenant comes from the authenticated request,
    never from the payload.
    """

    tenant_id: UUID
    request_id: str

    def __str__(self) -> str:
        return f"tenant={self.tenant_id} request={self.request_id}"
