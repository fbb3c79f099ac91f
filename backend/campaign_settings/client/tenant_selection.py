"""
Observable tenant selection shared by settings views
"""

import logging
from typing import Awaitable, Callable, List, Optional
from uuid import UUID

logger = logging.getLogger(__name__)

TenantListener = Callable[[Optional[UUID]], Awaitable[None]]


class TenantSelection:
    """
    Holds the tenant an operator is currently acting for. Views subscribe
    and get awaited on every change instead of listening for a global event.
    """

    def __init__(self, tenant_id: Optional[UUID] = None):
        self._tenant_id = tenant_id
        self._listeners: List[TenantListener] = []

    @property
    def tenant_id(self) -> Optional[UUID]:
        return self._tenant_id

    def subscribe(self, listener: TenantListener) -> Callable[[], None]:
        """
        Register a listener

        Returns:
            Function removing the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def select(self, tenant_id: Optional[UUID]) -> None:
        """Switch tenant and notify listeners; selecting the current tenant is a no-op"""
        if tenant_id == self._tenant_id:
            return
        self._tenant_id = tenant_id
        logger.info(f"Tenant selection changed to {tenant_id}")
        for listener in list(self._listeners):
            await listener(tenant_id)
