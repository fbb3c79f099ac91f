"""
HTTP client for the settings API, used by the settings form controller
"""

import httpx
import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from campaign_settings.core.config import settings

logger = logging.getLogger(__name__)


class SettingsAPIError(Exception):
    """Failed settings API call, carrying the server message when there is one"""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.errors = errors or []


class SettingsAPIClient:
    """Client for the /zeus/credentials resource"""

    CREDENTIALS_PATH = "/zeus/credentials"

    def __init__(self, base_url: str, token: Optional[str] = None,
                 tenant_id: Optional[UUID] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None,
                 timeout: float = 10.0):
        """
        Args:
            base_url: API root, e.g. http://localhost:8000/api/v1
            token: Bearer token attached to every request
            tenant_id: Tenant to act for; sent in the tenant header
            transport: Optional httpx transport (ASGI app in tests)
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.tenant_id = tenant_id
        self.transport = transport
        self.timeout = timeout

    @property
    def headers(self) -> Dict[str, str]:
        """Get headers for API calls"""
        headers = {'Content-Type': 'application/json'}
        if self.token:
            headers['Authorization'] = f"Bearer {self.token}"
        if self.tenant_id:
            headers[settings.TENANT_HEADER] = str(self.tenant_id)
        return headers

    async def get_zeus_credentials(self) -> Optional[Dict[str, Any]]:
        """
        Returns:
            Redacted credentials dict (camelCase keys) or None when not configured
        """
        body = await self._request("GET", self.CREDENTIALS_PATH)
        return body.get("data")

    async def save_zeus_credentials(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Args:
            data: {host, port, databaseName, username, password?}

        Returns:
            Response envelope {success, message, data}
        """
        return await self._request("POST", self.CREDENTIALS_PATH, json=data)

    async def delete_zeus_credentials(self) -> Dict[str, Any]:
        """
        Returns:
            Response envelope {success, message}
        """
        return await self._request("DELETE", self.CREDENTIALS_PATH)

    async def _request(self, method: str, path: str,
                       json: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            async with httpx.AsyncClient(base_url=self.base_url, transport=self.transport,
                                         timeout=self.timeout) as client:
                response = await client.request(method, path, json=json, headers=self.headers)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise SettingsAPIError(f"Could not reach the settings API: {e}")

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.is_success and isinstance(body, dict):
            return body

        message = body.get("message") if isinstance(body, dict) else None
        errors = body.get("errors") if isinstance(body, dict) else None
        logger.warning(f"{method} {path} returned {response.status_code}: {message}")
        raise SettingsAPIError(
            message or f"Request failed with status {response.status_code}",
            status_code=response.status_code,
            errors=errors,
        )
