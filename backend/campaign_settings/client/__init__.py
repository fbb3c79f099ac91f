"""
Settings page client: API client, tenant selection store and form controller
"""

from .api_client import SettingsAPIClient, SettingsAPIError
from .controller import FormState, LoggingNotifier, ZeusCredentialsFormController
from .tenant_selection import TenantSelection

__all__ = [
    "SettingsAPIClient", "SettingsAPIError",
    "FormState", "LoggingNotifier", "ZeusCredentialsFormController",
    "TenantSelection",
]
