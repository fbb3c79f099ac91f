"""
Database models package
"""

from .base import Base, BaseModel
from .tenant import Tenant
from .zeus_credentials import ZeusCredentials

__all__ = ["Base", "BaseModel", "Tenant", "ZeusCredentials"]
