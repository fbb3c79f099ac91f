"""
Zeus ERP database connection credentials, one record per tenant
"""

from sqlalchemy import Column, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship, validates
from typing import Optional
import logging

from campaign_settings.models.base import BaseModel

logger = logging.getLogger(__name__)

class ZeusCredentials(BaseModel):
    """
    Connection settings for a tenant's Zeus ERP (Firebird) database.
    The password column holds a Fernet token, or "" when no password was set.
    """
    __tablename__ = "zeus_credentials"

    tenant_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        index=True,
        comment="Owning tenant; at most one credential record per tenant"
    )

    host = Column(
        String(255),
        nullable=False,
        comment="IP address or hostname of the Zeus database server"
    )

    port = Column(
        Integer,
        nullable=False,
        comment="Database server port"
    )

    database_name = Column(
        String(1024),
        nullable=False,
        comment="Database name or path (e.g. C:\\Zeus\\DB.FDB)"
    )

    username = Column(
        String(255),
        nullable=False,
        comment="Database user"
    )

    password = Column(
        Text,
        nullable=False,
        default="",
        comment="Encrypted database password, empty when not configured"
    )

    # Relationships
    tenant = relationship("Tenant", back_populates="zeus_credentials")

    @validates('port')
    def validate_port(self, key: str, port: int) -> int:
        if isinstance(port, bool) or not isinstance(port, int) or port <= 0:
            raise ValueError("Port must be a positive integer")
        return port

    @property
    def has_password(self) -> bool:
        """Whether a non-empty password is stored"""
        return bool(self.password)

    def get_decrypted_password(self) -> Optional[str]:
        """
        Get the plaintext password for opening a connection to the ERP

        Returns:
            Decrypted password, "" when none is stored, or None if decryption fails
        """
        if not self.password:
            return ""

        from campaign_settings.core.encryption import decrypt_secret
        password = decrypt_secret(self.password)
        if password is None:
            logger.error(f"Failed to decrypt Zeus password for tenant {self.tenant_id}")
        return password

    def __repr__(self) -> str:
        return f"<ZeusCredentials(tenant_id={self.tenant_id}, host={self.host}, port={self.port})>"
