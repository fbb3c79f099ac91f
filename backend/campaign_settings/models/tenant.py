"""
Tenant model: an isolated customer account owning its integration settings
"""

from sqlalchemy import Boolean, Column, String
from sqlalchemy.orm import relationship, validates

from campaign_settings.models.base import BaseModel

class Tenant(BaseModel):
    """
    Customer account. Every credential record is scoped to exactly one tenant.
    """
    __tablename__ = "tenants"

    name = Column(
        String(255),
        nullable=False,
        comment="Display name of the tenant"
    )

    is_active = Column(
        Boolean,
        default=True,
        nullable=False,
        comment="Whether the tenant account is active"
    )

    # Relationships
    zeus_credentials = relationship(
        "ZeusCredentials",
        back_populates="tenant",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @validates('name')
    def validate_name(self, key: str, name: str) -> str:
        if not name or not name.strip():
            raise ValueError("Tenant name cannot be empty")
        return name.strip()

    def __repr__(self) -> str:
        return f"<Tenant(id={self.id}, name={self.name})>"
