"""
Zeus ERP credential persistence: read with redaction, upsert, delete
"""

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from campaign_settings.core.context import RequestContext
from campaign_settings.core.encryption import encrypt_secret
from campaign_settings.models.zeus_credentials import ZeusCredentials
from campaign_settings.schemas.zeus_credentials import ZeusCredentialsIn, ZeusCredentialsOut

logger = logging.getLogger(__name__)

# Dialects with INSERT .. ON CONFLICT DO UPDATE
UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class CredentialStorageError(Exception):
    """Storage failure; the message is safe to log but never sent to clients"""
    pass


class ZeusCredentialsService:
    """Service for a tenant's Zeus ERP connection credentials"""

    def get_credentials(self, db: Session, ctx: RequestContext) -> Optional[ZeusCredentialsOut]:
        """
        Fetch the tenant's credentials without the password

        Args:
            db: Database session
            ctx: Request context carrying the tenant

        Returns:
            Redacted credentials with has_password, or None when not configured
        """
        try:
            credentials = self._find(db, ctx.tenant_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load Zeus credentials ({ctx}): {e}")
            raise CredentialStorageError("Failed to load Zeus credentials") from e

        if credentials is None:
            return None
        return ZeusCredentialsOut.from_model(credentials)

    def upsert_credentials(self, db: Session, ctx: RequestContext,
                           data: ZeusCredentialsIn) -> ZeusCredentials:
        """
        Create or update the tenant's credentials

        The stored password only changes when data carries a non-empty one.
        The returned row is not redacted; pass it through
        ZeusCredentialsOut.from_model before it leaves the server.

        Args:
            db: Database session
            ctx: Request context carrying the tenant
            data: Validated payload

        Returns:
            The stored ZeusCredentials row
        """
        values: Dict[str, Any] = {
            "host": data.host,
            "port": data.port,
            "database_name": data.database_name,
            "username": data.username,
        }
        if data.has_new_password:
            values["password"] = encrypt_secret(data.password)

        try:
            dialect = db.get_bind().dialect.name
            if dialect in UPSERT_INSERTS:
                credentials = self._upsert_on_conflict(db, ctx.tenant_id, values, dialect)
            else:
                credentials = self._find_then_write(db, ctx.tenant_id, values)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to save Zeus credentials ({ctx}): {e}")
            raise CredentialStorageError("Failed to save Zeus credentials") from e

        logger.info(
            f"Saved Zeus credentials ({ctx}) host={credentials.host} port={credentials.port} "
            f"password_changed={data.has_new_password}"
        )
        return credentials

    def delete_credentials(self, db: Session, ctx: RequestContext) -> int:
        """
        Remove the tenant's credentials; deleting nothing is not an error

        Returns:
            Number of removed records (0 or 1)
        """
        try:
            result = db.execute(
                delete(ZeusCredentials).where(ZeusCredentials.tenant_id == ctx.tenant_id)
            )
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to delete Zeus credentials ({ctx}): {e}")
            raise CredentialStorageError("Failed to delete Zeus credentials") from e

        logger.info(f"Deleted Zeus credentials ({ctx}) removed={result.rowcount}")
        return result.rowcount

    def _find(self, db: Session, tenant_id: UUID) -> Optional[ZeusCredentials]:
        return db.execute(
            select(ZeusCredentials)
            .where(ZeusCredentials.tenant_id == tenant_id)
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def _upsert_on_conflict(self, db: Session, tenant_id: UUID,
                            values: Dict[str, Any], dialect: str) -> ZeusCredentials:
        insert = UPSERT_INSERTS[dialect]
        create_values = {"password": "", **values, "tenant_id": tenant_id}
        update_values = {**values, "updated_at": func.now()}

        stmt = insert(ZeusCredentials).values(**create_values).on_conflict_do_update(
            index_elements=["tenant_id"],
            set_=update_values,
        )
        db.execute(stmt)
        return self._find(db, tenant_id)

    def _find_then_write(self, db: Session, tenant_id: UUID,
                         values: Dict[str, Any]) -> ZeusCredentials:
        credentials = self._find(db, tenant_id)
        if credentials is None:
            credentials = ZeusCredentials(tenant_id=tenant_id, password="")
            db.add(credentials)
        credentials.update_from_dict(values)
        db.flush()
        return credentials


# Global service instance
zeus_credentials_service = ZeusCredentialsService()
