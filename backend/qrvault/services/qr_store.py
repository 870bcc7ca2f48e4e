"""
QRVault Backend — QR Code Store (Persistence Layer)
=====================================================

What:  Durable CRUD access to the `qr_codes` table.
How:   Each operation opens a short-lived AsyncSession, runs one statement inside
       its own transaction, and commits on exit. Engine failures are wrapped in
       DatabaseError; the SQLAlchemy detail goes to the exception context and
       the log, never into the client-facing message.
Who:   Owned by the application lifespan; used by QRCodeService.
When:  `init()` once at startup (schema creation), `close()` once at shutdown.

Operation Summary:
    create(content, label, image_data) → QRCode
    get_by_id(id)                      → QRCode | None   (absent is not an error)
    list(limit, offset)                → list[QRCode]    (created_at DESC)
    update_label(id, label)            → None | NotFoundError
    delete(id)                         → None | NotFoundError
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, desc, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from qrvault.database import Base, create_engine_for, create_session_factory
from qrvault.exceptions import DatabaseError, NotFoundError, ValidationError
from qrvault.models.qr_code import QRCode, utcnow

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 50


class QRCodeStore:
    """
    SQLite-backed store for QRCode records.

    Concurrency:
        The store keeps no mutable state besides the engine. Concurrent requests
        share the engine's connection pool; SQLite serializes the writes.
    """

    def __init__(self, db_path: str, echo: bool = False):
        self.db_path = db_path
        self._engine: Optional[AsyncEngine] = create_engine_for(db_path, echo=echo)
        self._session_factory = create_session_factory(self._engine)

    async def init(self) -> None:
        """
        Create the table and index if they do not exist yet.

        Safe to call on every startup: CREATE ... IF NOT EXISTS leaves an
        existing schema and its rows untouched.
        """
        try:
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            logger.error("Schema creation failed for %s: %s", self.db_path, e)
            raise DatabaseError(
                message="Failed to initialize the database",
                context={"db_path": self.db_path, "error_type": type(e).__name__},
            ) from e
        logger.info("Database ready at %s", self.db_path)

    async def create(self, content: str, label: str, image_data: bytes) -> QRCode:
        """
        Insert a new QR code and return it as stored.

        Raises:
            ValidationError: empty content or empty image data
            DatabaseError:   insert failed
        """
        if not content:
            raise ValidationError(message="Content is required", field="content")
        if not image_data:
            raise ValidationError(message="Image data is required", field="image_data")

        record = QRCode(content=content, label=label or "", image_data=image_data)
        try:
            async with self._session_factory.begin() as session:
                session.add(record)
        except SQLAlchemyError as e:
            logger.error("Failed to insert QR code: %s", e)
            raise DatabaseError(
                message="Failed to save QR code",
                context={"operation": "create", "error_type": type(e).__name__},
            ) from e

        # Re-read so the caller sees exactly what a later fetch would return
        stored = await self.get_by_id(record.id)
        if stored is None:
            raise DatabaseError(
                message="Failed to save QR code",
                context={"operation": "create", "id": record.id},
            )
        return stored

    async def get_by_id(self, qr_id: int) -> Optional[QRCode]:
        """Fetch one record, or None when no row has this id."""
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(QRCode).where(QRCode.id == qr_id))
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Failed to get QR code %s: %s", qr_id, e)
            raise DatabaseError(
                message="Failed to get QR code",
                context={"operation": "get_by_id", "id": qr_id, "error_type": type(e).__name__},
            ) from e

    async def list(self, limit: int = DEFAULT_LIST_LIMIT, offset: int = 0) -> List[QRCode]:
        """
        Most recent records first.

        Args:
            limit:  Maximum rows returned; values <= 0 fall back to 50
            offset: Rows skipped from the newest end; negative values count as 0

        Ordering: created_at DESC, then id DESC for rows created in the same tick.
        """
        if limit <= 0:
            limit = DEFAULT_LIST_LIMIT
        offset = max(offset, 0)

        query = (
            select(QRCode)
            .order_by(desc(QRCode.created_at), desc(QRCode.id))
            .limit(limit)
            .offset(offset)
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(query)
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Failed to list QR codes: %s", e)
            raise DatabaseError(
                message="Failed to list QR codes",
                context={"operation": "list", "error_type": type(e).__name__},
            ) from e

    async def update_label(self, qr_id: int, label: str) -> None:
        """
        Replace the label and refresh updated_at.

        Raises:
            NotFoundError: no row has this id (nothing is modified)
            DatabaseError: update failed
        """
        statement = (
            update(QRCode)
            .where(QRCode.id == qr_id)
            .values(label=label, updated_at=utcnow())
        )
        try:
            async with self._session_factory.begin() as session:
                result = await session.execute(statement)
                affected = result.rowcount
        except SQLAlchemyError as e:
            logger.error("Failed to update label of QR code %s: %s", qr_id, e)
            raise DatabaseError(
                message="Failed to update label",
                context={"operation": "update_label", "id": qr_id, "error_type": type(e).__name__},
            ) from e

        if affected == 0:
            raise NotFoundError(resource="QR code", resource_id=qr_id)

    async def delete(self, qr_id: int) -> None:
        """
        Hard-delete one record.

        Raises:
            NotFoundError: no row has this id
            DatabaseError: delete failed
        """
        try:
            async with self._session_factory.begin() as session:
                result = await session.execute(delete(QRCode).where(QRCode.id == qr_id))
                affected = result.rowcount
        except SQLAlchemyError as e:
            logger.error("Failed to delete QR code %s: %s", qr_id, e)
            raise DatabaseError(
                message="Failed to delete QR code",
                context={"operation": "delete", "id": qr_id, "error_type": type(e).__name__},
            ) from e

        if affected == 0:
            raise NotFoundError(resource="QR code", resource_id=qr_id)

    async def close(self) -> None:
        """Dispose the engine and its pooled connections. A second call is a no-op."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
