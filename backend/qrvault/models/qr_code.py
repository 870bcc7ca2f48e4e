"""
QRVault Backend — QRCode SQLAlchemy Model
===========================================

What:  ORM model representing the `qr_codes` table in SQLite.
Who:   Used by QRCodeStore for CRUD operations and for schema creation.

Table Design:
    - INTEGER PRIMARY KEY AUTOINCREMENT: ids grow monotonically and are never
      reused, even after the newest row is deleted
    - content: the text encoded into the image; immutable after insert
    - label: free-text annotation, the only mutable column
    - image_data: the rendered PNG, stored inline as a BLOB
    - created_at / updated_at: UTC, microsecond resolution (assigned in Python;
      CURRENT_TIMESTAMP is only the fallback for rows inserted by hand)

    Index on created_at DESC:
        Serves the listing query (most recent first) without a sort step.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, Integer, LargeBinary, Text, func, text
from sqlalchemy.orm import Mapped, mapped_column

from qrvault.database import Base


def utcnow() -> datetime:
    """Current UTC time; the single clock every timestamp column is set from."""
    return datetime.now(timezone.utc)


class QRCode(Base):
    """
    A generated QR code and its source text.

    Lifecycle:
        1. Created by POST /generate (content + image, empty label)
        2. Label changed any number of times via PUT /qr/{id}
        3. Hard-deleted via DELETE /qr/{id}
    """

    __tablename__ = "qr_codes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    label: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        server_default=text("''"),
    )

    # Raw PNG bytes, served as-is by GET /qr/{id}
    image_data: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.current_timestamp(),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.current_timestamp(),
    )

    # sqlite_autoincrement: AUTOINCREMENT keyword, so ids of deleted rows are never reissued
    __table_args__ = (
        Index("idx_qr_codes_created_at", created_at.desc()),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        """Developer-friendly string representation for debugging."""
        return (
            f"<QRCode(id={self.id}, label='{self.label}', "
            f"created_at='{self.created_at}')>"
        )

