"""
QRVault Backend — QR Code Service (Business Logic Orchestrator)
=================================================================

What:  Maps each API operation to input validation plus one generator/store call.
How:   Composes an injected QRCodeGenerator and QRCodeStore.
Who:   Called by route handlers; calls the generator and the store.

Orchestration Flow (POST /generate):
    ┌──────────┐    ┌─────────────┐    ┌───────────────┐    ┌──────────────┐
    │  Form    │───▶│  Trim &     │───▶│  Generator    │───▶│  Store       │
    │  (Route) │    │  validate   │    │  (PNG bytes)  │    │  (INSERT)    │
    └──────────┘    └─────────────┘    └───────────────┘    └──────────────┘

    Empty content is rejected before the generator is touched, so a 400 never
    leaves a row behind. Generator and store failures propagate as
    CodecError / DatabaseError and become a generic 500 in the global handler.
"""

import logging
from typing import List

from starlette.concurrency import run_in_threadpool

from qrvault.exceptions import NotFoundError, ValidationError
from qrvault.models.qr_code import QRCode
from qrvault.services.qr_generator import QRCodeGenerator
from qrvault.services.qr_store import QRCodeStore

logger = logging.getLogger(__name__)


class QRCodeService:
    """
    Business logic layer for QR code operations.

    Responsibilities:
        - generate(): trim → validate → encode → persist
        - get_image(): single lookup with not-found translation
        - list_recent(): newest-first page for the index
        - update_label() / delete(): single-row mutations
    """

    def __init__(self, store: QRCodeStore, generator: QRCodeGenerator):
        self.store = store
        self.generator = generator

    async def list_recent(self, limit: int = 100) -> List[QRCode]:
        """The `limit` most recently created codes, newest first."""
        return await self.store.list(limit=limit, offset=0)

    async def generate(self, content: str) -> QRCode:
        """
        Create and persist a QR code for `content`.

        Args:
            content: Raw form value; surrounding whitespace is stripped

        Returns:
            The stored QRCode record (with id and timestamps)

        Raises:
            ValidationError: content is empty after trimming
            CodecError:      the generator could not encode the content
            DatabaseError:   the insert failed
        """
        content = (content or "").strip()
        if not content:
            raise ValidationError(message="Content is required", field="content")

        # PNG rendering is CPU bound; keep it off the event loop
        image_data = await run_in_threadpool(self.generator.generate, content)

        record = await self.store.create(content, "", image_data)
        logger.info(
            "QR code %d created: %d chars, %d bytes",
            record.id,
            len(content),
            len(image_data),
        )
        return record

    async def get_image(self, qr_id: int) -> QRCode:
        """
        Look up a code whose image is about to be served.

        Raises:
            NotFoundError: no code has this id
        """
        record = await self.store.get_by_id(qr_id)
        if record is None:
            raise NotFoundError(resource="QR code", resource_id=qr_id)
        return record

    async def update_label(self, qr_id: int, label: str) -> None:
        """Replace the label; NotFoundError from the store propagates as-is."""
        await self.store.update_label(qr_id, label)
        logger.info("QR code %d relabelled", qr_id)

    async def delete(self, qr_id: int) -> None:
        """Hard-delete a code; NotFoundError from the store propagates as-is."""
        await self.store.delete(qr_id)
        logger.info("QR code %d deleted", qr_id)
