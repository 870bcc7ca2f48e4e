"""
QRVault Backend — QR Code Service Unit Tests
==============================================

What:  Tests for QRCodeService orchestration (generate, get, list, mutate).
How:   Uses mock store and mock generator (no database, no rendering).

What we test:
    ✅ Content is trimmed before encoding and storing
    ✅ Empty / whitespace-only content never reaches the generator or store
    ✅ Codec failures stop before the store is touched
    ✅ Absent records become NotFoundError
    ✅ Store NotFoundError on mutations propagates unchanged
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from qrvault.exceptions import CodecError, DatabaseError, NotFoundError, ValidationError
from qrvault.services.qr_service import QRCodeService


def _record(qr_id=1, content="https://example.com", label=""):
    record = MagicMock()
    record.id = qr_id
    record.content = content
    record.label = label
    record.image_data = b"\x89PNG\r\n\x1a\nfake"
    record.created_at = datetime.now(timezone.utc)
    record.updated_at = record.created_at
    return record


class TestQRCodeServiceGenerate:
    """Tests for the generate workflow."""

    @pytest.mark.asyncio
    async def test_generate_success(self, mock_store, mock_generator):
        """Trimmed content is encoded once and stored with an empty label."""
        mock_store.create.return_value = _record()
        service = QRCodeService(store=mock_store, generator=mock_generator)

        result = await service.generate("  https://example.com \n")

        assert result.id == 1
        mock_generator.generate.assert_called_once_with("https://example.com")
        mock_store.create.assert_awaited_once_with(
            "https://example.com", "", mock_generator.generate.return_value
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   ", "\t\n", None])
    async def test_generate_empty_content_rejected(self, mock_store, mock_generator, content):
        service = QRCodeService(store=mock_store, generator=mock_generator)

        with pytest.raises(ValidationError, match="Content is required"):
            await service.generate(content)

        mock_generator.generate.assert_not_called()
        mock_store.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_generate_codec_failure_skips_store(self, mock_store, mock_generator):
        mock_generator.generate.side_effect = CodecError()
        service = QRCodeService(store=mock_store, generator=mock_generator)

        with pytest.raises(CodecError):
            await service.generate("way too long")

        mock_store.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_generate_store_failure_propagates(self, mock_store, mock_generator):
        mock_store.create.side_effect = DatabaseError()
        service = QRCodeService(store=mock_store, generator=mock_generator)

        with pytest.raises(DatabaseError):
            await service.generate("content")


class TestQRCodeServiceGet:
    """Tests for get_image and list_recent."""

    @pytest.mark.asyncio
    async def test_get_image_found(self, mock_store, mock_generator):
        mock_store.get_by_id.return_value = _record(qr_id=7)
        service = QRCodeService(store=mock_store, generator=mock_generator)

        result = await service.get_image(7)

        assert result.id == 7
        mock_store.get_by_id.assert_awaited_once_with(7)

    @pytest.mark.asyncio
    async def test_get_image_not_found(self, mock_store, mock_generator):
        """A None from the store becomes NotFoundError."""
        mock_store.get_by_id.return_value = None
        service = QRCodeService(store=mock_store, generator=mock_generator)

        with pytest.raises(NotFoundError):
            await service.get_image(404)

    @pytest.mark.asyncio
    async def test_list_recent_reads_first_page(self, mock_store, mock_generator):
        records = [_record(qr_id=2), _record(qr_id=1)]
        mock_store.list.return_value = records
        service = QRCodeService(store=mock_store, generator=mock_generator)

        result = await service.list_recent(limit=100)

        assert result == records
        mock_store.list.assert_awaited_once_with(limit=100, offset=0)


class TestQRCodeServiceMutations:
    """Tests for update_label and delete."""

    @pytest.mark.asyncio
    async def test_update_label_delegates(self, mock_store, mock_generator):
        service = QRCodeService(store=mock_store, generator=mock_generator)

        await service.update_label(3, "Menu")

        mock_store.update_label.assert_awaited_once_with(3, "Menu")

    @pytest.mark.asyncio
    async def test_update_label_not_found_propagates(self, mock_store, mock_generator):
        mock_store.update_label.side_effect = NotFoundError(resource="QR code", resource_id=3)
        service = QRCodeService(store=mock_store, generator=mock_generator)

        with pytest.raises(NotFoundError):
            await service.update_label(3, "Menu")

    @pytest.mark.asyncio
    async def test_delete_delegates(self, mock_store, mock_generator):
        service = QRCodeService(store=mock_store, generator=mock_generator)

        await service.delete(5)

        mock_store.delete.assert_awaited_once_with(5)

    @pytest.mark.asyncio
    async def test_delete_not_found_propagates(self, mock_store, mock_generator):
        mock_store.delete.side_effect = NotFoundError(resource="QR code", resource_id=5)
        service = QRCodeService(store=mock_store, generator=mock_generator)

        with pytest.raises(NotFoundError):
            await service.delete(5)
