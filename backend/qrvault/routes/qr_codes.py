"""
QRVault Backend — QR Code Resource Routes
===========================================

What:  GET /qr/{id} (PNG image), PUT /qr/{id} (relabel), DELETE /qr/{id}.
How:   FastAPI parses the integer path id and the JSON body; a non-integer id
       or malformed body surfaces as RequestValidationError, which the global
       handler turns into 400. Lookups and mutations go through QRCodeService.

Caching:
    The image of a given id never changes, so GET /qr/{id} may be cached by
    the browser. Ids are never reused, so a cached image cannot go stale.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response

from qrvault.dependencies import get_qr_service
from qrvault.schemas.qr_code import ErrorResponse, LabelUpdate, StatusResponse
from qrvault.services.qr_service import QRCodeService

router = APIRouter(prefix="/qr", tags=["QR Codes"])

# SQLite INTEGER range; anything outside cannot be an id
QRCodeId = Annotated[
    int,
    Path(ge=-(2**63), le=2**63 - 1, description="QR code id"),
]

_ERROR_RESPONSES = {
    400: {"description": "Invalid id or body", "model": ErrorResponse},
    404: {"description": "QR code not found", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


@router.get(
    "/{qr_id}",
    response_class=Response,
    responses={200: {"content": {"image/png": {}}}, **_ERROR_RESPONSES},
    summary="Get the PNG image of a QR code",
)
async def get_qr_image(
    qr_id: QRCodeId,
    service: QRCodeService = Depends(get_qr_service),
) -> Response:
    """Serve the stored PNG bytes inline."""
    record = await service.get_image(qr_id)
    return Response(
        content=record.image_data,
        media_type="image/png",
        headers={
            "Content-Disposition": f'inline; filename="qr-{qr_id}.png"',
            "Cache-Control": "private, max-age=86400",
        },
    )


@router.put(
    "/{qr_id}",
    response_model=StatusResponse,
    responses=_ERROR_RESPONSES,
    summary="Update the label of a QR code",
)
async def update_label(
    qr_id: QRCodeId,
    body: LabelUpdate,
    service: QRCodeService = Depends(get_qr_service),
) -> StatusResponse:
    """Replace the label; answers {"status": "ok"}."""
    await service.update_label(qr_id, body.label or "")
    return StatusResponse(status="ok")


@router.delete(
    "/{qr_id}",
    response_model=StatusResponse,
    responses=_ERROR_RESPONSES,
    summary="Delete a QR code",
)
async def delete_qr_code(
    qr_id: QRCodeId,
    service: QRCodeService = Depends(get_qr_service),
) -> StatusResponse:
    """Hard-delete the code; answers {"status": "ok"}."""
    await service.delete(qr_id)
    return StatusResponse(status="ok")
