"""
QRVault Backend — Browser Page Routes
=======================================

What:  GET / (HTML listing) and POST /generate (form submission).
How:   Thin handlers: pull the form value, delegate to QRCodeService, then
       render the template or redirect back to the listing.
Who:   A browser; the form on the index page posts to /generate.

Request Flow (POST /generate):
    1. Browser sends application/x-www-form-urlencoded with a `content` field
    2. QRCodeService trims, validates, encodes, and stores
    3. 303 See Other → GET / so a page reload does not resubmit the form
    4. On error: global exception handlers answer 400 / 500
"""

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from qrvault.config import Settings
from qrvault.dependencies import get_qr_service, get_settings, get_templates
from qrvault.schemas.qr_code import ErrorResponse
from qrvault.services.qr_service import QRCodeService

router = APIRouter(tags=["Pages"])


@router.get(
    "/",
    response_class=HTMLResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List saved QR codes",
)
async def index(
    request: Request,
    service: QRCodeService = Depends(get_qr_service),
    templates: Jinja2Templates = Depends(get_templates),
    settings: Settings = Depends(get_settings),
) -> HTMLResponse:
    """
    Render the most recent QR codes, newest first.

    Each entry links its image to GET /qr/{id}; the page script calls
    PUT /qr/{id} and DELETE /qr/{id} for relabelling and removal.
    """
    codes = await service.list_recent(limit=settings.list_limit)
    return templates.TemplateResponse(
        request,
        "index.html",
        {"qr_codes": codes},
    )


@router.post(
    "/generate",
    status_code=303,
    responses={
        303: {"description": "Created; redirects to the listing"},
        400: {"description": "Content is empty", "model": ErrorResponse},
        500: {"description": "Encoding or storage failed", "model": ErrorResponse},
    },
    summary="Generate and save a QR code",
)
async def generate(
    content: str = Form(default="", description="Text to encode"),
    service: QRCodeService = Depends(get_qr_service),
) -> RedirectResponse:
    """Create a QR code from the submitted text and go back to the listing."""
    await service.generate(content)
    return RedirectResponse(url="/", status_code=303)
