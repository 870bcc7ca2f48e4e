"""
QRVault Backend — FastAPI Dependency Providers
================================================

What:  `Depends()` providers that hand route handlers the objects built at startup.
How:   The lifespan handler in main.py stores the service and settings on
       `app.state`; these functions read them back from the current request.
Why not module globals: tests build several apps side by side, each with its
       own database file, and every handler must see the objects of its own app.
"""

from fastapi import Request
from fastapi.templating import Jinja2Templates

from qrvault.config import Settings
from qrvault.services.qr_service import QRCodeService


def get_qr_service(request: Request) -> QRCodeService:
    """The QRCodeService of the application serving this request."""
    return request.app.state.qr_service


def get_settings(request: Request) -> Settings:
    """The Settings the application was created with."""
    return request.app.state.settings


def get_templates(request: Request) -> Jinja2Templates:
    """Jinja2 environment for HTML pages."""
    return request.app.state.templates
