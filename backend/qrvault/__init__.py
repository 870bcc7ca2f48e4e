"""
QRVault Backend — Application Package Initializer
==================================================

What: Marks the `qrvault` directory as a Python package.
Who:  Imported by uvicorn (`qrvault.main:app`), by `python -m qrvault`, and by pytest.

Architecture Note:
    The backend follows the same layered layout on every request path:

    ┌─────────────────────────────────────┐
    │      Routes (HTTP / HTML layer)     │  ← parse request, format response
    ├─────────────────────────────────────┤
    │   QRCodeService (orchestration)     │  ← validation, codec + store calls
    ├─────────────────────────────────────┤
    │  QRCodeGenerator  │  QRCodeStore    │  ← PNG encoding │ SQLite persistence
    ├─────────────────────────────────────┤
    │    Models & Schemas (data shapes)   │  ← SQLAlchemy ORM + Pydantic
    └─────────────────────────────────────┘

    The generator and the store are built once in the application lifespan and
    handed to routes through FastAPI dependencies; nothing below the routes
    reaches for a module-level instance.
"""

__version__ = "1.0.0"
