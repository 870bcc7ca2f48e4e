"""
QRVault Backend — Middleware Package
======================================

Middleware Chain:
    Request → [Request ID] → [Access Logging] → Route Handler

    Request ID runs first so the access log line and every error log carry
    the id of the request they belong to.
"""
