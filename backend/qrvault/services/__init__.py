"""
QRVault Backend — Services Layer
==================================

Service Inventory:
    - QRCodeGenerator: text → PNG bytes (python-qrcode + Pillow)
    - QRCodeStore:     SQLite persistence of QRCode records
    - QRCodeService:   orchestrates validate → encode → persist for the routes

All three are constructed once in the application lifespan and shared by
every request.
"""
