"""
QRVault Backend — Routes Package
==================================

Route Inventory:
    - pages.py:     GET  /              (HTML listing)
                    POST /generate      (form submission → 303 to /)
    - qr_codes.py:  GET    /qr/{id}     (PNG image)
                    PUT    /qr/{id}     (relabel, JSON body)
                    DELETE /qr/{id}     (hard delete)
    - health.py:    GET  /health        (liveness)

Routes handle HTTP concerns only; validation and store/generator calls live
in QRCodeService.
"""
