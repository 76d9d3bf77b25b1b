"""
Versioned API v1: aggregates all sub-routers under ``/api/v1``.

Usage in ``main.py``::

    from tax_estimator.api.v1 import v1_router
    app.include_router(v1_router)
"""

from fastapi import APIRouter

from tax_estimator.api.v1.routes.instalments import router as instalments_router
from tax_estimator.api.v1.routes.tax import router as tax_router

v1_router = APIRouter(prefix="/api/v1")

v1_router.include_router(tax_router)
v1_router.include_router(instalments_router)
