"""
Top-level API router.

Aggregates the domain routers.  When a new domain is added, include its
router here.
"""

from fastapi import APIRouter

from .routes import clients, trips


router = APIRouter()

router.include_router(clients.router, prefix="/clients", tags=["clients"])
router.include_router(trips.router, prefix="/trips", tags=["trips"])
