"""API v1 router aggregation."""

from fastapi import APIRouter

from backend.app.api.v1 import stock

router = APIRouter(prefix="/v1")
router.include_router(stock.router)
