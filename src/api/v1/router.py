# src/api/v1/router.py

from fastapi import APIRouter
from src.api.v1.valuations import router as valuations_router

router = APIRouter()

router.include_router(valuations_router, tags=["Valuations"])
