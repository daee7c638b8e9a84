# backend/app/api/v1/routes/__init__.py
from fastapi import APIRouter
from .seating import router as seating_router

# Create a main router that includes all sub-routers
router = APIRouter()

router.include_router(seating_router, prefix="/seating", tags=["Seating Planner"])
