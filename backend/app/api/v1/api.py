# backend/app/api/v1/api.py
from fastapi import APIRouter

# Import the master router from your routes package
from .routes import router as v1_routes_router

# This is the top-level router for the entire v1 API.
# Do NOT add a prefix here. The prefix is applied in main.py
# when this api_router is included.
api_router = APIRouter()

# The "/seating" prefix is defined in 'backend/app/api/v1/routes/__init__.py'
# and is appended to the router's main prefix.
api_router.include_router(v1_routes_router)
