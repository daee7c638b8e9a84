# backend/app/api/deps.py
import logging

from fastapi import Request

from ..services.seating import SeatingService

# Configure logging
logger = logging.getLogger(__name__)


def get_seating_service(request: Request) -> SeatingService:
    """Dependency returning the single service created at application startup."""
    service = getattr(request.app.state, "seating_service", None)
    if service is None:
        # Started without the lifespan (e.g. a bare ASGI transport); create lazily
        logger.warning("Seating service missing from app state, creating one")
        service = SeatingService()
        request.app.state.seating_service = service
    return service
