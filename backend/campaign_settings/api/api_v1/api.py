"""
Main API router that includes all endpoint routers
"""

from fastapi import APIRouter

from campaign_settings.api.api_v1.endpoints import database, zeus

# Create main API router
api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(zeus.router, prefix="/zeus", tags=["zeus"])
api_router.include_router(database.router, prefix="/database", tags=["database"])
