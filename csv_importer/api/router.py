from fastapi import APIRouter

from csv_importer.api.v1 import events

# Initialize API router
api_router = APIRouter()

# Include routers from different modules
api_router.include_router(events.router, tags=["Events"])
