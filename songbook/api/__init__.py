"""
API routers

songbook/api/__init__.py
"""
from fastapi import APIRouter

# Create the main API router
api_router = APIRouter()

# Import individual routers
from songbook.api.songs import router as songs_router
from songbook.api.concerts import router as concerts_router


# Include all routers
api_router.include_router(songs_router, prefix="/song", tags=["songs"])
api_router.include_router(concerts_router, prefix="/concert", tags=["concerts"])
