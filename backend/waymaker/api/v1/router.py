"""
API Router v1

Combines all route modules.
"""

from fastapi import APIRouter

from waymaker.api.v1.routes import gpx, places, pois, routes

api_router = APIRouter()

api_router.include_router(routes.router, prefix="/routes", tags=["Routes"])
api_router.include_router(gpx.router, prefix="/gpx", tags=["GPX"])
api_router.include_router(pois.router, prefix="/pois", tags=["POIs"])
api_router.include_router(places.router, prefix="/places", tags=["Places"])
