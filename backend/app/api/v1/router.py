"""
API Router v1

Combines all route modules.
"""

from fastapi import APIRouter

from app.api.v1.routes import admin, drops, mileage, stats, strava, users

api_router = APIRouter()

api_router.include_router(strava.router)
api_router.include_router(mileage.router)
api_router.include_router(drops.router)
api_router.include_router(admin.router)
api_router.include_router(stats.router)
api_router.include_router(users.router)
