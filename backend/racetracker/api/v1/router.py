"""
API Router v1

Combines all route modules.
"""

from fastapi import APIRouter

from racetracker.api.v1.routes import auth, races, users

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(races.router, prefix="/races", tags=["Races"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
