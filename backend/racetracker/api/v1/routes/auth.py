"""
Auth Routes

Registration, login and the current user's profile.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from racetracker.db.session import get_async_db
from racetracker.features.auth.dependencies import get_current_user
from racetracker.features.auth.service import AuthService
from racetracker.features.users.models import User
from racetracker.features.users.schemas import LoginRequest, RegisterRequest
from racetracker.shared.responses import envelope

router = APIRouter()


@router.post("/register", status_code=201)
async def register(request: RegisterRequest, db: AsyncSession = Depends(get_async_db)):
    """Create an account and return a bearer token."""
    user, token = await AuthService(db).register(request)
    await db.commit()
    return JSONResponse(
        status_code=201,
        content=envelope({"user": user.to_dict(), "token": token}, message="User created"),
    )


@router.post("/login")
async def login(request: LoginRequest, db: AsyncSession = Depends(get_async_db)):
    user, token = await AuthService(db).login(request)
    return envelope({"user": user.to_dict(), "token": token}, message="Login successful")


@router.get("/profile")
async def profile(user: User = Depends(get_current_user)):
    return envelope({"user": user.to_dict()})
