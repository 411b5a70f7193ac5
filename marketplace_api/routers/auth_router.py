from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from marketplace_api.core.auth import require_active_user
from marketplace_api.core.config import get_settings
from marketplace_api.core.errors import Unauthenticated
from marketplace_api.core.security import create_token
from marketplace_api.database.mongo import get_db
from marketplace_api.models.user_models import (
    RegisterResponse,
    TokenResponse,
    UserCreate,
    UserLogin,
    UserResponse,
)
from marketplace_api.services.user_service import authenticate_user, public_user, register_user

router = APIRouter(tags=["Auth"])


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
@router.post("/create-user", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(data: UserCreate, db=Depends(get_db), settings=Depends(get_settings)):
    user = await register_user(db, data, settings)
    if user is None:
        # email de l'admin amorcé : succès idempotent, rien n'est écrit
        return JSONResponse(status_code=status.HTTP_200_OK, content={"message": "User registered successfully"})
    return RegisterResponse(message="User registered successfully", user=UserResponse(**user))


@router.post("/login", response_model=TokenResponse)
@router.post("/authentication", response_model=TokenResponse)
async def login(data: UserLogin, db=Depends(get_db), settings=Depends(get_settings)):
    user = await authenticate_user(db, data.email, data.password)
    if not user:
        raise Unauthenticated("Invalid email or password")
    token = create_token({"sub": user["email"]}, settings)
    return TokenResponse(access_token=token, user=UserResponse(**public_user(user)))


@router.get("/get-user", response_model=UserResponse)
@router.get("/me", response_model=UserResponse)
async def me(user=Depends(require_active_user)):
    return UserResponse(**public_user(user))
