from datetime import datetime
from pydantic import BaseModel, Field
from typing import List, Literal, Optional

Role = Literal["buyer", "seller", "admin"]
BanStatus = Literal["banned", "unbanned"]


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=6)
    role: Role = "buyer"
    image: Optional[str] = None


class UserLogin(BaseModel):
    email: str
    password: str


class RoleUpdate(BaseModel):
    role: Role


class UserResponse(BaseModel):
    user_id: str
    email: str
    name: str
    role: Role
    status: BanStatus = "unbanned"
    image: Optional[str] = None
    wishlist: Optional[List[str]] = None
    cart: Optional[List[str]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RegisterResponse(BaseModel):
    message: str
    user: Optional[UserResponse] = None


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
