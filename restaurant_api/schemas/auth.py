"""
Restaurant API — Auth schemas
"""
from pydantic import BaseModel, EmailStr, Field

from restaurant_api.core.permissions import Role


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=50, examples=["jane"])
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    role: Role = Role.CUSTOMER


class RegisterResponse(BaseModel):
    message: str
    userId: int


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1, max_length=128)


class UserResponse(BaseModel):
    id: int
    username: str
    email: str
    role: Role

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    token: str
    user: UserResponse
