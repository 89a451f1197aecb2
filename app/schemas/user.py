# backend-server/app/schemas/user.py
from pydantic import EmailStr, Field
from typing import Optional

from app.schemas.base import CamelModel

class UserBase(CamelModel):
    username: str = Field(min_length=3, max_length=100)
    email: EmailStr
    name: str = Field(min_length=1, max_length=120)
    avatar: Optional[str] = None

class UserCreate(UserBase):
    password: str = Field(min_length=6)

class User(UserBase):
    id: int

class LoginRequest(CamelModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)

class LoginResponse(User):
    access_token: str
    token_type: str = "bearer"

class PasswordUpdate(CamelModel):
    current_password: str
    new_password: str = Field(min_length=6)
