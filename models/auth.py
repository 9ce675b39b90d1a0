from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from .base import CamelModel


class UserCreate(BaseModel):
    username: str = Field(min_length=3, max_length=50)
    password: str = Field(min_length=6)


class UserLogin(BaseModel):
    username: str
    password: str


class TokenData(BaseModel):
    user_id: Optional[int] = None
    username: Optional[str] = None


class User(BaseModel):
    id: int
    username: str
    password: str
    created_at: datetime


class UserPublic(CamelModel):
    id: int
    username: str
    created_at: datetime


class Token(CamelModel):
    message: Optional[str] = None
    access_token: str
    token_type: str = "bearer"
    user: UserPublic
