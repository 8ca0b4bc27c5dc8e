"""Request and response bodies for the auth API."""

from typing import Optional
from pydantic import BaseModel, ConfigDict


class LoginRequest(BaseModel):
    username: str
    password: str
    nicNumber: str


class RegisterRequest(BaseModel):
    email: Optional[str] = None
    username: Optional[str] = None
    password: str
    nicNumber: Optional[str] = None


class MessageResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: Optional[str] = None


class LoginResponse(MessageResponse):
    token: Optional[str] = None
    email: Optional[str] = None
