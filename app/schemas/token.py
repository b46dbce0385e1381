# app/schemas/token.py
from typing import Optional
from pydantic import BaseModel, EmailStr, Field
from app.schemas.user import UserOut

class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)

class RefreshRequest(BaseModel):
    refresh_token: Optional[str] = None

class LogoutRequest(BaseModel):
    refresh_token: Optional[str] = None

class ChangePasswordRequest(BaseModel):
    current_password: Optional[str] = None
    new_password: Optional[str] = None

class Tokens(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: str

class LoginResponse(BaseModel):
    user: UserOut
    tokens: Tokens

class RefreshResponse(BaseModel):
    tokens: Tokens

class Message(BaseModel):
    message: str
