from pydantic import BaseModel, EmailStr
from typing import Optional


class UserCreate(BaseModel):
    email: EmailStr
    name: str
    role: str = "user"  # Default role for users (can be overwritten when needed)
    plan: str = "starter"

    class Config:
        from_attributes = True


class UserInDB(UserCreate):
    id: str  # MongoDB ObjectId as a string
    password_hash: Optional[str] = None

    class Config:
        from_attributes = True


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class RegisterRequest(LoginRequest):
    name: str = ""
