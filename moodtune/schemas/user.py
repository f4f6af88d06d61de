# ============================================================================
# FILE: moodtune/schemas/user.py
# ============================================================================
from pydantic import BaseModel, EmailStr, Field

class UserCreate(BaseModel):
    """Schema for user registration"""
    email: EmailStr
    password: str = Field(..., min_length=1)

class UserLogin(BaseModel):
    """Schema for user login"""
    email: EmailStr
    password: str

class UserResponse(BaseModel):
    """Public view of a user (never carries the password hash)"""
    id: int
    email: str
    
    class Config:
        from_attributes = True

class AuthResponse(BaseModel):
    """Envelope returned by signup and login"""
    user: UserResponse
