"""
Authentication schemas
"""
from pydantic import BaseModel, Field
from vivaponto.schemas.user import UserOut


class LoginRequest(BaseModel):
    """Login request schema"""
    email: str = Field(..., description="User email")
    password: str = Field(..., description="Password")


class TokenResponse(BaseModel):
    """Token response schema"""
    access_token: str
    token_type: str = "bearer"
    user: UserOut
