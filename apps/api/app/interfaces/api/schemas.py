from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    # Required fields are checked by the directory service so that missing
    # values surface as 400 with a message, not as a 422 from pydantic.
    model_config = ConfigDict(populate_by_name=True)

    full_name: Optional[str] = Field(default=None, alias="fullName")
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None
    phone: Optional[str] = None


class UserLogin(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class AuthResponse(BaseModel):
    user: Dict[str, Any]
    token: str


class MessageResponse(BaseModel):
    message: str


class LegacySaveResponse(BaseModel):
    success: bool
    error: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    timestamp: str
