"""Authentication schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class UserRegister(BaseModel):
    """User registration request."""

    email: EmailStr | None = None
    username: str | None = Field(None, max_length=255)
    password: str | None = Field(None, max_length=128)


class UserLogin(BaseModel):
    """User login request."""

    email: str | None = Field(None, max_length=255)
    password: str | None = Field(None, max_length=128)


class UserResponse(BaseModel):
    """User information response. Never includes the password hash."""

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    email: str
    username: str
    created_at: datetime


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    message: str
    user: UserResponse
    token: str


class CurrentUserResponse(BaseModel):
    """Response for the current user endpoint."""

    message: str = "User retrieved successfully"
    user: UserResponse
