"""User and authentication Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Schema for account registration."""

    username: str | None = Field(None, description="Unique username")
    password: str | None = Field(None, description="Password, at least 8 characters")


class LoginRequest(BaseModel):
    """Schema for login submissions."""

    username: str | None = None
    password: str | None = None


class UserResponse(BaseModel):
    """Public view of an account."""

    id: int
    username: str
    role: str

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    """Response returned after register and login."""

    user: UserResponse


class MeResponse(BaseModel):
    """Current session owner, or null without a valid session."""

    user: UserResponse | None


class UserSummary(BaseModel):
    """Entry in the member picker; name and email both carry the username."""

    id: int
    name: str
    email: str


class UserListResponse(BaseModel):
    users: list[UserSummary]
