"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class CurrentUser(BaseModel):
    """Authenticated identity decoded from the bearer token (id, username, role)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    role: str


class PublicUser(BaseModel):
    """Identity returned after login; never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    name: str
    email: str
    role: str


class LoginResponse(BaseModel):
    """JWT access token plus the logged-in user's public identity."""

    token: str = Field(..., description="JWT access token; send as 'Authorization: Bearer <token>'")
    token_type: str = Field(default="bearer", description="Token type")
    user: PublicUser
