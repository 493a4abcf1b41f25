"""
Pydantic schemas for the remote auth API.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator


class LoginCredentials(BaseModel):
    """Login request body."""

    email: EmailStr = Field(..., description="Account email")
    password: str = Field(..., min_length=8, description="Account password")


class SignupDetails(BaseModel):
    """Registration request body."""

    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    email: EmailStr = Field(..., description="Account email")
    password: str = Field(..., min_length=8, description="Account password")
    password_confirmation: str = Field(..., description="Repeated password")

    @model_validator(mode="after")
    def passwords_match(self) -> "SignupDetails":
        if self.password != self.password_confirmation:
            raise ValueError("Passwords do not match")
        return self


class AuthUser(BaseModel):
    """User summary returned alongside a successful auth response."""

    model_config = ConfigDict(extra="ignore")

    id: int | str
    name: str | None = None
    email: str | None = None


class AuthResult(BaseModel):
    """Response of ``login`` and ``signup``."""

    model_config = ConfigDict(extra="ignore")

    success: bool = Field(..., description="Whether the backend accepted the request")
    message: str | None = Field(None, description="Human-readable outcome")
    token: str | None = Field(None, description="Session token on success")
    user: AuthUser | None = Field(None, description="Authenticated user")
