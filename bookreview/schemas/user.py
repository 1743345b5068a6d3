"""
User Pydantic Schemas

Schemas:
- Credentials: Username/password body for signup and login
- UserResponse: Public user data (never exposes the password hash)
- SignupResponse: Result of a successful signup
- TokenResponse: Bearer token returned by login
"""

from pydantic import BaseModel, ConfigDict, Field


class Credentials(BaseModel):
    """
    Username and password.

    Presence is checked by the identity service so that a missing field
    is reported like any other validation failure (400).
    """

    username: str | None = Field(
        default=None,
        max_length=50,
        description="Username (stored lowercase)",
        examples=["reader"],
    )
    # bcrypt only looks at the first 72 bytes
    password: str | None = Field(
        default=None,
        max_length=72,
        description="Password",
        examples=["SecurePass123"],
    )


class UserResponse(BaseModel):
    """Public view of a user."""

    id: int = Field(..., description="Unique user identifier")
    username: str = Field(..., description="Unique username")

    model_config = ConfigDict(from_attributes=True)


class SignupResponse(UserResponse):
    message: str = Field(default="User registered successfully")


class TokenResponse(BaseModel):
    """
    Login result.

    Send the token back as:
        Authorization: Bearer <token>
    """

    token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer")
    expires_in: int = Field(..., description="Token lifetime in seconds")
