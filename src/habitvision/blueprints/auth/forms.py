"""Authentication payload definitions."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RegisterForm(BaseModel):
    """Sign-up payload."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=255)
    full_name: Optional[str] = Field(default=None, max_length=120)
    email: Optional[str] = Field(default=None, max_length=255, pattern=EMAIL_PATTERN)
    bio: Optional[str] = Field(default=None, max_length=500)


class LoginForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    username: str
    password: str


class ProfileForm(BaseModel):
    """Partial profile update; only provided fields change."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    full_name: Optional[str] = Field(default=None, max_length=120)
    email: Optional[str] = Field(default=None, max_length=255, pattern=EMAIL_PATTERN)
    bio: Optional[str] = Field(default=None, max_length=500)
    password: Optional[str] = Field(default=None, min_length=1, max_length=255)

    def changes(self) -> dict:
        provided = self.model_dump(exclude_unset=True)
        if provided.get("password", "") is None:
            provided.pop("password")
        return provided


__all__ = ["LoginForm", "ProfileForm", "RegisterForm"]
