from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import AliasChoices, BaseModel, Field, field_validator

from krishi_setu.core.languages import validate_language

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserRole(str, Enum):
    FARMER = "farmer"
    ADMIN = "admin"


class User(BaseModel):
    id: str = Field(
        default_factory=lambda: uuid4().hex,
        validation_alias=AliasChoices("id", "_id"),
        serialization_alias="_id",
    )
    phone: str = Field(...)
    name: str = Field(...)
    language: str = Field(...)
    email: Optional[str] = Field(default=None, pattern=EMAIL_PATTERN)
    role: UserRole = Field(default=UserRole.FARMER)
    is_verified: bool = Field(default=False)

    @field_validator("language")
    @classmethod
    def _check_language(cls, value: str) -> str:
        return validate_language(value)


class ProfileUpdate(BaseModel):
    """Editable account fields from the profile page."""

    name: Optional[str] = Field(default=None, min_length=2)
    email: Optional[str] = Field(default=None, pattern=EMAIL_PATTERN)
    language: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if len(value) < 2:
            raise ValueError("Name must be at least 2 characters.")
        return value

    @field_validator("language")
    @classmethod
    def _check_language(cls, value: Optional[str]) -> Optional[str]:
        return validate_language(value) if value is not None else None
