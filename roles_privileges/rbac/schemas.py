"""
Edge validation for role documents.

The core itself tolerates any privilege list; these models enforce the
rules applied where role documents enter the system (at least one
privilege, well-formed slug, bounded lengths).
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import privilege_keys_from

MAX_ROLE_SLUG_LENGTH = 64
MAX_TITLE_LENGTH = 128
MAX_DESCRIPTION_LENGTH = 512
MAX_PRIVILEGES_PER_ROLE = 1000


def _normalize_privileges(v: Any) -> Any:
    if isinstance(v, list):
        return privilege_keys_from(v)
    return v


class RoleInput(BaseModel):
    """Validated payload for creating a role"""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    slug: str = Field(
        ..., max_length=MAX_ROLE_SLUG_LENGTH, pattern=r"^[a-zA-Z0-9][a-zA-Z0-9_-]*$"
    )
    title: str = Field(..., min_length=1, max_length=MAX_TITLE_LENGTH)
    privileges: List[str] = Field(
        ..., min_length=1, max_length=MAX_PRIVILEGES_PER_ROLE
    )
    description: Optional[str] = Field(None, max_length=MAX_DESCRIPTION_LENGTH)

    @field_validator("privileges", mode="before")
    @classmethod
    def validate_privileges(cls, v: Any) -> Any:
        """Accept plain keys or {"privilege": key} rows"""
        return _normalize_privileges(v)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Validate role title"""
        if not v or v.isspace():
            raise ValueError("Role title cannot be empty")
        return v


class RoleUpdate(BaseModel):
    """Validated payload for a partial role update"""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    slug: Optional[str] = Field(
        None, max_length=MAX_ROLE_SLUG_LENGTH, pattern=r"^[a-zA-Z0-9][a-zA-Z0-9_-]*$"
    )
    title: Optional[str] = Field(None, min_length=1, max_length=MAX_TITLE_LENGTH)
    privileges: Optional[List[str]] = Field(
        None, min_length=1, max_length=MAX_PRIVILEGES_PER_ROLE
    )
    description: Optional[str] = Field(None, max_length=MAX_DESCRIPTION_LENGTH)

    @field_validator("privileges", mode="before")
    @classmethod
    def validate_privileges(cls, v: Any) -> Any:
        return _normalize_privileges(v)
