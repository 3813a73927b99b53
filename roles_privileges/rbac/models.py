"""
RBAC Models - Data structures for role-based access decisions.

This module defines:
- Role: a persisted bundle of privilege keys assignable to principals
- Decision / AccessResult: the outcome of an access predicate, which is
  either a plain allow, a plain deny, or an allow scoped by a filter
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set

SUPER_ADMIN_SLUG = "super-admin"

VALID_ROLE_SLUG = re.compile(r"^[a-zA-Z0-9_-]+$")


def privilege_keys_from(rows: Optional[Iterable[Any]]) -> List[str]:
    """
    Normalize stored privilege rows to plain keys.

    Rows may be plain strings or documents shaped like
    ``{"privilege": "posts-read"}``; anything else is ignored.
    """
    keys: List[str] = []
    for row in rows or []:
        if isinstance(row, str):
            keys.append(row)
        elif isinstance(row, Mapping) and isinstance(row.get("privilege"), str):
            keys.append(row["privilege"])
    return keys


@dataclass
class Role:
    """
    Represents a role with an ordered list of privilege keys.

    Duplicated keys are tolerated and carry no meaning. The role whose slug
    is ``super-admin`` is protected: it cannot be deleted and its slug
    cannot change.

    Attributes:
        slug: Unique identifier of the role.
        title: Human-readable name.
        privileges: Privilege keys granted by the role.
        description: Optional description.
        id: Identifier assigned by the role store.

    Example:
        >>> editor = Role(
        ...     slug="editor",
        ...     title="Editor",
        ...     privileges=["posts-read", "posts-update"],
        ... )
        >>> editor.has_privilege("posts-read")
        True
    """

    slug: str
    title: str
    privileges: List[str] = field(default_factory=list)
    description: Optional[str] = None
    id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate role data after initialization."""
        if not self.slug:
            raise ValueError("Role slug cannot be empty")
        if not self.title:
            raise ValueError("Role title cannot be empty")
        if not VALID_ROLE_SLUG.match(self.slug):
            raise ValueError(f"Invalid role slug format: {self.slug}")
        if not isinstance(self.privileges, list):
            raise ValueError("Role privileges must be a list")

    @property
    def is_super_admin(self) -> bool:
        return self.slug == SUPER_ADMIN_SLUG

    def privilege_set(self) -> Set[str]:
        return set(self.privileges)

    def has_privilege(self, privilege_key: str) -> bool:
        return privilege_key in self.privileges

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Role":
        """
        Build a role from a stored document.

        Accepts privileges as plain keys or as ``{"privilege": key}`` rows.
        """
        return cls(
            slug=data["slug"],
            title=data["title"],
            privileges=privilege_keys_from(data.get("privileges")),
            description=data.get("description"),
            id=data.get("id"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the role to a document.

        Returns:
            Dictionary with privileges stored as ``{"privilege": key}`` rows.
        """
        return {
            "id": self.id,
            "slug": self.slug,
            "title": self.title,
            "description": self.description,
            "privileges": [{"privilege": key} for key in self.privileges],
        }


class Decision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"
    SCOPED = "scoped"


@dataclass(frozen=True)
class AccessResult:
    """
    Outcome of an access predicate.

    ``SCOPED`` results allow the operation only over documents matching
    ``filter``; the filter is opaque to this library and handed back to
    the host unchanged.

    Example:
        >>> AccessResult.coerce({"author": {"equals": "user123"}}).decision
        <Decision.SCOPED: 'scoped'>
        >>> bool(AccessResult.deny())
        False
    """

    decision: Decision
    filter: Optional[Dict[str, Any]] = None

    @classmethod
    def allow(cls) -> "AccessResult":
        return cls(Decision.ALLOW)

    @classmethod
    def deny(cls) -> "AccessResult":
        return cls(Decision.DENY)

    @classmethod
    def scoped(cls, where: Dict[str, Any]) -> "AccessResult":
        return cls(Decision.SCOPED, where)

    @classmethod
    def coerce(cls, value: Any) -> "AccessResult":
        """
        Convert a raw predicate result.

        Booleans map to allow/deny, mappings to a scoped result, None to
        deny. AccessResult instances pass through.
        """
        if isinstance(value, AccessResult):
            return value
        if isinstance(value, bool):
            return cls.allow() if value else cls.deny()
        if isinstance(value, Mapping):
            return cls.scoped(value)
        if value is None:
            return cls.deny()
        raise TypeError(f"Unsupported access result: {type(value).__name__}")

    @property
    def is_denied(self) -> bool:
        return self.decision is Decision.DENY

    @property
    def is_scoped(self) -> bool:
        return self.decision is Decision.SCOPED

    def __bool__(self) -> bool:
        return self.decision is not Decision.DENY

    def to_value(self) -> Any:
        """Host representation: True, False, or the filter mapping."""
        if self.decision is Decision.SCOPED:
            return self.filter
        return self.decision is Decision.ALLOW

    def to_dict(self) -> Dict[str, Any]:
        return {"decision": self.decision.value, "filter": self.filter}
