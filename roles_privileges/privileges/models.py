"""
Privilege Models - Data structures for the privilege catalog.

This module defines the records produced by the catalog generator:
- Privilege: one capability on one resource, with localized metadata
- CatalogEntry: every privilege generated for one resource
- CustomPrivilegeGroup: hand-registered privileges waiting to be merged
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..models import ResourceKind


@dataclass
class Privilege:
    """
    A named, described capability to perform one operation on one resource.

    Attributes:
        privilege_key: Globally unique key (e.g. "posts-read").
        label: Locale to display label.
        description: Locale to description.
        is_custom: True for hand-registered privileges.

    Example:
        >>> Privilege(
        ...     privilege_key="posts-publish",
        ...     label={"en": "Publish Posts"},
        ...     description={"en": "Ability to publish posts"},
        ...     is_custom=True,
        ... )
    """

    privilege_key: str
    label: Dict[str, str] = field(default_factory=dict)
    description: Dict[str, str] = field(default_factory=dict)
    is_custom: bool = False

    def __post_init__(self) -> None:
        if not self.privilege_key:
            raise ValueError("Privilege key cannot be empty")

    def get_label(self, locale: str) -> str:
        """Label in the locale, falling back to the shared default then English."""
        return _pick(self.label, locale, self.privilege_key)

    def get_description(self, locale: str) -> str:
        return _pick(self.description, locale, "")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "privilegeKey": self.privilege_key,
            "label": dict(self.label),
            "description": dict(self.description),
            "isCustom": self.is_custom,
        }


def _pick(values: Dict[str, str], locale: str, default: str) -> str:
    for key in (locale, "_default", "en"):
        if values.get(key):
            return values[key]
    return next(iter(values.values()), default)


@dataclass
class CatalogEntry:
    """
    All privileges generated for one resource.

    Only ``privileges`` may grow after creation (custom merges); the entry is
    never removed for the lifetime of its catalog.
    """

    slug: str
    kind: ResourceKind
    label: Dict[str, str]
    description: Dict[str, str]
    privileges: Dict[str, Privilege] = field(default_factory=dict)

    def privilege_keys(self) -> List[str]:
        return [privilege.privilege_key for privilege in self.privileges.values()]

    def copy(self) -> "CatalogEntry":
        return CatalogEntry(
            slug=self.slug,
            kind=self.kind,
            label=dict(self.label),
            description=dict(self.description),
            privileges=dict(self.privileges),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "slug": self.slug,
            "kind": self.kind.value,
            "label": dict(self.label),
            "description": dict(self.description),
            "privileges": {
                name: privilege.to_dict() for name, privilege in self.privileges.items()
            },
        }


@dataclass
class CustomPrivilegeGroup:
    """Custom privileges registered for one resource slug."""

    slug: str
    kind: ResourceKind
    label: Dict[str, str]
    privileges: Dict[str, Privilege] = field(default_factory=dict)

    def copy(self) -> "CustomPrivilegeGroup":
        return CustomPrivilegeGroup(
            slug=self.slug,
            kind=self.kind,
            label=dict(self.label),
            privileges=dict(self.privileges),
        )
