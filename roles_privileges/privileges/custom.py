"""
Custom privilege registry.

Custom privileges describe capabilities that are not derived from CRUD
operations (e.g. "posts-publish"). They are grouped by resource slug and
merged into the catalog entry of that resource.
"""

import logging
import threading
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models import ResourceKind
from .models import CustomPrivilegeGroup, Privilege

logger = logging.getLogger(__name__)

MAX_PRIVILEGE_KEY_LENGTH = 128


class CustomPrivilegeConfig(BaseModel):
    """Validated definition of a custom privilege."""

    model_config = ConfigDict(
        str_strip_whitespace=True, populate_by_name=True, extra="forbid"
    )

    privilege_key: str = Field(
        ..., alias="privilegeKey", min_length=1, max_length=MAX_PRIVILEGE_KEY_LENGTH
    )
    label: Dict[str, str]
    description: Dict[str, str] = Field(default_factory=dict)

    @field_validator("privilege_key")
    @classmethod
    def validate_privilege_key(cls, v: str) -> str:
        """Reject keys containing whitespace"""
        if any(ch.isspace() for ch in v):
            raise ValueError("Privilege key cannot contain whitespace")
        return v

    @field_validator("label")
    @classmethod
    def validate_label(cls, v: Dict[str, str]) -> Dict[str, str]:
        """Require at least one non-empty label"""
        if not any(text and not text.isspace() for text in v.values()):
            raise ValueError("Custom privilege needs at least one label")
        return v

    def to_privilege(self) -> Privilege:
        return Privilege(
            privilege_key=self.privilege_key,
            label=dict(self.label),
            description=dict(self.description),
            is_custom=True,
        )


PrivilegeConfigLike = Union[CustomPrivilegeConfig, Mapping[str, Any]]


def _coerce_config(config: PrivilegeConfigLike) -> CustomPrivilegeConfig:
    if isinstance(config, CustomPrivilegeConfig):
        return config
    return CustomPrivilegeConfig.model_validate(dict(config))


class CustomPrivilegeRegistry:
    """
    Append-only store of custom privileges grouped by resource slug.

    Registering the same key twice for a slug replaces the earlier
    definition. The group's kind and label are fixed by the first
    registration for that slug.

    Example:
        >>> registry = CustomPrivilegeRegistry()
        >>> registry.register("posts", {
        ...     "privilegeKey": "posts-publish",
        ...     "label": {"en": "Publish Posts"},
        ...     "description": {"en": "Ability to publish posts"},
        ... })
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._groups: Dict[str, CustomPrivilegeGroup] = {}

    def register(
        self,
        resource_slug: str,
        config: PrivilegeConfigLike,
        group_label: Optional[Dict[str, str]] = None,
        kind: ResourceKind = ResourceKind.COLLECTION,
    ) -> Privilege:
        """
        Register one custom privilege for a resource.

        Args:
            resource_slug: Slug of the resource the privilege belongs to.
            config: Privilege definition (model or mapping).
            group_label: Label of the group when it is created by this call.
                Defaults to ``{"_default": resource_slug}``.
            kind: Kind of the group when it is created by this call.

        Returns:
            The registered privilege, flagged ``is_custom``.

        Raises:
            pydantic.ValidationError: If the definition is invalid.
        """
        if not resource_slug:
            raise ValueError("Resource slug cannot be empty")

        privilege = _coerce_config(config).to_privilege()

        with self._lock:
            groups = dict(self._groups)
            group = groups.get(resource_slug)
            if group is None:
                group = CustomPrivilegeGroup(
                    slug=resource_slug,
                    kind=ResourceKind(kind),
                    label=dict(group_label or {"_default": resource_slug}),
                )
            else:
                group = group.copy()

            if privilege.privilege_key in group.privileges:
                logger.info(
                    f"Redefining custom privilege '{privilege.privilege_key}'",
                    extra={"resource_slug": resource_slug},
                )
            group.privileges[privilege.privilege_key] = privilege
            groups[resource_slug] = group
            self._groups = groups

        logger.debug(
            f"Registered custom privilege '{privilege.privilege_key}' for '{resource_slug}'",
            extra={"resource_slug": resource_slug, "kind": group.kind.value},
        )
        return privilege

    def register_many(
        self,
        resource_slug: str,
        configs: Iterable[PrivilegeConfigLike],
        group_label: Optional[Dict[str, str]] = None,
        kind: ResourceKind = ResourceKind.COLLECTION,
    ) -> List[Privilege]:
        """Register several custom privileges in order."""
        return [
            self.register(resource_slug, config, group_label=group_label, kind=kind)
            for config in configs
        ]

    def get(self, resource_slug: str) -> Optional[CustomPrivilegeGroup]:
        return self._groups.get(resource_slug)

    def groups(self) -> List[CustomPrivilegeGroup]:
        return list(self._groups.values())

    def __contains__(self, resource_slug: object) -> bool:
        return resource_slug in self._groups

    def __len__(self) -> int:
        return len(self._groups)
