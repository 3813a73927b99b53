"""
Roles resource and the invariants protecting the super-admin role.

The super-admin role can never be deleted and its slug is pinned: it cannot
be renamed, and no other role can be renamed to take its slug.
"""

import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from ..exceptions import SuperAdminRoleError
from ..models import ResourceDescriptor, ResourceKind
from ..translations import translate
from .engine import has_privilege
from .models import SUPER_ADMIN_SLUG, Role

logger = logging.getLogger(__name__)

ROLES_SLUG = "roles"

RoleLike = Union[Role, Mapping[str, Any]]


def _slug_of(role: Optional[RoleLike]) -> Optional[str]:
    if role is None:
        return None
    if isinstance(role, Role):
        return role.slug
    return role.get("slug")


def _incoming_slug(data: Mapping[str, Any]) -> Optional[str]:
    # Compared the way RoleInput/RoleUpdate store it
    slug = data.get("slug")
    if isinstance(slug, str):
        return slug.strip()
    return slug


def ensure_super_admin_not_deleted(
    role: Optional[RoleLike], locale: Optional[str] = None
) -> None:
    """
    Reject deletion of the super-admin role.

    Raises:
        SuperAdminRoleError: If the role being deleted is the super-admin role.
    """
    if _slug_of(role) == SUPER_ADMIN_SLUG:
        logger.warning("Rejected deletion of the super-admin role")
        raise SuperAdminRoleError("error-cannot-delete-super-admin", locale)


def ensure_super_admin_slug_unchanged(
    data: Dict[str, Any],
    original: Optional[RoleLike] = None,
    locale: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Reject slug changes that move the super-admin slug.

    Any other field of any role, the super-admin included, may change.

    Args:
        data: Incoming fields of the update.
        original: The role as currently stored.
        locale: Locale of the error message.

    Returns:
        ``data`` unchanged when the update is allowed.

    Raises:
        SuperAdminRoleError: If the update renames the super-admin role or
            gives another role the super-admin slug.
    """
    original_slug = _slug_of(original)
    new_slug = _incoming_slug(data)
    if original_slug is None or not new_slug or new_slug == original_slug:
        return data

    if original_slug == SUPER_ADMIN_SLUG:
        logger.warning(
            "Rejected slug change of the super-admin role",
            extra={"new_slug": new_slug},
        )
        raise SuperAdminRoleError("error-cannot-modify-super-admin-slug", locale)

    if new_slug == SUPER_ADMIN_SLUG:
        logger.warning(
            f"Rejected rename of role '{original_slug}' to the super-admin slug",
            extra={"role_slug": original_slug},
        )
        raise SuperAdminRoleError("error-cannot-assign-super-admin-slug", locale)

    return data


def ensure_super_admin_slug_not_taken(
    data: Mapping[str, Any], locale: Optional[str] = None
) -> Mapping[str, Any]:
    """
    Reject creation of a role with the super-admin slug.

    Only the synchronizer creates the super-admin role, through
    ``create_super_admin`` on the store.

    Raises:
        SuperAdminRoleError: If ``data`` carries the super-admin slug.
    """
    if _incoming_slug(data) == SUPER_ADMIN_SLUG:
        logger.warning("Rejected creation of a role with the super-admin slug")
        raise SuperAdminRoleError("error-cannot-assign-super-admin-slug", locale)
    return data


def _localized(key: str, locales: Iterable[str]) -> Dict[str, str]:
    return {locale: translate(key, locale) for locale in locales}


def create_roles_resource(locales: Iterable[str] = ("en", "fr")) -> ResourceDescriptor:
    """
    Descriptor of the roles collection.

    Reading roles is open (principals need it to resolve their own roles);
    writes require the matching ``roles-*`` privilege. The super-admin
    guards are installed as hooks.

    Example:
        >>> roles = create_roles_resource()
        >>> roles.slug
        'roles'
    """
    locales = tuple(locales)
    return ResourceDescriptor(
        slug=ROLES_SLUG,
        kind=ResourceKind.COLLECTION,
        singular_label=_localized("roles-collection-label-singular", locales),
        plural_label=_localized("roles-collection-label-plural", locales),
        access={
            "read": True,
            "create": has_privilege("roles-create"),
            "update": has_privilege("roles-update"),
            "delete": has_privilege("roles-delete"),
        },
        hooks={
            "before_create": [ensure_super_admin_slug_not_taken],
            "before_change": [ensure_super_admin_slug_unchanged],
            "before_delete": [ensure_super_admin_not_deleted],
        },
    )
