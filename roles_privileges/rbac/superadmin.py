"""
Super-admin lifecycle: keeping the role complete and bootstrapping it.

Both operations run at the edge of system initialization. Role store
failures are logged and swallowed here so that initialization carries on;
the role simply stays stale until the next successful sync.
"""

import logging
from typing import Any, Callable, Iterable, List, Optional

from ..models import Principal
from ..translations import translate
from .engine import maybe_await
from .models import SUPER_ADMIN_SLUG, Role

logger = logging.getLogger(__name__)


def _unique(keys: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(keys))


async def sync_super_admin(
    role_store: Any,
    privilege_keys: Iterable[str],
    locale: Optional[str] = None,
) -> Optional[Role]:
    """
    Create or update the super-admin role with every known privilege.

    The privilege list is replaced, not merged, so privileges that no longer
    exist are dropped and newly discovered ones are added.

    Args:
        role_store: Role store collaborator.
        privilege_keys: Full privilege key list (typically
            ``catalog.all_privilege_keys()``).
        locale: Locale for the title and description of a new role.

    Returns:
        The stored role, or None if the store failed.

    Example:
        >>> await sync_super_admin(store, catalog.all_privilege_keys())
    """
    keys = _unique(privilege_keys)
    fields = {
        "slug": SUPER_ADMIN_SLUG,
        "title": translate("super-admin-title", locale),
        "description": translate("super-admin-description", locale),
        "privileges": keys,
    }

    try:
        existing = await maybe_await(role_store.find_by_slug(SUPER_ADMIN_SLUG))

        if existing is not None:
            role = await maybe_await(role_store.update(existing.id, fields))
            logger.info(
                f"Super Admin role updated with {len(keys)} privileges",
                extra={"role_id": existing.id, "privilege_count": len(keys)},
            )
        else:
            create = getattr(role_store, "create_super_admin", role_store.create)
            role = await maybe_await(create(Role(**fields)))
            logger.info(
                f"Super Admin role created with {len(keys)} privileges",
                extra={"privilege_count": len(keys)},
            )
        return role

    except Exception as e:
        logger.error(
            f"Error seeding Super Admin role: {e}",
            extra={"privilege_count": len(keys)},
            exc_info=True,
        )
        return None


async def assign_super_admin_to_first_principal(
    role_store: Any,
    principal_id: str,
    roles_field: str = "roles",
) -> Optional[Principal]:
    """
    Give the super-admin role to the very first principal.

    Does nothing unless exactly one principal exists after the creation that
    triggered this call.

    Args:
        role_store: Role store collaborator (roles and principals).
        principal_id: Id of the principal that was just created.
        roles_field: Principal attribute holding role ids.

    Returns:
        The updated principal when the role was assigned, None otherwise.
    """
    try:
        if await maybe_await(role_store.count_principals()) != 1:
            return None

        role = await maybe_await(role_store.find_by_slug(SUPER_ADMIN_SLUG))
        if role is None:
            logger.warning(
                "Super Admin role not found. First principal created without role assignment.",
                extra={"principal_id": principal_id},
            )
            return None

        updated = await maybe_await(
            role_store.update_principal(principal_id, {roles_field: [role.id]})
        )
        logger.info(
            f"First principal created - Super Admin role assigned to: {principal_id}",
            extra={"principal_id": principal_id, "role_id": role.id},
        )
        return updated

    except Exception as e:
        logger.error(
            f"Error assigning Super Admin role to first principal: {e}",
            extra={"principal_id": principal_id},
            exc_info=True,
        )
        return None


def create_first_principal_hook(
    role_store: Any = None, roles_field: str = "roles"
) -> Callable:
    """
    Build an after-change hook running the bootstrap assignment on create.

    The hook receives the principal, the operation name and optionally the
    store that performed the write; ``role_store`` takes precedence when set.
    """

    async def hook(
        principal: Principal, operation: str = "create", store: Any = None
    ) -> Principal:
        if operation != "create":
            return principal
        target = role_store if role_store is not None else store
        if target is None:
            logger.warning(
                "First principal hook called without a role store",
                extra={"principal_id": principal.id},
            )
            return principal
        updated = await assign_super_admin_to_first_principal(
            target, principal.id, roles_field
        )
        return updated or principal

    return hook
