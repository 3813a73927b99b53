"""
Access wrapping - put a privilege requirement on top of existing access.

The composed predicate never loosens the original one: an explicit denial
short-circuits before the privilege check runs, and a scoping filter
returned by the original predicate is passed through untouched once the
privilege check succeeds.
"""

import logging
from typing import Any, Dict, Iterable, Optional

from ..models import AccessContext, ResourceDescriptor
from ..privileges.keys import generate_privilege_key
from .engine import AccessPredicate, has_privilege, maybe_await
from .models import AccessResult, Decision

logger = logging.getLogger(__name__)

# Attribute set on composed predicates
WRAPPED_PRIVILEGE_ATTR = "__privilege_key__"


async def resolve_access(original: Any, ctx: AccessContext) -> AccessResult:
    """Evaluate a predicate, static boolean or filter into an AccessResult."""
    value = original(ctx) if callable(original) else original
    return AccessResult.coerce(await maybe_await(value))


def wrap_access(original: Any, privilege_key: str) -> AccessPredicate:
    """
    Compose an existing access rule with a required privilege.

    Args:
        original: Existing predicate (sync or async), a static bool, a
            filter mapping, or None when the operation had no rule.
        privilege_key: Privilege the principal must hold.

    Returns:
        Coroutine predicate returning an ``AccessResult``:
        - no original rule: allow iff the privilege is held
        - original denies: deny without checking the privilege
        - original allows or scopes: the original result iff the privilege
          is held, deny otherwise

    Note:
        Wrapping an already wrapped predicate requires both privileges.
        Callers wrap each operation once.
    """
    if getattr(original, WRAPPED_PRIVILEGE_ATTR, None) is not None:
        logger.warning(
            f"Access for '{privilege_key}' wraps a predicate already guarded by "
            f"'{getattr(original, WRAPPED_PRIVILEGE_ATTR)}'",
            extra={"privilege_key": privilege_key},
        )

    privilege_check = has_privilege(privilege_key)

    async def wrapped(ctx: AccessContext) -> AccessResult:
        original_result = AccessResult.allow()

        if original is not None:
            original_result = await resolve_access(original, ctx)
            if original_result.decision is Decision.DENY:
                return AccessResult.deny()

        if not await privilege_check(ctx):
            return AccessResult.deny()

        return original_result

    setattr(wrapped, WRAPPED_PRIVILEGE_ATTR, privilege_key)
    wrapped.__name__ = f"wrapped_access_{privilege_key}"
    return wrapped


def wrap_resource_access(
    resource: ResourceDescriptor, operations: Optional[Iterable[str]] = None
) -> Dict[str, AccessPredicate]:
    """
    Wrap every operation of a resource with its generated privilege.

    The resource's ``access`` mapping is replaced in place. Originals are
    snapshotted first so each operation wraps its own pre-existing rule.

    Args:
        resource: Resource to guard.
        operations: Operations to wrap. Defaults to the kind's full set.

    Returns:
        The new access mapping.
    """
    original_access = dict(resource.access or {})
    access = dict(original_access)

    for operation in operations or resource.operations:
        key = generate_privilege_key(resource.slug, operation)
        access[operation] = wrap_access(original_access.get(operation), key)

    resource.access = access
    logger.debug(
        f"Wrapped access for {resource.kind.value} '{resource.slug}'",
        extra={"resource_slug": resource.slug},
    )
    return access
