"""
Access Evaluator - privilege checks over a principal's roles.

Requirements are expressed in disjunctive normal form: a list of groups,
where the principal must hold every key of at least one group.

    [["pages-create", "pages-read"]]          both keys
    [["pages-create"], ["posts-create"]]      either key
    [["a", "b"], ["c"]]                       (a and b) or c

Predicates built here are coroutines over an ``AccessContext`` so that role
ids can be resolved through an asynchronous role store before deciding.
"""

import logging
from typing import Any, Awaitable, Callable, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from ..models import AccessContext, Principal
from .models import Role, privilege_keys_from

logger = logging.getLogger(__name__)

Requirement = Sequence[Sequence[str]]
AccessPredicate = Callable[[AccessContext], Awaitable[Any]]


async def maybe_await(value: Any) -> Any:
    """Await ``value`` if the collaborator returned an awaitable."""
    if hasattr(value, "__await__"):
        return await value
    return value


def normalize_requirement(requirement: Requirement) -> Tuple[Tuple[str, ...], ...]:
    """
    Freeze a requirement into tuples.

    Raises:
        TypeError: If the requirement or one of its groups is a bare string.
    """
    if isinstance(requirement, str):
        raise TypeError("Requirement must be a list of privilege key lists")
    groups = []
    for group in requirement:
        if isinstance(group, str):
            raise TypeError(
                f"Requirement group must be a list of privilege keys, got string '{group}'"
            )
        groups.append(tuple(group))
    return tuple(groups)


def satisfies(requirement: Requirement, privileges: Set[str]) -> bool:
    """True if every key of at least one group is in ``privileges``."""
    return any(
        all(key in privileges for key in group)
        for group in normalize_requirement(requirement)
    )


def _keys_from_document(role: Mapping[str, Any]) -> Optional[List[str]]:
    if "privileges" in role:
        return privilege_keys_from(role.get("privileges"))
    return None


def collect_privileges(principal: Optional[Principal]) -> Set[str]:
    """
    Union of privilege keys across already-populated roles.

    Role ids that would need a store lookup are skipped.
    """
    privileges: Set[str] = set()
    if principal is None:
        return privileges
    for ref in principal.role_refs():
        if isinstance(ref, Role):
            privileges.update(ref.privileges)
        elif isinstance(ref, Mapping):
            privileges.update(_keys_from_document(ref) or [])
    return privileges


async def effective_privileges(
    principal: Optional[Principal], role_store: Optional[Any] = None
) -> Set[str]:
    """
    Union of privilege keys across every role of the principal.

    Args:
        principal: The principal, or None when unauthenticated.
        role_store: Store used to resolve roles given by id.

    Returns:
        The effective privilege set; empty for a missing principal.
    """
    privileges: Set[str] = set()
    if principal is None:
        return privileges

    for ref in principal.role_refs():
        if isinstance(ref, Role):
            privileges.update(ref.privileges)
            continue

        role_id = ref
        if isinstance(ref, Mapping):
            keys = _keys_from_document(ref)
            if keys is not None:
                privileges.update(keys)
                continue
            role_id = ref.get("id")

        if not role_id:
            continue
        if role_store is None:
            logger.debug(
                f"Cannot resolve role '{role_id}' without a role store",
                extra={"principal_id": principal.id},
            )
            continue

        role = await maybe_await(role_store.find_by_id(role_id))
        if role is not None:
            privileges.update(role.privileges)

    return privileges


async def evaluate(
    requirement: Requirement,
    principal: Optional[Principal],
    role_store: Optional[Any] = None,
) -> bool:
    """
    Decide whether a principal satisfies a requirement.

    Returns False for a missing principal and for an empty requirement.

    Example:
        >>> await evaluate([["posts-update"], ["posts-delete"]], editor)
        True
    """
    groups = normalize_requirement(requirement)
    if principal is None or not groups:
        return False

    privileges = await effective_privileges(principal, role_store)
    allowed = satisfies(groups, privileges)
    logger.debug(
        f"Privilege check {'passed' if allowed else 'failed'} for principal {principal.id}",
        extra={"principal_id": principal.id, "requirement": [list(g) for g in groups]},
    )
    return allowed


def privileges_access(requirement: Requirement) -> AccessPredicate:
    """
    Build an access predicate for a requirement.

    Within a group keys combine with AND, across groups with OR.

    Example:
        >>> # (pages-create AND pages-read) OR (posts-create AND posts-read)
        >>> access = privileges_access(
        ...     [["pages-create", "pages-read"], ["posts-create", "posts-read"]]
        ... )
    """
    groups = normalize_requirement(requirement)

    async def check(ctx: AccessContext) -> bool:
        return await evaluate(groups, ctx.principal, ctx.role_store)

    check.requirement = groups
    return check


def has_privilege(privilege_key: str) -> AccessPredicate:
    """Predicate requiring a single privilege."""
    return privileges_access([[privilege_key]])


def has_any_privilege(*privilege_keys: str) -> AccessPredicate:
    """Predicate requiring any one of the privileges."""
    return privileges_access([[key] for key in privilege_keys])


def has_all_privileges(*privilege_keys: str) -> AccessPredicate:
    """Predicate requiring every one of the privileges."""
    return privileges_access([list(privilege_keys)])


# Synchronous variants for principals whose roles are already populated
def check_privileges(requirement: Requirement, principal: Optional[Principal]) -> bool:
    groups = normalize_requirement(requirement)
    if principal is None or not groups:
        return False
    return satisfies(groups, collect_privileges(principal))


def check_privilege(privilege_key: str, principal: Optional[Principal]) -> bool:
    """
    Check a single privilege without touching a role store.

    Useful inside field-level checks where awaiting is not possible.
    """
    return check_privileges([[privilege_key]], principal)


def check_any_privilege(privilege_keys: Iterable[str], principal: Optional[Principal]) -> bool:
    return check_privileges([[key] for key in privilege_keys], principal)


def check_all_privileges(privilege_keys: Iterable[str], principal: Optional[Principal]) -> bool:
    return check_privileges([list(privilege_keys)], principal)
