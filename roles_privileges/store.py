"""
Role Store - the persistence collaborator for roles and principals.

roles-privileges-py never persists anything itself. Hosts implement
``RoleStore`` on top of their storage layer; methods may be synchronous or
return awaitables, the core awaits results when needed.

``InMemoryRoleStore`` is a complete reference implementation used by the
examples and the test-suite.
"""

import logging
import threading
import uuid
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Union

from .exceptions import DuplicateRoleError, PrincipalNotFoundError, RoleNotFoundError
from .models import Principal
from .rbac.engine import maybe_await
from .rbac.models import SUPER_ADMIN_SLUG, Role
from .rbac.roles import (
    ensure_super_admin_not_deleted,
    ensure_super_admin_slug_not_taken,
    ensure_super_admin_slug_unchanged,
)
from .rbac.schemas import RoleInput, RoleUpdate

logger = logging.getLogger(__name__)

PrincipalHook = Callable[..., Union[Optional[Principal], Awaitable[Optional[Principal]]]]


class RoleStore(ABC):
    """
    Interface consumed by the synchronizer, the bootstrap assigner and the
    evaluator when roles are referenced by id.

    Implementations may be synchronous or asynchronous (returning
    coroutines).
    """

    @abstractmethod
    def find_by_slug(self, slug: str) -> Optional[Role]:
        raise NotImplementedError()

    @abstractmethod
    def find_by_id(self, role_id: str) -> Optional[Role]:
        raise NotImplementedError()

    @abstractmethod
    def create(self, role: Role) -> Role:
        raise NotImplementedError()

    @abstractmethod
    def update(self, role_id: str, fields: Mapping[str, Any]) -> Role:
        raise NotImplementedError()

    @abstractmethod
    def count_principals(self) -> int:
        raise NotImplementedError()

    @abstractmethod
    def update_principal(self, principal_id: str, fields: Mapping[str, Any]) -> Principal:
        raise NotImplementedError()

    @abstractmethod
    def delete(self, role_id: str) -> bool:
        raise NotImplementedError()

    @abstractmethod
    def find_principal(self, principal_id: str) -> Optional[Principal]:
        raise NotImplementedError()

    def create_super_admin(self, role: Role) -> Role:
        """Create the super-admin role; only the synchronizer calls this."""
        return self.create(role)


class InMemoryRoleStore(RoleStore):
    """
    Thread-safe in-memory role and principal store.

    Enforces slug uniqueness, validates role payloads at the edge (at least
    one privilege) and runs the super-admin guards on create, update and
    delete. The super-admin role itself is created through
    ``create_super_admin``.

    Example:
        >>> store = InMemoryRoleStore()
        >>> editor = await store.create(
        ...     Role(slug="editor", title="Editor", privileges=["posts-read"])
        ... )
        >>> principal = await store.create_principal(
        ...     Principal(id="user123", roles=[editor.id])
        ... )
    """

    def __init__(self, locale: Optional[str] = None):
        self.locale = locale
        self._lock = threading.RLock()
        self._roles: Dict[str, Role] = {}
        self._principals: Dict[str, Principal] = {}
        self._principal_hooks: List[PrincipalHook] = []

    # Roles
    async def find_by_slug(self, slug: str) -> Optional[Role]:
        with self._lock:
            for role in self._roles.values():
                if role.slug == slug:
                    return replace(role, privileges=list(role.privileges))
        return None

    async def find_by_id(self, role_id: str) -> Optional[Role]:
        with self._lock:
            role = self._roles.get(role_id)
            if role is None:
                return None
            return replace(role, privileges=list(role.privileges))

    async def list_roles(self) -> List[Role]:
        with self._lock:
            return [replace(r, privileges=list(r.privileges)) for r in self._roles.values()]

    async def create(self, role: Union[Role, Mapping[str, Any]]) -> Role:
        """
        Create a role.

        Raises:
            SuperAdminRoleError: If the role carries the super-admin slug.
            DuplicateRoleError: If the slug is already taken.
            pydantic.ValidationError: If the payload is invalid.
        """
        payload = self._payload(role)
        ensure_super_admin_slug_not_taken(payload, self.locale)
        return self._insert(RoleInput.model_validate(payload))

    async def create_super_admin(self, role: Union[Role, Mapping[str, Any]]) -> Role:
        """
        Create the super-admin role.

        Raises:
            ValueError: If the role does not carry the super-admin slug.
            DuplicateRoleError: If the super-admin role already exists.
        """
        validated = RoleInput.model_validate(self._payload(role))
        if validated.slug != SUPER_ADMIN_SLUG:
            raise ValueError(f"Expected slug '{SUPER_ADMIN_SLUG}', got '{validated.slug}'")
        return self._insert(validated)

    @staticmethod
    def _payload(role: Union[Role, Mapping[str, Any]]) -> Dict[str, Any]:
        if isinstance(role, Role):
            return {
                "slug": role.slug,
                "title": role.title,
                "privileges": list(role.privileges),
                "description": role.description,
            }
        return {k: v for k, v in role.items() if k != "id"}

    def _insert(self, validated: RoleInput) -> Role:
        with self._lock:
            self._ensure_slug_free(validated.slug)
            created = Role(id=str(uuid.uuid4()), **validated.model_dump())
            self._roles[created.id] = created

        logger.info(
            f"Created role '{created.slug}' with {len(created.privileges)} privileges",
            extra={"role_id": created.id, "role_slug": created.slug},
        )
        return replace(created, privileges=list(created.privileges))

    async def update(self, role_id: str, fields: Mapping[str, Any]) -> Role:
        """
        Apply a partial update to a role.

        Raises:
            RoleNotFoundError: If the role does not exist.
            SuperAdminRoleError: If the update would move the super-admin slug.
            DuplicateRoleError: If the new slug is already taken.
        """
        with self._lock:
            original = self._roles.get(role_id)
            if original is None:
                raise RoleNotFoundError(f"Role '{role_id}' not found", code="role-not-found")

            data = ensure_super_admin_slug_unchanged(dict(fields), original, self.locale)
            changes = RoleUpdate.model_validate(data).model_dump(exclude_unset=True)

            if changes.get("slug") and changes["slug"] != original.slug:
                self._ensure_slug_free(changes["slug"])

            updated = replace(original, **changes)
            self._roles[role_id] = updated

        logger.info(
            f"Updated role '{updated.slug}'",
            extra={"role_id": role_id, "fields": sorted(changes)},
        )
        return replace(updated, privileges=list(updated.privileges))

    async def delete(self, role_id: str) -> bool:
        """
        Delete a role and remove it from every principal.

        Returns:
            True if the role was deleted, False if it did not exist.

        Raises:
            SuperAdminRoleError: If the role is the super-admin role.
        """
        with self._lock:
            role = self._roles.get(role_id)
            if role is None:
                return False
            ensure_super_admin_not_deleted(role, self.locale)

            del self._roles[role_id]
            for principal in self._principals.values():
                if principal.roles and role_id in principal.roles:
                    principal.roles = [r for r in principal.roles if r != role_id]

        logger.info(f"Deleted role '{role.slug}'", extra={"role_id": role_id})
        return True

    def _ensure_slug_free(self, slug: str) -> None:
        if any(role.slug == slug for role in self._roles.values()):
            raise DuplicateRoleError(
                f"Role with slug '{slug}' already exists", code="duplicate-role-slug"
            )

    # Principals
    def add_principal_hook(self, hook: PrincipalHook) -> None:
        """Register a hook run after each principal creation."""
        self._principal_hooks.append(hook)

    async def create_principal(self, principal: Principal) -> Principal:
        """
        Store a new principal and run after-create hooks in order.

        A hook may return an updated principal, which is passed to the next
        hook and returned to the caller.
        """
        with self._lock:
            if principal.id in self._principals:
                raise ValueError(f"Principal '{principal.id}' already exists")
            self._principals[principal.id] = principal

        for hook in list(self._principal_hooks):
            result = await maybe_await(hook(principal, operation="create", store=self))
            if isinstance(result, Principal):
                principal = result
        return principal

    async def count_principals(self) -> int:
        with self._lock:
            return len(self._principals)

    async def find_principal(self, principal_id: str) -> Optional[Principal]:
        with self._lock:
            return self._principals.get(principal_id)

    async def update_principal(
        self, principal_id: str, fields: Mapping[str, Any]
    ) -> Principal:
        """
        Update principal attributes.

        Raises:
            PrincipalNotFoundError: If the principal does not exist.
            ValueError: If a field is not a principal attribute.
        """
        with self._lock:
            principal = self._principals.get(principal_id)
            if principal is None:
                raise PrincipalNotFoundError(
                    f"Principal '{principal_id}' not found", code="principal-not-found"
                )
            unknown = [name for name in fields if not hasattr(principal, name)]
            if unknown:
                raise ValueError(f"Unknown principal fields: {unknown}")
            updated = replace(principal, **dict(fields))
            self._principals[principal_id] = updated
        return updated
