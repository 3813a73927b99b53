"""
Core data models shared across roles-privileges-py.

This module defines the host-facing structures: the principal whose
privileges are evaluated, the descriptor of a resource whose operations are
guarded, and the context handed to every access predicate.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Tuple, Union

if TYPE_CHECKING:  # pragma: no cover
    from .rbac.models import Role
    from .store import RoleStore


class ResourceKind(str, Enum):
    """Shape of a guarded resource."""

    COLLECTION = "collection"
    SINGLETON = "singleton"


COLLECTION_OPERATIONS: Tuple[str, ...] = (
    "create",
    "read",
    "update",
    "delete",
    "admin",
    "readVersions",
    "unlock",
)

SINGLETON_OPERATIONS: Tuple[str, ...] = (
    "read",
    "update",
    "readDrafts",
    "readVersions",
)


def operations_for(kind: ResourceKind) -> Tuple[str, ...]:
    """Return the fixed operation set for a resource kind."""
    if ResourceKind(kind) is ResourceKind.SINGLETON:
        return SINGLETON_OPERATIONS
    return COLLECTION_OPERATIONS


LabelValue = Union[str, Dict[str, str], None]


@dataclass
class ResourceDescriptor:
    """
    Declaration of a resource registered with the host platform.

    Collections expose ``singular_label``/``plural_label``; singletons use
    ``singular_label`` as their only label. Labels may be a plain string
    shared by every locale or a mapping of locale to string.

    Attributes:
        slug: Unique identifier of the resource (e.g. "posts").
        kind: Collection-like or singleton-like.
        singular_label: Display label for one item.
        plural_label: Display label for many items.
        access: Operation name to access predicate, static bool or filter.
        hooks: Lifecycle hook lists keyed by event name. The library only
            registers hooks here; the host runs them around its own writes,
            in list order, passing:

            - ``before_create``: ``(data, locale)``
            - ``before_change``: ``(data, original, locale)``
            - ``before_delete``: ``(document, locale)``
            - ``after_change``: ``(principal, operation=..., store=...)``,
              awaiting the result

            ``InMemoryRoleStore`` runs the roles guards itself.

    Example:
        >>> posts = ResourceDescriptor(
        ...     slug="posts",
        ...     singular_label={"en": "Post", "fr": "Article"},
        ...     plural_label={"en": "Posts", "fr": "Articles"},
        ... )
    """

    slug: str
    kind: ResourceKind = ResourceKind.COLLECTION
    singular_label: LabelValue = None
    plural_label: LabelValue = None
    access: Dict[str, Any] = field(default_factory=dict)
    hooks: Dict[str, List[Callable]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate descriptor data after initialization."""
        if not self.slug:
            raise ValueError("Resource slug cannot be empty")
        self.kind = ResourceKind(self.kind)

    @property
    def operations(self) -> Tuple[str, ...]:
        return operations_for(self.kind)


@dataclass
class Principal:
    """
    Represents an authenticated user/principal in the system.

    Roles can be given already populated (``Role`` instances or role
    documents as dictionaries) or as role ids that are resolved through a
    ``RoleStore`` at evaluation time.

    Attributes:
        id: Unique identifier for the principal.
        provider: Name of the authentication source that produced it.
        name: Human-readable display name, if available.
        email: Email address, if available.
        roles: Assigned roles (objects, documents or ids).
        raw: Raw claims or document data from the host platform.

    Example:
        >>> principal = Principal(
        ...     id="user123",
        ...     name="John Doe",
        ...     roles=[Role(slug="editor", title="Editor", privileges=["posts-read"])],
        ... )
    """

    id: str
    provider: str = "local"
    name: Optional[str] = None
    email: Optional[str] = None
    roles: Optional[List[Union[str, "Role", Dict[str, Any]]]] = None
    raw: Optional[Dict[str, Any]] = None

    def __post_init__(self) -> None:
        """Validate principal data after initialization."""
        if not self.id:
            raise ValueError("Principal ID cannot be empty")

        # Ensure roles is always a list if provided
        if self.roles is not None and not isinstance(self.roles, list):
            raise ValueError("Principal roles must be a list")

    def role_refs(self) -> List[Union[str, "Role", Dict[str, Any]]]:
        """Return assigned roles, empty when none are set."""
        return list(self.roles or [])

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the principal to a dictionary representation.

        Role objects are reduced to their ids so the result can be persisted.
        """
        roles = None
        if self.roles is not None:
            roles = [
                role if isinstance(role, (str, dict)) else role.id
                for role in self.roles
            ]
        return {
            "id": self.id,
            "provider": self.provider,
            "name": self.name,
            "email": self.email,
            "roles": roles,
            "raw": self.raw,
        }


@dataclass
class AccessContext:
    """
    Arguments passed to every access predicate.

    Attributes:
        principal: The requesting principal, None when unauthenticated.
        role_store: Collaborator used to resolve role ids, if any.
        locale: Locale used for any user-facing message.
        id: Identifier of the targeted document, when applicable.
        data: Incoming payload for write operations.
    """

    principal: Optional[Principal] = None
    role_store: Optional["RoleStore"] = None
    locale: str = "en"
    id: Optional[str] = None
    data: Optional[Dict[str, Any]] = None
