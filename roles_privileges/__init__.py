"""
roles-privileges-py: Privilege catalog and role-based access for resource APIs

This package derives a catalog of fine-grained privileges from the resources
a host application declares, guards each resource operation with its
privilege and keeps a protected super-admin role holding every privilege.

Features:
    - Automatic privilege generation for collections and singletons
    - Localized privilege labels and descriptions (English, French)
    - Custom privileges merged into the catalog
    - Access wrapping that preserves existing access rules and filters
    - Super-admin seeding and first-principal bootstrap
    - FastAPI dependencies for privilege-protected endpoints

Example:
    >>> from roles_privileges import ResourceDescriptor, setup_roles_privileges
    >>>
    >>> posts = ResourceDescriptor(slug="posts")
    >>> plugin = setup_roles_privileges([posts])
    >>> await plugin.on_init(role_store)

See Also:
    - `examples/` directory for a complete blog configuration
"""

__version__ = "0.1.0"

from . import rbac
from .exceptions import (
    ConfigurationError,
    DuplicateRoleError,
    PrincipalNotFoundError,
    RoleNotFoundError,
    RolesPrivilegesError,
    SuperAdminRoleError,
)
from .models import AccessContext, Principal, ResourceDescriptor, ResourceKind
from .plugin import RolesPrivileges, setup_roles_privileges
from .privileges import (
    CustomPrivilegeConfig,
    Privilege,
    PrivilegeCatalog,
    generate_privilege_key,
)
from .rbac import (
    AccessResult,
    Role,
    has_all_privileges,
    has_any_privilege,
    has_privilege,
    privileges_access,
)
from .settings import Settings
from .store import InMemoryRoleStore, RoleStore

__all__ = [
    "Settings",
    "RolesPrivileges",
    "setup_roles_privileges",
    "Principal",
    "ResourceDescriptor",
    "ResourceKind",
    "AccessContext",
    "PrivilegeCatalog",
    "Privilege",
    "CustomPrivilegeConfig",
    "generate_privilege_key",
    "Role",
    "AccessResult",
    "privileges_access",
    "has_privilege",
    "has_any_privilege",
    "has_all_privileges",
    "RoleStore",
    "InMemoryRoleStore",
    "RolesPrivilegesError",
    "SuperAdminRoleError",
    "RoleNotFoundError",
    "DuplicateRoleError",
    "PrincipalNotFoundError",
    "ConfigurationError",
    "rbac",
]
