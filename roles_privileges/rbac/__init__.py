"""
Role-based access control over the privilege catalog.

Features:
- Role entity with privilege sets and the protected super-admin role
- Privilege predicates with OR-of-AND requirements
- Access wrapping that never loosens existing rules
- Super-admin synchronization and first-principal bootstrap
- FastAPI dependencies for endpoint protection
"""

from .dependencies import (
    get_current_principal,
    install_error_handler,
    require_privilege,
    require_privileges,
    resource_access,
)
from .engine import (
    check_all_privileges,
    check_any_privilege,
    check_privilege,
    check_privileges,
    effective_privileges,
    evaluate,
    has_all_privileges,
    has_any_privilege,
    has_privilege,
    privileges_access,
)
from .models import SUPER_ADMIN_SLUG, AccessResult, Decision, Role
from .roles import (
    ROLES_SLUG,
    create_roles_resource,
    ensure_super_admin_not_deleted,
    ensure_super_admin_slug_not_taken,
    ensure_super_admin_slug_unchanged,
)
from .schemas import RoleInput, RoleUpdate
from .superadmin import (
    assign_super_admin_to_first_principal,
    create_first_principal_hook,
    sync_super_admin,
)
from .wrapping import wrap_access, wrap_resource_access

__all__ = [
    "Role",
    "RoleInput",
    "RoleUpdate",
    "AccessResult",
    "Decision",
    "SUPER_ADMIN_SLUG",
    "ROLES_SLUG",
    "privileges_access",
    "has_privilege",
    "has_any_privilege",
    "has_all_privileges",
    "check_privileges",
    "check_privilege",
    "check_any_privilege",
    "check_all_privileges",
    "effective_privileges",
    "evaluate",
    "wrap_access",
    "wrap_resource_access",
    "create_roles_resource",
    "ensure_super_admin_not_deleted",
    "ensure_super_admin_slug_not_taken",
    "ensure_super_admin_slug_unchanged",
    "sync_super_admin",
    "assign_super_admin_to_first_principal",
    "create_first_principal_hook",
    "get_current_principal",
    "require_privileges",
    "require_privilege",
    "resource_access",
    "install_error_handler",
]
