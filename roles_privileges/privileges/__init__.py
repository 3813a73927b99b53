"""
Privilege catalog: key derivation, localized metadata, custom privileges.
"""

from .catalog import PrivilegeCatalog
from .custom import CustomPrivilegeConfig, CustomPrivilegeRegistry
from .keys import encode, generate_privilege_key
from .labels import resolve_label, slug_to_label
from .models import CatalogEntry, CustomPrivilegeGroup, Privilege

__all__ = [
    "PrivilegeCatalog",
    "CustomPrivilegeConfig",
    "CustomPrivilegeRegistry",
    "CatalogEntry",
    "CustomPrivilegeGroup",
    "Privilege",
    "encode",
    "generate_privilege_key",
    "resolve_label",
    "slug_to_label",
]
