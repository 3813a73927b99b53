"""
Configuration root - wires the catalog, the roles resource, access wrapping
and the super-admin lifecycle into a host's resource declarations.

Typical flow:

1. ``configure(resources)`` at startup: catalog every resource, append the
   roles resource and wrap each resource's access with its privileges.
2. ``await on_init(role_store, discovered)`` once the host is running:
   catalog resources registered late, then sync the super-admin role.
3. ``with_first_principal_hook(...)`` so the first principal becomes
   super-admin.
"""

import logging
from typing import Any, Iterable, List, Optional, Set

from .exceptions import ConfigurationError
from .models import ResourceDescriptor, ResourceKind
from .privileges.catalog import PrivilegeCatalog
from .rbac.models import Role
from .rbac.roles import ROLES_SLUG, create_roles_resource
from .rbac.superadmin import create_first_principal_hook, sync_super_admin
from .rbac.wrapping import wrap_resource_access
from .settings import Settings

logger = logging.getLogger(__name__)


class RolesPrivileges:
    """
    Roles and privileges for a set of host resources.

    Args:
        settings: Plugin settings. Defaults to ``Settings()`` (environment).
        catalog: Catalog service to populate. A new one is built from the
            settings when omitted.

    Example:
        >>> plugin = RolesPrivileges(Settings(exclude_collections=["media"]))
        >>> resources = plugin.configure([posts, media, site_settings])
        >>> await plugin.on_init(store)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        catalog: Optional[PrivilegeCatalog] = None,
    ):
        self.settings = settings or Settings()
        self.settings.validate_configuration()
        self.catalog = catalog or PrivilegeCatalog(
            locales=self.settings.locales,
            warn_on_override=self.settings.warn_on_privilege_override,
        )
        self.roles_resource: Optional[ResourceDescriptor] = None
        self.resources: List[ResourceDescriptor] = []
        self._wrapped: Set[int] = set()

        if self.settings.debug:
            logging.getLogger("roles_privileges").setLevel(logging.DEBUG)

    def is_excluded(self, resource: ResourceDescriptor) -> bool:
        if resource.kind is ResourceKind.SINGLETON:
            return resource.slug in self.settings.exclude_singletons
        return resource.slug in self.settings.exclude_collections

    def _is_roles(self, resource: ResourceDescriptor) -> bool:
        return resource.kind is ResourceKind.COLLECTION and resource.slug == ROLES_SLUG

    def configure(
        self,
        resources: Iterable[ResourceDescriptor],
        custom_roles_resource: Optional[ResourceDescriptor] = None,
    ) -> List[ResourceDescriptor]:
        """
        Catalog and guard the host's resources.

        Args:
            resources: Resource declarations of the host.
            custom_roles_resource: Replacement for the default roles
                resource, typically built from ``create_roles_resource()``.

        Returns:
            The resource list with the roles resource appended. Descriptors
            are modified in place.

        Raises:
            ConfigurationError: If the roles resource slug is not ``roles``
                or the host already declares a ``roles`` collection.
        """
        resources = list(resources)
        if not self.settings.enable:
            logger.info("Roles & privileges disabled; resources left untouched")
            self.resources = resources
            return resources

        if any(self._is_roles(r) for r in resources):
            raise ConfigurationError(
                f"A '{ROLES_SLUG}' collection is already declared; "
                "pass it as custom_roles_resource instead",
                code="roles-resource-conflict",
            )

        for resource in resources:
            if not self.is_excluded(resource):
                self.catalog.generate_for_resource(resource)

        roles = custom_roles_resource or create_roles_resource(self.settings.locales)
        if not self._is_roles(roles):
            raise ConfigurationError(
                f"Custom roles resource must be a collection with slug '{ROLES_SLUG}'",
                code="invalid-roles-resource",
            )
        resources.append(roles)
        self.catalog.generate_for_resource(roles)
        self.roles_resource = roles
        self.resources = resources

        if self.settings.disabled:
            logger.info("Access wrapping disabled; privileges generated only")
            return resources

        for resource in resources:
            if self._should_wrap(resource):
                wrap_resource_access(resource)
                self._wrapped.add(id(resource))

        logger.info(
            f"Configured {len(self.catalog)} resources with "
            f"{len(self.catalog.all_privilege_keys())} privileges",
            extra={"wrapped": len(self._wrapped)},
        )
        return resources

    def _should_wrap(self, resource: ResourceDescriptor) -> bool:
        if self._is_roles(resource) or self.is_excluded(resource):
            return False
        if id(resource) in self._wrapped:
            return False
        if resource.kind is ResourceKind.SINGLETON:
            return self.settings.wrap_singleton_access
        return self.settings.wrap_collection_access

    def discover(self, resources: Iterable[ResourceDescriptor]) -> List[ResourceDescriptor]:
        """
        Catalog resources registered after configuration.

        Already cataloged, excluded and host-internal resources are skipped.
        Discovered resources are not wrapped.

        Returns:
            The newly cataloged resources.
        """
        found = []
        for resource in resources:
            if (
                self.catalog.has(resource.slug, resource.kind)
                or self.is_excluded(resource)
                or resource.slug in self.settings.internal_slugs
            ):
                continue
            logger.info(
                f"Discovered late-loaded {resource.kind.value}: {resource.slug}",
                extra={"resource_slug": resource.slug},
            )
            self.catalog.generate_for_resource(resource)
            found.append(resource)
        return found

    async def on_init(
        self, role_store: Any, discovered: Iterable[ResourceDescriptor] = ()
    ) -> Optional[Role]:
        """
        Initialization step run once the host is up.

        Returns:
            The synced super-admin role, or None when seeding is off or the
            store failed.
        """
        if not self.settings.enable:
            return None

        self.discover(discovered)

        if not self.settings.seed_super_admin:
            return None
        return await sync_super_admin(
            role_store,
            self.catalog.all_privilege_keys(),
            self.settings.default_locale,
        )

    def with_first_principal_hook(
        self, descriptor: Optional[ResourceDescriptor], role_store: Any
    ) -> Any:
        """
        Attach the bootstrap assigner to principal creation.

        The hook is appended to ``descriptor.hooks["after_change"]`` when a
        descriptor is given, otherwise registered on the store itself through
        ``add_principal_hook``. Descriptor hooks are run by the host after
        it creates a principal, as ``await hook(principal, operation="create")``.

        Returns:
            The hook.
        """
        hook = create_first_principal_hook(role_store, self.settings.roles_field_name)
        if descriptor is not None:
            descriptor.hooks.setdefault("after_change", []).append(hook)
        elif hasattr(role_store, "add_principal_hook"):
            role_store.add_principal_hook(hook)
        else:
            raise ConfigurationError(
                "A principal resource or a store supporting add_principal_hook is required",
                code="missing-principal-resource",
            )
        return hook


def setup_roles_privileges(
    resources: Iterable[ResourceDescriptor],
    settings: Optional[Settings] = None,
    custom_roles_resource: Optional[ResourceDescriptor] = None,
) -> RolesPrivileges:
    """
    Build and configure a ``RolesPrivileges`` root in one call.

    The configured resource list is available as ``.resources``.
    """
    plugin = RolesPrivileges(settings)
    plugin.configure(resources, custom_roles_resource)
    return plugin
