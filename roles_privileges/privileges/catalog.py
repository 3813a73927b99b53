"""
Privilege Catalog - generation and storage of every known privilege.

The catalog is an explicitly constructed service owned by the host's
configuration root. It is written during the configuration phase and read
while requests are served; every write swaps in a new mapping under a lock
so readers never observe a half-updated store.
"""

import logging
import threading
from typing import Dict, Iterable, List, Optional

from ..models import ResourceDescriptor, ResourceKind
from .custom import CustomPrivilegeRegistry, PrivilegeConfigLike
from .labels import DEFAULT_LOCALES, build_privilege, render_entry_description, resolve_label
from .models import CatalogEntry, CustomPrivilegeGroup, Privilege

logger = logging.getLogger(__name__)

_KINDS = (ResourceKind.COLLECTION, ResourceKind.SINGLETON)


class PrivilegeCatalog:
    """
    Catalog of generated and custom privileges, keyed by kind and slug.

    Example:
        >>> catalog = PrivilegeCatalog()
        >>> catalog.generate_for_resource(ResourceDescriptor(slug="posts"))
        >>> catalog.register_custom_privilege("posts", {
        ...     "privilegeKey": "posts-publish",
        ...     "label": {"en": "Publish Posts"},
        ... })
        >>> "posts-publish" in catalog.all_privilege_keys()
        True
    """

    def __init__(
        self,
        locales: Iterable[str] = DEFAULT_LOCALES,
        custom_registry: Optional[CustomPrivilegeRegistry] = None,
        warn_on_override: bool = True,
    ):
        self.locales = tuple(locales)
        self.custom_registry = custom_registry or CustomPrivilegeRegistry()
        self.warn_on_override = warn_on_override
        self._lock = threading.RLock()
        self._entries: Dict[ResourceKind, Dict[str, CatalogEntry]] = {
            kind: {} for kind in _KINDS
        }

    # Generation
    def generate_for_resource(self, resource: ResourceDescriptor) -> CatalogEntry:
        """
        Generate and store the catalog entry of a resource.

        Re-generating a slug replaces the generated privileges while custom
        privileges registered for it are merged in again.

        Args:
            resource: Resource declaration.

        Returns:
            The stored catalog entry.
        """
        if resource.kind is ResourceKind.SINGLETON:
            return self.generate_singleton_privileges(resource)
        return self.generate_collection_privileges(resource)

    def generate_collection_privileges(self, resource: ResourceDescriptor) -> CatalogEntry:
        singular = resolve_label(resource.singular_label, resource.slug, self.locales)
        plural = resolve_label(
            resource.plural_label, resource.slug, self.locales, plural=True
        )
        # A locale declared on only one of the labels still gets both
        singular = _align(singular, plural, resource.slug)
        plural = _align(plural, singular, resource.slug)

        entry = CatalogEntry(
            slug=resource.slug,
            kind=ResourceKind.COLLECTION,
            label=plural,
            description=render_entry_description(ResourceKind.COLLECTION, plural),
            privileges={
                operation: build_privilege(
                    resource.slug, ResourceKind.COLLECTION, operation, singular, plural
                )
                for operation in resource.operations
            },
        )
        return self._store(entry)

    def generate_singleton_privileges(self, resource: ResourceDescriptor) -> CatalogEntry:
        label = resolve_label(resource.singular_label, resource.slug, self.locales)

        entry = CatalogEntry(
            slug=resource.slug,
            kind=ResourceKind.SINGLETON,
            label=label,
            description=render_entry_description(ResourceKind.SINGLETON, label),
            privileges={
                operation: build_privilege(
                    resource.slug, ResourceKind.SINGLETON, operation, label, label
                )
                for operation in resource.operations
            },
        )
        return self._store(entry)

    def _store(self, entry: CatalogEntry) -> CatalogEntry:
        with self._lock:
            group = self.custom_registry.get(entry.slug)
            if group is not None and group.kind is entry.kind:
                self._merge(entry, group.privileges.values())

            entries = dict(self._entries[entry.kind])
            entries[entry.slug] = entry
            self._entries = {**self._entries, entry.kind: entries}

        logger.info(
            f"Generated {len(entry.privileges)} privileges for {entry.kind.value} '{entry.slug}'",
            extra={"resource_slug": entry.slug, "kind": entry.kind.value},
        )
        return entry

    def _merge(self, entry: CatalogEntry, privileges: Iterable[Privilege]) -> None:
        generated = {
            p.privilege_key for p in entry.privileges.values() if not p.is_custom
        }
        for privilege in privileges:
            if privilege.privilege_key in generated and self.warn_on_override:
                logger.warning(
                    f"Custom privilege '{privilege.privilege_key}' overrides a generated privilege",
                    extra={"resource_slug": entry.slug},
                )
            # Collisions resolve by key: the custom definition takes the generated slot
            slot = privilege.privilege_key
            for name, existing in entry.privileges.items():
                if existing.privilege_key == privilege.privilege_key:
                    slot = name
                    break
            entry.privileges[slot] = privilege

    # Custom privileges
    def register_custom_privilege(
        self,
        resource_slug: str,
        config: PrivilegeConfigLike,
        group_label: Optional[Dict[str, str]] = None,
        kind: ResourceKind = ResourceKind.COLLECTION,
    ) -> Privilege:
        """
        Register a custom privilege and merge it into an existing entry.

        Custom privileges never guard resource access on their own; check
        them explicitly with ``has_privilege`` or ``check_privilege``.

        Returns:
            The registered privilege.
        """
        privilege = self.custom_registry.register(
            resource_slug, config, group_label=group_label, kind=kind
        )
        group = self.custom_registry.get(resource_slug)

        with self._lock:
            existing = self._entries[group.kind].get(resource_slug)
            if existing is not None:
                entry = existing.copy()
                self._merge(entry, [privilege])
                entries = dict(self._entries[group.kind])
                entries[resource_slug] = entry
                self._entries = {**self._entries, group.kind: entries}

        return privilege

    def register_custom_privileges(
        self,
        resource_slug: str,
        configs: Iterable[PrivilegeConfigLike],
        group_label: Optional[Dict[str, str]] = None,
        kind: ResourceKind = ResourceKind.COLLECTION,
    ) -> List[Privilege]:
        return [
            self.register_custom_privilege(
                resource_slug, config, group_label=group_label, kind=kind
            )
            for config in configs
        ]

    # Queries
    def get(
        self, slug: str, kind: ResourceKind = ResourceKind.COLLECTION
    ) -> Optional[CatalogEntry]:
        return self._entries[ResourceKind(kind)].get(slug)

    def has(self, slug: str, kind: ResourceKind = ResourceKind.COLLECTION) -> bool:
        return slug in self._entries[ResourceKind(kind)]

    def slugs(self, kind: ResourceKind = ResourceKind.COLLECTION) -> List[str]:
        return list(self._entries[ResourceKind(kind)].keys())

    def entries(self, kind: Optional[ResourceKind] = None) -> List[CatalogEntry]:
        """Entries of one kind, or collections followed by singletons."""
        snapshot = self._entries
        kinds = _KINDS if kind is None else (ResourceKind(kind),)
        return [entry for k in kinds for entry in snapshot[k].values()]

    def all_privileges(self) -> List[Privilege]:
        """
        Every known privilege: all entries plus custom groups that have no
        generated entry of their kind.
        """
        privileges: List[Privilege] = []
        seen = set()
        for group in self.privilege_groups():
            for privilege in group.privileges.values():
                if privilege.privilege_key not in seen:
                    seen.add(privilege.privilege_key)
                    privileges.append(privilege)
        return privileges

    def all_privilege_keys(self) -> List[str]:
        return [privilege.privilege_key for privilege in self.all_privileges()]

    def privilege_groups(
        self, kind: Optional[ResourceKind] = None
    ) -> List[CustomPrivilegeGroup]:
        """
        Group view used by privilege selectors.

        One group per catalog entry, followed by custom-only groups whose
        resource was never generated.
        """
        snapshot = self._entries
        kinds = _KINDS if kind is None else (ResourceKind(kind),)
        groups: List[CustomPrivilegeGroup] = []
        for k in kinds:
            for entry in snapshot[k].values():
                groups.append(
                    CustomPrivilegeGroup(
                        slug=entry.slug,
                        kind=entry.kind,
                        label=dict(entry.label),
                        privileges=dict(entry.privileges),
                    )
                )
            for custom in self.custom_registry.groups():
                if custom.kind is k and custom.slug not in snapshot[k]:
                    groups.append(custom.copy())
        return groups

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._entries.values())


def _align(primary: Dict[str, str], other: Dict[str, str], slug: str) -> Dict[str, str]:
    aligned = dict(primary)
    fallback = primary.get("en") or next(iter(primary.values()), slug)
    for locale in other:
        if locale not in aligned:
            aligned[locale] = fallback
    return aligned
