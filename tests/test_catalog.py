"""
Tests for the privilege catalog and custom privileges
"""

import logging

import pytest
from pydantic import ValidationError

from roles_privileges.models import ResourceDescriptor, ResourceKind
from roles_privileges.privileges import (
    CustomPrivilegeConfig,
    CustomPrivilegeRegistry,
    PrivilegeCatalog,
)

PUBLISH = {
    "privilegeKey": "posts-publish",
    "label": {"en": "Publish Posts", "fr": "Publier les articles"},
    "description": {"en": "Ability to publish posts"},
}

EXPECTED_KEYS = [
    "posts-create",
    "posts-read",
    "posts-update",
    "posts-delete",
    "posts-admin",
    "posts-readVersions",
    "posts-unlock",
    "site-settings-read",
    "site-settings-update",
    "site-settings-readDrafts",
    "site-settings-readVersions",
]


class TestCatalogGeneration:
    """Test automatic privilege generation"""

    def test_collection_and_singleton_keys(self, catalog, posts, site_settings):
        """A collection and a singleton produce exactly eleven keys"""
        catalog.generate_for_resource(posts)
        catalog.generate_for_resource(site_settings)

        assert catalog.all_privilege_keys() == EXPECTED_KEYS
        assert len(catalog) == 2

    def test_collection_entry(self, catalog, posts):
        entry = catalog.generate_for_resource(posts)

        assert entry.kind is ResourceKind.COLLECTION
        assert entry.label == {"en": "Posts", "fr": "Articles"}
        assert entry.description["en"] == "Manage posts in the system"
        assert list(entry.privileges) == list(posts.operations)
        assert catalog.get("posts") is entry

    def test_singleton_entry(self, catalog, site_settings):
        entry = catalog.generate_for_resource(site_settings)

        assert entry.kind is ResourceKind.SINGLETON
        assert entry.privilege_keys() == [
            "site-settings-read",
            "site-settings-update",
            "site-settings-readDrafts",
            "site-settings-readVersions",
        ]
        assert entry.description["en"] == "Manage site settings global settings"
        assert catalog.has("site-settings", ResourceKind.SINGLETON)
        assert not catalog.has("site-settings")

    def test_same_slug_in_both_kinds(self, catalog):
        catalog.generate_for_resource(ResourceDescriptor(slug="config"))
        catalog.generate_for_resource(
            ResourceDescriptor(slug="config", kind=ResourceKind.SINGLETON)
        )

        assert catalog.slugs(ResourceKind.COLLECTION) == ["config"]
        assert catalog.slugs(ResourceKind.SINGLETON) == ["config"]
        assert catalog.all_privilege_keys().count("config-read") == 1

    def test_label_declared_in_one_form_only(self, catalog):
        """A locale present on only one label is filled for the other"""
        entry = catalog.generate_for_resource(
            ResourceDescriptor(
                slug="media",
                singular_label={"en": "Media", "es": "Medio"},
                plural_label={"en": "Media"},
            )
        )
        assert entry.label["es"] == "Media"
        assert entry.privileges["read"].label["es"] == "Read Medio"

    def test_regeneration_replaces_entry(self, catalog, posts):
        first = catalog.generate_for_resource(posts)
        second = catalog.generate_for_resource(posts)

        assert first is not second
        assert catalog.get("posts") is second
        assert len(catalog) == 1

    def test_reader_snapshot_is_stable(self, catalog, posts, site_settings):
        catalog.generate_for_resource(posts)
        entries = catalog.entries()

        catalog.generate_for_resource(site_settings)

        assert [e.slug for e in entries] == ["posts"]
        assert [e.slug for e in catalog.entries()] == ["posts", "site-settings"]


class TestCustomPrivileges:
    """Test custom privilege registration and merging"""

    def test_custom_after_generation_is_merged(self, catalog, posts):
        catalog.generate_for_resource(posts)
        privilege = catalog.register_custom_privilege("posts", PUBLISH)

        assert privilege.is_custom
        assert catalog.get("posts").privileges["posts-publish"] is privilege
        assert catalog.all_privilege_keys()[-1] == "posts-publish"

    def test_custom_before_generation_is_merged(self, catalog, posts):
        catalog.register_custom_privilege("posts", PUBLISH)
        entry = catalog.generate_for_resource(posts)

        assert "posts-publish" in entry.privilege_keys()

    def test_custom_only_group(self, catalog):
        catalog.register_custom_privilege(
            "reports",
            {"privilegeKey": "reports-export", "label": {"en": "Export Reports"}},
        )

        groups = catalog.privilege_groups()
        assert [g.slug for g in groups] == ["reports"]
        assert groups[0].label == {"_default": "reports"}
        assert catalog.all_privilege_keys() == ["reports-export"]

    def test_singleton_group(self, catalog, site_settings):
        catalog.generate_for_resource(site_settings)
        catalog.register_custom_privileges(
            "site-settings",
            [
                {"privilegeKey": "site-settings-manage-logo", "label": {"en": "Manage Logo"}},
                {"privilegeKey": "site-settings-change-name", "label": {"en": "Change Name"}},
            ],
            kind=ResourceKind.SINGLETON,
        )

        keys = catalog.get("site-settings", ResourceKind.SINGLETON).privilege_keys()
        assert keys[-2:] == ["site-settings-manage-logo", "site-settings-change-name"]

    def test_kind_mismatch_is_not_merged(self, catalog, posts):
        """A singleton group never merges into a collection entry"""
        catalog.generate_for_resource(posts)
        catalog.register_custom_privilege(
            "posts", PUBLISH, kind=ResourceKind.SINGLETON
        )

        assert "posts-publish" not in catalog.get("posts").privilege_keys()
        assert "posts-publish" in catalog.all_privilege_keys()

    def test_override_of_generated_key(self, catalog, posts, caplog):
        catalog.generate_for_resource(posts)

        with caplog.at_level(logging.WARNING):
            catalog.register_custom_privilege(
                "posts",
                {"privilegeKey": "posts-read", "label": {"en": "Read Published Posts"}},
            )

        entry = catalog.get("posts")
        assert entry.privileges["read"].label == {"en": "Read Published Posts"}
        assert entry.privileges["read"].is_custom
        assert entry.privilege_keys().count("posts-read") == 1
        assert "overrides a generated privilege" in caplog.text

    def test_override_without_warning(self, posts, caplog):
        catalog = PrivilegeCatalog(warn_on_override=False)
        catalog.generate_for_resource(posts)

        with caplog.at_level(logging.WARNING):
            catalog.register_custom_privilege(
                "posts", {"privilegeKey": "posts-read", "label": {"en": "Read"}}
            )

        assert "overrides" not in caplog.text

    def test_redefinition_last_write_wins(self):
        registry = CustomPrivilegeRegistry()
        registry.register("posts", PUBLISH)
        registry.register(
            "posts", {"privilegeKey": "posts-publish", "label": {"en": "Publish"}}
        )

        group = registry.get("posts")
        assert list(group.privileges) == ["posts-publish"]
        assert group.privileges["posts-publish"].label == {"en": "Publish"}

    def test_first_registration_fixes_group(self):
        registry = CustomPrivilegeRegistry()
        registry.register("posts", PUBLISH, group_label={"en": "Posts"})
        registry.register(
            "posts",
            {"privilegeKey": "posts-feature", "label": {"en": "Feature Posts"}},
            group_label={"en": "Other"},
            kind=ResourceKind.SINGLETON,
        )

        group = registry.get("posts")
        assert group.label == {"en": "Posts"}
        assert group.kind is ResourceKind.COLLECTION
        assert "posts" in registry
        assert len(registry) == 1


class TestCustomPrivilegeConfig:
    """Test validation of custom privilege definitions"""

    def test_alias_and_field_name(self):
        by_alias = CustomPrivilegeConfig.model_validate(PUBLISH)
        by_name = CustomPrivilegeConfig(
            privilege_key="posts-publish", label={"en": "Publish Posts"}
        )
        assert by_alias.privilege_key == by_name.privilege_key == "posts-publish"

    def test_whitespace_in_key_rejected(self):
        with pytest.raises(ValidationError):
            CustomPrivilegeConfig(privilege_key="posts publish", label={"en": "Publish"})

    def test_empty_label_rejected(self):
        with pytest.raises(ValidationError):
            CustomPrivilegeConfig(privilege_key="posts-publish", label={"en": " "})

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            CustomPrivilegeConfig.model_validate({**PUBLISH, "icon": "star"})

    def test_localized_accessors(self):
        privilege = CustomPrivilegeConfig.model_validate(PUBLISH).to_privilege()

        assert privilege.get_label("fr") == "Publier les articles"
        assert privilege.get_label("de") == "Publish Posts"
        assert privilege.get_description("fr") == "Ability to publish posts"
        assert privilege.to_dict()["privilegeKey"] == "posts-publish"
        assert privilege.to_dict()["isCustom"] is True
