"""
Tests for privilege evaluation
"""

import pytest

from roles_privileges.models import AccessContext, Principal
from roles_privileges.rbac.engine import (
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
    satisfies,
)
from roles_privileges.rbac.models import Role


class SyncRoleStore:
    """Role store with synchronous lookups"""

    def __init__(self, *roles):
        self.roles = {role.id: role for role in roles}
        self.lookups = []

    def find_by_id(self, role_id):
        self.lookups.append(role_id)
        return self.roles.get(role_id)


class TestRequirementMatching:
    """Test OR-of-AND requirement semantics"""

    def test_and_within_group(self):
        assert satisfies([["a", "b"]], {"a", "b", "c"})
        assert not satisfies([["a", "b"]], {"a"})

    def test_or_across_groups(self):
        assert satisfies([["a", "b"], ["c"]], {"c"})
        assert not satisfies([["a", "b"], ["c"]], {"b"})

    def test_empty_requirement_never_matches(self):
        assert not satisfies([], {"a"})

    def test_bare_string_rejected(self):
        with pytest.raises(TypeError):
            privileges_access("posts-read")
        with pytest.raises(TypeError):
            privileges_access(["posts-read"])


class TestEvaluate:
    """Test evaluation against principals"""

    @pytest.mark.asyncio
    async def test_editor_scenario(self, editor):
        """Editor holds posts-read and posts-update only"""
        assert not await evaluate([["posts-update", "posts-delete"]], editor)
        assert await evaluate([["posts-update"], ["posts-delete"]], editor)

    @pytest.mark.asyncio
    async def test_missing_principal_denied(self):
        assert not await evaluate([["posts-read"]], None)

    @pytest.mark.asyncio
    async def test_empty_requirement_denied(self, editor):
        assert not await evaluate([], editor)

    @pytest.mark.asyncio
    async def test_principal_without_roles(self):
        assert not await evaluate([["posts-read"]], Principal(id="nobody"))

    @pytest.mark.asyncio
    async def test_union_across_roles(self, editor_role):
        reviewer = Role(slug="reviewer", title="Reviewer", privileges=["posts-publish"])
        principal = Principal(id="user1", roles=[editor_role, reviewer])

        assert await evaluate([["posts-update", "posts-publish"]], principal)

    @pytest.mark.asyncio
    async def test_role_documents(self):
        principal = Principal(
            id="user1",
            roles=[
                {"slug": "editor", "privileges": [{"privilege": "posts-read"}]},
                {"slug": "author", "privileges": ["posts-create"]},
            ],
        )
        assert await effective_privileges(principal) == {"posts-read", "posts-create"}

    @pytest.mark.asyncio
    async def test_role_ids_resolved_through_store(self, store):
        role = await store.create(
            Role(slug="editor", title="Editor", privileges=["posts-read"])
        )
        principal = Principal(id="user1", roles=[role.id, {"id": role.id}])

        assert await evaluate([["posts-read"]], principal, store)
        assert not await evaluate([["posts-read"]], principal)

    @pytest.mark.asyncio
    async def test_sync_store_and_unknown_ids(self, editor_role):
        role_store = SyncRoleStore(editor_role)
        principal = Principal(id="user1", roles=["role-editor", "role-missing"])

        privileges = await effective_privileges(principal, role_store)

        assert privileges == {"posts-read", "posts-update"}
        assert role_store.lookups == ["role-editor", "role-missing"]


class TestPredicates:
    """Test predicates over an access context"""

    @pytest.mark.asyncio
    async def test_privileges_access(self, editor):
        access = privileges_access([["pages-create", "pages-read"], ["posts-read"]])

        assert access.requirement == (("pages-create", "pages-read"), ("posts-read",))
        assert await access(AccessContext(principal=editor))
        assert not await access(AccessContext())

    @pytest.mark.asyncio
    async def test_single_any_all(self, editor):
        ctx = AccessContext(principal=editor)

        assert await has_privilege("posts-read")(ctx)
        assert not await has_privilege("posts-delete")(ctx)
        assert await has_any_privilege("posts-delete", "posts-update")(ctx)
        assert not await has_any_privilege()(ctx)
        assert await has_all_privileges("posts-read", "posts-update")(ctx)
        assert not await has_all_privileges("posts-read", "posts-delete")(ctx)

    @pytest.mark.asyncio
    async def test_all_of_nothing_requires_authentication_only(self, editor):
        access = has_all_privileges()

        assert await access(AccessContext(principal=editor))
        assert not await access(AccessContext())

    @pytest.mark.asyncio
    async def test_context_role_store_used(self, editor_role):
        ctx = AccessContext(
            principal=Principal(id="user1", roles=["role-editor"]),
            role_store=SyncRoleStore(editor_role),
        )
        assert await has_privilege("posts-update")(ctx)


class TestSyncChecks:
    """Test synchronous checks over populated principals"""

    def test_check_privilege(self, editor):
        assert check_privilege("posts-read", editor)
        assert not check_privilege("posts-delete", editor)
        assert not check_privilege("posts-read", None)

    def test_check_variants(self, editor):
        assert check_privileges([["posts-delete"], ["posts-read"]], editor)
        assert check_any_privilege(["posts-delete", "posts-update"], editor)
        assert check_all_privileges(["posts-read", "posts-update"], editor)
        assert not check_all_privileges(["posts-read", "posts-delete"], editor)

    def test_role_ids_are_ignored(self):
        principal = Principal(id="user1", roles=["role-editor"])
        assert not check_privilege("posts-read", principal)
