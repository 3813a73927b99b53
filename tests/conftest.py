import os
import sys

import pytest

# Ensure project root is on sys.path so tests can import the package under test
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from roles_privileges.models import Principal, ResourceDescriptor, ResourceKind  # noqa: E402
from roles_privileges.privileges import PrivilegeCatalog  # noqa: E402
from roles_privileges.rbac.models import Role  # noqa: E402
from roles_privileges.store import InMemoryRoleStore  # noqa: E402


@pytest.fixture
def catalog():
    """Fresh catalog service for each test"""
    return PrivilegeCatalog()


@pytest.fixture
def store():
    """Empty in-memory role store"""
    return InMemoryRoleStore()


@pytest.fixture
def posts():
    """Collection with localized labels"""
    return ResourceDescriptor(
        slug="posts",
        singular_label={"en": "Post", "fr": "Article"},
        plural_label={"en": "Posts", "fr": "Articles"},
    )


@pytest.fixture
def site_settings():
    """Singleton with localized label"""
    return ResourceDescriptor(
        slug="site-settings",
        kind=ResourceKind.SINGLETON,
        singular_label={"en": "Site Settings", "fr": "Paramètres du site"},
    )


@pytest.fixture
def editor_role():
    return Role(
        slug="editor",
        title="Editor",
        privileges=["posts-read", "posts-update"],
        id="role-editor",
    )


@pytest.fixture
def editor(editor_role):
    """Principal whose roles are already populated"""
    return Principal(id="user123", name="Jane Editor", roles=[editor_role])
