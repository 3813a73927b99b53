"""
Blog Demo - Roles & Privileges for a small content API

This example wires roles-privileges-py into a FastAPI application:

1. Resources (posts, pages, media, site settings, header) are declared
2. Custom privileges are registered (publish/feature posts, manage logo,
   change site name)
3. The plugin catalogs every resource and wraps its access
4. On startup the super-admin role is synced with every privilege
5. The first user created becomes super-admin

## Usage Instructions

1. **Start the server:**
   ```bash
   uvicorn examples.blog_demo:app --reload
   ```

2. **Create users** (the first one becomes super-admin):
   ```bash
   curl -X POST localhost:8000/users -H 'content-type: application/json' \\
        -d '{"id": "alice", "name": "Alice"}'
   ```

3. **Call endpoints as a user** with the development header
   ``X-User-Id: alice``. Authentication itself is out of scope here; a
   real application sets ``request.state.principal`` from its own
   authentication middleware.
"""

import logging
import uuid
from contextlib import asynccontextmanager
from dataclasses import replace
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel

from roles_privileges import (
    AccessContext,
    InMemoryRoleStore,
    Principal,
    ResourceDescriptor,
    ResourceKind,
    RolesPrivileges,
    Settings,
)
from roles_privileges.rbac import (
    AccessResult,
    RoleInput,
    check_privilege,
    get_current_principal,
    install_error_handler,
    require_privilege,
    resource_access,
)

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

PUBLISH_POSTS = {
    "privilegeKey": "posts-publish",
    "label": {"en": "Publish Posts", "fr": "Publier les articles"},
    "description": {
        "en": "Ability to publish posts to make them publicly visible",
        "fr": "Capacité de publier des articles pour les rendre publiquement visibles",
    },
}

FEATURE_POSTS = {
    "privilegeKey": "posts-feature",
    "label": {"en": "Feature Posts", "fr": "Mettre en vedette les articles"},
    "description": {
        "en": "Ability to feature posts on the homepage",
        "fr": "Capacité de mettre en vedette des articles sur la page d'accueil",
    },
}

SITE_SETTINGS_PRIVILEGES = [
    {
        "privilegeKey": "site-settings-manage-logo",
        "label": {"en": "Manage Logo", "fr": "Gérer le logo"},
        "description": {
            "en": "Ability to update the site logo",
            "fr": "Capacité de mettre à jour le logo du site",
        },
    },
    {
        "privilegeKey": "site-settings-change-name",
        "label": {"en": "Change Site Name", "fr": "Changer le nom du site"},
        "description": {
            "en": "Ability to modify the site name",
            "fr": "Capacité de modifier le nom du site",
        },
    },
]


# ================== DATA MODELS ==================


class UserIn(BaseModel):
    id: str
    name: Optional[str] = None


class PostIn(BaseModel):
    title: str
    content: str = ""


class PostUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    status: Optional[str] = None
    featured: Optional[bool] = None


class SiteSettingsUpdate(BaseModel):
    site_name: Optional[str] = None
    logo: Optional[str] = None


# ================== HELPERS ==================


def own_posts_only(ctx: AccessContext) -> Any:
    """Authors edit their own posts; post admins edit everything."""
    if ctx.principal is None:
        return False
    if check_privilege("posts-admin", ctx.principal):
        return True
    return {"author": {"equals": ctx.principal.id}}


def matches(doc: Dict[str, Any], where: Optional[Dict[str, Any]]) -> bool:
    """Evaluate the ``{"field": {"equals": value}}`` filters used here."""
    if not where:
        return True
    return all(doc.get(name) == cond.get("equals") for name, cond in where.items())


def apply_access(access: AccessResult, docs: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    if access.is_scoped:
        return [doc for doc in docs if matches(doc, access.filter)]
    return docs


def build_resources() -> List[ResourceDescriptor]:
    return [
        ResourceDescriptor(slug="users", singular_label="User", plural_label="Users"),
        ResourceDescriptor(
            slug="posts",
            singular_label={"en": "Blog Post", "fr": "Article de blog"},
            plural_label={"en": "Blog Posts", "fr": "Articles de blog"},
            access={"read": True, "update": own_posts_only},
        ),
        ResourceDescriptor(slug="pages"),
        ResourceDescriptor(slug="media"),
        ResourceDescriptor(
            slug="site-settings",
            kind=ResourceKind.SINGLETON,
            singular_label={"en": "Site Settings", "fr": "Paramètres du site"},
        ),
        ResourceDescriptor(slug="header", kind=ResourceKind.SINGLETON),
    ]


# ================== APPLICATION ==================


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the demo application with its own store and catalog."""
    settings = settings or Settings(exclude_collections=["media"])
    store = InMemoryRoleStore(locale=settings.default_locale)
    plugin = RolesPrivileges(settings)

    plugin.catalog.register_custom_privileges("posts", [PUBLISH_POSTS, FEATURE_POSTS])
    plugin.catalog.register_custom_privileges(
        "site-settings", SITE_SETTINGS_PRIVILEGES, kind=ResourceKind.SINGLETON
    )

    resources = {r.slug: r for r in plugin.configure(build_resources())}
    plugin.with_first_principal_hook(None, store)

    posts_db: Dict[str, Dict[str, Any]] = {}
    site_settings_db: Dict[str, Any] = {"site_name": "My Blog", "logo": None}

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Sync the super-admin role once the application starts"""
        await plugin.on_init(store)
        logger.info("Blog demo started")
        yield

    app = FastAPI(
        title="Roles & Privileges Blog Demo",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.role_store = store
    app.state.plugin = plugin
    install_error_handler(app)

    @app.middleware("http")
    async def development_principal(request: Request, call_next):
        """Resolve ``X-User-Id`` to a principal with populated roles"""
        user_id = request.headers.get("x-user-id")
        principal = await store.find_principal(user_id) if user_id else None
        if principal is not None:
            roles = [await store.find_by_id(role_id) for role_id in principal.role_refs()]
            principal = replace(principal, roles=[r for r in roles if r is not None])
        request.state.principal = principal
        return await call_next(request)

    @app.get("/")
    async def root():
        return {"message": "Roles & Privileges blog demo"}

    @app.get("/privileges")
    async def list_privileges(locale: str = "en"):
        """Privilege selector data, one group per resource"""
        return {
            "groups": [
                {
                    "slug": group.slug,
                    "kind": group.kind.value,
                    "label": group.label.get(locale) or group.label.get("_default"),
                    "privileges": [
                        {
                            "privilegeKey": p.privilege_key,
                            "label": p.get_label(locale),
                            "description": p.get_description(locale),
                        }
                        for p in group.privileges.values()
                    ],
                }
                for group in plugin.catalog.privilege_groups()
            ]
        }

    # Users
    @app.post("/users", status_code=201)
    async def create_user(user: UserIn):
        principal = await store.create_principal(Principal(id=user.id, name=user.name))
        return principal.to_dict()

    # Posts
    @app.get("/posts")
    async def list_posts(access: AccessResult = resource_access(resources["posts"], "read")):
        return {"posts": apply_access(access, list(posts_db.values()))}

    @app.post("/posts", status_code=201)
    async def create_post(
        post: PostIn,
        request: Request,
        access: AccessResult = resource_access(resources["posts"], "create"),
    ):
        principal = get_current_principal(request)
        doc = {
            "id": str(uuid.uuid4()),
            "author": principal.id,
            "status": "draft",
            "featured": False,
            **post.model_dump(),
        }
        posts_db[doc["id"]] = doc
        return doc

    @app.patch("/posts/{id}")
    async def update_post(
        id: str,
        changes: PostUpdate,
        request: Request,
        access: AccessResult = resource_access(resources["posts"], "update"),
    ):
        doc = posts_db.get(id)
        if doc is None or not matches(doc, access.filter if access.is_scoped else None):
            raise HTTPException(status_code=404, detail="Post not found")

        principal = get_current_principal(request)
        data = changes.model_dump(exclude_unset=True)
        if data.get("status") == "published" and not check_privilege("posts-publish", principal):
            raise HTTPException(status_code=403, detail="Publishing requires posts-publish")
        if "featured" in data and not check_privilege("posts-feature", principal):
            raise HTTPException(status_code=403, detail="Featuring requires posts-feature")

        doc.update(data)
        return doc

    # Site settings
    @app.get("/site-settings")
    async def read_site_settings(
        access: AccessResult = resource_access(resources["site-settings"], "read"),
    ):
        return site_settings_db

    @app.patch("/site-settings")
    async def update_site_settings(
        changes: SiteSettingsUpdate,
        request: Request,
        access: AccessResult = resource_access(resources["site-settings"], "update"),
    ):
        principal = get_current_principal(request)
        data = changes.model_dump(exclude_unset=True)
        if "site_name" in data and not check_privilege("site-settings-change-name", principal):
            raise HTTPException(status_code=403, detail="Insufficient privileges")
        if "logo" in data and not check_privilege("site-settings-manage-logo", principal):
            raise HTTPException(status_code=403, detail="Insufficient privileges")
        site_settings_db.update(data)
        return site_settings_db

    # Roles
    @app.get("/roles")
    async def list_roles(
        access: AccessResult = resource_access(plugin.roles_resource, "read"),
    ):
        return {"roles": [role.to_dict() for role in await store.list_roles()]}

    @app.post("/roles", status_code=201)
    async def create_role(role: RoleInput, _: None = require_privilege("roles-create")):
        created = await store.create(role.model_dump())
        return created.to_dict()

    @app.delete("/roles/{id}")
    async def delete_role(
        id: str,
        access: AccessResult = resource_access(plugin.roles_resource, "delete"),
    ):
        if not await store.delete(id):
            raise HTTPException(status_code=404, detail="Role not found")
        return {"deleted": id}

    @app.post("/users/{user_id}/roles/{role_id}")
    async def assign_role(
        user_id: str, role_id: str, _: None = require_privilege("roles-update")
    ):
        principal = await store.find_principal(user_id)
        if principal is None:
            raise HTTPException(status_code=404, detail="User not found")
        roles = [r for r in principal.role_refs() if r != role_id] + [role_id]
        updated = await store.update_principal(user_id, {"roles": roles})
        return updated.to_dict()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    print("Starting roles-privileges-py blog demo...")
    print("Visit http://localhost:8000/docs for the API documentation")

    uvicorn.run(app, host="127.0.0.1", port=8000)
