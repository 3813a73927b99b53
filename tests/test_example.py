"""
Integration test running the blog example end to end
"""

from fastapi.testclient import TestClient


def as_user(user_id):
    return {"X-User-Id": user_id}


def test_blog_demo_flow():
    """First user is super-admin, others need roles"""
    from examples.blog_demo import create_app

    with TestClient(create_app()) as client:
        assert client.get("/").status_code == 200

        alice = client.post("/users", json={"id": "alice", "name": "Alice"}).json()
        bob = client.post("/users", json={"id": "bob", "name": "Bob"}).json()
        assert len(alice["roles"]) == 1
        assert bob["roles"] is None

        roles = client.get("/roles").json()["roles"]
        super_admin = next(r for r in roles if r["slug"] == "super-admin")
        assert super_admin["id"] == alice["roles"][0]
        keys = [row["privilege"] for row in super_admin["privileges"]]
        assert "posts-publish" in keys
        assert "site-settings-change-name" in keys
        assert "media-read" not in keys

        # Anonymous and role-less users are denied
        assert client.get("/posts").status_code == 403
        assert client.get("/posts", headers=as_user("bob")).status_code == 403

        first = client.post("/posts", json={"title": "Hello"}, headers=as_user("alice"))
        assert first.status_code == 201
        alice_post = first.json()["id"]

        author = client.post(
            "/roles",
            json={
                "slug": "author",
                "title": "Author",
                "privileges": ["posts-read", "posts-create", "posts-update"],
            },
            headers=as_user("alice"),
        ).json()
        response = client.post(
            "/roles",
            json={"slug": "super-admin", "title": "Mine", "privileges": ["posts-read"]},
            headers=as_user("alice"),
        )
        assert response.status_code == 400
        assert response.json()["error"] == "error-cannot-assign-super-admin-slug"

        response = client.post(f"/users/bob/roles/{author['id']}", headers=as_user("alice"))
        assert response.json()["roles"] == [author["id"]]

        bob_post = client.post(
            "/posts", json={"title": "Draft"}, headers=as_user("bob")
        ).json()["id"]
        assert len(client.get("/posts", headers=as_user("bob")).json()["posts"]) == 2

        # Updates are scoped to the author's own posts
        response = client.patch(f"/posts/{alice_post}", json={"title": "Mine"}, headers=as_user("bob"))
        assert response.status_code == 404
        response = client.patch(f"/posts/{bob_post}", json={"title": "Edited"}, headers=as_user("bob"))
        assert response.json()["title"] == "Edited"

        # Publishing needs the custom privilege
        response = client.patch(
            f"/posts/{bob_post}", json={"status": "published"}, headers=as_user("bob")
        )
        assert response.status_code == 403
        response = client.patch(
            f"/posts/{bob_post}", json={"status": "published"}, headers=as_user("alice")
        )
        assert response.json()["status"] == "published"

        assert client.patch(
            "/site-settings", json={"site_name": "New"}, headers=as_user("bob")
        ).status_code == 403
        assert client.patch(
            "/site-settings", json={"site_name": "New"}, headers=as_user("alice")
        ).json()["site_name"] == "New"

        # The super-admin role cannot be deleted
        response = client.delete(
            f"/roles/{super_admin['id']}",
            headers={**as_user("alice"), "Accept-Language": "fr"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "error-cannot-delete-super-admin"
        assert response.json()["detail"] == "Impossible de supprimer le rôle Super Admin"

        assert client.delete(f"/roles/{author['id']}", headers=as_user("alice")).status_code == 200
        assert client.get("/posts", headers=as_user("bob")).status_code == 403


def test_privilege_selector():
    from examples.blog_demo import create_app

    with TestClient(create_app()) as client:
        groups = {g["slug"]: g for g in client.get("/privileges?locale=fr").json()["groups"]}

        assert "media" not in groups
        assert groups["posts"]["label"] == "Articles de blog"
        labels = [p["label"] for p in groups["posts"]["privileges"]]
        assert "Lire Article de blog" in labels
        assert "Publier les articles" in labels
        assert groups["site-settings"]["kind"] == "singleton"
        assert groups["header"]["label"] == "Header"
