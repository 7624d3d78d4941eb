"""
Tests API — admin pages/blocks/versions/collections + public storefront HTML
"""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from fastapi.testclient import TestClient

H = {"X-Admin-Token": "changeme"}


# ── Fixtures ──────────────────────────────────────────────────────────────

@pytest.fixture
def client(tmp_path):
    """Test client on a temporary SQLite database."""
    os.environ["DB_PATH"] = str(tmp_path / "test.db")
    os.environ.pop("ADMIN_TOKEN", None)

    from storefront.api.main import app
    from storefront.database import init_db
    init_db(os.environ["DB_PATH"])

    with TestClient(app) as c:
        yield c


def _page(client, slug="about", content=None, **kw) -> dict:
    body = {"title": slug.title(), "slug": slug, "content": content or [], **kw}
    r = client.post("/api/admin/pages", json=body, headers=H)
    assert r.status_code == 201, r.text
    return r.json()


def _product(client, name, price, **kw) -> str:
    r = client.post("/api/admin/products", json={"name": name, "price": price, **kw}, headers=H)
    assert r.status_code == 201, r.text
    return r.json()["id"]


def _collection(client, slug="summer", **kw) -> dict:
    r = client.post("/api/admin/collections", json={"title": slug.title(), "slug": slug, **kw}, headers=H)
    assert r.status_code == 201, r.text
    return r.json()


# ── Auth ──────────────────────────────────────────────────────────────────

class TestAdminAuth:
    def test_missing_token(self, client):
        assert client.get("/api/admin/pages").status_code == 403

    def test_query_token(self, client):
        assert client.get("/api/admin/pages?token=changeme").status_code == 200

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "ok"

    def test_collections_need_token(self, client):
        assert client.get("/api/admin/collections").status_code == 403
        assert client.get("/api/admin/collections", headers=H).status_code == 200


# ── Pages ─────────────────────────────────────────────────────────────────

class TestPages:
    def test_create_and_get(self, client):
        content = [{"id": "b2", "type": "faq", "content": {}}, {"id": "b1", "type": "hero", "content": {}}]
        page = _page(client, content=content)
        r = client.get(f"/api/admin/pages/{page['id']}", headers=H)
        assert [b["id"] for b in r.json()["content"]] == ["b2", "b1"]

    def test_duplicate_slug(self, client):
        _page(client, "about")
        r = client.post("/api/admin/pages", json={"title": "x", "slug": "about"}, headers=H)
        assert r.status_code == 409

    def test_duplicate_block_ids_rejected(self, client):
        page = _page(client)
        r = client.put(f"/api/admin/pages/{page['id']}/content", headers=H, json={"content": [
            {"id": "x", "type": "text"}, {"id": "x", "type": "faq"},
        ]})
        assert r.status_code == 422

    def test_replace_content_keeps_unknown_types(self, client):
        page = _page(client)
        content = [{"id": "a", "type": "legacy-slider", "content": {"speed": 2}}, {"id": "b", "type": "cta", "content": {}}]
        r = client.put(f"/api/admin/pages/{page['id']}/content", headers=H, json={"content": content})
        assert r.status_code == 200
        assert r.json()["content"] == content

    def test_update_metadata(self, client):
        page = _page(client)
        r = client.patch(f"/api/admin/pages/{page['id']}", headers=H,
                         json={"meta_title": "About us", "status": "published"})
        assert r.json()["meta_title"] == "About us"
        assert r.json()["status"] == "published"

    def test_single_home_page(self, client):
        a = _page(client, "a", is_home=True)
        b = _page(client, "b")
        client.patch(f"/api/admin/pages/{b['id']}", headers=H, json={"is_home": True})
        assert client.get(f"/api/admin/pages/{a['id']}", headers=H).json()["is_home"] is False
        assert client.get(f"/api/admin/pages/{b['id']}", headers=H).json()["is_home"] is True

    def test_delete(self, client):
        page = _page(client)
        assert client.delete(f"/api/admin/pages/{page['id']}", headers=H).status_code == 200
        assert client.get(f"/api/admin/pages/{page['id']}", headers=H).status_code == 404

    def test_list(self, client):
        _page(client, "a"); _page(client, "b")
        r = client.get("/api/admin/pages", headers=H)
        assert {p["slug"] for p in r.json()} == {"a", "b"}
        assert "content" not in r.json()[0]


# ── Blocks ────────────────────────────────────────────────────────────────

class TestBlocks:
    def test_add_block(self, client):
        page = _page(client, content=[{"id": "a", "type": "hero"}])
        r = client.post(f"/api/admin/pages/{page['id']}/blocks", headers=H,
                        json={"type": "collection-grid", "content": {"columns": 3}, "index": 0})
        assert r.status_code == 201
        content = r.json()["content"]
        assert content[0]["type"] == "collection-grid"
        assert content[1]["id"] == "a"

    def test_add_unknown_type(self, client):
        page = _page(client)
        r = client.post(f"/api/admin/pages/{page['id']}/blocks", headers=H, json={"type": "mystery"})
        assert r.status_code == 422

    def test_move(self, client):
        page = _page(client, content=[{"id": i, "type": "text"} for i in "abcd"])
        r = client.post(f"/api/admin/pages/{page['id']}/blocks/move", headers=H,
                        json={"block_id": "a", "target_id": "c"})
        assert [b["id"] for b in r.json()["content"]] == ["b", "c", "a", "d"]

    def test_move_to_index(self, client):
        page = _page(client, content=[{"id": i, "type": "text"} for i in "abc"])
        r = client.post(f"/api/admin/pages/{page['id']}/blocks/move", headers=H,
                        json={"block_id": "c", "index": 0})
        assert [b["id"] for b in r.json()["content"]] == ["c", "a", "b"]

    def test_move_unknown_block(self, client):
        page = _page(client, content=[{"id": "a", "type": "text"}])
        r = client.post(f"/api/admin/pages/{page['id']}/blocks/move", headers=H,
                        json={"block_id": "zz", "target_id": "a"})
        assert r.status_code == 404

    def test_edit_block(self, client):
        page = _page(client, content=[{"id": "a", "type": "cta", "content": {"title": "Hi", "variant": "dark"}}])
        r = client.patch(f"/api/admin/pages/{page['id']}/blocks/a", headers=H, json={"content": {"title": "Bye"}})
        assert r.json()["content"][0]["content"] == {"title": "Bye", "variant": "dark"}

    def test_remove_and_duplicate(self, client):
        page = _page(client, content=[{"id": "a", "type": "faq"}, {"id": "b", "type": "cta"}])
        r = client.post(f"/api/admin/pages/{page['id']}/blocks/a/duplicate", headers=H)
        ids = [b["id"] for b in r.json()["content"]]
        assert len(ids) == 3 and ids[0] == "a" and ids[2] == "b"
        r = client.delete(f"/api/admin/pages/{page['id']}/blocks/a", headers=H)
        assert [b["id"] for b in r.json()["content"]] == [ids[1], "b"]


# ── Versions ──────────────────────────────────────────────────────────────

class TestVersions:
    def test_snapshot_numbers(self, client):
        page = _page(client)
        v1 = client.post(f"/api/admin/pages/{page['id']}/versions", headers=H).json()
        v2 = client.post(f"/api/admin/pages/{page['id']}/versions", headers=H, json={"created_by": "ana"}).json()
        assert (v1["version_number"], v2["version_number"]) == (1, 2)
        listed = client.get(f"/api/admin/pages/{page['id']}/versions", headers=H).json()
        assert [v["version_number"] for v in listed] == [2, 1]

    def test_restore(self, client):
        page = _page(client, content=[{"id": "a", "type": "hero"}], meta_title="Old")
        v = client.post(f"/api/admin/pages/{page['id']}/versions", headers=H).json()
        client.put(f"/api/admin/pages/{page['id']}/content", headers=H, json={"content": []})
        client.patch(f"/api/admin/pages/{page['id']}", headers=H, json={"meta_title": "New"})
        r = client.post(f"/api/admin/pages/{page['id']}/versions/{v['id']}/restore", headers=H)
        assert r.json()["content"][0]["id"] == "a"
        assert r.json()["meta_title"] == "Old"

    def test_list_limited_to_20(self, client):
        page = _page(client)
        for _ in range(22):
            client.post(f"/api/admin/pages/{page['id']}/versions", headers=H)
        listed = client.get(f"/api/admin/pages/{page['id']}/versions", headers=H).json()
        assert len(listed) == 20
        assert listed[0]["version_number"] == 22


# ── Collections ───────────────────────────────────────────────────────────

class TestCollections:
    def test_membership(self, client):
        coll = _collection(client)
        pid = _product(client, "Tee", "10.00")
        r = client.post(f"/api/admin/collections/{coll['id']}/products", headers=H, json={"product_id": pid})
        assert r.json()["product_ids"] == [pid]
        # idempotent
        r = client.post(f"/api/admin/collections/{coll['id']}/products", headers=H, json={"product_id": pid})
        assert r.json()["product_ids"] == [pid]
        r = client.delete(f"/api/admin/collections/{coll['id']}/products/{pid}", headers=H)
        assert r.json()["product_ids"] == []

    def test_unknown_product(self, client):
        coll = _collection(client)
        r = client.post(f"/api/admin/collections/{coll['id']}/products", headers=H, json={"product_id": "nope"})
        assert r.status_code == 404

    def test_link_unknown_page(self, client):
        r = client.post("/api/admin/collections", headers=H, json={"title": "X", "slug": "x", "page_id": "nope"})
        assert r.status_code == 422

    def test_update_and_delete(self, client):
        coll = _collection(client)
        r = client.patch(f"/api/admin/collections/{coll['id']}", headers=H, json={"is_visible": False})
        assert r.json()["is_visible"] is False
        assert client.delete(f"/api/admin/collections/{coll['id']}", headers=H).status_code == 200
        assert client.get(f"/api/admin/collections/{coll['id']}", headers=H).status_code == 404


# ── Catalog ───────────────────────────────────────────────────────────────

class TestCatalog:
    def test_lists_every_kind(self, client):
        body = client.get("/api/page-builder/catalog").json()
        types = {k["type"] for k in body}
        assert "collection-grid" in types and "social-feed" in types
        assert len(body) == 20

    def test_defaults_are_camel_case(self, client):
        body = {k["type"]: k for k in client.get("/api/page-builder/catalog").json()}
        grid = body["collection-grid"]
        assert grid["data_bound"] is True
        assert grid["defaults"]["sortBy"] == "newest"
        assert grid["defaults"]["emptyMessage"] == "No products in this collection yet."


# ── Storefront HTML ───────────────────────────────────────────────────────

class TestStorefront:
    def test_published_page(self, client):
        _page(client, "about", status="published", content=[{"id": "t", "type": "text", "content": {"text": "<p>Hello</p>"}}])
        r = client.get("/pages/about")
        assert r.status_code == 200
        assert "<p>Hello</p>" in r.text

    def test_draft_is_404(self, client):
        _page(client, "draft")
        assert client.get("/pages/draft").status_code == 404

    def test_template_never_public(self, client):
        _page(client, "collection-template", status="published")
        assert client.get("/pages/collection-template").status_code == 404

    def test_home(self, client):
        assert client.get("/").status_code == 404
        _page(client, "home", status="published", is_home=True,
              content=[{"id": "c", "type": "cta", "content": {"title": "Welcome in"}}])
        r = client.get("/")
        assert r.status_code == 200
        assert "Welcome in" in r.text

    def test_unknown_collection(self, client):
        assert client.get("/collections/nope").status_code == 404

    def test_hidden_collection(self, client):
        _collection(client, "secret", is_visible=False)
        assert client.get("/collections/secret").status_code == 404

    def test_collection_with_explicit_grid(self, client):
        page = _page(client, "summer-layout", content=[
            {"id": "h", "type": "hero", "content": {}},
            {"id": "g", "type": "collection-grid", "content": {"sortBy": "price-low"}},
        ])
        coll = _collection(client, "summer", page_id=page["id"])
        for name, price in [("Pricey", "50.00"), ("Cheap", "5.00")]:
            pid = _product(client, name, price)
            client.post(f"/api/admin/collections/{coll['id']}/products", headers=H, json={"product_id": pid})
        r = client.get("/collections/summer")
        assert r.status_code == 200
        assert "collection-listing" not in r.text
        assert r.text.index("Cheap") < r.text.index("Pricey")
        assert "$5.00" in r.text
        assert "2 products" in r.text

    def test_collection_falls_back_to_template(self, client):
        _page(client, "collection-template", content=[
            {"id": "x", "type": "cta", "content": {"title": "Above"}},
            {"id": "m", "type": "product-grid", "content": {}},
            {"id": "y", "type": "faq", "content": {"title": "Below"}},
        ])
        _collection(client, "winter", description="Warm things")
        r = client.get("/collections/winter")
        assert r.status_code == 200
        assert 'data-block-id="m"' not in r.text
        assert r.text.index("Above") < r.text.index("collection-listing") < r.text.index("Below")
        assert "No products in this collection yet." in r.text

    def test_collection_without_any_layout(self, client):
        _collection(client, "plain")
        r = client.get("/collections/plain")
        assert r.status_code == 200
        assert "collection-header" in r.text

    def test_preview_draft(self, client):
        page = _page(client, "wip", content=[{"id": "c", "type": "cta", "content": {"title": "Soon"}}])
        r = client.get(f"/api/admin/pages/{page['id']}/preview", headers=H)
        assert r.status_code == 200
        assert "Soon" in r.text


# ── Page themes ───────────────────────────────────────────────────────────

class TestThemes:
    def test_create_with_theme(self, client):
        page = _page(client, "themed", theme={"primaryColor": "#16a34a", "borderRadius": "sm"})
        theme = client.get(f"/api/admin/pages/{page['id']}", headers=H).json()["theme"]
        assert theme["primaryColor"] == "#16a34a"
        assert theme["borderRadius"] == "sm"
        assert theme["backgroundColor"] == "#ffffff"

    def test_no_theme_by_default(self, client):
        assert _page(client, "plain")["theme"] is None

    def test_patch_and_clear(self, client):
        page = _page(client, "themed")
        r = client.patch(f"/api/admin/pages/{page['id']}", headers=H, json={"theme": {"accentColor": "#dcfce7"}})
        assert r.json()["theme"]["accentColor"] == "#dcfce7"
        r = client.patch(f"/api/admin/pages/{page['id']}", headers=H, json={"theme": None})
        assert r.json()["theme"] is None

    def test_invalid_values_stored_as_defaults(self, client):
        page = _page(client, "themed", theme={"primaryColor": "</style>"})
        assert page["theme"]["primaryColor"] == "#18181b"

    def test_published_page_styled(self, client):
        _page(client, "themed", status="published", theme={"primaryColor": "#0ea5e9"})
        r = client.get("/pages/themed")
        assert "--theme-primary:#0ea5e9;" in r.text

    def test_presets(self, client):
        presets = client.get("/api/page-builder/themes").json()
        assert [t["id"] for t in presets][:2] == ["default", "modern-dark"]
        assert presets[1]["backgroundColor"] == "#0f0f10"
