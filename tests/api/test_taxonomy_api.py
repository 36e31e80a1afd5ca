"""
HTTP tests for the /categories and /tags endpoints.
"""


class TestCategoriesApi:
    async def test_create_and_get(self, client):
        created = await client.post("/categories", json={"name": "World News", "description": "Abroad"})
        assert created.status_code == 201
        body = created.json()
        assert body["slug"] == "world-news"
        assert body["description"] == "Abroad"
        assert body["parent"] == 0
        assert body["count"] == 0

        fetched = await client.get(f"/categories/{body['id']}")
        assert fetched.json() == body

    async def test_duplicate_is_409(self, client):
        await client.post("/categories", json={"name": "News"})
        response = await client.post("/categories", json={"name": "News"})
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CONFLICT"

    async def test_bad_parent_is_400(self, client):
        response = await client.post("/categories", json={"name": "Child", "parent": 77})
        assert response.status_code == 400

    async def test_update_parent_cycle_is_400(self, client):
        parent = (await client.post("/categories", json={"name": "Parent"})).json()
        child = (
            await client.post("/categories", json={"name": "Child", "parent": parent["id"]})
        ).json()

        response = await client.patch(f"/categories/{parent['id']}", json={"parent": child["id"]})
        assert response.status_code == 400

    async def test_list_and_search(self, client):
        for name in ("Sports", "News"):
            await client.post("/categories", json={"name": name})

        everything = await client.get("/categories")
        assert [c["name"] for c in everything.json()] == ["News", "Sports"]

        found = await client.get("/categories", params={"search": "spo"})
        assert [c["name"] for c in found.json()] == ["Sports"]

    async def test_count_follows_posts(self, client, author):
        news = (await client.post("/categories", json={"name": "News"})).json()
        await client.post("/posts", json={"author_id": author.id, "title": "A", "category_ids": [news["id"]]})

        assert (await client.get(f"/categories/{news['id']}")).json()["count"] == 1

    async def test_delete(self, client):
        news = (await client.post("/categories", json={"name": "News"})).json()

        assert (await client.delete(f"/categories/{news['id']}")).status_code == 204
        assert (await client.get(f"/categories/{news['id']}")).status_code == 404


class TestTagsApi:
    async def test_create_returns_existing(self, client):
        first = await client.post("/tags", json={"name": "Python"})
        second = await client.post("/tags", json={"name": "PYTHON"})

        assert first.status_code == second.status_code == 201
        assert first.json()["id"] == second.json()["id"]

    async def test_update_and_conflict(self, client):
        await client.post("/tags", json={"name": "Python"})
        rust = (await client.post("/tags", json={"name": "Rust"})).json()

        renamed = await client.patch(f"/tags/{rust['id']}", json={"name": "Rust Lang"})
        assert renamed.json()["name"] == "Rust Lang"

        clash = await client.patch(f"/tags/{rust['id']}", json={"slug": "python"})
        assert clash.status_code == 409

    async def test_category_id_is_not_a_tag(self, client):
        news = (await client.post("/categories", json={"name": "News"})).json()
        assert (await client.get(f"/tags/{news['id']}")).status_code == 404

    async def test_missing_name_is_400(self, client):
        response = await client.post("/tags", json={})
        assert response.status_code == 400
