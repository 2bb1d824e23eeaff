"""
RecipeBook Backend: HTTP API Tests
===================================

What:  End-to-end tests of the route handlers through an in-process
       ASGI transport (no network, memory storage).

What we test:
    ✅ Status codes: 201 create, 204 delete, 400 / 404 / 409 error bodies
    ✅ 422 for bodies with the wrong shape
    ✅ X-Request-ID generated or echoed
    ✅ Recipe filters, lifecycle, shopping list and scale endpoints
    ✅ Health endpoint
    ✅ Database and unexpected failures become a generic 500 that keeps
       the request id
"""

from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from recipebook.dependencies import build_memory_container
from recipebook.exceptions import DatabaseError
from recipebook.main import create_app


async def _create(client, path, payload):
    response = await client.post(path, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def _setup_cake(client):
    desserts = await _create(client, "/categories", {"name": "Desserts"})
    sugar = await _create(client, "/ingredients", {"name": "Sugar"})
    cake = await _create(
        client,
        "/recipes",
        {
            "name": "Cake",
            "category_id": desserts["id"],
            "portions": 4,
            "ingredients": [{"ingredient_id": sugar["id"], "quantity": 200, "unit": "g"}],
        },
    )
    return desserts, sugar, cake


class TestCategoryRoutes:

    @pytest.mark.asyncio
    async def test_crud(self, test_client):
        created = await _create(test_client, "/categories", {"name": "Desserts"})
        assert created["name"] == "Desserts"
        assert created["id"]

        listed = await test_client.get("/categories")
        assert listed.status_code == 200
        assert [c["id"] for c in listed.json()] == [created["id"]]

        renamed = await test_client.put(f"/categories/{created['id']}", json={"name": "Sweets"})
        assert renamed.status_code == 200
        assert renamed.json()["name"] == "Sweets"

        deleted = await test_client.delete(f"/categories/{created['id']}")
        assert deleted.status_code == 204
        assert deleted.content == b""

        missing = await test_client.get(f"/categories/{created['id']}")
        assert missing.status_code == 404
        assert missing.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_blank_name_is_400(self, test_client):
        response = await test_client.post("/categories", json={"name": "  "})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["message"] == "Name is required"

    @pytest.mark.asyncio
    async def test_missing_name_is_422(self, test_client):
        response = await test_client.post("/categories", json={})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_duplicate_name_is_409(self, test_client):
        await _create(test_client, "/categories", {"name": "Desserts"})

        response = await test_client.post("/categories", json={"name": "DESSERTS"})

        assert response.status_code == 409
        assert response.json()["message"] == "Category name must be unique"

    @pytest.mark.asyncio
    async def test_delete_with_recipes_is_409(self, test_client):
        """A category still referenced by a recipe cannot be deleted."""
        desserts, _, cake = await _setup_cake(test_client)

        response = await test_client.delete(f"/categories/{desserts['id']}")
        assert response.status_code == 409
        assert response.json()["message"] == "Cannot delete category with recipes"
        assert response.json()["details"]["recipe_count"] == 1

        assert (await test_client.delete(f"/recipes/{cake['id']}")).status_code == 204
        assert (await test_client.delete(f"/categories/{desserts['id']}")).status_code == 204

    @pytest.mark.asyncio
    async def test_delete_unknown_is_204(self, test_client):
        response = await test_client.delete("/categories/never-existed")
        assert response.status_code == 204


class TestIngredientRoutes:

    @pytest.mark.asyncio
    async def test_crud(self, test_client):
        sugar = await _create(test_client, "/ingredients", {"name": "Sugar"})

        fetched = await test_client.get(f"/ingredients/{sugar['id']}")
        assert fetched.json() == sugar

        empty_patch = await test_client.put(f"/ingredients/{sugar['id']}", json={})
        assert empty_patch.json() == sugar

        duplicate = await test_client.post("/ingredients", json={"name": "sugar"})
        assert duplicate.status_code == 409

        assert (await test_client.delete(f"/ingredients/{sugar['id']}")).status_code == 204
        assert (await test_client.get("/ingredients")).json() == []


class TestRecipeRoutes:

    @pytest.mark.asyncio
    async def test_create_and_get(self, test_client):
        desserts, sugar, cake = await _setup_cake(test_client)

        assert cake["status"] == "draft"
        assert cake["category_id"] == desserts["id"]
        assert cake["ingredients"] == [{"ingredient_id": sugar["id"], "quantity": 200.0, "unit": "g"}]

        fetched = await test_client.get(f"/recipes/{cake['id']}")
        assert fetched.status_code == 200
        assert fetched.json() == cake

    @pytest.mark.asyncio
    async def test_create_with_unknown_category_is_404(self, test_client):
        response = await test_client.post(
            "/recipes", json={"name": "Cake", "category_id": "nope", "portions": 2}
        )
        assert response.status_code == 404
        assert response.json()["details"]["resource"] == "category"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
    async def test_create_with_non_finite_quantity_is_400(self, test_client, literal):
        """JSON extensions like NaN parse as floats but are not valid quantities."""
        desserts = await _create(test_client, "/categories", {"name": "Desserts"})
        sugar = await _create(test_client, "/ingredients", {"name": "Sugar"})
        body = (
            '{"name": "Cake", "category_id": "' + desserts["id"] + '", "portions": 4, '
            '"ingredients": [{"ingredient_id": "' + sugar["id"] + '", '
            '"quantity": ' + literal + ', "unit": "g"}]}'
        )

        response = await test_client.post(
            "/recipes", content=body, headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        assert (await test_client.get("/recipes")).json() == []

    @pytest.mark.asyncio
    async def test_create_with_zero_portions_is_400(self, test_client):
        desserts = await _create(test_client, "/categories", {"name": "Desserts"})

        response = await test_client.post(
            "/recipes", json={"name": "Cake", "category_id": desserts["id"], "portions": 0}
        )

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "portions"

    @pytest.mark.asyncio
    async def test_partial_update(self, test_client):
        _, _, cake = await _setup_cake(test_client)

        response = await test_client.put(f"/recipes/{cake['id']}", json={"name": "Sponge Cake"})

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Sponge Cake"
        assert body["ingredients"] == cake["ingredients"]
        assert body["portions"] == cake["portions"]

    @pytest.mark.asyncio
    async def test_status_is_not_patchable(self, test_client):
        _, _, cake = await _setup_cake(test_client)

        response = await test_client.put(f"/recipes/{cake['id']}", json={"status": "archived"})

        assert response.status_code == 200
        assert response.json()["status"] == "draft"

    @pytest.mark.asyncio
    async def test_filters(self, test_client):
        desserts, _, cake = await _setup_cake(test_client)
        soups = await _create(test_client, "/categories", {"name": "Soups"})
        await _create(
            test_client,
            "/recipes",
            {"name": "Tomato Soup", "category_id": soups["id"], "portions": 2},
        )
        await test_client.post(f"/recipes/{cake['id']}/publish")

        async def names(**params):
            response = await test_client.get("/recipes", params=params)
            assert response.status_code == 200
            return [r["name"] for r in response.json()]

        assert await names() == ["Cake", "Tomato Soup"]
        assert await names(category_id=desserts["id"]) == ["Cake"]
        assert await names(category_name="soups") == ["Tomato Soup"]
        assert await names(category_name="Breads") == []
        assert await names(category_name="") == ["Cake", "Tomato Soup"]
        assert await names(search="SOUP") == ["Tomato Soup"]
        assert await names(status="published") == ["Cake"]
        assert await names(status="draft", category_name="Desserts") == []

    @pytest.mark.asyncio
    async def test_unknown_status_filter_is_422(self, test_client):
        response = await test_client.get("/recipes", params={"status": "deleted"})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_lifecycle(self, test_client):
        """draft -> published -> archived, then every transition is refused."""
        _, _, cake = await _setup_cake(test_client)

        published = await test_client.post(f"/recipes/{cake['id']}/publish")
        assert published.status_code == 200
        assert published.json()["status"] == "published"

        archived = await test_client.post(f"/recipes/{cake['id']}/archive")
        assert archived.json()["status"] == "archived"

        for action in ["publish", "archive"]:
            refused = await test_client.post(f"/recipes/{cake['id']}/{action}")
            assert refused.status_code == 409
            assert refused.json()["error"] == "conflict"

    @pytest.mark.asyncio
    async def test_lifecycle_unknown_recipe_is_404(self, test_client):
        response = await test_client.post("/recipes/missing/publish")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_shopping_list(self, test_client):
        desserts, sugar, cake = await _setup_cake(test_client)
        flour = await _create(test_client, "/ingredients", {"name": "Flour"})
        cookies = await _create(
            test_client,
            "/recipes",
            {
                "name": "Cookies",
                "category_id": desserts["id"],
                "portions": 12,
                "ingredients": [
                    {"ingredient_id": sugar["id"], "quantity": 100, "unit": "g"},
                    {"ingredient_id": flour["id"], "quantity": 2, "unit": "cup"},
                ],
            },
        )

        response = await test_client.post(
            "/recipes/shopping-list", json={"recipe_ids": [cake["id"], cookies["id"]]}
        )

        assert response.status_code == 200
        assert response.json() == [
            {"ingredient_id": sugar["id"], "name": "Sugar", "quantity": 300.0, "unit": "g"},
            {"ingredient_id": flour["id"], "name": "Flour", "quantity": 2.0, "unit": "cup"},
        ]

    @pytest.mark.asyncio
    async def test_shopping_list_unknown_recipe_is_404(self, test_client):
        response = await test_client.post("/recipes/shopping-list", json={"recipe_ids": ["missing"]})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_scale(self, test_client):
        _, _, cake = await _setup_cake(test_client)

        response = await test_client.get(f"/recipes/{cake['id']}/scale", params={"portions": 6})

        assert response.status_code == 200
        assert response.json()["portions"] == 6
        assert response.json()["ingredients"][0]["quantity"] == 300.0
        assert (await test_client.get(f"/recipes/{cake['id']}")).json() == cake

    @pytest.mark.asyncio
    async def test_scale_with_zero_portions_is_400(self, test_client):
        _, _, cake = await _setup_cake(test_client)

        response = await test_client.get(f"/recipes/{cake['id']}/scale", params={"portions": 0})

        assert response.status_code == 400


class TestCrossCutting:

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/categories")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_request_id_echoed_in_header_and_error_body(self, test_client):
        response = await test_client.get(
            "/recipes/missing", headers={"X-Request-ID": "trace-123"}
        )

        assert response.headers["X-Request-ID"] == "trace-123"
        assert response.json()["request_id"] == "trace-123"

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["storage"] == "memory"

    @pytest.mark.asyncio
    async def test_database_error_is_generic_500(self, test_client):
        """Database details stay in the logs, not in the response."""
        with patch(
            "recipebook.services.category_service.CategoryService.list",
            new=AsyncMock(side_effect=DatabaseError(context={"resource": "category"})),
        ):
            response = await test_client.get("/categories")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert "details" not in body

    @pytest.mark.asyncio
    async def test_unexpected_error_keeps_request_id(self):
        """The catch-all 500 still reports the request id in body and header."""
        app = create_app(build_memory_container())
        transport = ASGITransport(app=app, raise_app_exceptions=False)

        with patch(
            "recipebook.services.category_service.CategoryService.list",
            new=AsyncMock(side_effect=RuntimeError("boom")),
        ):
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.get("/categories", headers={"X-Request-ID": "trace-9"})

        assert response.status_code == 500
        assert response.headers["X-Request-ID"] == "trace-9"
        body = response.json()
        assert body["error"] == "internal_server_error"
        assert body["request_id"] == "trace-9"
        assert "boom" not in response.text
