# tests/test_products_list.py
import pytest
from httpx import AsyncClient
from pydantic import ValidationError

from inventory_api.db.session_async import get_async_db
from inventory_api.services.product_service import ProductQuery


async def _seed_catalog(make_product):
    # nombres en orden inverso a su id para distinguir orden por nombre vs id
    await make_product("Echo", category="Pinturas", brand="Alba", stock=5)
    await make_product("Delta", category="Pinturas", brand="Sinteplast", stock=1)
    await make_product("Charlie", category="Herramientas", brand="Bosch", stock=9)
    await make_product("Bravo", category="Herramientas", brand="Stanley", stock=3)
    await make_product("Alfa", category=None, brand=None, stock=7)


@pytest.mark.asyncio
async def test_pagination_sorted_by_name(client: AsyncClient, make_product):
    await _seed_catalog(make_product)

    r = await client.get("/api/products", params={"limit": 2, "page": 2, "sort": "name", "order": "asc"})
    assert r.status_code == 200, r.text
    data = r.json()
    assert [p["name"] for p in data["products"]] == ["Charlie", "Delta"]
    assert data["pagination"] == {"page": 2, "limit": 2, "total": 5, "totalPages": 3}


@pytest.mark.asyncio
async def test_default_listing_is_id_order(client: AsyncClient, make_product):
    await _seed_catalog(make_product)

    r = await client.get("/api/products")
    assert r.status_code == 200
    data = r.json()
    assert [p["name"] for p in data["products"]] == ["Echo", "Delta", "Charlie", "Bravo", "Alfa"]
    assert data["pagination"]["limit"] == 100
    assert data["pagination"]["totalPages"] == 1


@pytest.mark.asyncio
async def test_sort_by_stock_desc(client: AsyncClient, make_product):
    await _seed_catalog(make_product)

    r = await client.get("/api/products", params={"sort": "stock", "order": "desc"})
    assert r.status_code == 200
    assert [p["stock"] for p in r.json()["products"]] == [9, 7, 5, 3, 1]


@pytest.mark.asyncio
async def test_filters_by_category_and_name(client: AsyncClient, make_product):
    await _seed_catalog(make_product)

    r_cat = await client.get("/api/products", params={"category": "Pinturas"})
    data = r_cat.json()
    assert data["pagination"]["total"] == 2
    assert {p["name"] for p in data["products"]} == {"Echo", "Delta"}

    r_both = await client.get("/api/products", params={"category": "Herramientas", "name": "arl"})
    data = r_both.json()
    assert [p["name"] for p in data["products"]] == ["Charlie"]
    assert data["pagination"]["total"] == 1


@pytest.mark.asyncio
async def test_empty_listing_has_zero_pages(client: AsyncClient):
    r = await client.get("/api/products")
    assert r.status_code == 200
    assert r.json() == {
        "products": [],
        "pagination": {"page": 1, "limit": 100, "total": 0, "totalPages": 0},
    }


class _ExplodingSession:
    async def execute(self, *args, **kwargs):  # pragma: no cover - must never run
        raise AssertionError("store accessed")

    async def get(self, *args, **kwargs):  # pragma: no cover - must never run
        raise AssertionError("store accessed")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params",
    [
        {"sort": "unknown_field"},
        {"order": "sideways"},
        {"limit": 0},
        {"limit": 101},
        {"page": 0},
        {"page": "abc"},
    ],
)
async def test_invalid_list_params_rejected_before_store(app, client: AsyncClient, params: dict):
    async def _no_store():
        yield _ExplodingSession()

    app.dependency_overrides[get_async_db] = _no_store
    r = await client.get("/api/products", params=params)
    assert r.status_code == 422


def test_product_query_validation():
    with pytest.raises(ValidationError):
        ProductQuery(sort="unknown_field")
    with pytest.raises(ValidationError):
        ProductQuery(limit=0)

    query = ProductQuery(page=3, limit=10)
    assert query.offset == 20
    assert query.sort == "id"
    assert query.order == "asc"


@pytest.mark.asyncio
async def test_search_by_name(client: AsyncClient, make_product):
    await make_product("Pintura Latex")
    await make_product("Pintura Esmalte")
    await make_product("Rodillo")

    r = await client.get("/api/products/search", params={"name": "Pintura"})
    assert r.status_code == 200
    assert [p["name"] for p in r.json()["products"]] == ["Pintura Latex", "Pintura Esmalte"]

    r_missing = await client.get("/api/products/search")
    assert r_missing.status_code == 422
    r_blank = await client.get("/api/products/search", params={"name": ""})
    assert r_blank.status_code == 422


@pytest.mark.asyncio
async def test_list_categories(client: AsyncClient, make_product):
    await _seed_catalog(make_product)
    await make_product("Sin categoria", category="")

    r = await client.get("/api/products/categories/list")
    assert r.status_code == 200
    assert r.json() == {"categories": ["Herramientas", "Pinturas"]}
