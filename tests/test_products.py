# tests/test_products.py
import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_create_and_read_product(client: AsyncClient):
    payload = {
        "name": "Tornillo 6mm",
        "unit": "caja",
        "category": "Ferreteria",
        "brand": "Fischer",
        "stock": 40,
        "status": "active",
        "image": "https://example.com/tornillo.png",
    }
    r = await client.post("/api/products", json=payload)
    assert r.status_code == 201, r.text
    created = r.json()
    assert isinstance(created["id"], int)
    for key, value in payload.items():
        assert created[key] == value

    r_get = await client.get(f"/api/products/{created['id']}")
    assert r_get.status_code == 200
    assert r_get.json() == created


@pytest.mark.asyncio
async def test_create_product_defaults(client: AsyncClient):
    r = await client.post("/api/products", json={"name": "Arandela"})
    assert r.status_code == 201, r.text
    data = r.json()
    assert data["stock"] == 0
    for key in ("unit", "category", "brand", "status", "image"):
        assert data[key] is None


@pytest.mark.asyncio
async def test_create_product_duplicate_name(client: AsyncClient, make_product):
    await make_product("Martillo", stock=3)
    r2 = await client.post("/api/products", json={"name": "Martillo", "stock": 1})
    assert r2.status_code == 409
    assert r2.json()["detail"] == "Product with this name already exists"


@pytest.mark.asyncio
async def test_name_uniqueness_is_case_sensitive(client: AsyncClient, make_product):
    await make_product("Clavo")
    r = await client.post("/api/products", json={"name": "clavo"})
    assert r.status_code == 201, r.text


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"name": "", "stock": 1},
        {"stock": 1},
        {"name": "Negativo", "stock": -1},
        {"name": "Texto", "stock": "muchos"},
        {"name": "Enorme", "stock": 99999999999999999999},
        {"name": "x" * 256},
        {"name": "Unidad larga", "unit": "u" * 65},
        {"name": "Imagen larga", "image": "i" * 513},
    ],
)
async def test_create_product_validation(client: AsyncClient, payload: dict):
    r = await client.post("/api/products", json=payload)
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_create_product_accepts_max_stock(client: AsyncClient):
    r = await client.post("/api/products", json={"name": "Granel", "stock": 2**63 - 1})
    assert r.status_code == 201, r.text
    assert r.json()["stock"] == 2**63 - 1


@pytest.mark.asyncio
async def test_get_missing_product_returns_404(client: AsyncClient):
    r = await client.get("/api/products/9999")
    assert r.status_code == 404
    assert r.json()["detail"] == "Product not found"


@pytest.mark.asyncio
async def test_partial_update_keeps_other_fields(client: AsyncClient, make_product):
    prod = await make_product("Taladro", brand="Bosch", category="Herramientas", stock=2)

    r = await client.put(f"/api/products/{prod['id']}", json={"status": "discontinued"})
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["status"] == "discontinued"
    assert data["brand"] == "Bosch"
    assert data["category"] == "Herramientas"
    assert data["stock"] == 2


@pytest.mark.asyncio
async def test_update_can_clear_optional_field(client: AsyncClient, make_product):
    prod = await make_product("Sierra", brand="Stanley")
    r = await client.put(f"/api/products/{prod['id']}", json={"brand": None})
    assert r.status_code == 200, r.text
    assert r.json()["brand"] is None


@pytest.mark.asyncio
async def test_update_rename_to_existing_name_conflicts(client: AsyncClient, make_product):
    await make_product("Pinza")
    other = await make_product("Alicate")

    r = await client.put(f"/api/products/{other['id']}", json={"name": "Pinza"})
    assert r.status_code == 409

    # renombrar al mismo nombre no es conflicto
    r_same = await client.put(f"/api/products/{other['id']}", json={"name": "Alicate"})
    assert r_same.status_code == 200


@pytest.mark.asyncio
async def test_update_without_fields_is_rejected(client: AsyncClient, make_product):
    prod = await make_product("Llave")
    r = await client.put(f"/api/products/{prod['id']}", json={})
    assert r.status_code == 400
    assert r.json()["detail"] == "No fields to update"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"name": ""},
        {"name": None},
        {"stock": None},
        {"stock": -3},
        {"stock": 2**63},
        {"category": "c" * 121},
    ],
)
async def test_update_validation(client: AsyncClient, make_product, payload: dict):
    prod = await make_product("Destornillador")
    r = await client.put(f"/api/products/{prod['id']}", json=payload)
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_update_missing_product_returns_404(client: AsyncClient):
    r = await client.put("/api/products/424242", json={"stock": 1})
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_delete_product(client: AsyncClient, make_product):
    prod = await make_product("Lija")

    r = await client.delete(f"/api/products/{prod['id']}")
    assert r.status_code == 200
    assert r.json() == {"message": "Product deleted successfully"}

    assert (await client.get(f"/api/products/{prod['id']}")).status_code == 404
    assert (await client.delete(f"/api/products/{prod['id']}")).status_code == 404
