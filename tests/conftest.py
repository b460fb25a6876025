# tests/conftest.py
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_api.core.config import Settings
from inventory_api.db.session_async import Database
from inventory_api.main import create_app


# ---------- Fixtures ----------
@pytest.fixture(scope="function")
def settings(tmp_path: Path) -> Settings:
    """Settings aisladas por test: base SQLite y carpeta de uploads propias."""
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        UPLOAD_DIR=tmp_path / "uploads",
        LOG_LEVEL="WARNING",
    )


@pytest_asyncio.fixture(scope="function")
async def database(settings: Settings):
    db = Database.from_settings(settings)
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture(scope="function")
def app(settings: Settings, database: Database):
    return create_app(settings, database)


@pytest_asyncio.fixture(scope="function")
async def client(app):
    """Provee un AsyncClient enlazado a una app nueva."""
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def async_db_session(database: Database) -> AsyncSession:
    """Provee una AsyncSession para pruebas directas de servicios."""
    async with database.session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest.fixture(scope="function")
def make_product(client: httpx.AsyncClient):
    """Crea productos via API y devuelve el JSON de respuesta."""

    async def _make(name: str, **fields) -> dict:
        resp = await client.post("/api/products", json={"name": name, **fields})
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make
