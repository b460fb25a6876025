"""Seed script for populating development product data."""

from __future__ import annotations

import asyncio
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from sqlalchemy.ext.asyncio import AsyncSession

from inventory_api.core.config import get_settings
from inventory_api.db.session_async import Database
from inventory_api.schemas.product import ProductCreate
from inventory_api.services import product_service


@dataclass(frozen=True, slots=True)
class ProductSeed:
    name: str
    unit: str | None = None
    category: str | None = None
    brand: str | None = None
    stock: int = 0
    status: str | None = "active"
    image: str | None = None


PRODUCTS: tuple[ProductSeed, ...] = (
    ProductSeed(name="Tornillo autoperforante 8x1", unit="caja", category="Ferreteria", brand="Fischer", stock=120),
    ProductSeed(name="Taco nylon 8mm", unit="bolsa", category="Ferreteria", brand="Fischer", stock=300),
    ProductSeed(name="Martillo carpintero 27mm", unit="unidad", category="Herramientas", brand="Stanley", stock=15),
    ProductSeed(name="Taladro percutor 650W", unit="unidad", category="Herramientas", brand="Bosch", stock=6),
    ProductSeed(name="Latex interior 20L", unit="balde", category="Pinturas", brand="Alba", stock=24),
    ProductSeed(name="Rodillo lana 23cm", unit="unidad", category="Pinturas", brand=None, stock=40),
    ProductSeed(name="Cable unipolar 2.5mm", unit="metro", category="Electricidad", brand="Pirelli", stock=500),
    ProductSeed(
        name="Disyuntor bipolar 40A",
        unit="unidad",
        category="Electricidad",
        brand="Schneider",
        stock=0,
        status="discontinued",
    ),
)


async def _seed_products(db: AsyncSession, logger: logging.Logger) -> tuple[int, int]:
    created = 0
    skipped = 0

    for seed in PRODUCTS:
        existing = await product_service.get_product_by_name(db, seed.name)
        if existing:
            # no pisamos stock ni datos editados a mano
            skipped += 1
            logger.debug("Product %s already present", seed.name)
            continue

        payload = ProductCreate(
            name=seed.name,
            unit=seed.unit,
            category=seed.category,
            brand=seed.brand,
            stock=seed.stock,
            status=seed.status,
            image=seed.image,
        )
        await product_service.create_product(db, payload)
        created += 1
        logger.debug("Created product %s", payload.name)

    return created, skipped


async def seed_dev_products(database: Database | None = None) -> tuple[int, int]:
    logger = logging.getLogger("seed_dev_products")
    owns_database = database is None
    database = database or Database.from_settings(get_settings())
    logger.info("Seeding development products into %s", database.url)
    try:
        await database.create_all()
        async with database.session_factory() as session:
            created, skipped = await _seed_products(session, logger)
            await session.commit()
    finally:
        if owns_database:
            await database.dispose()
    logger.info("Seed completed: %s created, %s skipped", created, skipped)
    return created, skipped


async def main() -> None:
    await seed_dev_products()


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
