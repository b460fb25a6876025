from math import ceil

from fastapi import APIRouter, Depends, File, Query, Response, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_api.api.deps import get_app_settings, get_metrics, get_user_info
from inventory_api.core.config import Settings
from inventory_api.core.metrics import Metrics
from inventory_api.db.operations import commit_async
from inventory_api.db.session_async import get_async_db
from inventory_api.schemas.importing import ImportSummary
from inventory_api.schemas.inventory import HistoryList
from inventory_api.schemas.pagination import PaginatedProducts
from inventory_api.schemas.product import (
    CategoryList,
    MessageResponse,
    ProductCreate,
    ProductList,
    ProductRead,
    ProductUpdate,
)
from inventory_api.services import export_service, import_service, product_service
from inventory_api.services.exceptions import MissingUploadError
from inventory_api.services.product_service import ProductQuery
from inventory_api.services.product_service.query import SortField, SortOrder

router = APIRouter(prefix="/products", tags=["products"])


# ---------- Lectura ----------
@router.get("", response_model=PaginatedProducts)
async def list_products(
    page: int = Query(1, ge=1),
    limit: int = Query(100, ge=1, le=100),
    sort: SortField = Query("id"),
    order: SortOrder = Query("asc"),
    category: str | None = Query(None, description="categoria exacta"),
    name: str | None = Query(None, description="texto contenido en el nombre"),
    db: AsyncSession = Depends(get_async_db),
):
    query = ProductQuery(page=page, limit=limit, sort=sort, order=order, category=category, name=name)
    items, total = await product_service.list_products_with_total(db, query)
    return {
        "products": items,
        "pagination": {
            "page": query.page,
            "limit": query.limit,
            "total": total,
            "totalPages": ceil(total / query.limit),
        },
    }


@router.get("/search", response_model=ProductList)
async def search_products(
    name: str = Query(..., min_length=1, description="texto a buscar"),
    db: AsyncSession = Depends(get_async_db),
):
    return {"products": await product_service.search_products(db, name)}


@router.get("/categories/list", response_model=CategoryList)
async def list_categories(db: AsyncSession = Depends(get_async_db)):
    return {"categories": await product_service.list_categories(db)}


# ---------- Import / Export ----------
@router.get("/export")
async def export_products(db: AsyncSession = Depends(get_async_db)):
    content = await export_service.export_products_csv(db)
    return Response(
        content=content,
        media_type=export_service.EXPORT_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{export_service.EXPORT_FILENAME}"'},
    )


@router.post("/import", response_model=ImportSummary, response_model_exclude_none=True)
async def import_products(
    csv_file: UploadFile | None = File(None, alias="csvFile"),
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_app_settings),
    metrics: Metrics = Depends(get_metrics),
):
    if csv_file is None:
        raise MissingUploadError()
    try:
        data = await csv_file.read()
    finally:
        await csv_file.close()

    summary = await import_service.import_upload(
        db,
        data,
        filename=csv_file.filename,
        content_type=csv_file.content_type,
        upload_dir=settings.UPLOAD_DIR,
    )
    metrics.record_import(summary.added, summary.skipped, len(summary.errors or []))
    return summary


# ---------- Producto ----------
@router.get("/{product_id}", response_model=ProductRead)
async def get_product(product_id: int, db: AsyncSession = Depends(get_async_db)):
    return await product_service.get_product(db, product_id)


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
async def create_product(payload: ProductCreate, db: AsyncSession = Depends(get_async_db)):
    product = await product_service.create_product(db, payload)
    await commit_async(db)
    return product


@router.put("/{product_id}", response_model=ProductRead)
async def update_product(
    product_id: int,
    payload: ProductUpdate,
    db: AsyncSession = Depends(get_async_db),
    user_info: str = Depends(get_user_info),
):
    product = await product_service.update_product(db, product_id, payload, user_info)
    await commit_async(db)
    return product


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(product_id: int, db: AsyncSession = Depends(get_async_db)):
    await product_service.delete_product(db, product_id)
    await commit_async(db)
    return {"message": "Product deleted successfully"}


@router.get("/{product_id}/history", response_model=HistoryList)
async def product_history(product_id: int, db: AsyncSession = Depends(get_async_db)):
    return {"history": await product_service.list_history(db, product_id)}
