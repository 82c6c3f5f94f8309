from typing import Any

from fastapi import APIRouter, Body, Depends

from app.db.database import Database, get_db
from app.services import product_service

router = APIRouter(prefix="/product", tags=["product"])


@router.get("/id/{product_id}")
async def retrieve_product_by_id(product_id: int, db: Database = Depends(get_db)) -> dict[str, Any]:
    return await product_service.get_product_by_id(db, product_id)


@router.get("/type/{product_type}")
async def retrieve_products_by_type(product_type: str, db: Database = Depends(get_db)) -> list[dict[str, Any]]:
    return await product_service.get_products_by_type(db, product_type)


@router.post("", status_code=201)
async def add_product(
    payload: dict[str, Any] = Body(...),
    db: Database = Depends(get_db)
) -> dict[str, Any]:
    """Create a film, book or music product.

    The required fields depend on `type`, so the body is validated by the
    service against the schema of that type.
    """
    return await product_service.create_product(db, payload)
