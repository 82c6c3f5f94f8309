from fastapi import APIRouter, Depends

from app.db.database import Database, get_db
from app.schemas.statistic import ProductStatistics
from app.services import statistic_service

router = APIRouter(prefix="/statistic", tags=["statistic"])


@router.get("/{product_id}", response_model=ProductStatistics)
async def retrieve_product_statistics(product_id: int, db: Database = Depends(get_db)):
    return await statistic_service.get_product_statistics(db, product_id)
