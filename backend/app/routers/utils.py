from fastapi import APIRouter, Depends

from app.db.database import Database, get_db
from app.schemas.bulk import BulkProductsRequest, BulkFeedbacksRequest, BulkResponse
from app.services import bulk_service
from app.services.sentiment_service import SentimentAnalyzer, get_analyzer

router = APIRouter(prefix="/utils", tags=["utils"])


# Partial failures still answer 201: the summary body reports them.
@router.post("/create-products-in-bulk", response_model=BulkResponse, status_code=201)
async def create_products_in_bulk(
    request: BulkProductsRequest | None = None,
    db: Database = Depends(get_db)
):
    items = request.products if request else None
    result = await bulk_service.create_products_in_bulk(db, items)
    return BulkResponse(**vars(result))


@router.post("/create-feedbacks-in-bulk", response_model=BulkResponse, status_code=201)
async def create_feedbacks_in_bulk(
    request: BulkFeedbacksRequest | None = None,
    db: Database = Depends(get_db),
    analyzer: SentimentAnalyzer = Depends(get_analyzer)
):
    items = request.feedbacks if request else None
    result = await bulk_service.create_feedbacks_in_bulk(db, analyzer, items)
    return BulkResponse(**vars(result))
