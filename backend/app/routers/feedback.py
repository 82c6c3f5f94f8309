from fastapi import APIRouter, Depends

from app.db.database import Database, get_db
from app.schemas.feedback import FeedbackCreate, FeedbackRead
from app.services import feedback_service
from app.services.sentiment_service import SentimentAnalyzer, get_analyzer

router = APIRouter(prefix="/feedback", tags=["feedback"])


@router.get("", response_model=list[FeedbackRead])
async def list_feedbacks(db: Database = Depends(get_db)):
    return await feedback_service.get_feedbacks(db)


@router.post("", response_model=FeedbackRead, status_code=201)
async def add_feedback(
    request: FeedbackCreate,
    db: Database = Depends(get_db),
    analyzer: SentimentAnalyzer = Depends(get_analyzer)
):
    return await feedback_service.create_feedback(db, analyzer, request)
