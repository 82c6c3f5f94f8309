from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from app.db.database import Database
from app.errors import ErrorType
from app.exceptions import AppException
from app.models import Feedback
from app.schemas.statistic import ProductStatistics


def average_score(scores: list[int]) -> float:
    return sum(scores) / len(scores)


def summarize_scores(scores: list[int]) -> str:
    """One-line description of a product's feedback scores."""
    average = average_score(scores)
    if average >= 3.5:
        tone = "mostly positive"
    elif average <= 2.5:
        tone = "mostly negative"
    else:
        tone = "mixed"

    noun = "entry" if len(scores) == 1 else "entries"
    return f"{len(scores)} feedback {noun}, average {average:.2f}/5, {tone}"


async def get_product_statistics(db: Database, product_id: int) -> ProductStatistics:
    """Average feedback score of a product.

    Raises:
        AppException: NOT_FOUND if the product has no feedback
    """
    try:
        async with db.session() as session:
            result = await session.execute(
                select(Feedback.feedback_score).where(Feedback.product_id == product_id)
            )
            scores = [score for score in result.scalars().all() if score is not None]
    except SQLAlchemyError as e:
        raise db.translate_error(e)

    if not scores:
        raise AppException(ErrorType.NOT_FOUND, "Statistics not found for the specified product.")

    return ProductStatistics(
        averageScore=average_score(scores),
        significantSummary=summarize_scores(scores)
    )
