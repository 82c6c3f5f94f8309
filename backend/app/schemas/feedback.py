from datetime import datetime

from pydantic import BaseModel, ConfigDict


class FeedbackCreate(BaseModel):
    feedback_text: str
    user_id: int
    product_id: int


class FeedbackRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    product_id: int
    feedback_text: str
    feedback_time: datetime | None = None
    response_time: int
    feedback_score: int
