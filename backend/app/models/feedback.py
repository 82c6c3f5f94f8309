from sqlalchemy import Column, Integer, Text, ForeignKey, DateTime, func
from sqlalchemy.orm import relationship
from app.db.database import Base


class Feedback(Base):
    __tablename__ = "feedback"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("product.id", ondelete="CASCADE"), nullable=False, index=True)
    feedback_text = Column(Text, nullable=False)
    feedback_time = Column(DateTime, nullable=False, server_default=func.now())
    # Milliseconds spent in the sentiment analyzer, not a timestamp
    response_time = Column(Integer, nullable=False)
    feedback_score = Column(Integer, nullable=False)

    # Relationships
    user = relationship("User", back_populates="feedbacks")
    product = relationship("Product", back_populates="feedbacks")
