from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from app.db.database import Base


class Film(Base):
    __tablename__ = "film"

    product_id = Column(Integer, ForeignKey("product.id", ondelete="CASCADE"), primary_key=True)
    director = Column(String(255), nullable=False)
    duration = Column(Integer, nullable=False)
    description = Column(Text, nullable=False)

    # Relationships
    product = relationship("Product", back_populates="film")
