from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from app.db.database import Base


class Music(Base):
    __tablename__ = "music"

    product_id = Column(Integer, ForeignKey("product.id", ondelete="CASCADE"), primary_key=True)
    producer = Column(String(255), nullable=False)
    artist = Column(String(255), nullable=False)
    duration = Column(Integer, nullable=False)

    # Relationships
    product = relationship("Product", back_populates="music")
