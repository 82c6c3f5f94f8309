from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from app.db.database import Base


class Book(Base):
    __tablename__ = "book"

    product_id = Column(Integer, ForeignKey("product.id", ondelete="CASCADE"), primary_key=True)
    publisher = Column(String(255), nullable=False)
    author = Column(String(255), nullable=False)
    isbn = Column(String(20), nullable=False)
    description = Column(Text, nullable=False)

    # Relationships
    product = relationship("Product", back_populates="book")
