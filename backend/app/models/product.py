from enum import Enum

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from app.db.database import Base


class ProductType(str, Enum):
    FILM = "FILM"
    BOOK = "BOOK"
    MUSIC = "MUSIC"


class Product(Base):
    __tablename__ = "product"

    id = Column(Integer, primary_key=True)
    title = Column(String(255), nullable=False)
    image = Column(String(1024), nullable=False)
    # Stored as the plain enum value so an unknown value can be detected on read
    type = Column(String(10), nullable=False, index=True)
    genre_category = Column(String(100), nullable=False)

    # Relationships (exactly one of these exists, chosen by type)
    film = relationship("Film", back_populates="product", uselist=False, cascade="all, delete-orphan")
    book = relationship("Book", back_populates="product", uselist=False, cascade="all, delete-orphan")
    music = relationship("Music", back_populates="product", uselist=False, cascade="all, delete-orphan")
    feedbacks = relationship("Feedback", back_populates="product")
