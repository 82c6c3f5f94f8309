from app.models.product import Product, ProductType
from app.models.film import Film
from app.models.book import Book
from app.models.music import Music
from app.models.feedback import Feedback
from app.models.user import User

__all__ = ["Product", "ProductType", "Film", "Book", "Music", "Feedback", "User"]
