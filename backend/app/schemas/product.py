from pydantic import BaseModel

from app.models.product import ProductType


class ProductBase(BaseModel):
    title: str
    image: str
    type: ProductType
    genre_category: str


class FilmCreate(ProductBase):
    director: str
    duration: int
    description: str


class BookCreate(ProductBase):
    publisher: str
    author: str
    isbn: str
    description: str


class MusicCreate(ProductBase):
    producer: str
    artist: str
    duration: int


# Creation schema for each product type
PRODUCT_CREATE_SCHEMAS: dict[ProductType, type[ProductBase]] = {
    ProductType.FILM: FilmCreate,
    ProductType.BOOK: BookCreate,
    ProductType.MUSIC: MusicCreate,
}
