"""
Product service - one flat product shape over a shared base table and one
extension table per product type (film, book, music).
"""
import logging
from typing import Any

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.db.database import Database, Base
from app.errors import ErrorType
from app.exceptions import AppException, format_validation_errors
from app.models import Product, ProductType, Film, Book, Music
from app.schemas.product import PRODUCT_CREATE_SCHEMAS, ProductBase

logger = logging.getLogger(__name__)

# Extension model and Product relationship name for each product type
EXTENSION_MODELS: dict[ProductType, type[Base]] = {
    ProductType.FILM: Film,
    ProductType.BOOK: Book,
    ProductType.MUSIC: Music,
}
EXTENSION_RELATIONS = {
    ProductType.FILM: "film",
    ProductType.BOOK: "book",
    ProductType.MUSIC: "music",
}
BASE_FIELDS = ("title", "image", "genre_category")


def product_type_from_string(value: Any) -> ProductType:
    """Parse a product type, case-insensitively.

    Raises:
        AppException: INVALID_PRODUCT_TYPE if the value is not FILM, BOOK or MUSIC
    """
    if not isinstance(value, str):
        raise AppException(ErrorType.INVALID_PRODUCT_TYPE, f'Product type "{value}" not valid!')
    try:
        return ProductType(value.strip().upper())
    except ValueError:
        raise AppException(ErrorType.INVALID_PRODUCT_TYPE, f'Product type "{value}" not valid!')


def validate_product_input(data: Any) -> ProductBase:
    """Validate a raw creation payload against the schema of its type."""
    if not isinstance(data, dict):
        raise AppException(ErrorType.VALIDATION_ERROR, "Product payload must be an object")

    if data.get("type") is None:
        missing = [f for f in ("title", "image", "type", "genre_category") if data.get(f) is None]
        raise AppException(ErrorType.VALIDATION_ERROR, f"Missing required fields: {', '.join(missing)}")

    product_type = product_type_from_string(data.get("type"))
    schema = PRODUCT_CREATE_SCHEMAS[product_type]
    try:
        return schema.model_validate({**data, "type": product_type})
    except ValidationError as e:
        raise AppException(ErrorType.VALIDATION_ERROR, format_validation_errors(e.errors()))


def build_extension(product_input: ProductBase, product_id: int) -> Base:
    """Create the extension row holding the type-specific fields."""
    model = EXTENSION_MODELS[product_input.type]
    fields = product_input.model_dump(exclude={"type", *BASE_FIELDS})
    return model(product_id=product_id, **fields)


def _stored_type(product: Product) -> ProductType:
    try:
        return ProductType(product.type)
    except ValueError:
        logger.critical(f"Product {product.id} has corrupt type {product.type!r}")
        raise AppException(
            ErrorType.CORRUPT_PRODUCT_TYPE,
            f"Product {product.id} has an unknown stored type"
        )


def merge_product(product: Product, extension: Base | None) -> dict[str, Any]:
    """Flatten a product and its extension into one dict.

    The extension's product_id is dropped since it duplicates the product id.

    Raises:
        AppException: CORRUPT_PRODUCT_TYPE if the stored type is unknown or
            the extension row is missing or of the wrong kind
    """
    product_type = _stored_type(product)
    merged = product.to_dict()

    if product_type == ProductType.FILM:
        expected = Film
    elif product_type == ProductType.BOOK:
        expected = Book
    elif product_type == ProductType.MUSIC:
        expected = Music
    else:
        logger.critical(f"No merge branch for product type {product_type}")
        raise AppException(ErrorType.CORRUPT_PRODUCT_TYPE, f"Product {product.id} has an unknown stored type")

    if not isinstance(extension, expected):
        logger.critical(f"Product {product.id} of type {product_type.value} has no {expected.__tablename__} record")
        raise AppException(
            ErrorType.CORRUPT_PRODUCT_TYPE,
            f"Product {product.id} is missing its {product_type.value.lower()} details"
        )

    extension_fields = extension.to_dict()
    extension_fields.pop("product_id", None)
    merged.update(extension_fields)
    merged["type"] = product_type.value
    return merged


async def _load_extension(session: AsyncSession, product: Product) -> Base | None:
    model = EXTENSION_MODELS[_stored_type(product)]
    result = await session.execute(select(model).where(model.product_id == product.id))
    return result.scalar_one_or_none()


async def create_product(db: Database, data: dict[str, Any]) -> dict[str, Any]:
    """Create a product and its extension in one transaction.

    Returns:
        The flattened product

    Raises:
        AppException: INVALID_PRODUCT_TYPE, VALIDATION_ERROR, or a persistence
            error type if either insert fails (both are rolled back)
    """
    product_input = validate_product_input(data)

    try:
        async with db.session() as session:
            async with session.begin():
                product = Product(
                    title=product_input.title,
                    image=product_input.image,
                    type=product_input.type.value,
                    genre_category=product_input.genre_category,
                )
                session.add(product)
                await session.flush()

                extension = build_extension(product_input, product.id)
                session.add(extension)
                await session.flush()
    except SQLAlchemyError as e:
        raise db.translate_error(e, fallback=ErrorType.CREATION_FAILED)

    logger.info(f"Created {product_input.type.value} product {product.id}")
    return merge_product(product, extension)


async def get_product_by_id(db: Database, product_id: int) -> dict[str, Any]:
    """Get one flattened product.

    Raises:
        AppException: NOT_FOUND if absent, CORRUPT_PRODUCT_TYPE on integrity faults
    """
    try:
        async with db.session() as session:
            product = await session.get(Product, product_id)
            if product is None:
                raise AppException(ErrorType.NOT_FOUND, "Product not found.")
            extension = await _load_extension(session, product)
    except SQLAlchemyError as e:
        raise db.translate_error(e)

    return merge_product(product, extension)


async def get_products_by_type(db: Database, product_type: str) -> list[dict[str, Any]]:
    """Get all flattened products of a type; only that type's table is loaded."""
    parsed_type = product_type_from_string(product_type)
    relation = EXTENSION_RELATIONS[parsed_type]

    try:
        async with db.session() as session:
            result = await session.execute(
                select(Product)
                .where(Product.type == parsed_type.value)
                .options(selectinload(getattr(Product, relation)))
                .order_by(Product.id)
            )
            products = result.scalars().all()
    except SQLAlchemyError as e:
        raise db.translate_error(e)

    return [merge_product(product, getattr(product, relation)) for product in products]
