from enum import Enum


class ErrorType(Enum):
    VALIDATION_ERROR = "validation_error"
    INVALID_PRODUCT_TYPE = "invalid_product_type"
    INVALID_BULK_INPUT = "invalid_bulk_input"
    NOT_FOUND = "not_found"
    UNIQUE_VIOLATION = "unique_violation"
    FOREIGN_KEY_VIOLATION = "foreign_key_violation"
    NOT_NULL_VIOLATION = "not_null_violation"
    CREATION_FAILED = "creation_failed"
    PERSISTENCE_ERROR = "persistence_error"
    ENRICHMENT_FAILED = "enrichment_failed"
    CORRUPT_PRODUCT_TYPE = "corrupt_product_type"
    INTERNAL_ERROR = "internal_error"


# Map error types to HTTP status codes
ERROR_STATUS_MAP = {
    ErrorType.VALIDATION_ERROR: 422,
    ErrorType.INVALID_PRODUCT_TYPE: 400,
    ErrorType.INVALID_BULK_INPUT: 400,
    ErrorType.NOT_FOUND: 404,
    ErrorType.UNIQUE_VIOLATION: 400,
    ErrorType.FOREIGN_KEY_VIOLATION: 400,
    ErrorType.NOT_NULL_VIOLATION: 400,
    ErrorType.CREATION_FAILED: 400,
    ErrorType.PERSISTENCE_ERROR: 500,
    ErrorType.ENRICHMENT_FAILED: 400,
    ErrorType.CORRUPT_PRODUCT_TYPE: 500,
    ErrorType.INTERNAL_ERROR: 500,
}

# Stable messages for storage errors; the raw driver text is never returned
PERSISTENCE_MESSAGES = {
    ErrorType.UNIQUE_VIOLATION: "Unique constraint failed: a record with the same value already exists.",
    ErrorType.FOREIGN_KEY_VIOLATION: "Foreign key constraint failed: a referenced record does not exist.",
    ErrorType.NOT_NULL_VIOLATION: "Null constraint violation: a required value is missing.",
    ErrorType.CREATION_FAILED: "The record could not be created.",
    ErrorType.PERSISTENCE_ERROR: "An unknown database error occurred.",
}
