from typing import Any

from pydantic import BaseModel


# The item lists are left untyped: a missing, empty or non-list value is
# rejected by the bulk service with a 400 rather than a 422.
class BulkProductsRequest(BaseModel):
    products: Any = None


class BulkFeedbacksRequest(BaseModel):
    feedbacks: Any = None


class BulkResponse(BaseModel):
    success_count: int
    failure_count: int
    errors: list[str]
