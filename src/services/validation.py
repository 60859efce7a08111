"""Field constraints applied to product payloads before they are stored."""

from __future__ import annotations

import math

from src.models.product import ProductCreate
from src.services.errors import ProductValidationError

MIN_DESCRIPTION_LENGTH = 10


def validate_product(payload: ProductCreate) -> None:
    """Raise ``ProductValidationError`` on the first constraint the payload breaks."""

    if not payload.name or not payload.name.strip():
        raise ProductValidationError("Product name cannot be empty")

    # NaN fails every comparison, so it is rejected here too
    if not (payload.price > 0) or math.isinf(payload.price):
        raise ProductValidationError("Product price must be greater than 0")

    if not payload.category or not payload.category.strip():
        raise ProductValidationError("Product category cannot be empty")

    if (
        payload.description is not None
        and len(payload.description) < MIN_DESCRIPTION_LENGTH
    ):
        raise ProductValidationError(
            f"Product description must be at least {MIN_DESCRIPTION_LENGTH} "
            "characters long"
        )
