"""Tests for product payload validation."""

import math

import pytest

from src.models.product import ProductCreate
from src.services.errors import ProductValidationError
from src.services.validation import validate_product


def _payload(**overrides) -> ProductCreate:
    fields = {
        "name": "Test Product",
        "price": 99.99,
        "image": "/test.jpg",
        "description": "Test Description",
        "category": "Test",
    }
    fields.update(overrides)
    return ProductCreate(**fields)


def test_valid_product_passes():
    validate_product(_payload())


def test_description_and_image_are_optional():
    validate_product(_payload(description=None, image=None))


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"name": ""}, "Product name cannot be empty"),
        ({"name": "   "}, "Product name cannot be empty"),
        ({"price": 0.0}, "Product price must be greater than 0"),
        ({"price": -5.0}, "Product price must be greater than 0"),
        ({"price": math.nan}, "Product price must be greater than 0"),
        ({"price": math.inf}, "Product price must be greater than 0"),
        ({"category": ""}, "Product category cannot be empty"),
        ({"category": None}, "Product category cannot be empty"),
        (
            {"description": "Short"},
            "Product description must be at least 10 characters long",
        ),
    ],
)
def test_invalid_payloads_are_rejected(overrides, message):
    with pytest.raises(ProductValidationError) as exc_info:
        validate_product(_payload(**overrides))

    assert exc_info.value.message == message
    assert exc_info.value.status_code == 400
