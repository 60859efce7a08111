"""Read-time price noise used to simulate a live market in the UI."""

from __future__ import annotations

import random
from collections.abc import Sequence

from src.models.product import Product

MAX_PRICE_SWING = 0.05


def jitter(price: float, rng: random.Random | None = None) -> float:
    """Return the price moved by a uniform random swing of at most 5%."""

    source = rng or random
    return price * (1 + source.uniform(-MAX_PRICE_SWING, MAX_PRICE_SWING))


def simulate_prices(
    products: Sequence[Product], rng: random.Random | None = None
) -> list[Product]:
    """Return copies of the products with independently jittered prices.

    The stored products are left untouched.
    """

    return [
        product.model_copy(update={"price": jitter(product.price, rng)})
        for product in products
    ]
