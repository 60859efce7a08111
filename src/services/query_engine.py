"""Filtering, sorting and pagination over product snapshots."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from functools import cmp_to_key

from src.models.product import Product, ProductQuery

Comparator = Callable[[Product, Product], int]


def _compare(left, right) -> int:
    # Values that are neither smaller nor larger (NaN) compare as equal
    if left < right:
        return -1
    if left > right:
        return 1
    return 0


_COMPARATORS: dict[str, Comparator] = {
    "name": lambda a, b: _compare(a.name, b.name),
    "price": lambda a, b: _compare(a.price, b.price),
    "category": lambda a, b: _compare(a.category or "", b.category or ""),
}


def _matches_search(product: Product, term: str) -> bool:
    fields = (product.name, product.description, product.category)
    return any(value is not None and term in value.lower() for value in fields)


def filter_products(products: Sequence[Product], query: ProductQuery) -> list[Product]:
    """Keep the products that satisfy every filter present on the query."""

    filtered = list(products)

    if query.category is not None:
        filtered = [p for p in filtered if p.category == query.category]

    if query.min_price is not None:
        filtered = [p for p in filtered if p.price >= query.min_price]

    if query.max_price is not None:
        filtered = [p for p in filtered if p.price <= query.max_price]

    if query.search_term is not None:
        term = query.search_term.lower()
        filtered = [p for p in filtered if _matches_search(p, term)]

    return filtered


def sort_products(products: Sequence[Product], query: ProductQuery) -> list[Product]:
    """Stable sort by the requested key; unknown keys leave the order unchanged."""

    if query.sort_by is None:
        return list(products)

    comparator = _COMPARATORS.get(query.sort_by)
    if comparator is None:
        return list(products)

    if query.sort_order == "desc":
        return sorted(products, key=cmp_to_key(lambda a, b: -comparator(a, b)))
    return sorted(products, key=cmp_to_key(comparator))


def paginate(products: Sequence[Product], offset: int, limit: int) -> list[Product]:
    if offset >= len(products):
        return []
    return list(products[offset : offset + limit])


def apply_query(products: Sequence[Product], query: ProductQuery) -> list[Product]:
    """Filter, then sort, then paginate the given snapshot."""

    filtered = filter_products(products, query)
    ordered = sort_products(filtered, query)
    return paginate(ordered, query.offset, query.limit)
