"""Routes for managing products in the catalog."""

from __future__ import annotations

import asyncio
import logging
from typing import Annotated

from fastapi import APIRouter, Body, Query, Response, status

from src.config import settings
from src.models.product import (
    ErrorResponse,
    GenerationStatus,
    Product,
    ProductCreate,
    ProductQuery,
    ProductUpdate,
)
from src.services.live_updates import HubDependency
from src.services.price_simulator import simulate_prices
from src.services.product_registry import StoreDependency
from src.services.query_engine import apply_query
from src.services.validation import validate_product
from src.services.workers.product_generator import GeneratorDependency

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])

_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}
_INVALID = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}}


def _present(products: list[Product]) -> list[Product]:
    """Apply read-time price jitter when the simulation is switched on.

    Runs before querying so filters and sorting see the prices the client gets.
    """

    if settings.PRICE_SIMULATION_ENABLED:
        return simulate_prices(products)
    return products


@router.get(
    "",
    response_model=list[Product],
    summary="List products with optional filters, sorting and pagination",
)
async def list_products(
    store: StoreDependency,
    category: str | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
    search_term: str | None = None,
    sort_by: str | None = None,
    sort_order: str = "asc",
    offset: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int | None, Query(ge=0)] = None,
) -> list[Product]:
    query = ProductQuery(
        category=category,
        min_price=min_price,
        max_price=max_price,
        search_term=search_term,
        sort_by=sort_by,
        sort_order=sort_order,
        offset=offset,
        limit=settings.DEFAULT_PAGE_SIZE if limit is None else limit,
    )
    products = await asyncio.to_thread(store.list_products)
    return apply_query(_present(products), query)


@router.get("/{product_id}", response_model=Product, responses=_NOT_FOUND)
async def get_product(product_id: int, store: StoreDependency) -> Product:
    product = await asyncio.to_thread(store.get, product_id)
    return _present([product])[0]


@router.post(
    "",
    response_model=Product,
    status_code=status.HTTP_201_CREATED,
    responses=_INVALID,
    summary="Create a product and push it to live subscribers",
)
async def create_product(
    payload: ProductCreate,
    store: StoreDependency,
    hub: HubDependency,
) -> Product:
    validate_product(payload)
    product = await asyncio.to_thread(store.create, payload)
    delivered = hub.publish(product)

    logger.info(
        "[product-created]",
        extra={"product_id": product.id, "subscribers": delivered},
    )
    return product


@router.put(
    "/{product_id}",
    response_model=Product,
    responses={**_NOT_FOUND, **_INVALID},
    summary="Replace every field of a product except its id",
)
async def update_product(
    product_id: int,
    payload: ProductUpdate,
    store: StoreDependency,
) -> Product:
    if payload.id is not None and payload.id != product_id:
        logger.debug(
            "Ignoring payload id %s for product %s", payload.id, product_id
        )
    # An unknown id is reported before any problem with the body
    await asyncio.to_thread(store.get, product_id)
    validate_product(payload)
    return await asyncio.to_thread(store.update, product_id, payload)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_NOT_FOUND,
)
async def delete_product(product_id: int, store: StoreDependency) -> Response:
    await asyncio.to_thread(store.delete, product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/generate",
    response_model=GenerationStatus,
    summary="Turn periodic synthetic product generation on or off",
)
async def toggle_generation(
    enabled: Annotated[bool, Body()],
    generator: GeneratorDependency,
) -> GenerationStatus:
    is_generating = generator.set_enabled(enabled)
    logger.info("Product generation toggled", extra={"is_generating": is_generating})
    return GenerationStatus(is_generating=is_generating)
