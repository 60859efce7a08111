"""Product domain models and API schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from src.config import settings


class ProductCreate(BaseModel):
    """Payload sent by clients when a product is created."""

    name: str = Field(..., description="Display name of the product")
    price: float = Field(..., description="Unit price, must be greater than 0")
    image: str | None = Field(None, description="Optional image path or URL")
    description: str | None = None
    category: str | None = Field(
        None,
        description="Category used for filtering",
    )


class ProductUpdate(ProductCreate):
    """Full replacement payload; any id it carries is overridden by the path."""

    id: int | None = Field(
        None,
        description="Ignored, the product id always comes from the URL",
    )


class Product(BaseModel):
    """A product stored in the catalog. Instances are immutable."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Unique identifier assigned by the store")
    name: str
    price: float
    image: str | None = None
    description: str | None = None
    category: str | None = None

    @classmethod
    def from_payload(cls, product_id: int, payload: ProductCreate) -> Product:
        """Build a stored product from a client payload and an assigned id."""

        return cls(
            id=product_id,
            name=payload.name,
            price=payload.price,
            image=payload.image,
            description=payload.description,
            category=payload.category,
        )


class ProductQuery(BaseModel):
    """Filter, sort and pagination options for listing products."""

    category: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    search_term: str | None = None
    sort_by: str | None = Field(
        None,
        description="One of name, price or category; other values keep the order",
    )
    sort_order: str = Field("asc", description="asc or desc")
    offset: int = Field(0, ge=0)
    limit: int = Field(default_factory=lambda: settings.DEFAULT_PAGE_SIZE, ge=0)


class GenerationStatus(BaseModel):
    """Response body for the generation toggle endpoint."""

    status: str = "success"
    is_generating: bool


class FileUploadResponse(BaseModel):
    status: str = "success"
    message: str
    filename: str


class FileListResponse(BaseModel):
    files: list[str] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    error: str
