"""Error types raised by the catalog services."""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for failures reported to API clients."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ProductNotFoundError(CatalogError):
    status_code = 404

    def __init__(self, product_id: int) -> None:
        super().__init__("Product not found")
        self.product_id = product_id


class ProductValidationError(CatalogError):
    """Raised when a product payload breaks a field constraint."""

    status_code = 400


class StorageUnavailableError(CatalogError):
    """Raised when the durable backend cannot serve a request."""

    status_code = 500

    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(message)


class FileNotFoundInStorageError(CatalogError):
    status_code = 404

    def __init__(self, filename: str) -> None:
        super().__init__("File not found")
        self.filename = filename


class InvalidUploadError(CatalogError):
    status_code = 400
