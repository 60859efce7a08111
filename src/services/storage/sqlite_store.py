"""SQLite-backed product store built on SQLModel."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from threading import RLock

from sqlalchemy import func
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Field, Session, SQLModel, create_engine, select

from src.models.product import Product, ProductCreate
from src.services.errors import ProductNotFoundError, StorageUnavailableError
from src.services.storage.base import ProductFactory, ProductStore

logger = logging.getLogger(__name__)


class ProductRow(SQLModel, table=True):
    """Products table, one column per product field."""

    __tablename__ = "products"

    id: int = Field(primary_key=True)
    name: str = Field(nullable=False)
    price: float = Field(nullable=False)
    image: str | None = None
    description: str | None = None
    category: str | None = Field(default=None, index=True)

    def to_product(self) -> Product:
        return Product(
            id=self.id,
            name=self.name,
            price=self.price,
            image=self.image,
            description=self.description,
            category=self.category,
        )


def create_sqlite_engine(database_url: str, echo: bool = False) -> Engine:
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, echo=echo, connect_args=connect_args)


class SqliteProductStore(ProductStore):
    """Durable product store; database failures surface as ``StorageUnavailableError``."""

    backend_name = "sqlite"

    def __init__(self, engine: Engine) -> None:
        self._lock = RLock()
        self._engine = engine
        SQLModel.metadata.create_all(engine)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        try:
            with Session(self._engine) as session:
                yield session
        except SQLAlchemyError as exc:
            logger.error("Product storage failure: %s", exc, exc_info=True)
            raise StorageUnavailableError() from exc

    def list_products(self) -> list[Product]:
        with self._lock, self._session() as session:
            rows = session.exec(select(ProductRow).order_by(ProductRow.id)).all()
            return [row.to_product() for row in rows]

    def get(self, product_id: int) -> Product:
        with self._lock, self._session() as session:
            row = session.get(ProductRow, product_id)
            if row is None:
                raise ProductNotFoundError(product_id)
            return row.to_product()

    def create_from(self, factory: ProductFactory) -> Product:
        with self._lock, self._session() as session:
            max_id = session.exec(select(func.max(ProductRow.id))).one()
            new_id = (max_id or 0) + 1
            row = ProductRow(id=new_id, **factory(new_id).model_dump(exclude={"id"}))
            session.add(row)
            session.commit()
            session.refresh(row)
            product = row.to_product()

        logger.info("Created product %s", product.id, extra={"backend": "sqlite"})
        return product

    def update(self, product_id: int, payload: ProductCreate) -> Product:
        with self._lock, self._session() as session:
            row = session.get(ProductRow, product_id)
            if row is None:
                raise ProductNotFoundError(product_id)
            for field_name, value in payload.model_dump(exclude={"id"}).items():
                setattr(row, field_name, value)
            session.add(row)
            session.commit()
            session.refresh(row)
            product = row.to_product()

        logger.info("Updated product %s", product_id, extra={"backend": "sqlite"})
        return product

    def delete(self, product_id: int) -> None:
        with self._lock, self._session() as session:
            row = session.get(ProductRow, product_id)
            if row is None:
                raise ProductNotFoundError(product_id)
            session.delete(row)
            session.commit()

        logger.info("Deleted product %s", product_id, extra={"backend": "sqlite"})

    def count(self) -> int:
        with self._lock, self._session() as session:
            return session.exec(select(func.count()).select_from(ProductRow)).one()

    def seed(self, products: list[Product]) -> None:
        """Insert the products when the table is empty."""

        with self._lock, self._session() as session:
            existing = session.exec(select(func.count()).select_from(ProductRow)).one()
            if existing:
                return
            session.add_all([ProductRow(**p.model_dump()) for p in products])
            session.commit()

        logger.info("Seeded %d products into SQLite", len(products))
