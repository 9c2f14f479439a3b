"""Product repository."""

from sqlmodel import Session, col, select

from src.marketplace.entities.service.product.entity import Product
from src.marketplace.entities.service.product.table import ProductTable


class ProductRepository:
    """Data-access layer for products."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, product_id: str) -> Product | None:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return None
        return Product.model_validate(row, from_attributes=True)

    def create(self, product: Product) -> Product:
        row = ProductTable.model_validate(product.model_dump())
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Product.model_validate(row, from_attributes=True)

    def get_orderable(self, product_ids: list[str]) -> dict[str, Product]:
        """Return available, live products among ``product_ids`` keyed by id."""
        if not product_ids:
            return {}
        statement = (
            select(ProductTable)
            .where(col(ProductTable.id).in_(product_ids))
            .where(col(ProductTable.is_available).is_(True))
            .where(col(ProductTable.deleted_at).is_(None))
        )
        return {
            row.id: Product.model_validate(row, from_attributes=True)
            for row in self._session.exec(statement)
        }
