"""Schema management for the marketplace database."""

from loguru import logger
from sqlalchemy import Engine
from sqlmodel import SQLModel, create_engine

from src.marketplace.runtime.context import get_config


class DbManageService:
    def __init__(self, engine: Engine | None = None):
        self._engine = engine or create_engine(
            get_config().database.connection_string, echo=False
        )

    def create_all(self) -> None:
        """Create all database tables."""
        import src.marketplace.entities  # noqa: F401

        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with {} tables.", len(SQLModel.metadata.tables))

    def drop_all(self) -> None:
        import src.marketplace.entities  # noqa: F401

        SQLModel.metadata.drop_all(self._engine)
        logger.warning("All database tables dropped.")
