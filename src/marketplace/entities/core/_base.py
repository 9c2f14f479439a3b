import uuid
from datetime import UTC, datetime

import sqlalchemy as sa
from pydantic import BaseModel
from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel

from src.marketplace.core.models.base import camel_config


def utc_now() -> datetime:
    """Return current UTC datetime."""
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes read back from databases without tz support."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class Entity(BaseModel):
    """Base entity class with auto-generated UUID identifier."""

    model_config = camel_config

    id: str = PydanticField(
        default_factory=lambda: str(uuid.uuid4()),
        description="Unique identifier for the entity",
    )

    created_at: datetime = PydanticField(default_factory=utc_now)
    updated_at: datetime = PydanticField(default_factory=utc_now)


class EntityTable(SQLModel, table=False):
    """Base table class with auto-generated UUID identifier."""

    id: str = Field(
        primary_key=True,
        default_factory=lambda: str(uuid.uuid4()),
        description="Unique identifier for the entity",
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=sa.DateTime(timezone=True),
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        nullable=False,
        sa_type=sa.DateTime(timezone=True),
        sa_column_kwargs={
            "server_default": sa.func.now(),
            "onupdate": utc_now,
        },
    )


class SoftDeleteMixin(SQLModel, table=False):
    """Adds the ``deleted_at`` marker used instead of physical deletes."""

    deleted_at: datetime | None = Field(
        default=None, sa_type=sa.DateTime(timezone=True), index=True
    )
