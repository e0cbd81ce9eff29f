"""
SQLAlchemy table definitions for the travel bounded context.

The users table is owned by account management; this service only
reads owner profiles from it.
"""

import logging

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
)
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("role", String(10), nullable=False, server_default="user"),
    Column("created_at", DateTime(timezone=True), nullable=True),
    Column("updated_at", DateTime(timezone=True), nullable=True),
)

travel_orders = Table(
    "travel_orders",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "user_id",
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("city", String(70), nullable=False),
    Column("state", String(50), nullable=False),
    Column("country", String(60), nullable=False),
    Column("departure_date", Date, nullable=False),
    Column("return_date", Date, nullable=False),
    Column("status", String(16), nullable=False, server_default="Requested"),
    Column("created_at", DateTime(timezone=True), nullable=True),
    Column("updated_at", DateTime(timezone=True), nullable=True),
    Column("deleted_at", DateTime(timezone=True), nullable=True),
    Index("ix_travel_orders_user_id", "user_id"),
    Index("ix_travel_orders_status", "status"),
)


def create_schema(engine: Engine) -> None:
    """Create missing tables. Existing tables are left untouched."""
    metadata.create_all(engine)
    logger.info("Travel schema ensured on %s", engine.url.render_as_string(hide_password=True))
