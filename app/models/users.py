"""User model definition using SQLAlchemy Core."""

from sqlalchemy import (
    Column,
    DateTime,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    func,
)

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    # Credentials
    Column("username", String(20), nullable=False, unique=True, index=True),
    # Stored as submitted; login compares it byte for byte
    Column("password", Text, nullable=False, server_default=""),
    Column("email", String(100), nullable=False, unique=True, index=True),
    # Audit
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column("updated_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column("deleted_at", DateTime(timezone=True)),
)
