# backend/schema.py
"""Creating, dropping and rendering the catalog schema."""
from flask import current_app
from sqlalchemy import create_engine, text
from sqlalchemy.dialects import mysql, sqlite
from sqlalchemy.schema import CreateIndex, CreateTable

from models import db

DIALECTS = {
    "mysql": mysql.dialect,
    "sqlite": sqlite.dialect,
}


def create_schema():
    """Create every table (dependency order) and its indexes. Existing tables are left alone."""
    db.create_all()
    current_app.logger.info("Created tables: %s", ", ".join(db.metadata.tables))


def drop_schema():
    db.drop_all()
    current_app.logger.info("Dropped all catalog tables")


def reset_database():
    """Start from an empty database.

    On MySQL the whole database is dropped and re-created with the catalog's
    character set and collation; other backends only drop and re-create the
    tables.
    """
    url = db.engine.url
    if url.get_backend_name() == "mysql":
        charset = current_app.config.get("DB_CHARSET", "utf8mb4")
        collation = current_app.config.get("DB_COLLATION", "utf8mb4_unicode_ci")
        name = url.database

        # The engine bound to `name` can't drop its own database while it holds connections
        db.engine.dispose()
        server = create_engine(url.set(database=None))
        try:
            with server.begin() as conn:
                conn.execute(text(f"DROP DATABASE IF EXISTS `{name}`"))
                conn.execute(text(f"CREATE DATABASE `{name}` CHARACTER SET {charset} COLLATE {collation}"))
        finally:
            server.dispose()
        current_app.logger.info("Re-created database %s (%s, %s)", name, charset, collation)
    else:
        drop_schema()

    create_schema()


def render_ddl(dialect="mysql"):
    """Return the CREATE TABLE and CREATE INDEX statements for ``dialect``."""
    if dialect not in DIALECTS:
        raise ValueError(f"Unsupported dialect {dialect!r}, expected one of: {', '.join(DIALECTS)}")
    target = DIALECTS[dialect]()

    statements = []
    tables = db.metadata.sorted_tables
    for table in tables:
        statements.append(str(CreateTable(table).compile(dialect=target)).strip() + ";")
    for table in tables:
        for index in sorted(table.indexes, key=lambda idx: idx.name):
            statements.append(str(CreateIndex(index).compile(dialect=target)).strip() + ";")
    return statements
