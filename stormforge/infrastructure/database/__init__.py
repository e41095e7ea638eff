"""Database infrastructure - connection, models, and session management."""

from stormforge.infrastructure.database.connection import (
    close_db,
    create_tables,
    get_db,
    get_engine,
    init_db,
)

__all__ = ["init_db", "close_db", "create_tables", "get_db", "get_engine"]
