"""Database utilities - engine and session."""

from src.taskboard.core.db.engine import (
    dispose_engine,
    get_engine,
    set_engine,
)
from src.taskboard.core.db.session import get_session

__all__ = [
    # Engine
    "dispose_engine",
    "get_engine",
    "set_engine",
    # Session
    "get_session",
]
