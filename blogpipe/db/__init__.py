"""Database management for blogpipe."""

from .articles import ArticleStore
from .connection import get_connection
from .init import init_database, validate_connection
from .runs import RunManager

__all__ = ["ArticleStore", "RunManager", "get_connection", "init_database", "validate_connection"]
