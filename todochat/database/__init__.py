"""
Database module - To-do persistence layer.

This module handles:
- Database connection management
- The to-do ORM model
- Table initialization
- The four to-do queries
"""
from todochat.database.connection import DatabaseConnection, get_database, reset_database
from todochat.database.models import Todo, Base
from todochat.database.repository import TodoRepository, DELETE_SUCCESS, DELETE_FAILURE

__all__ = [
    # Connection
    "DatabaseConnection",
    "get_database",
    "reset_database",
    # Models
    "Todo",
    "Base",
    # Repository
    "TodoRepository",
    "DELETE_SUCCESS",
    "DELETE_FAILURE",
]
