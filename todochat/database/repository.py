"""
To-do Repository - The four queries behind the assistant's functions.

Each method is one parameterized statement against the to-do table:
- get_all_todos : full scan
- create_todo   : insert, returns the new id
- search_todo   : case-insensitive substring match
- delete_todo   : delete by id
"""
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from todochat.core.exceptions import DatabaseError
from todochat.core.logging_config import get_logger
from todochat.database.connection import DatabaseConnection, get_database
from todochat.database.models import Todo

logger = get_logger(__name__)

DELETE_SUCCESS = "Deleted successfully"
DELETE_FAILURE = "Failed to delete"


class TodoRepository:
    """
    Query wrappers for the to-do table.

    Results are plain dicts so they can be handed straight
    back to the model as a function response.

    Example:
        >>> repo = TodoRepository()
        >>> new_id = repo.create_todo("Buy milk")
        >>> repo.search_todo("MILK")
        [{"id": 1, "todo": "Buy milk"}]
    """

    def __init__(self, db: Optional[DatabaseConnection] = None):
        self.db = db or get_database()

    def get_all_todos(self) -> List[Dict[str, Any]]:
        """Return every to-do as {"id", "todo"}."""
        try:
            with self.db.get_session() as session:
                rows = session.execute(
                    select(Todo.id, Todo.todo).order_by(Todo.id)
                ).all()
        except SQLAlchemyError as e:
            raise DatabaseError("Failed to list todos", details=str(e)) from e

        logger.debug(f"Listed {len(rows)} todos")
        return [{"id": row.id, "todo": row.todo} for row in rows]

    def create_todo(self, todo: str) -> Optional[int]:
        """
        Insert a to-do.

        Returns:
            The auto-assigned id, or None if the database gave none back
        """
        try:
            with self.db.get_session() as session:
                item = Todo(todo=todo)
                session.add(item)
                session.flush()
                new_id = item.id
        except SQLAlchemyError as e:
            raise DatabaseError("Failed to create todo", details=str(e)) from e

        logger.info(f"Created todo id={new_id}")
        return new_id or None

    def search_todo(self, search: str) -> List[Dict[str, Any]]:
        """
        Find to-dos whose text contains the term, ignoring case.

        LIKE wildcards in the term are not escaped.
        """
        try:
            with self.db.get_session() as session:
                items = session.scalars(
                    select(Todo)
                    .where(Todo.todo.ilike(f"%{search}%"))
                    .order_by(Todo.id)
                ).all()
                results = [item.to_dict() for item in items]
        except SQLAlchemyError as e:
            raise DatabaseError("Failed to search todos", details=str(e)) from e

        logger.debug(f"Search {search!r} matched {len(results)} todos")
        return results

    def delete_todo(self, todo_id: int) -> str:
        """
        Delete a to-do by id.

        Returns:
            DELETE_SUCCESS if a row was removed, DELETE_FAILURE otherwise
        """
        try:
            with self.db.get_session() as session:
                result = session.execute(delete(Todo).where(Todo.id == todo_id))
                deleted = result.rowcount
        except SQLAlchemyError as e:
            raise DatabaseError("Failed to delete todo", details=str(e)) from e

        if deleted:
            logger.info(f"Deleted todo id={todo_id}")
            return DELETE_SUCCESS

        logger.warning(f"Delete found no todo with id={todo_id}")
        return DELETE_FAILURE
