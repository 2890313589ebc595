"""
Database Models - SQLAlchemy ORM model for the to-do table.

A to-do is an auto-assigned id plus free text. There is no
status, priority, or timestamp column.
"""
from typing import Dict, Any

from sqlalchemy import Column, Integer, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Todo(Base):
    """A single to-do item."""
    __tablename__ = "todos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    todo = Column(Text, nullable=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the shape handed back to the model."""
        return {
            "id": self.id,
            "todo": self.todo,
        }

    def __repr__(self) -> str:
        return f"<Todo id={self.id} todo={self.todo!r}>"
