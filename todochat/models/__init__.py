"""
Models module - Pydantic schemas for data validation.

This module defines:
- To-do models: Function-call argument validation
- Chat models: Normalised model replies and chat turns
"""
from todochat.models.chat import (
    FunctionCall,
    ModelReply,
    ChatTurn,
)
from todochat.models.todo import (
    CreateTodoArgs,
    SearchTodoArgs,
    DeleteTodoArgs,
)

__all__ = [
    "FunctionCall",
    "ModelReply",
    "ChatTurn",
    "CreateTodoArgs",
    "SearchTodoArgs",
    "DeleteTodoArgs",
]
