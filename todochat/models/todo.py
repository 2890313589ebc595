"""
To-do schemas.

These models validate the arguments the model supplies with a function call.
"""
from pydantic import BaseModel, Field


class CreateTodoArgs(BaseModel):
    """Arguments for createTodo."""
    todo: str = Field(
        ...,
        min_length=1,
        description="The content of the todo item",
        examples=["Buy milk"]
    )


class SearchTodoArgs(BaseModel):
    """Arguments for searchTodo."""
    search: str = Field(
        ...,
        description="The search term to match against todo items"
    )


class DeleteTodoArgs(BaseModel):
    """
    Arguments for deleteTodo.

    Gemini sends numbers as floats (3.0); pydantic's lax mode
    coerces those to int and rejects fractional values.
    """
    id: int = Field(..., description="The unique ID of the todo item")
