"""
Function declarations offered to the model.

These are the static name/description/parameter contracts for the
four to-do operations. The same declarations are rendered in the
Gemini tool format and the OpenAI-compatible format used by Groq.
"""
from typing import Any, Dict, List

SYSTEM_INSTRUCTION = (
    "You are a To-do Manager who can perform To-do operations, "
    "you can perform operations like Create todo, Search todos, "
    "Delete todos and Get todos"
)

GET_ALL_TODOS = "getAllTodos"
CREATE_TODO = "createTodo"
SEARCH_TODO = "searchTodo"
DELETE_TODO = "deleteTodo"


FUNCTION_DECLARATIONS: List[Dict[str, Any]] = [
    {
        "name": GET_ALL_TODOS,
        "description": (
            "Retrieves all todo items from the database and returns them "
            "in an array containing todo items with their IDs."
        ),
    },
    {
        "name": CREATE_TODO,
        "description": "Creates a new todo in the database.",
        "parameters": {
            "type": "object",
            "description": "The todo item to be created.",
            "properties": {
                "todo": {
                    "type": "string",
                    "description": "The content of the todo item.",
                },
            },
            "required": ["todo"],
        },
    },
    {
        "name": SEARCH_TODO,
        "description": "Searches for todos that match the provided search term.",
        "parameters": {
            "type": "object",
            "description": "The search term to filter todos.",
            "properties": {
                "search": {
                    "type": "string",
                    "description": "The search term to match against todo items.",
                },
            },
            "required": ["search"],
        },
    },
    {
        "name": DELETE_TODO,
        "description": "Deletes a todo item by its ID.",
        "parameters": {
            "type": "object",
            "description": "The ID of the todo item to delete.",
            "properties": {
                "id": {
                    "type": "number",
                    "description": "The unique ID of the todo item.",
                },
            },
            "required": ["id"],
        },
    },
]


def function_names() -> List[str]:
    """Names of all registered functions, in declaration order."""
    return [declaration["name"] for declaration in FUNCTION_DECLARATIONS]


def gemini_tools() -> List[Dict[str, Any]]:
    """Declarations in the google-generativeai tools format."""
    return [{"function_declarations": [dict(d) for d in FUNCTION_DECLARATIONS]}]


def openai_tools() -> List[Dict[str, Any]]:
    """
    Declarations in the OpenAI-compatible tools format (Groq).

    OpenAI-style schemas require a parameters object even for
    functions that take no arguments.
    """
    tools = []
    for declaration in FUNCTION_DECLARATIONS:
        parameters = declaration.get("parameters", {"type": "object", "properties": {}})
        tools.append({
            "type": "function",
            "function": {
                "name": declaration["name"],
                "description": declaration["description"],
                "parameters": parameters,
            },
        })
    return tools
