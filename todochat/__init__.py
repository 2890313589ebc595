"""
To-do chat assistant package.

This package is organized by responsibility:
- cli/       : Interactive prompt loop and console entry point
- core/      : Configuration, logging, and exceptions
- services/  : Function dispatch and chat orchestration
- llm/       : Function declarations and model chat sessions
- database/  : Engine management, ORM model, and to-do queries
- models/    : Pydantic schemas shared between layers
"""

__version__ = "1.0.0"
