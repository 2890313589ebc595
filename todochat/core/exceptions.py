"""
Custom Exceptions - Application-specific error classes.

Every error carries an error code and an optional detail string.
The chat loop logs these and shows the user a generic message.
"""
from typing import Optional


class TodoChatException(Exception):
    """
    Base exception for all assistant errors.

    Subclass this for specific error types.
    """
    error_code: str = "internal_error"

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        """Convert to a plain error dict."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details
        }


class DatabaseError(TodoChatException):
    """Raised when database operations fail."""
    error_code = "database_error"

    def __init__(self, message: str = "Database operation failed", details: Optional[str] = None):
        super().__init__(message, details)


class LLMError(TodoChatException):
    """Raised when model API calls fail."""
    error_code = "llm_error"

    def __init__(self, message: str = "LLM service unavailable", details: Optional[str] = None):
        super().__init__(message, details)


class UnknownFunctionError(TodoChatException):
    """Raised when the model asks for a function that is not registered."""
    error_code = "unknown_function"

    def __init__(self, name: str):
        super().__init__(
            message=f"Unknown function: {name}",
            details=f"name={name}"
        )
        self.name = name


class FunctionArgumentsError(TodoChatException):
    """Raised when a function call carries missing or malformed arguments."""
    error_code = "function_arguments_error"

    def __init__(self, name: str, details: Optional[str] = None):
        super().__init__(
            message=f"Invalid arguments for function: {name}",
            details=details
        )
        self.name = name
