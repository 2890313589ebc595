"""
Services module - Business logic and orchestration.

Services contain the core application logic:
- No terminal I/O (that belongs in cli/)
- No SQL (that belongs in database/)
- Orchestrate between the model session and the to-do queries
"""
from todochat.services.chat_service import ChatService, ChatServiceError, OPERATION_FAILED
from todochat.services.dispatcher import FunctionDispatcher

__all__ = [
    "ChatService",
    "ChatServiceError",
    "OPERATION_FAILED",
    "FunctionDispatcher",
]
