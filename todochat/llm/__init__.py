"""
LLM module - Language model integration.

This module handles all model interactions:
- Function declarations offered to the model
- Chat sessions with Gemini and Groq
- Normalising responses into text plus function calls
"""
from todochat.core.exceptions import LLMError
from todochat.llm.client import (
    LLMClient,
    ChatSession,
    GeminiChatSession,
    GroqChatSession,
)
from todochat.llm.declarations import (
    FUNCTION_DECLARATIONS,
    SYSTEM_INSTRUCTION,
    function_names,
    gemini_tools,
    openai_tools,
)

__all__ = [
    "LLMClient",
    "LLMError",
    "ChatSession",
    "GeminiChatSession",
    "GroqChatSession",
    "FUNCTION_DECLARATIONS",
    "SYSTEM_INSTRUCTION",
    "function_names",
    "gemini_tools",
    "openai_tools",
]
