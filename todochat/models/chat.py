"""
Chat models - Provider-neutral shapes for model replies and chat turns.

Both model backends are normalised into ModelReply so that the
chat service never touches SDK response objects.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class FunctionCall(BaseModel):
    """
    A function call requested by the model.

    Attributes:
        name: Registered function name (e.g. 'createTodo')
        args: Arguments as decoded from the model response
        call_id: Provider call id, needed to answer Groq tool calls
    """
    name: str
    args: Dict[str, Any] = Field(default_factory=dict)
    call_id: Optional[str] = None


class ModelReply(BaseModel):
    """Text plus any function calls from one model response."""
    text: str = ""
    function_calls: List[FunctionCall] = Field(default_factory=list)

    @property
    def has_function_calls(self) -> bool:
        return len(self.function_calls) > 0


class ChatTurn(BaseModel):
    """
    Everything the assistant said in response to one prompt.

    Attributes:
        prompt: The user's input
        replies: Assistant messages in the order they were produced
        function_calls: Names of the functions that were executed
        failed_calls: Names of the functions whose execution failed
    """
    prompt: str
    replies: List[str] = Field(default_factory=list)
    function_calls: List[str] = Field(default_factory=list)
    failed_calls: List[str] = Field(default_factory=list)
