"""
LLM chat sessions with function calling.

This module provides a provider-neutral chat session on top of:
- Google Gemini (google-generativeai), the default
- Groq (OpenAI-compatible chat completions)

A session keeps the conversation state. Every response is normalised
into a ModelReply carrying the text and any requested function calls,
so the chat service never touches SDK objects.
"""
import json
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any, Dict, List, Optional

import google.generativeai as genai
from groq import Groq

from todochat.core.config import Settings, get_settings
from todochat.core.exceptions import LLMError
from todochat.core.logging_config import get_logger
from todochat.llm.declarations import SYSTEM_INSTRUCTION, gemini_tools, openai_tools
from todochat.models.chat import FunctionCall, ModelReply

logger = get_logger(__name__)


def _to_plain(value: Any) -> Any:
    """Convert proto map/repeated composites into plain dicts and lists."""
    if isinstance(value, Mapping):
        return {key: _to_plain(item) for key, item in value.items()}
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return [_to_plain(item) for item in value]
    return value


def reply_from_gemini_response(response) -> ModelReply:
    """
    Build a ModelReply from a google-generativeai response.

    response.text raises when a candidate only holds function calls,
    so the text parts are collected by hand.
    """
    texts: List[str] = []
    calls: List[FunctionCall] = []

    for part in response.parts:
        if getattr(part, "text", ""):
            texts.append(part.text)
        function_call = getattr(part, "function_call", None)
        if function_call is not None and function_call.name:
            calls.append(FunctionCall(
                name=function_call.name,
                args=_to_plain(function_call.args) if function_call.args else {},
            ))

    return ModelReply(text="".join(texts), function_calls=calls)


def reply_from_groq_response(response) -> ModelReply:
    """Build a ModelReply from a Groq chat completion."""
    message = response.choices[0].message
    calls = []
    for tool_call in message.tool_calls or []:
        arguments = tool_call.function.arguments or "{}"
        try:
            args = json.loads(arguments)
        except json.JSONDecodeError as e:
            raise LLMError(
                "Model returned malformed function arguments",
                details=f"name={tool_call.function.name} arguments={arguments!r}"
            ) from e
        calls.append(FunctionCall(
            name=tool_call.function.name,
            args=args,
            call_id=tool_call.id,
        ))
    return ModelReply(text=message.content or "", function_calls=calls)


FUNCTION_ERROR_PAYLOAD = {"error": "Operation failed"}


class ChatSession(ABC):
    """
    A running conversation with the model.

    Function calls from one model reply are answered as a batch: each
    result is buffered, and the model is only called again once every
    call of the reply has a result or an error. Calls still open when
    the next prompt arrives are answered with an error result.
    """

    provider: str = ""

    def __init__(self):
        self._pending_calls: List[FunctionCall] = []

    @abstractmethod
    def send_message(self, prompt: str) -> ModelReply:
        """Send a user prompt and return the model's reply."""

    @abstractmethod
    def _add_function_result(self, call: FunctionCall, payload: Dict[str, Any]) -> None:
        """Buffer one function result for the next model request."""

    @abstractmethod
    def _send_function_results(self) -> ModelReply:
        """Send all buffered function results and return the model's reply."""

    def send_function_response(self, call: FunctionCall, payload: Dict[str, Any]) -> ModelReply:
        """
        Answer one function call of the last reply.

        Returns an empty reply while other calls of the same reply
        are still unanswered.
        """
        pending = self._take_pending(call)
        if pending is None:
            logger.warning(f"Dropping result for {call.name}: no such pending call ({call.call_id})")
            return ModelReply()

        self._add_function_result(pending, payload)
        if self._pending_calls:
            logger.debug(f"Waiting for {len(self._pending_calls)} more function responses")
            return ModelReply()

        return self._send_function_results()

    def send_function_error(self, call: FunctionCall) -> ModelReply:
        """Answer a call whose execution failed."""
        return self.send_function_response(call, dict(FUNCTION_ERROR_PAYLOAD))

    def _track_calls(self, reply: ModelReply) -> ModelReply:
        for index, call in enumerate(reply.function_calls):
            if not call.call_id:
                call.call_id = f"{call.name}-{index}"
        self._pending_calls = list(reply.function_calls)
        return reply

    def _take_pending(self, call: FunctionCall) -> Optional[FunctionCall]:
        for pending in self._pending_calls:
            if pending.call_id == call.call_id:
                self._pending_calls.remove(pending)
                return pending
        return None

    def _fail_pending_calls(self) -> bool:
        """Buffer error results for calls left open. True if there were any."""
        unanswered, self._pending_calls = self._pending_calls, []
        for call in unanswered:
            logger.warning(f"Function call {call.name} was never answered")
            self._add_function_result(call, dict(FUNCTION_ERROR_PAYLOAD))
        return bool(unanswered)


class GeminiChatSession(ChatSession):
    """
    Chat session backed by a google-generativeai ChatSession.

    Gemini expects one function_response part per function_call part
    of the previous turn, all in a single message.
    """

    provider = "gemini"

    def __init__(self, chat):
        super().__init__()
        self.chat = chat
        self._results: List[Any] = []

    def send_message(self, prompt: str) -> ModelReply:
        if self._fail_pending_calls():
            try:
                self._send_function_results()
            except LLMError as e:
                logger.warning(f"Could not close unanswered function calls: {e}")
            self._pending_calls = []

        return self._track_calls(self._send(prompt, "Gemini request failed"))

    def _add_function_result(self, call: FunctionCall, payload: Dict[str, Any]) -> None:
        try:
            part = genai.protos.Part(
                function_response=genai.protos.FunctionResponse(
                    name=call.name,
                    response=payload,
                )
            )
        except Exception as e:
            logger.error(f"Could not encode result of {call.name}: {e}")
            part = genai.protos.Part(
                function_response=genai.protos.FunctionResponse(
                    name=call.name,
                    response=dict(FUNCTION_ERROR_PAYLOAD),
                )
            )
        self._results.append(part)

    def _send_function_results(self) -> ModelReply:
        content = genai.protos.Content(parts=self._results)
        self._results = []
        return self._track_calls(self._send(content, "Gemini function response failed"))

    def _send(self, content, error_message: str) -> ModelReply:
        try:
            response = self.chat.send_message(content)
            return reply_from_gemini_response(response)
        except LLMError:
            raise
        except Exception as e:
            logger.error(f"{error_message}: {e}")
            raise LLMError(error_message, details=str(e)) from e


class GroqChatSession(ChatSession):
    """
    Chat session backed by Groq chat completions.

    History is kept as an OpenAI-style message list; function results
    are appended as role="tool" messages.
    """

    provider = "groq"

    def __init__(
        self,
        client: Groq,
        model: str,
        temperature: float = 0.1,
        system_instruction: str = SYSTEM_INSTRUCTION
    ):
        super().__init__()
        self.client = client
        self.model = model
        self.temperature = temperature
        self.messages: List[Dict[str, Any]] = [
            {"role": "system", "content": system_instruction}
        ]

    def send_message(self, prompt: str) -> ModelReply:
        self._fail_pending_calls()
        self.messages.append({"role": "user", "content": prompt})
        return self._complete()

    def _add_function_result(self, call: FunctionCall, payload: Dict[str, Any]) -> None:
        self.messages.append({
            "role": "tool",
            "tool_call_id": call.call_id,
            "name": call.name,
            "content": json.dumps(payload, default=str),
        })

    def _send_function_results(self) -> ModelReply:
        return self._complete()

    def _complete(self) -> ModelReply:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=self.messages,
                tools=openai_tools(),
                tool_choice="auto",
                temperature=self.temperature,
            )
        except Exception as e:
            logger.error(f"Groq request failed ({self.model}): {e}")
            raise LLMError("Groq request failed", details=str(e)) from e

        reply = reply_from_groq_response(response)

        assistant_message: Dict[str, Any] = {"role": "assistant", "content": reply.text}
        if reply.has_function_calls:
            assistant_message["tool_calls"] = [
                {
                    "id": call.call_id,
                    "type": "function",
                    "function": {"name": call.name, "arguments": json.dumps(call.args)},
                }
                for call in reply.function_calls
            ]
        self.messages.append(assistant_message)

        return self._track_calls(reply)


class LLMClient:
    """
    Factory for chat sessions with the configured provider.

    Example:
        >>> client = LLMClient()
        >>> session = client.start_chat()
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.provider = self.settings.llm_provider

    def start_chat(self) -> ChatSession:
        """
        Open a new chat session.

        Raises:
            LLMError: If the provider's API key is missing or the SDK fails
        """
        if self.provider == "groq":
            return self._start_groq()
        return self._start_gemini()

    def _start_gemini(self) -> GeminiChatSession:
        if not self.settings.google_api_key:
            raise LLMError(
                "Missing Gemini API key",
                details="Set API_KEY (or GOOGLE_API_KEY) in the environment"
            )

        try:
            genai.configure(api_key=self.settings.google_api_key)
            model = genai.GenerativeModel(
                model_name=self.settings.llm_model,
                system_instruction=SYSTEM_INSTRUCTION,
                tools=gemini_tools(),
                tool_config={"function_calling_config": {"mode": "AUTO"}},
                generation_config=genai.types.GenerationConfig(
                    temperature=self.settings.llm_temperature
                ),
            )
            chat = model.start_chat()
        except Exception as e:
            logger.error(f"Failed to start Gemini chat: {e}")
            raise LLMError("Failed to start Gemini chat", details=str(e)) from e

        logger.info(f"Gemini chat started: model={self.settings.llm_model}")
        return GeminiChatSession(chat)

    def _start_groq(self) -> GroqChatSession:
        if not self.settings.groq_api_key:
            raise LLMError(
                "Missing Groq API key",
                details="Set GROQ_API_KEY in the environment"
            )

        client = Groq(api_key=self.settings.groq_api_key)
        logger.info(f"Groq chat started: model={self.settings.groq_model}")
        return GroqChatSession(
            client,
            model=self.settings.groq_model,
            temperature=self.settings.llm_temperature,
        )
