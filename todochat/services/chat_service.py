"""
Chat Service - One prompt in, assistant replies out.

This service orchestrates a single turn:
1. Sends the user prompt to the model session
2. Records the model's text reply
3. Runs each requested function call in order
4. Sends each result back and records the model's follow-up

A failed function call is logged, reported as "Operation failed" and
answered to the model with an error result. The remaining calls still
run. A failed model request aborts the turn with ChatServiceError.
"""
from typing import Optional

from todochat.core.exceptions import LLMError, TodoChatException
from todochat.core.logging_config import get_logger
from todochat.llm.client import ChatSession, LLMClient
from todochat.models.chat import ChatTurn, FunctionCall, ModelReply
from todochat.services.dispatcher import FunctionDispatcher

logger = get_logger(__name__)

OPERATION_FAILED = "Operation failed"


class ChatService:
    """
    Service for running to-do conversations with the model.

    Example:
        >>> service = ChatService()
        >>> turn = service.process_message("Add buy milk to my list")
        >>> turn.replies
        ["I've added 'buy milk' to your list."]
    """

    def __init__(
        self,
        session: Optional[ChatSession] = None,
        dispatcher: Optional[FunctionDispatcher] = None
    ):
        """
        Initialize the chat service.

        Args:
            session: Model chat session. Started from LLMClient if not provided.
            dispatcher: Function dispatcher. Uses the default repository if not provided.
        """
        self.session = session or LLMClient().start_chat()
        self.dispatcher = dispatcher or FunctionDispatcher()
        logger.info(f"ChatService initialized: provider={self.session.provider or 'custom'}")

    def process_message(self, prompt: str) -> ChatTurn:
        """
        Process one user prompt.

        Args:
            prompt: The user's natural language input

        Returns:
            ChatTurn with the assistant replies in order

        Raises:
            ChatServiceError: If the model request for the prompt fails
        """
        logger.info(f"Processing prompt: length={len(prompt)}")
        turn = ChatTurn(prompt=prompt)

        try:
            reply = self.session.send_message(prompt)
        except LLMError as e:
            logger.error(f"LLM error during message processing: {e} ({e.details})")
            raise ChatServiceError(str(e)) from e
        except Exception as e:
            logger.exception(f"Unexpected error in chat service: {e}")
            raise ChatServiceError("Failed to process message") from e

        self._record_reply(turn, reply.text)

        for call in reply.function_calls:
            self._run_function_call(turn, call)

        logger.info(
            f"Prompt processed: replies={len(turn.replies)}, "
            f"calls={turn.function_calls}, failed={turn.failed_calls}"
        )
        return turn

    def _run_function_call(self, turn: ChatTurn, call: FunctionCall) -> None:
        """Execute one call and feed its result back to the model."""
        try:
            result = self.dispatcher.dispatch(call)
            follow_up = self.session.send_function_response(call, {"todos": result})
        except TodoChatException as e:
            logger.error(f"Function call {call.name} failed: {e} ({e.details})")
            self._report_failure(turn, call)
            return
        except Exception as e:
            logger.exception(f"Unexpected error running {call.name}: {e}")
            self._report_failure(turn, call)
            return

        turn.function_calls.append(call.name)
        self._record_follow_up(turn, call, follow_up)

    def _report_failure(self, turn: ChatTurn, call: FunctionCall) -> None:
        """Record a failed call and answer it with an error result."""
        turn.failed_calls.append(call.name)
        turn.replies.append(OPERATION_FAILED)

        try:
            follow_up = self.session.send_function_error(call)
        except TodoChatException as e:
            logger.error(f"Could not report failure of {call.name}: {e} ({e.details})")
            return
        except Exception as e:
            logger.exception(f"Unexpected error reporting failure of {call.name}: {e}")
            return

        self._record_follow_up(turn, call, follow_up)

    def _record_follow_up(self, turn: ChatTurn, call: FunctionCall, follow_up: ModelReply) -> None:
        self._record_reply(turn, follow_up.text)

        if follow_up.has_function_calls:
            # Only one round of calls per prompt
            logger.debug(
                f"Ignoring {len(follow_up.function_calls)} chained function calls after {call.name}"
            )

    @staticmethod
    def _record_reply(turn: ChatTurn, text: str) -> None:
        text = text.strip()
        if text:
            turn.replies.append(text)


class ChatServiceError(Exception):
    """
    Raised when a prompt cannot be processed.

    Function-call failures do not raise this; they are
    reported inside the ChatTurn.
    """
    pass
