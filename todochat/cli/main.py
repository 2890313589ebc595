"""
Command-line entry point.

Reads prompts from standard input until the user types "exit",
forwards each one to the chat service, and prints the replies.

Run with: todochat   (or: python -m todochat)
"""
import argparse
import sys
from typing import Callable, List, Optional, TextIO

from sqlalchemy.exc import SQLAlchemyError

from todochat import __version__
from todochat.core.config import get_settings
from todochat.core.exceptions import TodoChatException
from todochat.core.logging_config import get_logger, setup_logging
from todochat.database import TodoRepository, get_database, reset_database
from todochat.llm.client import LLMClient
from todochat.services import ChatService, ChatServiceError, FunctionDispatcher

logger = get_logger(__name__)

EXIT_COMMAND = "exit"
PROMPT = "You: "
CHAT_ERROR_REPLY = "Sorry, I encountered an error"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="todochat",
        description="Manage your to-do list by chatting with an AI assistant.",
    )
    parser.add_argument("--database-url", help="SQLAlchemy URL of the to-do database (env: DATABASE_URL)")
    parser.add_argument("--provider", choices=["gemini", "groq"], help="Model provider (env: LLM_PROVIDER)")
    parser.add_argument("--model", help="Model name for the selected provider")
    parser.add_argument("--log-level", help="Console log level (env: LOG_LEVEL)")
    parser.add_argument(
        "--init-db",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Create the to-do table on start if missing",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run_chat_loop(
    service: ChatService,
    input_fn: Callable[[str], str] = input,
    output: Optional[TextIO] = None
) -> int:
    """
    Run the prompt loop until "exit" or end of input.

    Args:
        service: Chat service that handles each prompt
        input_fn: Reads one line, given the prompt text
        output: Where replies are written (stdout by default)

    Returns:
        Process exit code
    """
    output = output or sys.stdout

    while True:
        try:
            prompt = input_fn(PROMPT)
        except (EOFError, KeyboardInterrupt):
            print(file=output)
            break

        if prompt.strip().lower() == EXIT_COMMAND:
            break
        if not prompt.strip():
            continue

        try:
            turn = service.process_message(prompt)
        except ChatServiceError as e:
            logger.error(f"Chat error: {e}")
            print(f"Assistant: {CHAT_ERROR_REPLY}", file=output)
            continue

        for reply in turn.replies:
            print(f"Assistant: {reply}", file=output)

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        overrides = {
            "database_url": args.database_url,
            "llm_provider": args.provider,
            "log_level": args.log_level,
        }
        settings = get_settings().with_overrides(**overrides)
        if args.model:
            model_field = "groq_model" if settings.llm_provider == "groq" else "llm_model"
            settings = settings.with_overrides(**{model_field: args.model})
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    setup_logging(settings.log_level, settings.log_dir)
    logger.info(f"Starting {settings.app_name} in {settings.app_env} mode")
    logger.info(f"LLM provider: {settings.llm_provider}")

    try:
        db = get_database(settings.database_url)
        if args.init_db:
            db.create_tables()
        session = LLMClient(settings).start_chat()
        service = ChatService(
            session=session,
            dispatcher=FunctionDispatcher(TodoRepository(db)),
        )
    except TodoChatException as e:
        logger.error(f"Startup failed: {e.to_dict()}")
        print(f"Startup failed: {e.message}" + (f" ({e.details})" if e.details else ""), file=sys.stderr)
        reset_database()
        return 1
    except SQLAlchemyError as e:
        logger.error(f"Database unavailable: {e}")
        print(f"Startup failed: database unavailable ({e})", file=sys.stderr)
        reset_database()
        return 1

    try:
        return run_chat_loop(service)
    finally:
        logger.info(f"Shutting down {settings.app_name}")
        reset_database()


if __name__ == "__main__":
    sys.exit(main())
