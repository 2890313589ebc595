"""
Function Dispatcher - Maps model function calls to to-do queries.

The dispatch table is keyed by the names in the function
declarations. Arguments are validated with pydantic before the
repository is touched.
"""
from typing import Any, Callable, Dict, Optional

from pydantic import ValidationError as PydanticValidationError

from todochat.core.exceptions import FunctionArgumentsError, UnknownFunctionError
from todochat.core.logging_config import get_logger
from todochat.database.repository import TodoRepository
from todochat.llm.declarations import CREATE_TODO, DELETE_TODO, GET_ALL_TODOS, SEARCH_TODO
from todochat.models.chat import FunctionCall
from todochat.models.todo import CreateTodoArgs, DeleteTodoArgs, SearchTodoArgs

logger = get_logger(__name__)


class FunctionDispatcher:
    """
    Executes function calls requested by the model.

    Example:
        >>> dispatcher = FunctionDispatcher()
        >>> dispatcher.dispatch(FunctionCall(name="createTodo", args={"todo": "Buy milk"}))
        1
    """

    def __init__(self, repository: Optional[TodoRepository] = None):
        self.repository = repository or TodoRepository()
        self.handlers: Dict[str, Callable[[Dict[str, Any]], Any]] = {
            GET_ALL_TODOS: self._get_all_todos,
            CREATE_TODO: self._create_todo,
            SEARCH_TODO: self._search_todo,
            DELETE_TODO: self._delete_todo,
        }

    def dispatch(self, call: FunctionCall) -> Any:
        """
        Run the handler registered for the call's name.

        Raises:
            UnknownFunctionError: If no handler is registered for the name
            FunctionArgumentsError: If the arguments fail validation
            DatabaseError: If the query fails
        """
        handler = self.handlers.get(call.name)
        if handler is None:
            logger.warning(f"Model requested unknown function: {call.name}")
            raise UnknownFunctionError(call.name)

        logger.info(f"Dispatching {call.name} args={call.args}")
        try:
            return handler(call.args or {})
        except PydanticValidationError as e:
            logger.warning(f"Invalid arguments for {call.name}: {e}")
            raise FunctionArgumentsError(call.name, details=str(e)) from e

    def _get_all_todos(self, args: Dict[str, Any]):
        return self.repository.get_all_todos()

    def _create_todo(self, args: Dict[str, Any]):
        params = CreateTodoArgs.model_validate(args)
        return self.repository.create_todo(params.todo)

    def _search_todo(self, args: Dict[str, Any]):
        params = SearchTodoArgs.model_validate(args)
        return self.repository.search_todo(params.search)

    def _delete_todo(self, args: Dict[str, Any]):
        params = DeleteTodoArgs.model_validate(args)
        return self.repository.delete_todo(params.id)
