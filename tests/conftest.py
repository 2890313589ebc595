import pytest

from todochat.core.config import reset_settings
from todochat.database import DatabaseConnection, TodoRepository, reset_database
from todochat.models.chat import ModelReply


class ScriptedSession:
    """Chat session that replays canned replies instead of calling a model."""

    provider = "scripted"

    def __init__(self, replies=None, function_replies=None):
        self.replies = list(replies or [])
        self.function_replies = list(function_replies or [])
        self.prompts = []
        self.function_responses = []
        self.function_errors = []

    def send_message(self, prompt):
        self.prompts.append(prompt)
        return self._next(self.replies)

    def send_function_response(self, call, payload):
        self.function_responses.append((call, payload))
        return self._next(self.function_replies)

    def send_function_error(self, call):
        self.function_errors.append(call)
        return ModelReply()

    @staticmethod
    def _next(queue):
        item = queue.pop(0) if queue else ModelReply()
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture(autouse=True)
def clean_settings():
    reset_settings()
    yield
    reset_settings()
    reset_database()


@pytest.fixture
def db(tmp_path):
    connection = DatabaseConnection(f"sqlite:///{tmp_path / 'todos.db'}")
    connection.create_tables()
    yield connection
    connection.close()


@pytest.fixture
def repository(db):
    return TodoRepository(db)


@pytest.fixture
def scripted_session():
    return ScriptedSession
