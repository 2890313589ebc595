import json

import pytest

from todochat.core.config import get_settings
from todochat.core.exceptions import LLMError
from todochat.llm.client import (
    GeminiChatSession,
    GroqChatSession,
    LLMClient,
    reply_from_gemini_response,
)
from todochat.models.chat import FunctionCall
from tests.fakes import (
    FakeGeminiChat,
    FakeGroqClient,
    call_part,
    gemini_response,
    groq_response,
    groq_tool_call,
    text_part,
)


class TestGeminiReplies:
    def test_text_parts_are_joined(self):
        reply = reply_from_gemini_response(gemini_response(text_part("Hello "), text_part("there")))

        assert reply.text == "Hello there"
        assert not reply.has_function_calls

    def test_function_call_only(self):
        reply = reply_from_gemini_response(gemini_response(call_part("deleteTodo", {"id": 3.0})))

        assert reply.text == ""
        assert reply.function_calls == [FunctionCall(name="deleteTodo", args={"id": 3.0})]

    def test_call_without_args(self):
        reply = reply_from_gemini_response(gemini_response(call_part("getAllTodos", None)))

        assert reply.function_calls[0].args == {}

    def test_session_wraps_sdk_errors(self):
        session = GeminiChatSession(FakeGeminiChat([RuntimeError("429 quota")]))

        with pytest.raises(LLMError) as exc_info:
            session.send_message("hi")

        assert "429 quota" in exc_info.value.details

    def test_function_response_is_sent_as_named_part(self):
        chat = FakeGeminiChat([
            gemini_response(call_part("createTodo", {"todo": "Buy milk"})),
            gemini_response(text_part("Done.")),
        ])
        session = GeminiChatSession(chat)
        (call,) = session.send_message("add buy milk").function_calls

        reply = session.send_function_response(call, {"todos": 7})

        assert reply.text == "Done."
        part = chat.sent[1].parts[0]
        assert part.function_response.name == "createTodo"
        assert "todos" in part.function_response.response

    def test_all_function_responses_go_in_one_message(self):
        chat = FakeGeminiChat([
            gemini_response(
                call_part("createTodo", {"todo": "Buy milk"}),
                call_part("getAllTodos", None),
            ),
            gemini_response(text_part("Added and listed.")),
        ])
        session = GeminiChatSession(chat)
        first, second = session.send_message("add milk then list").function_calls

        assert session.send_function_response(first, {"todos": 1}).text == ""
        assert len(chat.sent) == 1

        final = session.send_function_error(second)

        assert final.text == "Added and listed."
        assert len(chat.sent) == 2
        parts = chat.sent[1].parts
        assert [p.function_response.name for p in parts] == ["createTodo", "getAllTodos"]
        assert "error" in parts[1].function_response.response

    def test_response_for_unknown_call_is_dropped(self):
        chat = FakeGeminiChat([])
        session = GeminiChatSession(chat)

        reply = session.send_function_response(FunctionCall(name="getAllTodos"), {"todos": []})

        assert reply.text == ""
        assert chat.sent == []


class TestGroqSession:
    def test_text_reply_extends_history(self):
        client = FakeGroqClient([groq_response("Hi!")])
        session = GroqChatSession(client, model="llama")

        reply = session.send_message("hello")

        assert reply.text == "Hi!"
        request = client.requests[0]
        assert request["tool_choice"] == "auto"
        assert [m["role"] for m in request["messages"]] == ["system", "user"]
        assert session.messages[-1] == {"role": "assistant", "content": "Hi!"}

    def test_tool_calls_wait_for_every_response(self):
        client = FakeGroqClient([
            groq_response(tool_calls=[
                groq_tool_call("a", "createTodo", '{"todo": "Buy milk"}'),
                groq_tool_call("b", "getAllTodos", ""),
            ]),
            groq_response("Added and listed."),
        ])
        session = GroqChatSession(client, model="llama")

        reply = session.send_message("add milk then list")
        first, second = reply.function_calls
        assert first.args == {"todo": "Buy milk"}
        assert second.args == {}

        assert session.send_function_response(first, {"todos": 1}).text == ""
        assert len(client.requests) == 1

        final = session.send_function_response(second, {"todos": [{"id": 1, "todo": "Buy milk"}]})
        assert final.text == "Added and listed."
        tool_messages = [m for m in client.requests[1]["messages"] if m["role"] == "tool"]
        assert [m["tool_call_id"] for m in tool_messages] == ["a", "b"]
        assert json.loads(tool_messages[0]["content"]) == {"todos": 1}

    def test_unanswered_calls_are_closed_before_next_prompt(self):
        client = FakeGroqClient([
            groq_response(tool_calls=[groq_tool_call("a", "deleteTodo", '{"id": 9}')]),
            groq_response("Okay."),
        ])
        session = GroqChatSession(client, model="llama")

        session.send_message("delete 9")
        session.send_message("never mind")

        roles = [m["role"] for m in client.requests[1]["messages"]]
        assert roles == ["system", "user", "assistant", "tool", "user"]
        closing = client.requests[1]["messages"][3]
        assert closing["tool_call_id"] == "a"
        assert json.loads(closing["content"]) == {"error": "Operation failed"}

    def test_malformed_arguments_raise(self):
        client = FakeGroqClient([
            groq_response(tool_calls=[groq_tool_call("a", "createTodo", "{not json")]),
        ])
        session = GroqChatSession(client, model="llama")

        with pytest.raises(LLMError):
            session.send_message("add something")

    def test_api_errors_raise_llm_error(self):
        session = GroqChatSession(FakeGroqClient([RuntimeError("rate limit")]), model="llama")

        with pytest.raises(LLMError):
            session.send_message("hello")


class TestLLMClient:
    def test_missing_gemini_key(self):
        settings = get_settings().with_overrides(llm_provider="gemini", google_api_key="")

        with pytest.raises(LLMError, match="Gemini"):
            LLMClient(settings).start_chat()

    def test_missing_groq_key(self):
        settings = get_settings().with_overrides(llm_provider="groq", groq_api_key="")

        with pytest.raises(LLMError, match="Groq"):
            LLMClient(settings).start_chat()
