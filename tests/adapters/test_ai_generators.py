"""Tests for the AI text generators."""

import pytest
import requests
from unittest.mock import Mock

from issue2case.adapters.ai import ClaudeGenerator, OpenAIGenerator, create_text_generator
from issue2case.adapters.resilience import RetryingRequestExecutor
from issue2case.core.domain.enums import AIProvider
from issue2case.core.exceptions import ConfigurationError, RateLimitError
from issue2case.core.ports.config_provider import AIConfig
from issue2case.core.ports.text_generator import TextGenerationError


def make_response(status=200, json_data=None, headers=None, invalid_json=False):
    response = Mock()
    response.status_code = status
    response.ok = 200 <= status < 300
    response.headers = headers or {}
    if invalid_json:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = json_data
    return response


OPENAI_OK = {"choices": [{"message": {"content": "drafted"}}]}
CLAUDE_OK = {"content": [{"type": "text", "text": "drafted"}]}


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def session():
    return Mock()


def build(cls, session, sleeps, **kwargs):
    return cls(
        api_key="sk-test",
        executor=RetryingRequestExecutor(sleep=sleeps.append),
        session=session,
        **kwargs,
    )


class TestOpenAIGenerator:
    """Tests for OpenAIGenerator."""

    def test_generate(self, session, sleeps):
        session.post.return_value = make_response(200, OPENAI_OK)

        assert build(OpenAIGenerator, session, sleeps).generate("prompt") == "drafted"

        kwargs = session.post.call_args.kwargs
        assert session.post.call_args.args[0] == "https://api.openai.com/v1/chat/completions"
        assert kwargs["headers"]["Authorization"] == "Bearer sk-test"
        assert kwargs["json"]["model"] == "gpt-4"
        assert kwargs["json"]["messages"][-1] == {"role": "user", "content": "prompt"}

    def test_rate_limit_retried_with_hint(self, session, sleeps):
        session.post.side_effect = [
            make_response(429, {"error": {"message": "slow", "type": "requests"}}, {"retry-after": "3"}),
            make_response(200, OPENAI_OK),
        ]

        assert build(OpenAIGenerator, session, sleeps).generate("p") == "drafted"
        assert sleeps == [3.0]

    def test_rate_limit_exhausted(self, session, sleeps):
        session.post.return_value = make_response(429, {"error": {"message": "slow"}})

        with pytest.raises(RateLimitError) as exc_info:
            build(OpenAIGenerator, session, sleeps).generate("p")

        assert session.post.call_count == 4
        assert exc_info.value.status_code == 429
        assert exc_info.value.provider == "openai"

    def test_rate_limit_with_plain_text_body(self, session, sleeps):
        session.post.return_value = make_response(429, invalid_json=True, headers={"retry-after": "2"})

        with pytest.raises(RateLimitError) as exc_info:
            build(OpenAIGenerator, session, sleeps).generate("p")

        assert session.post.call_count == 4
        assert sleeps == [2.0, 2.0, 2.0]
        assert "rate limit exceeded" in str(exc_info.value)

    def test_string_error_member(self, session, sleeps):
        session.post.return_value = make_response(400, {"error": "bad request"})

        with pytest.raises(TextGenerationError, match="bad request") as exc_info:
            build(OpenAIGenerator, session, sleeps).generate("p")

        assert exc_info.value.status_code == 400
        assert exc_info.value.error_type is None

    def test_error_body(self, session, sleeps):
        session.post.return_value = make_response(
            401, {"error": {"message": "Incorrect API key", "type": "invalid_request_error"}},
        )

        with pytest.raises(TextGenerationError) as exc_info:
            build(OpenAIGenerator, session, sleeps).generate("p")

        assert exc_info.value.error_type == "invalid_request_error"
        assert session.post.call_count == 1

    def test_non_json_response(self, session, sleeps):
        session.post.return_value = make_response(502, invalid_json=True)

        with pytest.raises(TextGenerationError, match="non-JSON"):
            build(OpenAIGenerator, session, sleeps).generate("p")

    def test_unexpected_shape(self, session, sleeps):
        session.post.return_value = make_response(200, {"choices": []})

        with pytest.raises(TextGenerationError):
            build(OpenAIGenerator, session, sleeps).generate("p")

    def test_transport_error(self, session, sleeps):
        session.post.side_effect = requests.exceptions.Timeout("slow network")

        with pytest.raises(TextGenerationError, match="request failed"):
            build(OpenAIGenerator, session, sleeps).generate("p")

    def test_missing_key(self):
        with pytest.raises(ConfigurationError):
            OpenAIGenerator(api_key="")


class TestClaudeGenerator:
    """Tests for ClaudeGenerator."""

    def test_generate(self, session, sleeps):
        session.post.return_value = make_response(200, CLAUDE_OK)

        assert build(ClaudeGenerator, session, sleeps).generate("prompt") == "drafted"

        kwargs = session.post.call_args.kwargs
        assert session.post.call_args.args[0] == "https://api.anthropic.com/v1/messages"
        assert kwargs["headers"]["x-api-key"] == "sk-test"
        assert kwargs["headers"]["anthropic-version"] == "2023-06-01"
        assert kwargs["json"]["model"] == "claude-3-5-sonnet-20241022"

    def test_custom_model(self, session, sleeps):
        session.post.return_value = make_response(200, CLAUDE_OK)

        build(ClaudeGenerator, session, sleeps, model="claude-other").generate("p")

        assert session.post.call_args.kwargs["json"]["model"] == "claude-other"

    def test_error_type(self, session, sleeps):
        session.post.return_value = make_response(
            529, {"type": "error", "error": {"type": "overloaded_error", "message": "Overloaded"}},
        )

        with pytest.raises(TextGenerationError) as exc_info:
            build(ClaudeGenerator, session, sleeps).generate("p")

        assert exc_info.value.error_type == "overloaded_error"


class TestCreateTextGenerator:
    """Tests for create_text_generator."""

    @pytest.mark.parametrize("provider,cls", [
        (AIProvider.OPENAI, OpenAIGenerator),
        (AIProvider.CLAUDE, ClaudeGenerator),
        ("claude", ClaudeGenerator),
    ])
    def test_selects_provider(self, provider, cls):
        generator = create_text_generator(AIConfig(provider=provider, api_key="k"))
        assert isinstance(generator, cls)

    def test_unsupported_provider(self):
        with pytest.raises(ConfigurationError, match="Unsupported provider"):
            create_text_generator(AIConfig(provider="gemini", api_key="k"))
