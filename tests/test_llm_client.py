from unittest.mock import Mock, patch
import pytest

from wordcascade.environment import LLMClient, Message


def create_mock_response(content: str = "Test response", model: str = "gpt-4o") -> Mock:
    """
    Create a mock response shaped like litellm's ModelResponse.

    Only the fields the client reads are filled in: ``choices[0].message``
    and ``usage``.
    """
    return Mock(
        id='chatcmpl-test123',
        model=model,
        object='chat.completion',
        choices=[
            Mock(
                finish_reason='stop',
                index=0,
                message=Mock(content=content, role='assistant'),
            )
        ],
        usage=Mock(
            completion_tokens=10,
            prompt_tokens=5,
            total_tokens=15
        ),
    )


class TestLLMClientInitialization:
    """Test cases for LLM client initialization."""

    def test_init_with_model_only(self):
        """Initialize with just a model name."""
        client = LLMClient(model="gpt-4o")
        assert client.model == "gpt-4o"
        assert client.temperature == 1.0
        assert client.max_tokens is None
        assert client.max_pairs == 6
        assert client.messages == []

    def test_init_with_additional_params(self):
        """Unknown keyword arguments are kept as litellm parameters."""
        client = LLMClient(model="gpt-4o", top_p=0.9, api_base="http://localhost:4000")
        assert client.additional_params == {"top_p": 0.9, "api_base": "http://localhost:4000"}

    def test_no_additional_params(self):
        client = LLMClient(model="gpt-4o")
        assert client.additional_params == {}


class TestMessageManagement:
    """Test cases for message management."""

    def test_add_messages(self):
        """Messages are stored in OpenAI chat format, in order."""
        client = LLMClient(model="gpt-4o")
        client.add_message("system", "Rules")
        client.add_message("user", "Board")
        client.add_message("assistant", "<paths></paths>")

        assert [m["role"] for m in client.messages] == ["system", "user", "assistant"]
        assert client.messages[1] == {"role": "user", "content": "Board"}

    def test_clear_messages(self):
        """Clear all messages from the conversation."""
        client = LLMClient(model="gpt-4o")
        client.add_message("user", "Message 1")
        client.clear_messages()
        assert client.messages == []

    def test_get_messages_returns_copy(self):
        """get_messages returns a copy, not the live list."""
        client = LLMClient(model="gpt-4o")
        client.add_message("user", "Hello!")

        messages = client.get_messages()
        messages.append({"role": "user", "content": "Should not affect client"})

        assert len(client.messages) == 1


class TestHistoryTrimming:
    """Test cases for the trimmed history sent to the model."""

    def _fill(self, client: LLMClient, pairs: int) -> None:
        client.add_message("system", "Rules")
        for i in range(pairs):
            client.add_message("user", f"turn {i}")
            client.add_message("assistant", f"reply {i}")

    def test_short_history_unchanged(self):
        """Histories within the limit are sent whole."""
        client = LLMClient(model="gpt-4o", max_pairs=3)
        self._fill(client, 2)
        assert client._get_trimmed_messages() == client.messages

    def test_keeps_system_and_recent_pairs(self):
        """Only the system prompt and the most recent pairs are sent."""
        client = LLMClient(model="gpt-4o", max_pairs=2)
        self._fill(client, 5)

        trimmed = client._get_trimmed_messages()
        assert len(trimmed) == 5
        assert trimmed[0] == {"role": "system", "content": "Rules"}
        assert trimmed[1]["content"] == "turn 3"
        assert trimmed[-1]["content"] == "reply 4"

    def test_full_history_kept(self):
        """Trimming does not discard stored messages."""
        client = LLMClient(model="gpt-4o", max_pairs=1)
        self._fill(client, 4)
        client._get_trimmed_messages()
        assert len(client.messages) == 9


class TestCompletion:
    """Test cases for completion generation."""

    @patch('litellm.completion')
    def test_completion_basic(self, mock_completion):
        """Test basic completion call."""
        mock_completion.return_value = create_mock_response(content="Hello!")

        client = LLMClient(model="gpt-4o")
        client.add_message("user", "Hi")
        response = client.completion()

        mock_completion.assert_called_once()
        call_kwargs = mock_completion.call_args[1]
        assert call_kwargs["model"] == "gpt-4o"
        assert call_kwargs["messages"] == [{"role": "user", "content": "Hi"}]
        assert call_kwargs["temperature"] == 1.0
        assert "max_tokens" not in call_kwargs
        assert response.choices[0].message.content == "Hello!"

    @patch('litellm.completion')
    def test_completion_with_max_tokens(self, mock_completion):
        """max_tokens is forwarded when set."""
        mock_completion.return_value = create_mock_response()

        client = LLMClient(model="gpt-4o", max_tokens=150)
        client.add_message("user", "Test")
        client.completion()

        assert mock_completion.call_args[1]["max_tokens"] == 150

    @patch('litellm.completion')
    def test_completion_with_overrides(self, mock_completion):
        """Additional params and call kwargs both reach litellm."""
        mock_completion.return_value = create_mock_response()

        client = LLMClient(model="gpt-4o", top_p=0.9)
        client.add_message("user", "Test")
        client.completion(n=2)

        call_kwargs = mock_completion.call_args[1]
        assert call_kwargs["top_p"] == 0.9
        assert call_kwargs["n"] == 2


class TestAsk:
    """Test cases for the prompt/reply round trip."""

    @patch('litellm.completion')
    def test_ask_records_exchange(self, mock_completion):
        """ask() stores the prompt and the reply."""
        mock_completion.return_value = create_mock_response(content="<paths>0,0 0,1 0,2</paths>")

        client = LLMClient(model="gpt-4o")
        content, usage = client.ask("Your move")

        assert content == "<paths>0,0 0,1 0,2</paths>"
        assert client.messages == [
            {"role": "user", "content": "Your move"},
            {"role": "assistant", "content": "<paths>0,0 0,1 0,2</paths>"},
        ]
        assert usage == {"prompt_tokens": 5, "completion_tokens": 10, "total_tokens": 15}

    @patch('litellm.completion')
    def test_ask_handles_empty_content(self, mock_completion):
        """A None reply is recorded as an empty string."""
        mock_completion.return_value = create_mock_response(content=None)

        client = LLMClient(model="gpt-4o")
        content, _ = client.ask("Your move")

        assert content == ""
        assert client.messages[-1]["content"] == ""

    @patch('litellm.completion')
    def test_ask_propagates_errors(self, mock_completion):
        """Provider errors reach the caller and leave no assistant message."""
        mock_completion.side_effect = RuntimeError("rate limited")

        client = LLMClient(model="gpt-4o")
        with pytest.raises(RuntimeError):
            client.ask("Your move")
        assert [m["role"] for m in client.messages] == ["user"]


class TestMessageModel:
    """Test cases for Message model validation."""

    def test_message_model_dump(self):
        """Message should serialize to dict."""
        msg = Message(role="user", content="Test")
        assert msg.model_dump() == {"role": "user", "content": "Test"}

    def test_invalid_role(self):
        """Invalid role should raise validation error."""
        with pytest.raises(Exception):  # Pydantic validation error
            Message(role="invalid", content="Test")
