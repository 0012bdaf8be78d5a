
from typing import List, Dict, Any, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field
import litellm

from .models import Message, Role


class LLMClient(BaseModel):
    """
    Conversation wrapper around LiteLLM for the bench player.

    Keeps the message history and sends the system prompt plus the most
    recent exchanges on each call.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, extra='allow')

    model: str
    temperature: float = 1.0
    max_tokens: Optional[int] = None
    max_pairs: int = 6
    messages: List[Dict[str, str]] = Field(default_factory=list)

    @property
    def additional_params(self) -> Dict[str, Any]:
        """Extra LiteLLM parameters given at construction."""
        return self.__pydantic_extra__ if self.__pydantic_extra__ else {}

    def add_message(self, role: Role, content: str) -> None:
        self.messages.append(Message(role=role, content=content).model_dump())

    def clear_messages(self) -> None:
        self.messages = []

    def get_messages(self) -> List[Dict[str, str]]:
        return self.messages.copy()

    def _get_trimmed_messages(self) -> List[Dict[str, str]]:
        """
        System prompt followed by the last ``max_pairs`` user/assistant pairs.

        Board state is re-sent every turn, so older exchanges add nothing
        the model needs.
        """
        system = [m for m in self.messages if m["role"] == "system"][:1]
        conversation = [m for m in self.messages if m["role"] != "system"]
        keep = self.max_pairs * 2
        if len(conversation) > keep:
            conversation = conversation[-keep:]
        return system + conversation

    def completion(self, **kwargs: Any) -> Any:
        """
        Call ``litellm.completion`` with the trimmed history.

        Args:
            **kwargs: Overrides passed through to litellm.completion()
        """
        params = {
            "model": self.model,
            "messages": self._get_trimmed_messages(),
            "temperature": self.temperature,
            **self.additional_params,
            **kwargs
        }

        if self.max_tokens is not None:
            params["max_tokens"] = self.max_tokens

        return litellm.completion(**params)

    def ask(self, prompt: str) -> Tuple[str, Dict[str, Optional[int]]]:
        """
        Send a user prompt, record the reply, and return it with token usage.

        Returns:
            Tuple of (reply text, usage dict with prompt/completion/total tokens)
        """
        self.add_message("user", prompt)
        response = self.completion()
        content = response.choices[0].message.content or ""
        self.add_message("assistant", content)

        usage = getattr(response, "usage", None)
        return content, {
            "prompt_tokens": getattr(usage, "prompt_tokens", None),
            "completion_tokens": getattr(usage, "completion_tokens", None),
            "total_tokens": getattr(usage, "total_tokens", None),
        }
