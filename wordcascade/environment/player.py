"""
Player class wrapping the LLM that proposes word paths.

Handles prompting and parses replies into coordinate paths; the bench
feeds those paths to the match session.
"""

import re
from typing import Any, Dict, Optional, Tuple
from pydantic import BaseModel, ConfigDict

from .llm_client import LLMClient
from .models import ParsedResponse
from .prompts import SYSTEM_PROMPT
from ..engine.board import in_bounds
from ..engine.models import Coordinate


_TILE = re.compile(r'^(\d+)\s*,\s*(\d+)$')


class Player(BaseModel):
    """
    An LLM-backed player.

    Attributes:
        name: Display name
        llm_client: LLM client for generating moves
        turn_count: Number of turns taken
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str = ""
    llm_client: Optional[LLMClient] = None
    turn_count: int = 0

    @classmethod
    def create(
        cls,
        model: str,
        name: Optional[str] = None,
        temperature: float = 1.0,
        max_tokens: Optional[int] = None,
        **llm_kwargs: Any
    ) -> "Player":
        """
        Factory method to create a player with an LLM client.

        Args:
            model: LLM model name (e.g., "gpt-4o")
            name: Optional display name
            temperature: LLM temperature setting
            max_tokens: Optional max tokens for responses
            **llm_kwargs: Additional arguments for the LLM client
        """
        llm_client = LLMClient(
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
            **llm_kwargs
        )
        return cls(name=name or f"Player ({model})", llm_client=llm_client)

    def take_turn(self, prompt: str) -> Tuple[ParsedResponse, Dict[str, Optional[int]]]:
        """
        Prompt the LLM and parse its reply.

        Returns:
            Tuple of (parsed response, token usage)

        Raises:
            ValueError: If the player has no LLM client
        """
        if self.llm_client is None:
            raise ValueError(f"{self.name} has no LLM client")
        if not self.llm_client.messages:
            self.llm_client.add_message("system", SYSTEM_PROMPT)
        raw, usage = self.llm_client.ask(prompt)
        self.turn_count += 1
        return self.parse_response(raw), usage

    @staticmethod
    def parse_response(response: str) -> ParsedResponse:
        """
        Parse an LLM reply for the game plan, word paths and shuffle action.

        Expected format:
        <game_plan>reasoning</game_plan>
        <paths>
        0,0 0,1 0,2
        </paths>
        <action>SHUFFLE</action>   (optional)

        Lines that do not parse are reported in ``parse_errors`` and skipped.
        """
        result = ParsedResponse(raw_response=response)

        plan_match = re.search(r'<game_plan>(.*?)</game_plan>', response, re.DOTALL)
        if plan_match:
            result.thinking = plan_match.group(1).strip()

        action_match = re.search(r'<action>(.*?)</action>', response, re.DOTALL)
        if action_match and action_match.group(1).strip().upper() == "SHUFFLE":
            result.shuffle = True

        paths_match = re.search(r'<paths>(.*?)</paths>', response, re.DOTALL)
        if not paths_match:
            return result

        for line in paths_match.group(1).strip().split('\n'):
            line = line.strip()
            if not line:
                continue
            path = []
            for token in line.split():
                tile = _TILE.match(token)
                if not tile:
                    result.parse_errors.append(f"'{line}': bad tile '{token}'")
                    path = []
                    break
                coord = Coordinate(int(tile.group(1)), int(tile.group(2)))
                if not in_bounds(*coord):
                    result.parse_errors.append(f"'{line}': tile '{token}' is off the board")
                    path = []
                    break
                path.append(coord)
            if path:
                result.paths.append(path)

        return result
