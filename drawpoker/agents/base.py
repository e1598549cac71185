"""
Base Agent Interface for DrawPoker.

An agent is the input source of a session: the game writes a prompt line
to its output sink, lets the agent observe the state, then reads one line
of input from it. Invalid answers are simply asked again.

Usage:
    class MyAgent(BaseAgent):
        def read_line(self, prompt):
            return "3"
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional


class BaseAgent(ABC):
    """
    Abstract base class for draw poker input sources.

    Attributes:
        name: Human-readable name
        state: The most recent game state passed to observe()
    """

    def __init__(self, name: Optional[str] = None):
        self.name = name or self.__class__.__name__
        self.state: Dict[str, Any] = {}

    def observe(self, game_state: Dict[str, Any]) -> None:
        """
        Observe the current game state before a prompt.

        Args:
            game_state: Dictionary from DrawPokerGame.get_state(), with
                phase, coins, max_wager, max_remains, cards_left and hand.
        """
        self.state = game_state

    @abstractmethod
    def read_line(self, prompt: str) -> str:
        """
        Return one line of input.

        Args:
            prompt: Short input marker shown before reading (">")

        Raises:
            EOFError: When the source has no more input.
        """
        pass

    def on_round_start(self, round_number: int) -> None:
        """Called when a new round starts."""
        pass

    def on_round_end(self, result: Any) -> None:
        """
        Called when a round resolves.

        Args:
            result: The RoundResult of the round
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name})"


class HumanAgent(BaseAgent):
    """Reads answers from the terminal."""

    def __init__(self, name: Optional[str] = None):
        super().__init__(name or "Human")

    def read_line(self, prompt: str) -> str:
        return input(prompt)
