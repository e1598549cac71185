"""
Scripted and Random Agent Implementations.

ScriptedAgent replays canned answers, which makes whole sessions
reproducible in tests. RandomAgent plays on its own with legal answers
and is what `run.py play --auto` uses.
"""

import logging
import random
from typing import Dict, Iterable, List, Any, Optional

from drawpoker.agents.base import BaseAgent


logger = logging.getLogger(__name__)


class ScriptedAgent(BaseAgent):
    """
    An agent that answers prompts from a fixed list of lines.

    Answers may be valid or invalid; invalid ones are re-prompted by the
    game, so scripts can exercise the retry path. The prompts seen are
    recorded in `prompts`.
    """

    def __init__(self, answers: Iterable[Any], name: Optional[str] = None):
        super().__init__(name or "Scripted")
        self._answers: List[str] = [str(a) for a in answers]
        self._position = 0
        self.prompts: List[str] = []
        self.results: List[Any] = []

    def read_line(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self._position >= len(self._answers):
            raise EOFError("Scripted answers exhausted")
        answer = self._answers[self._position]
        self._position += 1
        return answer

    def on_round_end(self, result: Any) -> None:
        self.results.append(result)

    @property
    def remaining_answers(self) -> int:
        return len(self._answers) - self._position


class RandomAgent(BaseAgent):
    """
    An agent that picks random legal answers.

    The agent has configurable tendencies:
    - max_wager_fraction: Largest share of the balance it will bet
    - keep_probability: Chance of keeping each successive low card
    """

    def __init__(
        self,
        name: Optional[str] = None,
        seed: Optional[int] = None,
        max_wager_fraction: float = 0.25,
        keep_probability: float = 0.5,
    ):
        """
        Initialize the random agent.

        Args:
            name: Optional name
            seed: Seed for the agent's own RNG
            max_wager_fraction: Upper bound of a bet as a share of the balance (0-1)
            keep_probability: Probability of keeping one more card (0-1)
        """
        super().__init__(name or "Random")
        if not 0 < max_wager_fraction <= 1:
            raise ValueError("max_wager_fraction must be in (0, 1]")
        self._rng = random.Random(seed)
        self.max_wager_fraction = max_wager_fraction
        self.keep_probability = keep_probability

    def read_line(self, prompt: str) -> str:
        phase = self.state.get("phase")
        if phase == "AWAITING_DRAW":
            answer = self._choose_remains(self.state)
        else:
            answer = self._choose_wager(self.state)
        logger.debug(f"{self.name} answers {answer} in {phase}")
        return str(answer)

    def _choose_wager(self, state: Dict[str, Any]) -> int:
        coins = max(1, state.get("max_wager", 1))
        upper = max(1, int(coins * self.max_wager_fraction))
        return self._rng.randint(1, upper)

    def _choose_remains(self, state: Dict[str, Any]) -> int:
        max_remains = state.get("max_remains", 5)
        remains = 0
        while remains < max_remains and self._rng.random() < self.keep_probability:
            remains += 1
        return remains
