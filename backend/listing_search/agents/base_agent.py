"""
Base agent class providing common functionality for all agents.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..config import Settings, get_settings
from ..models.state import SearchState


class BaseAgent(ABC):
    """
    Abstract base class for all workflow agents.

    Services are passed in by the workflow so tests can substitute doubles.
    """

    def __init__(self, agent_name: str, settings: Optional[Settings] = None):
        """
        Initialize the agent.

        Args:
            agent_name: Name of the agent (used in logs)
            settings: Application settings (cached settings if not provided)
        """
        self.agent_name = agent_name
        self._settings = settings or get_settings()

    @abstractmethod
    async def process(self, state: SearchState) -> SearchState:
        """
        Process the current state and return updated state.

        Args:
            state: Current workflow state

        Returns:
            Updated workflow state
        """
        pass

    async def __call__(self, state: SearchState) -> SearchState:
        """Allow agents to be used directly as graph nodes."""
        return await self.process(state)
