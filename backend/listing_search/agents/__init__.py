"""
Agent modules for the Listing Search Assistant.

Each agent handles one step of the search workflow.
"""

from .base_agent import BaseAgent
from .intent_agent import IntentAgent, parse_intent
from .retrieval_agent import RetrievalAgent
from .localization_agent import LocalizationAgent
from .fallback_agent import FallbackAgent

__all__ = [
    "BaseAgent",
    "IntentAgent",
    "parse_intent",
    "RetrievalAgent",
    "LocalizationAgent",
    "FallbackAgent",
]
