"""
LangGraph workflow for the Listing Search Assistant.
"""

from .graph import (
    SearchWorkflow,
    create_workflow,
    get_workflow,
)

__all__ = [
    "SearchWorkflow",
    "create_workflow",
    "get_workflow",
]
