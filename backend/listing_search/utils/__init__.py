"""
Utility functions for the Listing Search Assistant.
"""

from .formatting import (
    format_amount,
    format_caption,
    format_items,
    format_text_block,
    no_answer_message,
    parse_caption,
)

__all__ = [
    "format_amount",
    "format_caption",
    "format_items",
    "format_text_block",
    "no_answer_message",
    "parse_caption",
]
