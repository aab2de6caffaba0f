"""
Listing Search Assistant - natural-language front end for real-estate listing search.
"""

__version__ = "1.0.0"
