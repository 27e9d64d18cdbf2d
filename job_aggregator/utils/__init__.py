"""
Utility modules for the job aggregator.
"""

from .config import Config

__all__ = [
    "Config",
]
