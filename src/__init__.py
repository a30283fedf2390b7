"""
Source package containing the main implementation.
"""

from . import borderline

__all__ = [
    "borderline",
]
