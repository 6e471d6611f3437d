"""Shared utility functions for framekit.

Provides the angle conversion helpers behind the ``use_degrees`` convention.
"""

from framekit.utils._angle import to_radians

__all__ = [
    "to_radians",
]
