"""Utility functions and helpers for persistkit.

This module provides common utility functions used throughout the package.
"""

from persistkit.utils.decorators import (
    retry_with_backoff,
    traced,
)

__all__ = [
    # Decorators
    "retry_with_backoff",
    "traced",
]
