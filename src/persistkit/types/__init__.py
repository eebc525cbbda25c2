"""Type definitions for persistkit.

This module provides the base model and the entity shape descriptors
consumed by name adapters, query builders and repositories.
"""

from .base import PersistBaseModel
from .entity import EntityShape, FieldDescriptor

__all__ = [
    # Base model
    'PersistBaseModel',
    # Entity shape
    'EntityShape',
    'FieldDescriptor',
]
