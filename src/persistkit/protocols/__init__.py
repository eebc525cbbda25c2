"""Protocol definitions for persistkit.

Protocols define the contracts between the repository and its
collaborators. They follow Python's structural subtyping, so test
doubles and alternative backends need no common base class.
"""

from .database import ConnectionFactory, Parameters, Repository, Row, SqlExecutor

__all__ = [
    "ConnectionFactory",
    "SqlExecutor",
    "Repository",
    "Row",
    "Parameters",
]
