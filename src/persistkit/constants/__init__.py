"""Constants module for persistkit.

This module contains all constant values and enumerations used throughout
persistkit. As Layer 0 in the architecture, this module has no
dependencies on other persistkit modules.

Organization:
    - sql: Statement kinds and the shared ``@Id`` parameter name
    - database: SQL dialects and naming strategies
"""

# SQL/Query constants
from persistkit.constants.sql import ID_PARAMETER, PARAMETER_PREFIX, QueryType

# Database constants
from persistkit.constants.database import NamingStrategy, SqlDialect

__all__ = [
    # SQL
    "ID_PARAMETER",
    "PARAMETER_PREFIX",
    "QueryType",
    # Database
    "NamingStrategy",
    "SqlDialect",
]
