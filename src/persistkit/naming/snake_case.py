"""Convention-based name adapter converting PascalCase to snake_case.

Used for PostgreSQL naming conventions (e.g., ``ArticleId`` -> ``article_id``).

Every uppercase letter after the first character gets its own separator,
so acronyms are split letter by letter::

    >>> to_snake_case("HTTPSConnection")
    'h_t_t_p_s_connection'

Existing schemas depend on these names, so the behavior is kept as is.
"""

import re
from typing import Optional

from persistkit.naming.base import NameAdapter
from persistkit.types.entity import EntityShape, FieldDescriptor

_PASCAL_CASE_RE = re.compile(r"(?<!^)(?=[A-Z])")


def to_snake_case(value: Optional[str]) -> Optional[str]:
    """Convert a PascalCase string to snake_case.

    Args:
        value: PascalCase string

    Returns:
        snake_case string; None, empty and whitespace-only input is
        returned unchanged
    """
    if value is None or not value.strip():
        return value

    return _PASCAL_CASE_RE.sub("_", value).lower()


class SnakeCaseNameAdapter(NameAdapter):
    """Uses explicit table/column names from the shape, else snake_case names."""

    def get_table_name(self, shape: EntityShape) -> str:
        if shape.table:
            return shape.table

        return to_snake_case(shape.name)

    def get_column_name(self, name: Optional[str]) -> Optional[str]:
        return to_snake_case(name)

    def get_field_column_name(self, field: FieldDescriptor) -> str:
        field = self._require_field(field)
        if field.column:
            return field.column

        return to_snake_case(field.name)
