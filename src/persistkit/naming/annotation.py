"""Annotation-based name adapter."""

from typing import Optional

from persistkit.naming.base import NameAdapter
from persistkit.types.entity import EntityShape, FieldDescriptor


class AnnotationNameAdapter(NameAdapter):
    """Uses explicit table/column names from the shape, else logical names verbatim.

    No case transformation is ever applied: an entity named ``NewsArticle``
    without a table override maps to the table ``NewsArticle``.
    """

    def get_table_name(self, shape: EntityShape) -> str:
        return shape.table or shape.name

    def get_column_name(self, name: Optional[str]) -> Optional[str]:
        # A bare name carries no annotation to consult.
        return name

    def get_field_column_name(self, field: FieldDescriptor) -> str:
        field = self._require_field(field)
        return field.column or field.name
