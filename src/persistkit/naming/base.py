"""Name adapter interface."""

from abc import ABC, abstractmethod
from typing import Optional

from persistkit.types.entity import EntityShape, FieldDescriptor


class NameAdapter(ABC):
    """Maps logical entity/field names to physical table/column names.

    Implementations must be deterministic and free of side effects so a
    single instance can be shared by every query builder in the process.
    The table-name path never fails; it always falls back to a name derived
    from the shape itself.
    """

    @abstractmethod
    def get_table_name(self, shape: EntityShape) -> str:
        """Get the table name for an entity shape.

        Args:
            shape: Entity shape descriptor

        Returns:
            Table name to use in SQL statements
        """
        pass

    @abstractmethod
    def get_column_name(self, name: Optional[str]) -> Optional[str]:
        """Get the column name for a bare logical field name.

        Args:
            name: Logical field name

        Returns:
            Column name to use in SQL statements
        """
        pass

    @abstractmethod
    def get_field_column_name(self, field: FieldDescriptor) -> str:
        """Get the column name for a field descriptor.

        Explicit column overrides on the descriptor take precedence.

        Args:
            field: Field descriptor

        Returns:
            Column name to use in SQL statements

        Raises:
            ValueError: If field is None
        """
        pass

    @staticmethod
    def _require_field(field: Optional[FieldDescriptor]) -> FieldDescriptor:
        if field is None:
            raise ValueError("field cannot be None")
        return field
