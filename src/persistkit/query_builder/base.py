import re
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Tuple

from persistkit.constants.sql import ID_PARAMETER, PARAMETER_PREFIX, QueryType
from persistkit.naming.base import NameAdapter
from persistkit.types.entity import EntityShape


_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_MAX_IDENTIFIER_LENGTH = 128


class BaseQueryBuilder(ABC):
    """Base interface for CRUD query builders with SQL injection protection.

    A query builder produces the five statements needed to read and write
    one entity shape: select-all, select-by-id, insert, update-by-id and
    delete-by-id. Builders only generate SQL strings. They do NOT execute
    queries - that responsibility belongs to the executor classes.

    Naming policy lives in the bound NameAdapter; dialect policy (how an
    INSERT hands back the generated key) lives in the subclass. Either can
    be swapped without touching the other.

    The table name, the identity column and every field's column name are
    resolved once, at construction. A builder holds no per-call state and
    can be shared across threads and reused for any number of statements.

    Parameter placeholders use the logical field name (``@Title``), never
    the column name, and the primary key is always bound as ``@Id``.

    Security Principles:
        1. **Input Validation**: Resolved table/column names and parameter
           names are validated before they reach a statement
        2. **Whitelist Approach**: Only letters, digits and underscores
        3. **Length Limits**: Identifiers longer than 128 characters are rejected
        4. **No Values in SQL**: Values always travel as bound parameters
    """

    def __init__(self, name_adapter: NameAdapter, shape: EntityShape):
        """Initialize query builder for one entity shape.

        Args:
            name_adapter: Adapter mapping logical names to table/column names
            shape: Entity shape whose statements this builder produces

        Raises:
            ValueError: If the adapter or shape is missing, or a resolved
                name is not a valid SQL identifier
        """
        if name_adapter is None:
            raise ValueError("name_adapter cannot be None")
        if shape is None:
            raise ValueError("shape cannot be None")

        self._name_adapter = name_adapter
        self._shape = shape
        self._table_name = self._resolve_table_name()
        self._column_map: Dict[str, str] = {
            field.name: self._resolve_column_name(field.name) for field in shape.fields
        }
        self._id_column = self._column_map[shape.identity_field.name]
        self._field_names: Tuple[str, ...] = tuple(shape.field_names)

    @property
    def name_adapter(self) -> NameAdapter:
        return self._name_adapter

    @property
    def shape(self) -> EntityShape:
        return self._shape

    @property
    def table_name(self) -> str:
        return self._table_name

    @property
    def id_column(self) -> str:
        return self._id_column

    @property
    def field_names(self) -> List[str]:
        """Non-identity field names of the shape, in declaration order."""
        return list(self._field_names)

    @property
    def column_map(self) -> Dict[str, str]:
        """Logical field name -> column name for every field, identity included."""
        return dict(self._column_map)

    @abstractmethod
    def _build_insert(self, column_list: str, parameter_list: str) -> str:
        """Build INSERT statement that hands back the generated key.

        Args:
            column_list: Comma-separated, validated column names
            parameter_list: Comma-separated ``@<field>`` placeholders

        Returns:
            Dialect-specific INSERT statement
        """
        pass

    def build_select_all(self) -> str:
        """Build SELECT query returning every row of the table."""
        return f"SELECT * FROM {self._table_name}"

    def build_select_by_id(self) -> str:
        """Build SELECT query for one row, keyed by the ``@Id`` parameter."""
        return f"SELECT * FROM {self._table_name} WHERE {self._id_where()}"

    def build_insert(self, fields: Iterable[str]) -> str:
        """Build INSERT query for the given fields.

        Args:
            fields: Logical field names to insert, identity excluded. Column
                and parameter order follow this sequence exactly.

        Returns:
            INSERT statement with one ``@<field>`` parameter per field

        Raises:
            ValueError: If fields is None or empty, or a name is invalid
        """
        names = self._require_fields(fields)
        column_list = self.format_column_list(names)
        parameter_list = self.format_parameter_list(names)
        return self._build_insert(column_list, parameter_list)

    def build_update(self, fields: Iterable[str]) -> str:
        """Build UPDATE query by ID for the given fields.

        Args:
            fields: Logical field names to update, identity excluded

        Returns:
            UPDATE statement with ``@<field>`` parameters and ``@Id``

        Raises:
            ValueError: If fields is None or empty, or a name is invalid
        """
        names = self._require_fields(fields)
        set_clause = self.format_set_clause(names)
        return f"UPDATE {self._table_name} SET {set_clause} WHERE {self._id_where()}"

    def build_delete(self) -> str:
        """Build DELETE query for one row, keyed by the ``@Id`` parameter."""
        return f"DELETE FROM {self._table_name} WHERE {self._id_where()}"

    def build_query(self, query_type: QueryType, fields: Optional[Iterable[str]] = None) -> str:
        """Build SQL query for a statement kind.

        Args:
            query_type: Statement kind to build
            fields: Field names for INSERT/UPDATE; defaults to all
                non-identity fields of the shape

        Returns:
            SQL statement

        Raises:
            ValueError: If the query type is unknown or INSERT/UPDATE validation fails
        """
        if fields is None:
            fields = self._field_names

        operation_mapping = {
            QueryType.SELECT_ALL: self.build_select_all,
            QueryType.SELECT_BY_ID: self.build_select_by_id,
            QueryType.INSERT: lambda: self.build_insert(fields),
            QueryType.UPDATE: lambda: self.build_update(fields),
            QueryType.DELETE: self.build_delete,
        }

        try:
            query_type = QueryType(query_type)
        except ValueError:
            raise ValueError(
                f"Unsupported query type: {query_type}. "
                f"Supported types: {', '.join(t.value for t in QueryType)}"
            ) from None

        return operation_mapping[query_type]()

    def column_name(self, field_name: str) -> str:
        """Column name for a logical field name.

        Fields of the bound shape come from the construction-time cache;
        other names are resolved through the adapter and validated.
        """
        cached = self._column_map.get(field_name)
        if cached is not None:
            return cached
        return self._resolve_column_name(field_name)

    def format_column_list(self, fields: List[str]) -> str:
        """Format column names for a list of fields.

        Returns:
            Comma-separated list of columns, in field order
        """
        return ", ".join(self.column_name(field) for field in fields)

    def format_parameter_list(self, fields: List[str]) -> str:
        """Format parameter placeholders for a list of fields.

        Returns:
            Comma-separated ``@<field>`` placeholders, in field order
        """
        return ", ".join(f"{PARAMETER_PREFIX}{field}" for field in fields)

    def format_set_clause(self, fields: List[str]) -> str:
        """Format SET clause for UPDATE.

        Returns:
            SET clause like "col1 = @Field1, col2 = @Field2"
        """
        return ", ".join(
            f"{self.column_name(field)} = {PARAMETER_PREFIX}{field}" for field in fields
        )

    def _id_where(self) -> str:
        return f"{self._id_column} = {PARAMETER_PREFIX}{ID_PARAMETER}"

    def _resolve_table_name(self) -> str:
        table_name = self._name_adapter.get_table_name(self._shape)
        parts = (table_name or "").split(".")
        if len(parts) > 2:
            raise ValueError(f"Invalid table name: {table_name}")
        for part in parts:
            self._validate_identifier(part, "table")
        return table_name

    def _resolve_column_name(self, field_name: str) -> str:
        field = self._shape.get_field(field_name)
        if field is not None:
            column = self._name_adapter.get_field_column_name(field)
        else:
            column = self._name_adapter.get_column_name(field_name)
        self._validate_identifier(column, "column")
        return column

    def _require_fields(self, fields: Optional[Iterable[str]]) -> List[str]:
        """Materialize and validate a field-name sequence.

        Raises:
            ValueError: If fields is None, a bare string, empty, or holds an
                invalid parameter name or a name clashing with the key parameter
        """
        if fields is None:
            raise ValueError("Columns cannot be null or empty")
        if isinstance(fields, str):
            raise ValueError("Columns must be a sequence of field names, not a single string")

        names = list(fields)
        if not names:
            raise ValueError("Columns cannot be null or empty")

        for name in names:
            self._validate_identifier(name, "parameter")
            if name == ID_PARAMETER and self._shape.identity_field.name != ID_PARAMETER:
                raise ValueError(
                    f"Field '{name}' clashes with the @{ID_PARAMETER} key parameter"
                )
        return names

    def _validate_identifier(self, identifier: Optional[str], identifier_type: str = "identifier") -> None:
        """Validate an identifier for SQL injection protection.

        Args:
            identifier: The identifier to validate
            identifier_type: Type of identifier for error messages

        Raises:
            ValueError: If identifier is invalid
        """
        if not identifier:
            raise ValueError(f"Empty {identifier_type} name")

        if not isinstance(identifier, str):
            raise ValueError(f"Invalid {identifier_type} name: {identifier!r}")

        if len(identifier) > _MAX_IDENTIFIER_LENGTH:
            raise ValueError(f"{identifier_type} name too long: {identifier}")

        if not _IDENTIFIER_RE.match(identifier):
            raise ValueError(f"Invalid {identifier_type} name: {identifier}")
