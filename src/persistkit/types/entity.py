"""Entity shape descriptors.

An entity shape is the explicit, caller-supplied description of one record
type: its logical name, its ordered fields and which field is the identity.
Query builders and repositories read names from the shape instead of
inspecting entity classes at runtime.
"""

from typing import Dict, Iterable, List, Optional, Tuple

from pydantic import ConfigDict, Field, model_validator

from persistkit.constants.sql import ID_PARAMETER
from persistkit.types.base import PersistBaseModel


class FieldDescriptor(PersistBaseModel):
    """One logical field of an entity.

    Attributes:
        name: Logical field name. Also the attribute name on the entity model
            and the name of the ``@<name>`` parameter bound for it.
        column: Explicit column name. Takes precedence over any naming
            convention when set.
        identity: Whether this field is the primary key.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    column: Optional[str] = None
    identity: bool = False


class EntityShape(PersistBaseModel):
    """Named, ordered set of fields with exactly one identity field.

    Attributes:
        name: Logical entity type name (e.g. ``"NewsArticle"``).
        fields: Fields in declaration order, identity included.
        table: Explicit table name. Takes precedence over any naming
            convention when set.

    Example:
        >>> shape = EntityShape.define("Article", ["Id", "Title", "Content", "CreatedAt"])
        >>> shape.identity_field.name
        'Id'
        >>> shape.field_names
        ['Title', 'Content', 'CreatedAt']
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    fields: Tuple[FieldDescriptor, ...]
    table: Optional[str] = None

    @model_validator(mode='after')
    def check_fields(self) -> 'EntityShape':
        seen = set()
        for field in self.fields:
            if field.name in seen:
                raise ValueError(f"Duplicate field '{field.name}' in entity {self.name}")
            seen.add(field.name)

        identities = [field.name for field in self.fields if field.identity]
        if len(identities) != 1:
            raise ValueError(
                f"Entity {self.name} must declare exactly one identity field, "
                f"found {len(identities)}: {identities}"
            )

        # The key is always bound as @Id, so no other field may use that name.
        for field in self.fields:
            if not field.identity and field.name == ID_PARAMETER:
                raise ValueError(
                    f"Field '{field.name}' in entity {self.name} clashes with the "
                    f"@{ID_PARAMETER} key parameter; only the identity field may be named {ID_PARAMETER}"
                )
        return self

    @classmethod
    def define(
        cls,
        name: str,
        field_names: Iterable[str],
        identity: str = ID_PARAMETER,
        table: Optional[str] = None,
        columns: Optional[Dict[str, str]] = None,
    ) -> 'EntityShape':
        """Build a shape from plain field names.

        Args:
            name: Logical entity type name
            field_names: Field names in order; may or may not include ``identity``
            identity: Name of the identity field (defaults to ``Id``)
            table: Optional explicit table name
            columns: Optional mapping of field name -> explicit column name

        Returns:
            EntityShape with the identity field first if it was not listed
        """
        if field_names is None:
            raise ValueError("field_names cannot be None")
        if isinstance(field_names, str):
            raise ValueError("field_names must be a sequence of field names, not a single string")

        columns = columns or {}
        names = list(field_names)
        if identity not in names:
            names.insert(0, identity)

        return cls(
            name=name,
            table=table,
            fields=tuple(
                FieldDescriptor(name=field_name, column=columns.get(field_name), identity=field_name == identity)
                for field_name in names
            ),
        )

    @property
    def identity_field(self) -> FieldDescriptor:
        """The single identity field."""
        return next(field for field in self.fields if field.identity)

    @property
    def field_names(self) -> List[str]:
        """Ordered non-identity field names; the insert/update column set."""
        return [field.name for field in self.fields if not field.identity]

    def get_field(self, name: str) -> Optional[FieldDescriptor]:
        """Return the descriptor for ``name`` or None if the shape has no such field."""
        for field in self.fields:
            if field.name == name:
                return field
        return None
