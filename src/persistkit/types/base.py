"""Base model class for all persistkit models with serialization support."""

from typing import Any, Dict
from pydantic import BaseModel, ConfigDict


class PersistBaseModel(BaseModel):
    """Base model for persistkit descriptors and for user entities.

    Provides common functionality for all persistkit models including:
    - Serialization to dictionary via to_dict()
    - Consistent configuration
    - Validation on assignment, so a generated key written back onto an
      entity is coerced to the declared key type
    """
    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        use_enum_values=True,
        validate_assignment=True
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary for serialization.

        Recursively converts nested PersistBaseModel instances to dictionaries.

        Returns:
            Dictionary representation suitable for JSON serialization
        """
        data = self.model_dump(by_alias=False, exclude_none=True)

        def convert_nested(obj):
            if isinstance(obj, PersistBaseModel):
                return obj.to_dict()
            elif isinstance(obj, dict):
                return {k: convert_nested(v) for k, v in obj.items()}
            elif isinstance(obj, (list, tuple)):
                return [convert_nested(item) for item in obj]
            elif hasattr(obj, 'value'):  # Handle enums
                return obj.value
            return obj

        return convert_nested(data)
