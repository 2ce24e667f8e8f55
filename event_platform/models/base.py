"""
Base Model Components and Mixins

Records are stored with camelCase attribute names (``firstName``,
``attendeeCount``) while the Python side uses snake_case. CamelModel wires
that mapping once through pydantic's alias generator, and DynamoDBMixin adds
the item conversion every stored entity needs.

## How the alias mapping works

```python
class Attendee(DynamoDBMixin, CamelModel):
    first_name: str

Attendee(firstName="Ada")          # validates by alias
Attendee(first_name="Ada")         # populate_by_name allows this too
attendee.to_dynamodb_item()        # {'firstName': 'Ada', ...}
```

Fields whose camelCase form is a Python keyword (``from``) declare the alias
explicitly with ``Field(alias=...)``.

## Components

- CamelModel: BaseModel with camelCase aliases
- DynamoDBMixin: Canonical API for DynamoDB serialization/deserialization
"""

import logging
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..utils import to_dynamodb_value

logger = logging.getLogger(__name__)


class CamelModel(BaseModel):
    """BaseModel whose fields are read and written under camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        use_enum_values=True,
    )


class DynamoDBMixin(BaseModel):
    """
    Mixin providing DynamoDB serialization and deserialization functionality.

    Features:
    - Item serialization under the stored camelCase attribute names
    - None values omitted, so absent attributes stay absent
    - float → Decimal for DynamoDB Number types, recursively
    """

    def to_dynamodb_item(self) -> Dict[str, Any]:
        """
        Convert model to DynamoDB-compatible item.

        Returns:
            DynamoDB-compatible dictionary ready for storage

        Example:
            item = attendee.to_dynamodb_item()
            gateway.put_item(item)
        """
        dumped_item = self.model_dump(by_alias=True, exclude_none=True, mode='python')
        return to_dynamodb_value(dumped_item)

    @classmethod
    def from_dynamodb_item(cls, item: Dict[str, Any]):
        """
        Create model instance from DynamoDB item.

        Args:
            item: DynamoDB item dictionary with camelCase attribute names

        Returns:
            Model instance

        Raises:
            ValidationError: If item data is invalid for the model
        """
        try:
            return cls.model_validate(item)
        except Exception as e:
            logger.error(f"Failed to convert DynamoDB item to {cls.__name__}: {e}")
            from ..exceptions import ValidationError
            raise ValidationError(f"Failed to convert DynamoDB item to {cls.__name__}: {e}") from e
