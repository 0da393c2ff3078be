"""Shared pydantic base for models that cross the HTTP/websocket boundary.

The storefront speaks camelCase JSON; Python code uses snake_case. Models
accept either on input and emit camelCase with to_wire().
"""

from typing import Any

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """BaseModel with camelCase aliases."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
