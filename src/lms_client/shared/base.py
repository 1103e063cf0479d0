"""Base model for wire types.

Wire types use camelCase on the wire and snake_case in Python. Both spellings
are accepted on input.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base class for messages exchanged with the backend."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the camelCase wire shape, omitting unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class InboundWireModel(WireModel):
    """Wire type produced by the backend; unknown fields are kept."""

    model_config = ConfigDict(extra="allow")


__all__ = ["InboundWireModel", "WireModel"]
