# src/mongodb_operations/base/message.py

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pymongo.results import UpdateResult


class FlowContext(dict):
    """Variables shared by the components of one flow execution."""


class MessageAttributes(BaseModel):
    """Structured metadata travelling next to a message payload."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    component: Optional[str] = None


class UpdateAttributes(MessageAttributes):
    """Result attributes of an update operation."""

    matched_count: int = Field(alias="matchedCount")
    modified_count: int = Field(alias="modifiedCount")
    upserted_id: Optional[Any] = Field(default=None, alias="upsertedId")

    @classmethod
    def from_result(cls, result: UpdateResult, component: str = "Update") -> "UpdateAttributes":
        return cls(
            component=component,
            matched_count=result.matched_count,
            modified_count=result.modified_count,
            upserted_id=result.upserted_id,
        )

    def as_record(self) -> Dict[str, Any]:
        """matchedCount, modifiedCount and, when present, upsertedId."""
        return self.model_dump(by_alias=True, exclude={"component"}, exclude_none=True)


class Message:
    """A payload with its attributes."""

    __slots__ = ("payload", "attributes")

    def __init__(self, payload: Any = None, attributes: Optional[MessageAttributes] = None):
        self.payload = payload
        self.attributes = attributes if attributes is not None else MessageAttributes()

    def __repr__(self) -> str:
        return f"Message(payload={self.payload!r}, attributes={self.attributes!r})"
