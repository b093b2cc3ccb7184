# src/mongodb_operations/base/configuration.py

import os
import uuid
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mongodb_operations.base.expression import Expression


def _as_expression(value: Any) -> Optional[Expression]:
    if value is None or isinstance(value, Expression):
        return value
    return Expression(value)


class ConnectionConfiguration(BaseModel):
    """
    Settings of a MongoDB connection. Components referring to configurations
    with the same `id` share one client.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    connection_url: str = "mongodb://localhost:27017"
    database: str
    username: Optional[str] = None
    password: Optional[str] = None

    @field_validator("connection_url", "database")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be empty")
        return value

    @classmethod
    def from_env(cls, prefix: str = "MONGODB_") -> "ConnectionConfiguration":
        """Build a configuration from MONGODB_URL, MONGODB_DATABASE, MONGODB_USERNAME and MONGODB_PASSWORD."""
        values: Dict[str, Any] = {
            "connection_url": os.environ.get(f"{prefix}URL", "mongodb://localhost:27017"),
            "database": os.environ.get(f"{prefix}DATABASE", ""),
            "username": os.environ.get(f"{prefix}USERNAME"),
            "password": os.environ.get(f"{prefix}PASSWORD"),
        }
        return cls(**values)

    def client_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {}
        if self.username:
            options["username"] = self.username
        if self.password:
            options["password"] = self.password
        return options


class ComponentConfiguration(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    connection: ConnectionConfiguration
    collection: str

    @field_validator("collection")
    @classmethod
    def collection_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("MongoDB collection must not be empty")
        return value


class FindConfiguration(ComponentConfiguration):
    filter: Optional[Expression] = None

    @field_validator("filter", mode="before")
    @classmethod
    def wrap_filter(cls, value: Any) -> Optional[Expression]:
        return _as_expression(value)


class UpdateConfiguration(ComponentConfiguration):
    query: Expression
    document: Expression = Field(default_factory=Expression.payload)
    many: bool = False

    @field_validator("query", mode="before")
    @classmethod
    def query_not_blank(cls, value: Any) -> Expression:
        expression = _as_expression(value)
        if expression is None or expression.is_blank():
            raise ValueError("Query filter must not be empty")
        return expression

    @field_validator("document", mode="before")
    @classmethod
    def wrap_document(cls, value: Any) -> Expression:
        expression = _as_expression(value)
        return Expression.payload() if expression is None else expression

    @field_validator("many", mode="before")
    @classmethod
    def many_defaults_to_false(cls, value: Any) -> bool:
        return False if value is None else value
