# src/mongodb_operations/base/resolvers.py

"""
Resolution of the filter and update document of an invocation into runtime
values, before they are coerced into documents.
"""

import logging
from typing import Any, Optional

from mongodb_operations.base.exceptions import (EmptyDocumentError,
                                                NullFilterError)
from mongodb_operations.base.expression import (Expression,
                                                ExpressionEvaluator, is_blank)
from mongodb_operations.base.message import FlowContext, Message
from mongodb_operations.base.utils import first_non_empty

logger = logging.getLogger(__name__)


class _MatchAll:
    """Filter value meaning that every document of the collection matches."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MATCH_ALL"


MATCH_ALL = _MatchAll()


def resolve_filter(
    expression: Optional[Expression],
    evaluator: ExpressionEvaluator,
    context: FlowContext,
    message: Message,
) -> Any:
    """
    Evaluate a filter expression.

    Returns:
        MATCH_ALL when no expression is configured, the evaluated value otherwise.

    Raises:
        NullFilterError: The expression evaluated to None.
    """
    if is_blank(expression):
        return MATCH_ALL
    evaluated = evaluator.evaluate(expression, context, message)
    if evaluated is None:
        raise NullFilterError(expression.text)
    return evaluated


def resolve_document(
    expression: Optional[Expression],
    evaluator: ExpressionEvaluator,
    context: FlowContext,
    message: Message,
) -> Any:
    """
    Resolve the update document: the evaluated expression if it is not empty,
    else the message payload if it is not empty.

    Raises:
        EmptyDocumentError: Both the expression result and the payload are empty.
    """

    def from_expression() -> Any:
        if is_blank(expression):
            return None
        return evaluator.evaluate(expression, context, message)

    def from_payload() -> Any:
        return message.payload

    document = first_non_empty((from_expression, from_payload))
    if document is None:
        raise EmptyDocumentError(None if expression is None else expression.text)
    return document
