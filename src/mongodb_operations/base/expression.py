# src/mongodb_operations/base/expression.py

"""
Expressions configured on a component, and the evaluator that turns them into
runtime values for one invocation.

An Expression is either a static value (a JSON string, a dict, a Pair...) or
a callable taking `(context, message)`. `ExpressionEvaluator` is the seam for
hosts that bring their own scripting engine.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from mongodb_operations.base.message import FlowContext, Message


class Expression:
    """A static or dynamic value configured on a component property."""

    __slots__ = ("_value", "_text")

    def __init__(self, value: Any, text: Optional[str] = None):
        self._value = value
        self._text = text

    @classmethod
    def payload(cls) -> "Expression":
        """Expression yielding the payload of the inbound message."""
        return cls(lambda context, message: message.payload, text="message.payload")

    @property
    def value(self) -> Any:
        return self._value

    @property
    def is_dynamic(self) -> bool:
        return callable(self._value)

    @property
    def text(self) -> str:
        """Source text of the expression, used in error messages."""
        if self._text is not None:
            return self._text
        if self.is_dynamic:
            return getattr(self._value, "__name__", repr(self._value))
        return str(self._value)

    def is_blank(self) -> bool:
        if self.is_dynamic:
            return False
        if self._value is None:
            return True
        return isinstance(self._value, str) and not self._value.strip()

    def __repr__(self) -> str:
        return f"Expression({self.text!r})"


def is_blank(expression: Optional[Expression]) -> bool:
    return expression is None or expression.is_blank()


class ExpressionEvaluator(ABC):
    """Evaluates an Expression against the current flow context and message."""

    @abstractmethod
    def evaluate(
        self, expression: Expression, context: FlowContext, message: Message
    ) -> Optional[Any]:
        """
        Returns:
            The runtime value, or None if the expression produced no value.
        """
        pass


class DefaultEvaluator(ExpressionEvaluator):
    """Returns static values as they are and calls dynamic ones."""

    def evaluate(
        self, expression: Expression, context: FlowContext, message: Message
    ) -> Optional[Any]:
        if expression.is_dynamic:
            function: Callable[[FlowContext, Message], Any] = expression.value
            return function(context, message)
        return expression.value
