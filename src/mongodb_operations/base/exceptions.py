from typing import Any, Optional


class MongoDBOperationException(Exception):
    """Base class for every error raised by the Find and Update components."""

    def __init__(self, message: str = "The MongoDB operation failed."):
        super().__init__(message)


class CoercionError(MongoDBOperationException, TypeError):
    """A dynamic value could not be turned into a document."""

    def __init__(self, message: str = "The value could not be converted into a document."):
        super().__init__(message)


class NonStringKeyError(CoercionError):
    """Raised when a mapping or pair used as a document has a key that is not a string."""

    def __init__(self, key_type: str, is_pair: bool = False):
        self.key_type = key_type
        self.is_pair = is_pair
        if is_pair:
            message = (
                f"The left element of a pair must be of type str to be used as a "
                f"document key, but it was of type '{key_type}'."
            )
        else:
            message = (
                f"All the keys of a map must be of type str to be used as a "
                f"document, but a key of type '{key_type}' was found."
            )
        super().__init__(message)


class UnsupportedTypeError(CoercionError):
    """Raised when a value has none of the shapes a document can be built from."""

    def __init__(self, type_name: str, target: str = "document"):
        self.type_name = type_name
        self.target = target
        super().__init__(
            f"The {target} type '{type_name}' is not supported. Supported types "
            f"are: str, bytes, Map, Pair and DataRow."
        )


class NullFilterError(MongoDBOperationException):
    """Raised when a filter expression evaluated to None."""

    def __init__(self, expression: str):
        self.expression = expression
        super().__init__(
            f"The filter expression '{expression}' evaluated to a null value."
        )


class EmptyDocumentError(MongoDBOperationException):
    """Raised when neither the document expression nor the payload hold a document."""

    def __init__(self, expression: Optional[str] = None):
        self.expression = expression
        super().__init__(
            f"The update document was empty: the expression '{expression}' and "
            f"the message payload were both empty."
        )


class StoreOperationError(MongoDBOperationException):
    """Wraps an error returned by the MongoDB driver, keeping its diagnostic."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)


class ComponentConfigurationError(MongoDBOperationException, ValueError):
    """The component settings are invalid. Raised once, from initialize()."""

    def __init__(self, component: Any, message: str):
        self.component = component
        super().__init__(f"{component}: {message}")


class ComponentStateError(MongoDBOperationException, RuntimeError):
    """A component was used before initialize() or after dispose()."""

    def __init__(self, message: str = "The component is not initialized."):
        super().__init__(message)
