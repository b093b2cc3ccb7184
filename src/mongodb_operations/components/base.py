# src/mongodb_operations/components/base.py

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from logging import LoggerAdapter
from typing import Any, Dict, Generator, Generic, Optional, TypeVar

from pydantic import ValidationError
from pymongo.collection import Collection

from mongodb_operations.base.client_factory import ClientFactory
from mongodb_operations.base.configuration import ComponentConfiguration
from mongodb_operations.base.exceptions import (ComponentConfigurationError,
                                                ComponentStateError,
                                                MongoDBOperationException,
                                                StoreOperationError)
from mongodb_operations.base.expression import (DefaultEvaluator,
                                                ExpressionEvaluator)
from mongodb_operations.base.message import FlowContext, Message

C = TypeVar("C", bound=ComponentConfiguration)

_default_client_factory = ClientFactory()


def default_client_factory() -> ClientFactory:
    """The process-wide factory used when a component is not given one."""
    return _default_client_factory


class MongoDBComponent(Generic[C], ABC):
    """
    Base class of the flow components operating on a MongoDB collection.

    Lifecycle: `initialize()` validates the settings and acquires the client,
    `apply()` runs one invocation, `dispose()` releases the client. The
    settings are checked only once, in `initialize()`; an invalid component
    never reaches `apply()`. Each of `initialize()` and `dispose()` takes
    effect at most once.
    """

    def __init__(
        self,
        client_factory: Optional[ClientFactory] = None,
        evaluator: Optional[ExpressionEvaluator] = None,
        **settings: Any,
    ):
        self._settings: Dict[str, Any] = settings
        self._client_factory = client_factory or default_client_factory()
        self._evaluator = evaluator or DefaultEvaluator()
        self._configuration: Optional[C] = None
        self._client: Any = None
        self._disposed = False
        self._logger = logging.getLogger(
            f"{self.__class__.__module__}.{self.__class__.__name__}"
            f"[{settings.get('collection')}]"
        )

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @property
    def configuration(self) -> C:
        if self._configuration is None:
            raise ComponentStateError(f"{self.name} component is not initialized.")
        return self._configuration

    @abstractmethod
    def _build_configuration(self, settings: Dict[str, Any]) -> C:
        pass

    @abstractmethod
    def apply(self, context: FlowContext, message: Message, logger: LoggerAdapter) -> Message:
        """Run one invocation of the component against the inbound message."""
        pass

    def initialize(self) -> None:
        if self._disposed:
            raise ComponentStateError(f"{self.name} component was disposed and cannot be reused.")
        if self._client is not None:
            return
        try:
            configuration = self._build_configuration(self._settings)
        except ValidationError as e:
            errors = "; ".join(
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in e.errors()
            )
            raise ComponentConfigurationError(self.name, errors) from e
        self._configuration = configuration
        self._client = self._client_factory.client_by_config(self, configuration.connection)
        self._logger.info(
            f"{self.name} component initialized "
            f"(db: '{configuration.connection.database}', "
            f"collection: '{configuration.collection}')."
        )

    def dispose(self) -> None:
        if self._client is None:
            self._disposed = True
            return
        self._client_factory.dispose(self, self.configuration.connection)
        self._client = None
        self._disposed = True
        self._logger.info(f"{self.name} component disposed.")

    def __enter__(self):
        self.initialize()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.dispose()

    @contextmanager
    def _get_collection(self) -> Generator[Collection, None, None]:
        """
        Provides the configured collection. Lets operational exceptions
        propagate to the caller.
        """
        if self._client is None:
            raise ComponentStateError(
                f"{self.name} component must be initialized before use"
                + (" and cannot be used after dispose." if self._disposed else ".")
            )
        configuration = self.configuration
        yield self._client[configuration.connection.database][configuration.collection]

    def _handle_db_error(self, error: Exception, context: str = "operation") -> None:
        if isinstance(error, MongoDBOperationException):
            raise error
        self._logger.error(f"MongoDB error during {context}: {error}", exc_info=True)
        raise StoreOperationError(
            f"MongoDB error during {context}: {error}", cause=error
        ) from error
