# src/mongodb_operations/base/client_factory.py

import logging
from threading import Lock
from typing import Any, Callable, Dict, List, Set

from pymongo import MongoClient

from mongodb_operations.base.configuration import ConnectionConfiguration

base_logger = logging.getLogger(__name__)


class ClientFactory:
    """
    Hands out MongoDB clients shared by all the components that use the same
    connection configuration.

    Every owner acquiring a client must release it with `dispose(owner,
    connection)`. The client is closed when its last owner releases it.
    `dispose()` without arguments closes all the clients, whoever owns them.
    """

    def __init__(self, client_class: Callable[..., Any] = MongoClient):
        self._client_class = client_class
        self._lock = Lock()
        self._clients: Dict[str, Any] = {}
        self._owners: Dict[str, Set[int]] = {}

    def client_by_config(self, owner: Any, connection: ConnectionConfiguration) -> Any:
        with self._lock:
            client = self._clients.get(connection.id)
            if client is None:
                base_logger.info(
                    f"Creating MongoDB client for connection '{connection.id}' "
                    f"(database: '{connection.database}')."
                )
                client = self._client_class(
                    connection.connection_url, **connection.client_options()
                )
                self._clients[connection.id] = client
                self._owners[connection.id] = set()
            self._owners[connection.id].add(id(owner))
            return client

    def dispose(self, owner: Any = None, connection: ConnectionConfiguration = None) -> None:
        if owner is None and connection is None:
            self._close_all()
            return
        if owner is None or connection is None:
            raise ValueError("Both owner and connection are required to release a client.")

        client = None
        with self._lock:
            owners = self._owners.get(connection.id)
            if owners is None:
                return
            owners.discard(id(owner))
            if not owners:
                self._owners.pop(connection.id, None)
                client = self._clients.pop(connection.id, None)
        if client is not None:
            base_logger.info(f"Closing MongoDB client for connection '{connection.id}'.")
            client.close()

    def _close_all(self) -> None:
        with self._lock:
            clients: List[Any] = list(self._clients.values())
            self._clients.clear()
            self._owners.clear()
        for client in clients:
            client.close()
        if clients:
            base_logger.info(f"Closed {len(clients)} MongoDB client(s).")

    def owner_count(self, connection: ConnectionConfiguration) -> int:
        with self._lock:
            return len(self._owners.get(connection.id, ()))
