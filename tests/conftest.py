# tests/conftest.py
import logging
import os
import uuid

import mongomock
import pytest
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from mongodb_operations import (ClientFactory, ConnectionConfiguration,
                                FlowContext, Message)

# Silence verbose loggers
logging.getLogger("pymongo").setLevel(logging.ERROR)


# --- Constants ---
MONGO_URI = os.getenv("TEST_MONGO_URI", "mongodb://localhost:27017")
TEST_COLLECTION = "people"


# --- Availability Checks ---
def is_mongodb_available():
    """Check if a MongoDB server answers at MONGO_URI."""
    client = None
    try:
        client = MongoClient(MONGO_URI, serverSelectionTimeoutMS=1000)
        client.admin.command("ping")
        logging.info(f"MongoDB found and responsive at {MONGO_URI}")
        return True
    except PyMongoError as e:
        logging.warning(
            f"MongoDB not found or not responsive at {MONGO_URI}: {e}. "
            "Skipping MongoDB tests."
        )
        return False
    finally:
        if client is not None:
            client.close()


AVAILABLE_IMPLEMENTATIONS = ["mongomock"]  # Always available, in memory
if is_mongodb_available():
    AVAILABLE_IMPLEMENTATIONS.append("mongodb")


# --- Fixtures ---


@pytest.fixture(params=AVAILABLE_IMPLEMENTATIONS)
def client_factory(request):
    """
    Parametrized fixture providing a ClientFactory backed by mongomock or by
    a real MongoDB server. All the clients it created are closed afterwards.
    """
    impl_key = request.param
    if impl_key == "mongomock":
        factory = ClientFactory(client_class=mongomock.MongoClient)
    elif impl_key == "mongodb":
        factory = ClientFactory()
    else:
        raise ValueError(f"Unknown store implementation key: {impl_key}")
    yield factory
    factory.dispose()


@pytest.fixture
def mock_client_factory():
    """ClientFactory always backed by mongomock, for tests not needing a server."""
    factory = ClientFactory(client_class=mongomock.MongoClient)
    yield factory
    factory.dispose()


@pytest.fixture
def connection():
    """Connection configuration pointing at a database unique to the test."""
    return ConnectionConfiguration(
        connection_url=MONGO_URI,
        database=f"pytest_mongodb_ops_{uuid.uuid4().hex[:12]}",
    )


@pytest.fixture
def collection(client_factory, connection):
    """
    The test collection, reached through the same shared client the
    components get from the factory. Used to seed and inspect documents.
    """
    owner = object()
    client = client_factory.client_by_config(owner, connection)
    yield client[connection.database][TEST_COLLECTION]
    client.drop_database(connection.database)
    client_factory.dispose(owner, connection)


@pytest.fixture
def collection_name():
    return TEST_COLLECTION


@pytest.fixture
def context():
    return FlowContext()


@pytest.fixture
def empty_message():
    return Message()


# --- Logger Fixture ---


@pytest.fixture(scope="session")
def logger():
    """Create a test logger."""
    _logger = logging.getLogger("test_mongodb_operations_logger")
    if not _logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)
        handler.setLevel(logging.DEBUG)
        _logger.addHandler(handler)
        _logger.setLevel(logging.DEBUG)
        _logger.propagate = False
    return logging.LoggerAdapter(_logger, {})


# --- Test Data ---


@pytest.fixture
def people(collection):
    """Seeds the collection with a few people and returns them."""
    documents = [
        {"_id": 1, "name": "Ada", "age": 37},
        {"_id": 2, "name": "Grace"},
        {"_id": 3, "name": "Edsger", "age": 72, "status": "inactive"},
    ]
    collection.insert_many([dict(document) for document in documents])
    return documents
