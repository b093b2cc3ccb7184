# src/mongodb_operations/__init__.py

"""
MongoDB Operations Library Initialization.

This package provides the MongoDB Find and Update flow components together
with the layer converting loosely typed runtime values (JSON text, maps,
pairs, data rows) into MongoDB documents.

It initializes a logger with a NullHandler and makes the components, the
content and configuration types and the exceptions available at the top level.
"""

import logging

# --------------------------------------------------------------------------
# Logging Setup
# --------------------------------------------------------------------------
# Library logs are discarded unless the consuming application configures
# logging for the "mongodb_operations" logger.
logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())
logger.propagate = False

# --------------------------------------------------------------------------
# Content, Document and Coercion Exports
# --------------------------------------------------------------------------
from .base.content import DataRow, Pair
from .base.document import Document
from .base.coercion import coerce
from .base.utils import is_empty

# --------------------------------------------------------------------------
# Host Boundary Exports
# --------------------------------------------------------------------------
# Expressions, messages and the evaluator used to run the components.
from .base.expression import DefaultEvaluator, Expression, ExpressionEvaluator
from .base.message import FlowContext, Message, MessageAttributes, UpdateAttributes
from .base.configuration import (ConnectionConfiguration, FindConfiguration,
                                 UpdateConfiguration)
from .base.client_factory import ClientFactory

# --------------------------------------------------------------------------
# Exception Exports
# --------------------------------------------------------------------------
from .base.exceptions import (CoercionError, ComponentConfigurationError,
                              ComponentStateError, EmptyDocumentError,
                              MongoDBOperationException, NonStringKeyError,
                              NullFilterError, StoreOperationError,
                              UnsupportedTypeError)

# --------------------------------------------------------------------------
# Component Exports
# --------------------------------------------------------------------------
from .components.find import Find
from .components.update import Update

__all__ = [
    # Components
    "Find",
    "Update",
    # Content and documents
    "DataRow",
    "Pair",
    "Document",
    "coerce",
    "is_empty",
    # Host boundary
    "Expression",
    "ExpressionEvaluator",
    "DefaultEvaluator",
    "FlowContext",
    "Message",
    "MessageAttributes",
    "UpdateAttributes",
    "ConnectionConfiguration",
    "FindConfiguration",
    "UpdateConfiguration",
    "ClientFactory",
    # Exceptions
    "MongoDBOperationException",
    "CoercionError",
    "NonStringKeyError",
    "UnsupportedTypeError",
    "NullFilterError",
    "EmptyDocumentError",
    "StoreOperationError",
    "ComponentConfigurationError",
    "ComponentStateError",
    # Logging
    "logger",
]

__version__ = "0.1.0"
