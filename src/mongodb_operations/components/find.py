# src/mongodb_operations/components/find.py

from logging import LoggerAdapter
from typing import Any, Dict, List

from mongodb_operations.base.coercion import QUERY_FILTER, coerce
from mongodb_operations.base.configuration import FindConfiguration
from mongodb_operations.base.exceptions import CoercionError
from mongodb_operations.base.message import FlowContext, Message
from mongodb_operations.base.resolvers import MATCH_ALL, resolve_filter
from mongodb_operations.components.base import MongoDBComponent


class Find(MongoDBComponent[FindConfiguration]):
    """
    Finds the documents of a collection matching a filter.

    The filter may be Extended JSON text, a dict, a Pair or a DataRow, given
    statically or computed by an expression. Without a filter every document
    of the collection is returned.

    The output payload is the list of the matching documents, each one as a
    plain dict, in the order returned by the server. The whole cursor is read
    before the message is returned.
    """

    def _build_configuration(self, settings: Dict[str, Any]) -> FindConfiguration:
        return FindConfiguration(**settings)

    def apply(self, context: FlowContext, message: Message, logger: LoggerAdapter) -> Message:
        configuration = self.configuration
        logger.debug(
            f"Finding documents in '{configuration.collection}' "
            f"with filter: {configuration.filter!r}"
        )
        evaluated = resolve_filter(configuration.filter, self._evaluator, context, message)

        query_filter = None
        if evaluated is not MATCH_ALL:
            try:
                query_filter = coerce(evaluated, QUERY_FILTER)
            except (CoercionError, ValueError) as translation_error:
                logger.error(
                    f"Failed to convert the find filter: {translation_error}",
                    exc_info=True,
                )
                raise translation_error
            logger.debug(f"MongoDB find filter: {query_filter!r}")

        documents: List[Dict[str, Any]] = []
        try:
            with self._get_collection() as collection:
                if query_filter is None:
                    cursor = collection.find()
                else:
                    cursor = collection.find(query_filter.to_dict())
                for record in cursor:
                    documents.append(dict(record))
        except Exception as db_error:
            self._handle_db_error(db_error, f"finding documents in '{configuration.collection}'")

        logger.info(f"Found {len(documents)} document(s) in '{configuration.collection}'.")
        return Message(payload=documents)
