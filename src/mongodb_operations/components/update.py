# src/mongodb_operations/components/update.py

from logging import LoggerAdapter
from typing import Any, Dict

from mongodb_operations.base.coercion import (QUERY_FILTER, UPDATE_DOCUMENT,
                                              coerce)
from mongodb_operations.base.configuration import UpdateConfiguration
from mongodb_operations.base.document import Document
from mongodb_operations.base.exceptions import CoercionError
from mongodb_operations.base.message import (FlowContext, Message,
                                             UpdateAttributes)
from mongodb_operations.base.resolvers import (resolve_document,
                                               resolve_filter)
from mongodb_operations.components.base import MongoDBComponent


def as_update_operations(document: Document) -> Dict[str, Any]:
    """
    Return the body to send to update_one/update_many.

    A document made only of fields (no `$` operator at the top level) is
    applied as a `$set` of those fields. Documents using operators are sent
    unchanged.
    """
    if document.has_operators():
        return document.to_dict()
    return {"$set": document.to_dict()}


class Update(MongoDBComponent[UpdateConfiguration]):
    """
    Updates one, or with `many=True` all, the documents matching a query filter.

    The query filter is mandatory. The update document is taken from the
    `document` expression and, when that is not configured or evaluates to an
    empty value, from the message payload. Both may be Extended JSON text,
    bytes, a dict, a Pair or a DataRow.

    When `many` is False and several documents match, the server decides which
    one is updated (natural order of the collection or of the index in use).

    The output payload is the number of modified documents; the attributes
    are an UpdateAttributes with the matched and modified counts and the
    upserted id, if any.
    """

    def _build_configuration(self, settings: Dict[str, Any]) -> UpdateConfiguration:
        return UpdateConfiguration(**settings)

    def apply(self, context: FlowContext, message: Message, logger: LoggerAdapter) -> Message:
        configuration = self.configuration
        logger.debug(
            f"Updating {'many' if configuration.many else 'one'} document(s) in "
            f"'{configuration.collection}' matching: {configuration.query!r} "
            f"with update: {configuration.document!r}"
        )
        try:
            evaluated_query = resolve_filter(configuration.query, self._evaluator, context, message)
            query_filter = coerce(evaluated_query, QUERY_FILTER)
            to_update = resolve_document(configuration.document, self._evaluator, context, message)
            update_document = coerce(to_update, UPDATE_DOCUMENT)
            update_operations = as_update_operations(update_document)
            logger.debug(
                f"MongoDB update filter: {query_filter!r}, update: {update_operations}"
            )
        except (CoercionError, ValueError) as translation_error:
            logger.error(
                f"Failed to convert query/update for update: {translation_error}",
                exc_info=True,
            )
            raise translation_error

        try:
            with self._get_collection() as collection:
                if configuration.many:
                    result = collection.update_many(query_filter.to_dict(), update_operations)
                else:
                    result = collection.update_one(query_filter.to_dict(), update_operations)
        except Exception as db_error:
            self._handle_db_error(db_error, f"updating documents in '{configuration.collection}'")

        attributes = UpdateAttributes.from_result(result, component=self.name)
        logger.info(
            f"Updated {attributes.modified_count} document(s) in "
            f"'{configuration.collection}' (matched: {attributes.matched_count})."
        )
        return Message(payload=attributes.modified_count, attributes=attributes)
