# tests/components/test_find_component.py
import pytest

from mongodb_operations import (DataRow, Expression, Find, Message,
                                NonStringKeyError, NullFilterError, Pair,
                                UnsupportedTypeError)


@pytest.fixture
def find_factory(client_factory, connection, collection_name):
    """Creates initialized Find components; disposes them after the test."""
    components = []

    def _create(**settings):
        find = Find(
            connection=connection,
            collection=collection_name,
            client_factory=client_factory,
            **settings,
        )
        find.initialize()
        components.append(find)
        return find

    yield _create
    for component in components:
        component.dispose()


def test_find_without_filter_returns_all_documents(find_factory, people, context, empty_message, logger):
    find = find_factory()
    result = find.apply(context, empty_message, logger)
    assert result.payload == people


@pytest.mark.parametrize("blank_filter", [None, "", "   "])
def test_find_blank_filter_returns_all_documents(find_factory, people, context, empty_message, logger, blank_filter):
    find = find_factory(filter=blank_filter)
    result = find.apply(context, empty_message, logger)
    assert len(result.payload) == len(people)


def test_find_with_json_filter(find_factory, people, context, empty_message, logger):
    find = find_factory(filter='{"name": "Ada"}')
    result = find.apply(context, empty_message, logger)
    assert result.payload == [{"_id": 1, "name": "Ada", "age": 37}]


def test_find_with_mapping_filter(find_factory, people, context, empty_message, logger):
    find = find_factory(filter={"age": {"$gt": 40}})
    result = find.apply(context, empty_message, logger)
    assert [document["name"] for document in result.payload] == ["Edsger"]


def test_find_with_pair_filter(find_factory, people, context, empty_message, logger):
    find = find_factory(filter=Pair("name", "Grace"))
    result = find.apply(context, empty_message, logger)
    assert result.payload == [{"_id": 2, "name": "Grace"}]


def test_find_with_data_row_filter(find_factory, people, context, empty_message, logger):
    find = find_factory(filter=DataRow(["name", "age"], ["Ada", 37]))
    result = find.apply(context, empty_message, logger)
    assert result.payload == [{"_id": 1, "name": "Ada", "age": 37}]


def test_find_with_dynamic_filter_from_context(find_factory, people, context, empty_message, logger):
    context["wanted"] = "Edsger"
    find = find_factory(filter=Expression(lambda ctx, message: {"name": ctx["wanted"]}))
    result = find.apply(context, empty_message, logger)
    assert [document["_id"] for document in result.payload] == [3]


def test_find_with_dynamic_filter_from_payload(find_factory, people, context, logger):
    find = find_factory(filter=Expression.payload())
    result = find.apply(context, Message(payload=b'{"_id": 2}'), logger)
    assert result.payload == [{"_id": 2, "name": "Grace"}]


def test_find_no_match_returns_empty_list(find_factory, people, context, empty_message, logger):
    find = find_factory(filter={"name": "Nobody"})
    result = find.apply(context, empty_message, logger)
    assert result.payload == []


def test_find_result_is_fully_materialized(find_factory, people, context, empty_message, logger):
    # The payload is a list of plain dicts, not a cursor: it can be read
    # any number of times and after the collection changed.
    find = find_factory()
    result = find.apply(context, empty_message, logger)
    assert type(result.payload) is list
    assert all(type(document) is dict for document in result.payload)
    first_read = list(result.payload)
    second_read = list(result.payload)
    assert first_read == second_read == people


def test_find_documents_are_copies(find_factory, collection, people, context, empty_message, logger):
    find = find_factory()
    result = find.apply(context, empty_message, logger)
    result.payload[0]["name"] = "Changed"
    assert collection.find_one({"_id": 1})["name"] == "Ada"


def test_find_null_filter_raises(find_factory, people, context, empty_message, logger):
    find = find_factory(filter=Expression(lambda ctx, message: None, text="context.filter"))
    with pytest.raises(NullFilterError) as exc_info:
        find.apply(context, empty_message, logger)
    assert exc_info.value.expression == "context.filter"


def test_find_non_string_key_raises(find_factory, people, context, empty_message, logger):
    find = find_factory(filter={1: "Ada"})
    with pytest.raises(NonStringKeyError):
        find.apply(context, empty_message, logger)


def test_find_unsupported_filter_type_raises(find_factory, people, context, empty_message, logger):
    find = find_factory(filter=Expression(lambda ctx, message: 42))
    with pytest.raises(UnsupportedTypeError) as exc_info:
        find.apply(context, empty_message, logger)
    assert exc_info.value.type_name == "int"


def test_find_malformed_json_filter_raises(find_factory, people, context, empty_message, logger):
    find = find_factory(filter="{ name: ")
    with pytest.raises(ValueError):
        find.apply(context, empty_message, logger)



def test_find_with_shell_notation_filter(find_factory, people, context, empty_message, logger):
    find = find_factory(filter="{ name: 'Ada' }")
    result = find.apply(context, empty_message, logger)
    assert result.payload == [{"_id": 1, "name": "Ada", "age": 37}]
