"""
Serialisation Contract Tests
Wire keys, field omission, and context / relation validation.
"""

import json
from dataclasses import dataclass
from typing import ClassVar, Dict, List, Tuple

import pytest

from semlog import (
    AbstractContext,
    EventEntry,
    GenericContext,
    LogDocument,
    OpenEntry,
    Relation,
    SemanticContext,
    SemanticLogger,
)
from tests.fixtures import AContext


def make_document(**overrides):
    fields = dict(
        schema_ref="https://example.com/semantic-log.json",
        open=OpenEntry(id="a_1", kind="a", schema_ref="schemas/a.json", data={"value": 1}),
        close=EventEntry(
            id="b_1", kind="b", schema_ref="schemas/b.json", data={}, correlation_id="a_1"
        ),
    )
    fields.update(overrides)
    return LogDocument(**fields)


class TestEntrySerialisation:

    def test_open_child_under_open_key(self):
        inner = OpenEntry(id="a_2", kind="a", schema_ref="schemas/a.json", data={})
        outer = OpenEntry(id="a_1", kind="a", schema_ref="schemas/a.json", data={})

        result = outer.with_child(inner).to_dict()

        assert result["open"]["id"] == "a_2"
        assert "open" not in result["open"]
        assert outer.child is None

    def test_close_child_under_close_key(self):
        inner = EventEntry(id="b_1", kind="b", schema_ref="s", data={}, correlation_id="a_2")
        outer = EventEntry(id="b_2", kind="b", schema_ref="s", data={}, correlation_id="a_1")

        result = outer.with_child(inner).to_dict()

        assert result["close"]["correlationId"] == "a_2"
        assert "open" not in result

    def test_absent_correlation_omitted(self):
        entry = EventEntry(id="e_1", kind="e", schema_ref="s", data={})
        assert entry.to_dict() == {"id": "e_1", "kind": "e", "schemaRef": "s", "data": {}}

    def test_to_dict_copies_data(self):
        entry = OpenEntry(id="a_1", kind="a", schema_ref="s", data={"items": [1]})
        entry.to_dict()["data"]["items"].append(2)
        assert entry.data == {"items": [1]}


class TestDocumentSerialisation:

    def test_empty_sections_omitted(self):
        result = make_document().to_dict()
        assert set(result) == {"schemaRef", "open", "close"}

    def test_key_order(self):
        event = EventEntry(id="e_1", kind="e", schema_ref="s", data={}, correlation_id="a_1")
        relation = Relation(rel="docs", href="https://example.com/docs")

        result = make_document(events=(event,), relations=(relation,)).to_dict()

        assert list(result) == ["schemaRef", "open", "events", "close", "relations"]

    def test_to_json_round_trips_through_json(self):
        document = make_document(
            open=OpenEntry(id="a_1", kind="a", schema_ref="s", data={"name": "café"}),
        )

        text = document.to_json()

        assert "café" in text
        assert json.loads(text) == document.to_dict()

    def test_to_json_rejects_unserialisable_data(self):
        document = make_document(
            open=OpenEntry(id="a_1", kind="a", schema_ref="s", data={"when": object()}),
        )
        with pytest.raises(TypeError):
            document.to_json()

    def test_to_json_compact(self):
        assert "\n" not in make_document().to_json(indent=None)


# =============================================================================
# CONTEXTS
# =============================================================================

@dataclass(frozen=True)
class Point:
    x: int
    y: int


@dataclass(frozen=True)
class ShapeContext(AbstractContext):
    KIND: ClassVar[str] = "shape"
    SCHEMA_REF: ClassVar[str] = "schemas/shape.json"

    name: str
    points: Tuple[Point, ...] = ()


@dataclass(frozen=True)
class Item:
    sku: str
    tags: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CartContext(AbstractContext):
    KIND: ClassVar[str] = "cart"
    SCHEMA_REF: ClassVar[str] = "schemas/cart.json"

    items: List[Item]
    by_sku: Dict[str, Item]


@dataclass(frozen=True)
class UndeclaredContext(AbstractContext):
    value: int = 0


class TestContexts:

    def test_dataclass_fields_become_data(self):
        context = ShapeContext(name="line", points=(Point(0, 0), Point(1, 2)))

        assert context.kind == "shape"
        assert context.schema_ref == "schemas/shape.json"
        assert context.data == {
            "name": "line",
            "points": [{"x": 0, "y": 0}, {"x": 1, "y": 2}],
        }

    def test_dataclasses_nested_in_containers(self):
        """Dataclasses inside lists and dicts are converted at any depth."""
        item = Item(sku="P1", tags=("new",))
        context = CartContext(items=[item], by_sku={"P1": item})

        assert context.data == {
            "items": [{"sku": "P1", "tags": ["new"]}],
            "by_sku": {"P1": {"sku": "P1", "tags": ["new"]}},
        }

    def test_nested_dataclasses_survive_flush(self):
        log = SemanticLogger()
        op_id = log.open(CartContext(items=[Item(sku="P1")], by_sku={}))
        log.close(AContext(), op_id)

        document = json.loads(log.flush().to_json())

        assert document["open"]["data"]["items"] == [{"sku": "P1", "tags": []}]

    def test_missing_kind_rejected(self):
        with pytest.raises(TypeError):
            UndeclaredContext().kind
        with pytest.raises(TypeError):
            UndeclaredContext().schema_ref

    def test_contexts_satisfy_capability(self):
        assert isinstance(AContext(), SemanticContext)
        assert isinstance(GenericContext(kind="k", schema_ref="s"), SemanticContext)

    def test_generic_context_validation(self):
        with pytest.raises(ValueError):
            GenericContext(kind="", schema_ref="s")
        with pytest.raises(ValueError):
            GenericContext(kind="k", schema_ref="")


class TestRelations:

    def test_optional_fields_omitted(self):
        relation = Relation(rel="docs", href="https://example.com")
        assert relation.to_dict() == {"rel": "docs", "href": "https://example.com"}

    def test_from_dict(self):
        relation = Relation.from_dict({
            "rel": "schema", "href": "https://example.com/s.sql", "type": "application/sql",
        })
        assert relation == Relation(
            rel="schema", href="https://example.com/s.sql", type="application/sql"
        )

    @pytest.mark.parametrize("data", [
        {"rel": "", "href": "https://example.com"},
        {"rel": "docs"},
        {},
    ])
    def test_invalid_relation_rejected(self, data):
        with pytest.raises(ValueError):
            Relation.from_dict(data)
