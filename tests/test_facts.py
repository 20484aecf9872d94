"""Tests for fact models and `format_facts_as_context`."""

from __future__ import annotations

import pytest

from mindtoon import Entity, Fact, encode, format_facts_as_context


@pytest.mark.parametrize(
    ("facts", "expected"),
    [
        ([], ""),
        (
            [Fact(subject=Entity(name="Alice"), predicate="likes", object=Entity(name="Bob"))],
            "memory[1]{subject,predicate,object}:\n  Alice,likes,Bob",
        ),
        (
            [Fact(subject=Entity(name="Alice"), predicate="prefers", value="dark mode")],
            "memory[1]{subject,predicate,object}:\n  Alice,prefers,dark mode",
        ),
        (
            [
                Fact(subject=Entity(name="Alice"), predicate="works_at", object=Entity(name="Acme Corp")),
                Fact(subject=Entity(name="Bob"), predicate="likes", value="coffee"),
            ],
            "memory[2]{subject,predicate,object}:\n  Alice,works_at,Acme Corp\n  Bob,likes,coffee",
        ),
        ([Fact(subject=None, predicate="likes", object=Entity(name="Bob"))], ""),
        ([Fact(subject=Entity(name="Alice"), predicate="likes", object=None, value="")], ""),
        (
            [Fact(subject=Entity(name="John Smith, Jr."), predicate="title", value="CEO")],
            'memory[1]{subject,predicate,object}:\n  "John Smith, Jr.",title,CEO',
        ),
    ],
    ids=[
        "empty",
        "entity-object",
        "value-object",
        "multiple",
        "nil-subject-filtered",
        "no-object-filtered",
        "special-characters",
    ],
)
def test_format_facts_as_context(facts: list[Fact], expected: str) -> None:
    assert format_facts_as_context(facts) == expected


def test_invalid_facts_are_dropped_between_valid_ones() -> None:
    facts = [
        Fact(subject=Entity(name="Alice"), predicate="likes", object=Entity(name="Bob")),
        Fact(subject=Entity(name=""), predicate="likes", value="tea"),
        Fact(subject=Entity(name="Carol"), predicate="knows", object=Entity(name=""), value=""),
        Fact(subject=Entity(name="Dan"), predicate="uses", object=Entity(name=""), value="vim"),
    ]
    assert format_facts_as_context(facts) == "memory[2]{subject,predicate,object}:\n  Alice,likes,Bob\n  Dan,uses,vim"


def test_object_entity_preferred_over_value() -> None:
    fact = Fact(subject=Entity(name="Alice"), predicate="likes", object=Entity(name="Bob"), value="ignored")
    assert fact.object_text == "Bob"


def test_custom_table_name() -> None:
    fact = Fact(subject=Entity(name="A"), predicate="p", value="v")
    assert format_facts_as_context([fact], name="facts") == "facts[1]{subject,predicate,object}:\n  A,p,v"


def test_fact_block_form() -> None:
    fact = Fact(id="f1", subject=Entity(name="Alice"), predicate="likes", object=Entity(id="e2", name="Bob"))
    assert encode(fact) == "id: f1\nsubject:\n  name: Alice\npredicate: likes\nobject:\n  id: e2\n  name: Bob"


def test_fact_list_with_nested_records_uses_block_form() -> None:
    facts = [
        Fact(subject=Entity(name="Alice"), predicate="likes", value="tea"),
        Fact(subject=Entity(name="Bob"), predicate="likes", value="coffee"),
    ]
    # subject is a nested record, so the list stays in block form
    assert encode(facts).startswith("-\n  subject:\n    name: Alice\n")


def test_present_subject_with_empty_fields_is_kept() -> None:
    # omitempty only drops a missing entity, not an entity with empty fields
    assert encode(Fact(subject=Entity(), predicate="p")) == "subject:\n  name: \npredicate: p"
