"""Knowledge-graph facts and their prompt-context rendering."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from mindtoon.formats.tabular import auto_tabulate
from mindtoon.schema import toon_field

FACT_FIELDS = ("subject", "predicate", "object")


@dataclass
class Entity:
    """An entity node in the knowledge graph."""

    id: str = toon_field(default="", omitempty=True)
    name: str = ""
    entity_type: str = toon_field(default="", omitempty=True)


@dataclass
class Fact:
    """A subject-predicate-object triple, where the object may be a literal value."""

    id: str = toon_field(default="", omitempty=True)
    subject: Entity | None = toon_field(default=None, omitempty=True)
    predicate: str = ""
    object: Entity | None = toon_field(default=None, omitempty=True)
    value: str = toon_field(default="", omitempty=True)
    context: str = toon_field(default="", omitempty=True)
    source: str = toon_field(default="", omitempty=True)
    created_at: str = toon_field(default="", omitempty=True)

    @property
    def subject_name(self) -> str:
        return self.subject.name if self.subject is not None else ""

    @property
    def object_text(self) -> str:
        """The object entity's name, falling back to the literal value."""
        if self.object is not None and self.object.name:
            return self.object.name
        return self.value


@dataclass
class FactRow:
    """Flattened fact used as one table row."""

    subject: str
    predicate: str
    object: str


def format_facts_as_context(facts: Iterable[Fact], name: str = "memory") -> str:
    """Format recalled facts as a table for an LLM prompt.

    Facts without a subject or without an object/value are dropped. Returns
    an empty string, not a header-only table, when nothing survives.

    Example:
        >>> fact = Fact(subject=Entity(name="Alice"), predicate="likes", object=Entity(name="Bob"))
        >>> format_facts_as_context([fact])
        'memory[1]{subject,predicate,object}:\\n  Alice,likes,Bob'
    """
    rows = [
        FactRow(subject=fact.subject_name, predicate=fact.predicate, object=fact.object_text)
        for fact in facts
        if fact.subject_name and fact.object_text
    ]
    if not rows:
        return ""
    return auto_tabulate(name, rows, FACT_FIELDS)
