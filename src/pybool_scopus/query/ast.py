"""
Classes for representing parsed queries.

A parsed query is a tree of `QueryNode` objects. A node either carries a single `FieldTerm` (a leaf), or groups
other nodes into up to three ordered buckets, one per Boolean operator: `AND`, `OR` and `AND_NOT`. A node can carry
several non-empty buckets at once, e.g., `"a" AND NOT "b"` parses to a single node with one child in the `AND` bucket
and one child in the `AND_NOT` bucket.

Both classes serialise to the JSON shape consumed by downstream tools through `dataclasses_json`:

>>> QueryNode(and_=[QueryNode.leaf("TITLE", "survey")]).to_dict()
{'AND': [{'field': {'field': 'TITLE', 'value': 'survey'}}]}
"""

import dataclasses
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from dataclasses_json import config, dataclass_json

from pybool_scopus.query.scopus.fields import ANY

AND = "AND"
OR = "OR"
AND_NOT = "AND_NOT"

#: Operators in the order their buckets appear in a node.
OPERATORS = (AND, OR, AND_NOT)

_OPERATOR_WORDS = {AND: "AND", OR: "OR", AND_NOT: "AND NOT"}


def _omit_empty(value) -> bool:
    return not value


def _bucket(operator: str):
    return dataclasses.field(default_factory=list, metadata=config(field_name=operator, exclude=_omit_empty))


@dataclass_json
@dataclass(frozen=True)
class FieldTerm:
    """
    A quoted value restricted to a search field.
    """
    #: A field function name from `pybool_scopus.query.scopus.fields`, or `ANY`.
    field: str
    #: The text between the quotes.
    value: str

    def __str__(self):
        if self.field == ANY:
            return f'"{self.value}"'
        return f'{self.field}("{self.value}")'


@dataclass_json
@dataclass
class QueryNode:
    """
    A node in a parsed query.
    """
    and_: List["QueryNode"] = _bucket(AND)
    or_: List["QueryNode"] = _bucket(OR)
    and_not: List["QueryNode"] = _bucket(AND_NOT)
    #: Set on leaves only.
    term: Optional[FieldTerm] = dataclasses.field(default=None, metadata=config(field_name="field", exclude=_omit_empty))

    @classmethod
    def leaf(cls, field: str, value: str) -> "QueryNode":
        return cls(term=FieldTerm(field=field, value=value))

    def bucket(self, operator: str) -> List["QueryNode"]:
        """
        The list of children combined with `operator`, which must be one of `OPERATORS`.
        """
        return {AND: self.and_, OR: self.or_, AND_NOT: self.and_not}[operator]

    def children(self) -> Iterator[Tuple[str, "QueryNode"]]:
        for operator in OPERATORS:
            for child in self.bucket(operator):
                yield operator, child

    def walk(self) -> Iterator["QueryNode"]:
        """
        Visit this node and every node below it, parents before children.
        """
        yield self
        for _, child in self.children():
            yield from child.walk()

    @property
    def is_leaf(self) -> bool:
        return self.term is not None and not any(self.bucket(operator) for operator in OPERATORS)

    @property
    def is_empty(self) -> bool:
        return self.term is None and not any(self.bucket(operator) for operator in OPERATORS)

    def __str__(self):
        if self.term is not None and self.is_leaf:
            return str(self.term)
        parts = [] if self.term is None else [str(self.term)]
        for operator, child in self.children():
            text = str(child) if child.is_leaf else f"({child})"
            if len(parts) == 0 and operator == AND:
                parts.append(text)
            else:
                parts.append(f"{_OPERATOR_WORDS[operator]} {text}")
        return " ".join(parts)
