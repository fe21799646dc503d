"""
Helpers for writing query trees by hand.

>>> from pybool_scopus.query.dsl import AND, group, term
>>> print(AND(term("battery", "TITLE"), group(and_=["lithium"], or_=["sodium"])))
TITLE("battery") AND ("lithium" OR "sodium")
"""

from typing import Iterable, Union

from pybool_scopus.query.ast import QueryNode
from pybool_scopus.query.scopus.fields import ANY

Child = Union[str, QueryNode]


def term(value: str, field: str = ANY) -> QueryNode:
    return QueryNode.leaf(field, value)


def auto(child: Child) -> QueryNode:
    if isinstance(child, str):
        return term(child)
    return child


def group(and_: Iterable[Child] = (), or_: Iterable[Child] = (), and_not: Iterable[Child] = ()) -> QueryNode:
    """
    Build a node with any combination of buckets filled in.
    """
    return QueryNode(and_=[auto(c) for c in and_], or_=[auto(c) for c in or_], and_not=[auto(c) for c in and_not])


def AND(*args: Child) -> QueryNode:
    return group(and_=args)


def OR(*args: Child) -> QueryNode:
    return group(or_=args)


def AND_NOT(*args: Child) -> QueryNode:
    return group(and_not=args)
