"""
Removal of redundant structure from parsed queries.

Parsing leaves behind empty groups (e.g., ``()``) and groups that wrap a single child (e.g., ``("a")``).
`normalize` drops the former and replaces the latter with their only child.
"""

from typing import Optional

from pybool_scopus.query.ast import OPERATORS, QueryNode


def is_empty(node: Optional[QueryNode]) -> bool:
    return node is None or node.is_empty


def _sole_child(node: QueryNode) -> Optional[QueryNode]:
    if node.term is not None:
        return None
    buckets = [node.bucket(operator) for operator in OPERATORS if len(node.bucket(operator)) > 0]
    if len(buckets) == 1 and len(buckets[0]) == 1:
        return buckets[0][0]
    return None


def normalize(node: Optional[QueryNode]) -> Optional[QueryNode]:
    """
    Return a normalized copy of `node`, or `None` when nothing is left of it. The input is not modified.
    """
    if node is None:
        return None

    cleaned = QueryNode(term=node.term)
    for operator in OPERATORS:
        for child in node.bucket(operator):
            child = normalize(child)
            if not is_empty(child):
                cleaned.bucket(operator).append(child)

    if cleaned.is_empty:
        return None

    child = _sole_child(cleaned)
    if child is not None:
        return normalize(child)
    return cleaned
