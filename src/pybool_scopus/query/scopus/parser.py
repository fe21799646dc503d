"""
Implementation of the Scopus query parser.

Queries are parsed without recursion: each parenthesised group is built on its own node, and the enclosing group
waits on a stack, together with the operator that was active when the group was opened. When the group closes it is
normalized and attached to the enclosing group under that operator.

>>> from pybool_scopus.query import ScopusQueryParser
>>> print(ScopusQueryParser().parse_ast('TITLE("a") AND ("b" OR "c")').to_json())
{"AND": [{"field": {"field": "TITLE", "value": "a"}}, {"AND": [{"field": {"field": "ANY", "value": "b"}}], "OR": [{"field": {"field": "ANY", "value": "c"}}]}]}
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from pybool_scopus.query.ast import AND, AND_NOT, OR, QueryNode
from pybool_scopus.query.normalize import normalize
from pybool_scopus.query.parser import EmptyResultError, QueryParser
from pybool_scopus.query.scopus.tokenizer import FIELD_SEPARATOR, Token, TokenKind, tokenize

logger = logging.getLogger(__name__)

_operators = {
    TokenKind.AND: AND,
    TokenKind.OR: OR,
    TokenKind.AND_NOT: AND_NOT,
}


@dataclass
class _Frame:
    node: QueryNode = field(default_factory=QueryNode)
    #: The bucket that the next term (or closed group) is added to.
    operator: str = AND


class ScopusQueryParser(QueryParser):
    """
    A parser for Scopus queries, one query per line.
    """

    def tokenize(self, raw_query: str) -> List[Token]:
        return tokenize(raw_query)

    def parse_tokens(self, tokens: List[Token]) -> Optional[QueryNode]:
        stack: List[_Frame] = []
        current = _Frame()

        for token in tokens:
            if token.kind == TokenKind.FIELD:
                parts = token.text.split(FIELD_SEPARATOR)
                if len(parts) != 2:
                    logger.debug("dropping malformed field token %r", token.text)
                    continue
                current.node.bucket(current.operator).append(QueryNode.leaf(parts[0], parts[1]))

            elif token.is_operator:
                current.operator = _operators[token.kind]

            elif token.kind == TokenKind.OPEN_PAREN:
                stack.append(current)
                current = _Frame()

            elif token.kind == TokenKind.CLOSE_PAREN:
                if len(stack) == 0:
                    logger.debug("ignoring unmatched closing parenthesis")
                    continue
                group = normalize(current.node)
                current = stack.pop()
                if group is not None:
                    current.node.bucket(current.operator).append(group)

        if len(stack) > 0:
            logger.debug("discarding %d unclosed group(s)", len(stack))
        return normalize(current.node)

    def parse_ast(self, raw_query: str) -> QueryNode:
        node = self.parse_tokens(self.tokenize(raw_query))
        if node is None:
            raise EmptyResultError(raw_query)
        return node

    def format(self, node: QueryNode) -> str:
        return str(node)


_default_parser = ScopusQueryParser()


def parse_line(raw_query: str) -> QueryNode:
    """
    Parse one line of a query file. Raises `EmptyResultError` when the line holds no query.
    """
    return _default_parser.parse_ast(raw_query)
