"""
Tokenizer for Scopus-style queries.

A query line is scanned left to right against a small table of rules, tried in order at every position:

1. a field function, e.g., ``TITLE-ABS-KEY("battery")``;
2. one of the operator words ``OR``, ``AND_NOT`` or ``AND``;
3. a parenthesis;
4. a bare phrase, e.g., ``"deep learning"``, which is searched in the ``ANY`` field.

Text that no rule matches is skipped. Two terms written next to each other with no operator between them are joined
by an implicit ``AND``.
"""

import enum
import re
from dataclasses import dataclass
from typing import List

from pyparsing import Keyword, Literal, MatchFirst, Regex

from pybool_scopus.query.scopus.fields import ANY, FIELD_FUNCTIONS

#: Separates the field name from the value in the text of a field token.
FIELD_SEPARATOR = ":"


class TokenKind(enum.Enum):
    FIELD = "FIELD"
    OR = "OR"
    AND = "AND"
    AND_NOT = "AND_NOT"
    OPEN_PAREN = "("
    CLOSE_PAREN = ")"


OPERATOR_KINDS = frozenset([TokenKind.OR, TokenKind.AND, TokenKind.AND_NOT])


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    #: For field tokens this is ``<field>:<value>``, otherwise the matched text.
    text: str

    @property
    def is_operator(self) -> bool:
        return self.kind in OPERATOR_KINDS


IMPLICIT_AND = Token(TokenKind.AND, "AND")


def _field_token(tokens):
    return Token(TokenKind.FIELD, f"{tokens['field']}{FIELD_SEPARATOR}{tokens['value']}")


def _phrase_token(tokens):
    return Token(TokenKind.FIELD, f"{ANY}{FIELD_SEPARATOR}{tokens['value']}")


def _literal_token(tokens):
    # The values of `TokenKind` are the literals themselves.
    return Token(TokenKind(tokens[0]), tokens[0])


_field_names = "|".join(re.escape(name) for name in FIELD_FUNCTIONS)

field_function = Regex(rf'(?P<field>{_field_names})\s*\("(?P<value>[^"]+)"\)').set_name("field function")
field_function.set_parse_action(_field_token)

operator = (Keyword("OR") | Keyword("AND_NOT") | Keyword("AND")).set_name("operator")
operator.set_parse_action(_literal_token)

parenthesis = (Literal("(") | Literal(")")).set_name("parenthesis")
parenthesis.set_parse_action(_literal_token)

phrase = Regex(r'"(?P<value>[^"]+)"').set_name("phrase")
phrase.set_parse_action(_phrase_token)

#: The scanning rules, highest priority first.
RULES = [field_function, operator, parenthesis, phrase]

_scanner = MatchFirst(RULES).parse_with_tabs()


def balance_parentheses(query: str) -> str:
    """
    Close any parentheses left open at the end of the query. Surplus closing parentheses are kept as they are.
    """
    missing = query.count("(") - query.count(")")
    if missing > 0:
        query += ")" * missing
    return query


def preprocess(query: str) -> str:
    query = balance_parentheses(query)
    query = query.replace("( ", "(").replace(" )", ")")
    # Scopus spells negation with two words, the scanner wants one.
    return query.replace(" AND NOT ", " AND_NOT ")


def tokenize(query: str) -> List[Token]:
    """
    Split a single query line into tokens.
    """
    query = preprocess(query)
    matches = [(result[0], start, end) for result, start, end in _scanner.scan_string(query)]

    tokens = []
    for i, (token, start, end) in enumerate(matches):
        tokens.append(token)
        if token.kind != TokenKind.FIELD or i == len(matches) - 1:
            continue
        next_start = matches[i + 1][1]
        if query[end:next_start].strip() == "" and len(tokens) > 1 and not tokens[-2].is_operator:
            tokens.append(IMPLICIT_AND)
    return tokens
