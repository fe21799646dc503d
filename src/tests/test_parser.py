import pytest

from pybool_scopus.query import EmptyResultError, ScopusQueryParser, normalize, parse_line
from pybool_scopus.query.dsl import AND, OR, group, term
from pybool_scopus.query.scopus.fields import AUTHKEY, TITLE, TITLE_ABS_KEY
from pybool_scopus.query.scopus.tokenizer import Token, TokenKind

QUERIES = [
    'TITLE-ABS-KEY("battery") AND NOT AUTHKEY("recycling")',
    '("deep learning" OR "neural network") AND TITLE("survey")',
    'TITLE("a") TITLE("b")',
    '("a" OR ("b" "c")',
    '"a" OR ("b" "c") "d"',
    'TITLE-ABS-KEY("solid state" OR "lithium") AND (TITLE("anode") OR ( AUTHKEY("cathode") "electrolyte" ))',
    '((("a")))',
    '"a" AND () AND ("b" OR ())',
]


def test_negation():
    expected = group(and_=[term("battery", TITLE_ABS_KEY)], and_not=[term("recycling", AUTHKEY)])
    assert parse_line('TITLE-ABS-KEY("battery") AND NOT AUTHKEY("recycling")') == expected


def test_group():
    expected = AND(group(and_=["deep learning"], or_=["neural network"]), term("survey", TITLE))
    assert parse_line('("deep learning" OR "neural network") AND TITLE("survey")') == expected


def test_implicit_and():
    expected = AND(term("a", TITLE), term("b", TITLE))
    assert parse_line('TITLE("a") TITLE("b")') == expected
    assert parse_line('TITLE("a") AND TITLE("b")') == expected


def test_unclosed_parentheses_are_closed():
    expected = group(and_=["a"], or_=[AND("b", "c")])
    assert parse_line('("a" OR ("b" "c")') == expected
    assert parse_line('("a" OR ("b" "c"))') == expected


def test_unmatched_close_is_ignored():
    assert parse_line('"a" AND "b")') == parse_line('"a" AND "b"') == AND("a", "b")
    assert parse_line('TITLE("a") TITLE("b")))') == parse_line('TITLE("a") TITLE("b")')


def test_operator_restored_after_group():
    assert parse_line('"a" OR ("b" "c") "d"') == group(and_=["a"], or_=[AND("b", "c"), "d"])


def test_leading_operator():
    assert parse_line('OR "a" OR "b"') == OR("a", "b")


def test_redundant_groups():
    assert parse_line('((("a")))') == term("a")
    assert parse_line('"a" AND () AND ("b" OR ())') == AND("a", "b")


def test_malformed_field_token_is_dropped():
    assert parse_line('TITLE("a:b") AND TITLE("c")') == term("c", TITLE)


def test_unclosed_group_wins():
    # The stack still holds the outer group when the tokens run out.
    parser = ScopusQueryParser()
    tokens = [Token(TokenKind.FIELD, "ANY:a"), Token(TokenKind.OPEN_PAREN, "("), Token(TokenKind.FIELD, "ANY:b")]
    assert parser.parse_tokens(tokens) == term("b")
    assert parse_line('"a") OR ("b"') == term("b")


@pytest.mark.parametrize("raw_query", ["", "   ", "no quoted terms", "()", 'TITLE("unterminated', 'TITLE("a:b")'])
def test_empty_result(raw_query):
    with pytest.raises(EmptyResultError):
        parse_line(raw_query)
    assert ScopusQueryParser().parse_tokens(ScopusQueryParser().tokenize(raw_query)) is None


@pytest.mark.parametrize("raw_query", QUERIES)
def test_trees_are_normalized(raw_query):
    node = parse_line(raw_query)
    assert normalize(node) == node
    for n in node.walk():
        assert not n.is_empty
        if n.term is None:
            sizes = [len(n.bucket(op)) for op in ("AND", "OR", "AND_NOT") if len(n.bucket(op)) > 0]
            assert len(sizes) > 1 or sizes[0] > 1


@pytest.mark.parametrize("raw_query", QUERIES)
def test_extra_close_is_inert(raw_query):
    assert parse_line(raw_query + ")") == parse_line(raw_query)


def test_format():
    parser = ScopusQueryParser()
    assert parser.reformat('TITLE-ABS-KEY("battery") AND NOT AUTHKEY("recycling")') == \
        'TITLE-ABS-KEY("battery") AND NOT AUTHKEY("recycling")'
    assert parser.reformat('( "deep learning" OR "neural network" ) TITLE("survey")') == \
        '("deep learning" OR "neural network") AND TITLE("survey")'
    assert parser.reformat('"a" OR ("b" "c") "d"') == '"a" OR ("b" AND "c") OR "d"'
    assert parser.reformat('OR "a" OR "b"') == 'OR "a" OR "b"'


@pytest.mark.parametrize("raw_query", QUERIES)
def test_format_parses_back(raw_query):
    parser = ScopusQueryParser()
    node = parser.parse_ast(raw_query)
    assert parser.parse_ast(parser.format(node)) == node
