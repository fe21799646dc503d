"""
Parsing of Scopus-style boolean queries into query trees.
"""

from pybool_scopus.query.ast import AND, AND_NOT, OR, OPERATORS, FieldTerm, QueryNode
from pybool_scopus.query.normalize import is_empty, normalize
from pybool_scopus.query.parser import EmptyResultError, QueryParser
from pybool_scopus.query.scopus.parser import ScopusQueryParser, parse_line
