from abc import ABC, abstractmethod

from pybool_scopus.query.ast import QueryNode


class EmptyResultError(ValueError):
    """
    Raised when nothing is left of a query once it has been parsed, e.g., a blank line.
    """

    def __init__(self, raw_query: str):
        super().__init__("query parsed to empty structure")
        #: The query that produced no tree.
        self.raw_query = raw_query


class QueryParser(ABC):

    @abstractmethod
    def parse_ast(self, raw_query: str) -> QueryNode:
        """
          Parse a raw query into a query tree.
          """
        raise NotImplementedError()

    @abstractmethod
    def format(self, node: QueryNode) -> str:
        """
          Format a query tree into a raw query.
          """
        raise NotImplementedError()

    def reformat(self, raw_query: str) -> str:
        """
          Parse a raw query and format it again, which gives the canonical spelling of the query.
          """
        return self.format(self.parse_ast(raw_query))
