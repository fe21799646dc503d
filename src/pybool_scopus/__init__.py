"""
pybool_scopus turns Scopus-style boolean queries into structured query trees.
"""

__version__ = "0.1.0"
