"""
Parser for the boolean query language of Scopus.
"""
