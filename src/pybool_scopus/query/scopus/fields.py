"""
Field names understood by the Scopus query parser.
"""

TITLE_ABS_KEY = "TITLE-ABS-KEY"
TITLE_ABS = "TITLE-ABS"
TITLE = "TITLE"
AUTHKEY = "AUTHKEY"

#: The scope given to a quoted term that is not wrapped in a field function.
ANY = "ANY"

#: Field functions, longest first so that a prefix never shadows a longer name.
FIELD_FUNCTIONS = [TITLE_ABS_KEY, TITLE_ABS, TITLE, AUTHKEY]

