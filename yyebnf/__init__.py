"""yyebnf – YACC grammar to simplified EBNF (for syntax diagrams)"""

from .pipeline import Ok, Err, run, run_lines
from .convert import InlinePolicy, convert
