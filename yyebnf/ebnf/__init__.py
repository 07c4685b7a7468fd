# yyebnf/ebnf/__init__.py
"""EBNF submodule for yyebnf.

This package provides:
- AST nodes for the five EBNF node kinds and `Definition`
- the normalizer (flattening, optional-alternative folding, double quantifier check)
- a parser for the supplementary `name ::= body ;` notation
- rendering with precedence-based parenthesization
"""

from .ast import (
    Alt, Seq, Qnt, NonTerm, Term, Node, Quant, Definition, EMPTY,
    precedence, is_atomic, references,
)
from .normalize import normalize
from .parser import parse_ebnf
from .render import render, render_definition, emit_lines
