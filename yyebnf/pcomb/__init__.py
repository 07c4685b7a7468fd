# yyebnf/pcomb/__init__.py
"""Small backtracking parser-combinator runtime shared by both notation parsers.

This package provides:
- `Success` / `Failure` result values (failure is a value, never raised)
- the `Parser` wrapper with sequencing (`+`, `>>`, `<<`), ordered choice (`|`),
  repetition, optional matching, separated lists, labels and commit points
- primitives: `satisfy`, `literal`, `pattern`, `eof`, `lazy`, `choice`

It has no I/O and no shared mutable state.
"""

from .core import (
    Success, Failure, Parser,
    succeed, satisfy, literal, pattern, eof, lazy, choice,
)
