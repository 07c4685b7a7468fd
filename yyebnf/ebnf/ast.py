# yyebnf/ebnf/ast.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, Tuple, Union

# ---- EBNF AST node definitions ----
# Closed set of five node kinds. Nodes are immutable; rewrites build new trees.

class Quant:
    OPT  = "?"   # zero-or-one
    STAR = "*"   # zero-or-many
    PLUS = "+"   # one-or-many

    ALL = (OPT, STAR, PLUS)


@dataclass(frozen=True)
class Alt:
    alts: Tuple["Node", ...]

@dataclass(frozen=True)
class Seq:
    items: Tuple["Node", ...]

@dataclass(frozen=True)
class Qnt:
    node: "Node"
    kind: str  # '?', '*', '+'

@dataclass(frozen=True)
class NonTerm:
    name: str

@dataclass(frozen=True)
class Term:
    text: str  # verbatim, quotes/brackets included

Node = Union[Alt, Seq, Qnt, NonTerm, Term]

# canonical "nothing"
EMPTY = Seq(())

# display precedence, used only for parenthesization
PREC_ALT  = 0
PREC_SEQ  = 1
PREC_QNT  = 2
PREC_ATOM = 3


def precedence(node: Node) -> int:
    if isinstance(node, Alt):
        return PREC_ALT
    if isinstance(node, Seq):
        return PREC_SEQ
    if isinstance(node, Qnt):
        return PREC_QNT
    if isinstance(node, (NonTerm, Term)):
        return PREC_ATOM
    raise AssertionError(f"unknown node: {node!r}")


def is_atomic(node: Node) -> bool:
    return isinstance(node, (NonTerm, Term))


def references(node: Node) -> Iterator[str]:
    """Non-terminal names referenced anywhere in `node`, in order (repeats included)."""
    if isinstance(node, NonTerm):
        yield node.name
    elif isinstance(node, Term):
        return
    elif isinstance(node, Alt):
        for a in node.alts:
            yield from references(a)
    elif isinstance(node, Seq):
        for it in node.items:
            yield from references(it)
    elif isinstance(node, Qnt):
        yield from references(node.node)
    else:
        raise AssertionError(f"unknown node: {node!r}")


@dataclass(frozen=True)
class Definition:
    name: str
    expr: Node

    @property
    def is_recursive(self) -> bool:
        """True if the body mentions its own name (other definitions are not followed)."""
        return self.name in set(references(self.expr))
