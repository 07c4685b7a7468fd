# yyebnf/ebnf/render.py
"""EBNF 노드 → 텍스트

자식의 우선순위가 부모 문맥이 요구하는 값보다 낮으면 괄호로 감싼다.
  Alt 자식: '|'로 연결, Seq 자식: 공백 1개, Qnt: 안쪽 뒤에 ?,*,+
"""

from __future__ import annotations
from typing import Iterable, List
from .ast import (
    Alt, Seq, Qnt, NonTerm, Term, Node, Definition,
    PREC_ALT, PREC_SEQ, PREC_QNT, PREC_ATOM, precedence,
)


def render(node: Node, required: int = PREC_ALT) -> str:
    if isinstance(node, (NonTerm, Term)):
        text = node.name if isinstance(node, NonTerm) else node.text
    elif isinstance(node, Alt):
        text = "|".join(render(a, PREC_SEQ) for a in node.alts)
    elif isinstance(node, Seq):
        text = " ".join(render(it, PREC_QNT) for it in node.items)
    elif isinstance(node, Qnt):
        text = render(node.node, PREC_ATOM) + node.kind
    else:
        raise AssertionError(f"unknown node: {node!r}")

    if precedence(node) < required:
        return f"({text})"
    return text


def render_definition(d: Definition) -> str:
    body = render(d.expr)
    return f"{d.name} ::= {body}" if body else f"{d.name} ::="


def emit_lines(defs: Iterable[Definition]) -> List[str]:
    """정의마다 한 줄(`name ::= body`), 마지막에 빈 줄."""
    lines = [render_definition(d) for d in defs]
    lines.append("")
    return lines
