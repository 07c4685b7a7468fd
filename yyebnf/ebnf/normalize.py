# yyebnf/ebnf/normalize.py
"""EBNF 정규화(normalize)

자식을 먼저 정규화한 뒤 부모를 다시 짜므로, 한 번의 bottom-up 패스로 고정점에 도달한다.
  - Alt : 중첩 Alt 평탄화, 빈 Seq 대안이 있으면 제거 후 나머지를 '?'로 감쌈
  - Seq : 중첩 Seq 평탄화, 원소 1개면 그 원소
  - Qnt : 안쪽이 다시 Qnt면 DoubleQuantificationError
"""

from __future__ import annotations
from typing import List
from .ast import Alt, Seq, Qnt, NonTerm, Term, Node, Quant, EMPTY
from ..errors import DoubleQuantificationError


def _optional(node: Node) -> Node:
    """`( | node)` 의 정규형. node는 이미 정규화되어 있어야 한다."""
    if node == EMPTY:
        return EMPTY
    if isinstance(node, Qnt):
        # x*? == x*, x?? == x?, x+? == x*
        if node.kind == Quant.PLUS:
            return Qnt(node.node, Quant.STAR)
        return node
    return Qnt(node, Quant.OPT)


def normalize(node: Node) -> Node:
    if isinstance(node, (NonTerm, Term)):
        return node

    if isinstance(node, Alt):
        flat: List[Node] = []
        for a in node.alts:
            n = normalize(a)
            if isinstance(n, Alt):
                flat.extend(n.alts)
            else:
                flat.append(n)
        rest = [n for n in flat if n != EMPTY]
        if not rest:
            return EMPTY
        body = rest[0] if len(rest) == 1 else Alt(tuple(rest))
        if len(rest) < len(flat):
            return _optional(body)
        return body

    if isinstance(node, Seq):
        items: List[Node] = []
        for it in node.items:
            n = normalize(it)
            if isinstance(n, Seq):
                items.extend(n.items)
            else:
                items.append(n)
        if len(items) == 1:
            return items[0]
        return Seq(tuple(items))

    if isinstance(node, Qnt):
        inner = normalize(node.node)
        if isinstance(inner, Qnt):
            raise DoubleQuantificationError(node, Qnt(inner, node.kind))
        if inner == EMPTY:
            return EMPTY
        return Qnt(inner, node.kind)

    raise AssertionError(f"unknown node: {node!r}")
