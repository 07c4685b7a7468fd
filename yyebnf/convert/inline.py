# yyebnf/convert/inline.py
"""자명한(trivial) 정의 판정과 인라인 치환"""

from __future__     import annotations
from dataclasses    import dataclass
from typing         import Mapping

from ..ebnf.ast import Alt, Seq, Qnt, NonTerm, Term, Node, is_atomic
from ..ebnf.normalize import normalize

# 다이어그램 가독성을 위한 경험적 한계값
MAX_TRIVIAL_ALTERNATIVES = 4
MAX_TRIVIAL_SEQUENCE = 3


@dataclass(frozen=True)
class InlinePolicy:
    """
    인라인 설정.
    - max_alternatives: 원자 대안만으로 된 Alt의 최대 대안 수
    - max_sequence    : 원자만으로 된 Seq의 최대 원소 수
    - drop_inlined    : 모든 사용처에 인라인되어 더는 참조되지 않는 YACC 정의를 출력에서 뺀다
    """
    max_alternatives: int = MAX_TRIVIAL_ALTERNATIVES
    max_sequence: int = MAX_TRIVIAL_SEQUENCE
    drop_inlined: bool = False


def is_trivial(node: Node, policy: InlinePolicy = InlinePolicy()) -> bool:
    """
    정규화된 본문이 다음 중 하나면 자명하다(재귀 여부는 호출자가 따로 본다).
      - 원자 대안 max_alternatives개 이하의 Alt (중첩 Alt가 있으면 불가)
      - 원소가 모두 원자이거나 자명한 Seq. 전부 원자면 max_sequence개 이하
      - 원자를 감싼 Qnt
    """
    if isinstance(node, Alt):
        return len(node.alts) <= policy.max_alternatives and all(is_atomic(a) for a in node.alts)
    if isinstance(node, Seq):
        if all(is_atomic(it) for it in node.items):
            return len(node.items) <= policy.max_sequence
        return all(is_atomic(it) or is_trivial(it, policy) for it in node.items)
    if isinstance(node, Qnt):
        return is_atomic(node.node)
    if isinstance(node, (NonTerm, Term)):
        return False
    raise AssertionError(f"unknown node: {node!r}")


def _inline_once(node: Node, bodies: Mapping[str, Node]) -> Node:
    if isinstance(node, NonTerm):
        return bodies.get(node.name, node)
    if isinstance(node, Term):
        return node
    if isinstance(node, Alt):
        return normalize(Alt(tuple(_inline_once(a, bodies) for a in node.alts)))
    if isinstance(node, Seq):
        return normalize(Seq(tuple(_inline_once(it, bodies) for it in node.items)))
    if isinstance(node, Qnt):
        inner = _inline_once(node.node, bodies)
        if isinstance(inner, Qnt):
            # 수량자 아래 수량자가 생기는 치환은 하지 않는다(참조 유지)
            inner = node.node
        return normalize(Qnt(inner, node.kind))
    raise AssertionError(f"unknown node: {node!r}")


def inline(node: Node, bodies: Mapping[str, Node]) -> Node:
    """
    `bodies`에 있는 이름의 참조를 그 본문(값)으로 바꾸고 다시 정규화한다.
    더 바뀌는 것이 없을 때까지 반복(고정점).
    bodies의 정의들은 비재귀이므로 반복은 끝난다.
    """
    cur = node
    while True:
        nxt = _inline_once(cur, bodies)
        if nxt == cur:
            return cur
        cur = nxt
