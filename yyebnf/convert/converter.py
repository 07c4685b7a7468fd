# yyebnf/convert/converter.py
"""YACC 프로덕션 → EBNF 정의 (의존 순서 + 자명한 정의 인라인)"""

from __future__     import annotations
from dataclasses    import dataclass
from typing         import Dict, FrozenSet, List, Mapping, Optional, Set, Tuple

from ..analysis import reference_graph, strongly_connected_components, is_recursive_group
from ..ebnf.ast import Alt, Seq, NonTerm, Term, Node, Definition, references
from ..ebnf.normalize import normalize
from ..ebnf.render import emit_lines
from ..errors import DuplicateNameError
from ..grammar.ast import Grammar, Lit, Production
from .inline import InlinePolicy, inline, is_trivial


@dataclass(frozen=True)
class Conversion:
    """
    변환 결과.
    - definitions: YACC에서 온 정의(의존 순서, 잎 쪽이 먼저)
    - extra      : 보조 EBNF 정의(파일 순서)
    - components : 전체 정의에 대한 SCC 위상 순서
    - trivial    : 인라인 후보로 판정된 이름
    - inlined    : 원래 참조되었지만 인라인 후 어디서도 참조되지 않는 이름
    """
    definitions: Tuple[Definition, ...]
    extra: Tuple[Definition, ...]
    components: Tuple[Tuple[str, ...], ...]
    trivial: FrozenSet[str]
    inlined: FrozenSet[str]

    @property
    def all(self) -> Tuple[Definition, ...]:
        return self.definitions + self.extra

    def lines(self) -> List[str]:
        return emit_lines(self.all)


def production_to_ebnf(p: Production) -> Node:
    """대안들 → Alt(Seq(원자...)...), 정규화까지"""
    alts = []
    for r in p.rules:
        atoms = tuple(Term(it.text) if isinstance(it, Lit) else NonTerm(it.ident) for it in r.items)
        alts.append(Seq(atoms))
    return normalize(Alt(tuple(alts)))


def convert(g: Grammar,
            extra: Optional[Mapping[str, Definition]] = None,
            policy: InlinePolicy = InlinePolicy()) -> Conversion:
    extra = dict(extra or {})
    for name in extra:
        if name in g:
            raise DuplicateNameError(name)

    # 본문(정규화 완료): YACC 먼저, 그다음 보조 정의
    bodies: Dict[str, Node] = {p.name: production_to_ebnf(p) for p in g.productions}
    bodies.update({name: d.expr for name, d in extra.items()})

    graph = reference_graph({name: list(references(body)) for name, body in bodies.items()})
    components = strongly_connected_components(graph)

    trivial: Dict[str, Node] = {}
    settled: Dict[str, Node] = {}
    yacc_order: List[str] = []
    for comp in components:
        recursive = is_recursive_group(graph, comp)
        for name in comp:
            body = inline(bodies[name], trivial)
            settled[name] = body
            if not recursive and is_trivial(body, policy):
                trivial[name] = body
            if name in g:
                yacc_order.append(name)

    before: Set[str] = {n for name, edges in graph.items() for n in edges if n != name}
    after: Set[str] = {n for name, body in settled.items() for n in references(body) if n != name}
    inlined = frozenset(n for n in trivial if n in before and n not in after)

    if policy.drop_inlined:
        yacc_order = [n for n in yacc_order if n not in inlined]

    return Conversion(
        definitions=tuple(Definition(n, settled[n]) for n in yacc_order),
        extra=tuple(Definition(n, settled[n]) for n in extra),
        components=tuple(components),
        trivial=frozenset(trivial),
        inlined=inlined,
    )
