from __future__ import annotations
from typing import Dict, Iterable, List, Mapping, Set, Tuple

from ..grammar.ast import Grammar
from ..ebnf.ast import Definition, references

Graph = Dict[str, Tuple[str, ...]]


def reference_graph(refs: Mapping[str, Iterable[str]]) -> Graph:
    """
    이름 → 참조 이름들 에서 그래프를 만든다.
    간선은 키로 정의된 이름만, 첫 등장 순서대로 중복 없이 남긴다.
    """
    out: Graph = {}
    for name, names in refs.items():
        seen: Set[str] = set()
        edges: List[str] = []
        for n in names:
            if n in refs and n not in seen:
                seen.add(n)
                edges.append(n)
        out[name] = tuple(edges)
    return out


def dependency_graph(g: Grammar) -> Graph:
    """
    프로덕션 → (어느 대안에서든) 직접 참조하는 비단말.
    문법에 정의되지 않은 이름(토큰 등)은 노드가 아니다.
    """
    return reference_graph({p.name: list(p.referenced_names()) for p in g.productions})


def definition_graph(defs: Mapping[str, Definition]) -> Graph:
    """EBNF 정의 맵에 대한 같은 형태의 그래프"""
    return reference_graph({name: list(references(d.expr)) for name, d in defs.items()})


def reaches(graph: Graph, src: str, dst: str) -> bool:
    """src에서 간선 1개 이상을 거쳐 dst에 도달하는가"""
    seen: Set[str] = set()
    todo = list(graph.get(src, ()))
    while todo:
        n = todo.pop()
        if n == dst:
            return True
        if n in seen:
            continue
        seen.add(n)
        todo.extend(graph.get(n, ()))
    return False


def reaches_self(graph: Graph, name: str) -> bool:
    return reaches(graph, name, name)


def strongly_connected_components(graph: Graph) -> List[Tuple[str, ...]]:
    """
    Tarjan SCC (반복형).
    결과는 위상 순서: 어떤 컴포넌트도 뒤에 나오는 컴포넌트로 가는 간선이 없다.
    즉 가장 덜 의존되는(잎) 쪽이 먼저 나온다. 컴포넌트 내부는 그래프 선언 순서.
    """
    order = {n: i for i, n in enumerate(graph)}
    index: Dict[str, int] = {}
    low: Dict[str, int] = {}
    stack: List[str] = []
    on_stack: Set[str] = set()
    out: List[Tuple[str, ...]] = []
    counter = 0

    def _visit(n: str) -> None:
        nonlocal counter
        index[n] = low[n] = counter
        counter += 1
        stack.append(n)
        on_stack.add(n)

    for root in graph:
        if root in index:
            continue
        _visit(root)
        work: List[Tuple[str, int]] = [(root, 0)]
        while work:
            v, i = work[-1]
            succ = graph[v]
            if i < len(succ):
                work[-1] = (v, i + 1)
                w = succ[i]
                if w not in graph:
                    continue
                if w not in index:
                    _visit(w)
                    work.append((w, 0))
                elif w in on_stack:
                    low[v] = min(low[v], index[w])
                continue

            work.pop()
            if work:
                u = work[-1][0]
                low[u] = min(low[u], low[v])
            if low[v] == index[v]:
                comp: List[str] = []
                while True:
                    w = stack.pop()
                    on_stack.discard(w)
                    comp.append(w)
                    if w == v:
                        break
                out.append(tuple(sorted(comp, key=order.__getitem__)))
    return out


def is_recursive_group(graph: Graph, component: Tuple[str, ...]) -> bool:
    """여러 멤버이거나 자기 자신에 도달하면 재귀 그룹(인라인 후보 아님)"""
    return len(component) > 1 or reaches_self(graph, component[0])
