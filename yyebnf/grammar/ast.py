# yyebnf/grammar/ast.py
"""YACC 문법 모델
- Name/Lit: 규칙 원소(비단말 참조 / 따옴표 리터럴)
- Rule: 원소 시퀀스 하나(비어 있을 수 있음 = ε 대안)
- Production: 이름 + 대안 Rule 목록
- Grammar: 이름 → Rule 목록. 추가할 때마다 불변식을 먼저 검사한다.
"""

from __future__     import annotations
from dataclasses    import dataclass
from typing         import Dict, Iterator, Tuple, Union

from ..errors import DuplicateNameError, EmptyAlternativesError

@dataclass(frozen=True)
class Name:
    ident: str

@dataclass(frozen=True)
class Lit:
    text: str    # 따옴표 포함 원문

Element = Union[Name, Lit]

@dataclass(frozen=True)
class Rule:
    items: Tuple[Element, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.items

@dataclass(frozen=True)
class Production:
    name: str
    rules: Tuple[Rule, ...]

    def referenced_names(self) -> Iterator[str]:
        """모든 대안에서 참조하는 비단말 이름(등장 순서, 중복 포함)"""
        for r in self.rules:
            for it in r.items:
                if isinstance(it, Name):
                    yield it.ident


@dataclass(frozen=True)
class Grammar:
    """
    Grammar
    =======
    프로덕션을 선언 순서대로 보관하는 불변 컨테이너입니다.
    `add()`는 새 Grammar를 돌려주며, 다음 두 경우 삽입 전에 실패합니다.

    - 같은 이름의 프로덕션이 이미 있음   → DuplicateNameError
    - 빈 대안(ε)이 2개 이상인 프로덕션 → EmptyAlternativesError
    """
    productions: Tuple[Production, ...] = ()

    def add(self, p: Production) -> "Grammar":
        if p.name in self:
            raise DuplicateNameError(p.name)
        empties = sum(1 for r in p.rules if r.is_empty)
        if empties > 1:
            raise EmptyAlternativesError(p.name, empties)
        return Grammar(self.productions + (p,))

    def __contains__(self, name: object) -> bool:
        return any(p.name == name for p in self.productions)

    def __len__(self) -> int:
        return len(self.productions)

    def names(self) -> Tuple[str, ...]:
        return tuple(p.name for p in self.productions)

    def production(self, name: str) -> Production:
        for p in self.productions:
            if p.name == name:
                return p
        raise KeyError(name)

    def as_mapping(self) -> Dict[str, Tuple[Rule, ...]]:
        return {p.name: p.rules for p in self.productions}
