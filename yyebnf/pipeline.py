# yyebnf/pipeline.py
"""공개 파이프라인

각 단계는 예외 대신 태그된 결과를 돌려준다.
  Ok(value) : 성공
  Err(error): GrammarError(lexical/syntax/invariant) 또는 ResourceError, resource 이름 포함

단계: 문법 읽기 → YACC 파싱 → 보조 EBNF 읽기/파싱 → 변환/인라인 → 줄 목록
"""

from __future__     import annotations
from dataclasses    import dataclass
from typing         import Callable, Dict, Generic, List, Optional, TypeVar, Union

from .convert import Conversion, InlinePolicy, convert
from .ebnf.ast import Definition
from .ebnf.parser import parse_ebnf
from .errors import GrammarError, ResourceError
from .grammar.ast import Grammar
from .grammar.loader import load_grammar_text
from .grammar.parser import parse_yacc

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    error: Union[GrammarError, ResourceError]

    @property
    def ok(self) -> bool:
        return False

    @property
    def kind(self) -> str:
        return self.error.kind

    @property
    def resource(self) -> Optional[str]:
        return self.error.resource

    def __str__(self) -> str:
        return str(self.error)


Result = Union[Ok[T], Err]


def _tag(e: GrammarError, resource: Optional[str]) -> Err:
    if resource and not e.resource:
        e.resource = resource
    return Err(e)


def parse_grammar_text(src: str, resource: Optional[str] = None) -> Result[Grammar]:
    try:
        return Ok(parse_yacc(src))
    except GrammarError as e:
        return _tag(e, resource)


def parse_extra_text(src: str, resource: Optional[str] = None) -> Result[Dict[str, Definition]]:
    try:
        return Ok(parse_ebnf(src))
    except GrammarError as e:
        return _tag(e, resource)


def convert_grammar(g: Grammar,
                    extra: Optional[Dict[str, Definition]] = None,
                    policy: InlinePolicy = InlinePolicy(),
                    resource: Optional[str] = None) -> Result[Conversion]:
    try:
        return Ok(convert(g, extra, policy))
    except GrammarError as e:
        return _tag(e, resource)


def read_resource(name: str, reader: Callable[[str], str] = load_grammar_text) -> Result[str]:
    try:
        return Ok(reader(name))
    except ResourceError as e:
        return Err(e)


def run(grammar_name: str,
        extra_name: Optional[str],
        policy: InlinePolicy = InlinePolicy(),
        reader: Callable[[str], str] = load_grammar_text) -> Result[Conversion]:
    """두 리소스 이름으로 전체 변환을 수행한다. 첫 실패에서 멈춘다."""
    src = read_resource(grammar_name, reader)
    if isinstance(src, Err):
        return src
    g = parse_grammar_text(src.value, grammar_name)
    if isinstance(g, Err):
        return g

    extra: Dict[str, Definition] = {}
    if extra_name:
        extra_src = read_resource(extra_name, reader)
        if isinstance(extra_src, Err):
            return extra_src
        parsed = parse_extra_text(extra_src.value, extra_name)
        if isinstance(parsed, Err):
            return parsed
        extra = parsed.value

    return convert_grammar(g.value, extra, policy, resource=grammar_name)


def run_lines(grammar_name: str,
              extra_name: Optional[str],
              policy: InlinePolicy = InlinePolicy(),
              reader: Callable[[str], str] = load_grammar_text) -> Result[List[str]]:
    r = run(grammar_name, extra_name, policy, reader)
    if isinstance(r, Err):
        return r
    return Ok(r.value.lines())
