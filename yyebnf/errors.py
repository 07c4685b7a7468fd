# yyebnf/errors.py
"""오류 종류(kind)

- lexical   : 인식할 수 없는 문자 / 깨진 리터럴 (offset + 발췌)
- syntax    : 콤비네이터 실패(라벨된 기대값 + 위치)
- invariant : 중복 이름, 빈 대안 2개 이상, 이중 수량자
- resource  : 입력 리소스를 읽을 수 없음

코어는 예외를 던지고, 공개 파이프라인(`yyebnf.pipeline`)이 이를 잡아
Ok/Err 로 돌려준다.
"""

from __future__ import annotations
from typing import Optional, Tuple


# ---------- caret snippet utils ----------
def _line_bounds(src: str, pos: int) -> Tuple[int, int]:
    """pos가 속한 라인의 [시작, 끝) 범위"""
    start = src.rfind("\n", 0, pos)
    start = 0 if start == -1 else start + 1
    end = src.find("\n", pos)
    if end == -1:
        end = len(src)
    return start, end

def line_col(src: str, pos: int) -> Tuple[int, int]:
    """절대 위치 pos → (line, col), 둘 다 1-based"""
    start, _ = _line_bounds(src, pos)
    return src.count("\n", 0, pos) + 1, (pos - start) + 1

def snippet_at(src: str, pos: int) -> str:
    """pos 위치에 캐럿을 찍은 한 줄 발췌"""
    start, end = _line_bounds(src, pos)
    caret = " " * (pos - start) + "^"
    return f"{src[start:end]}\n{caret}"


class GrammarError(SyntaxError):
    """문법/표기 오류의 공통 부모. `resource`는 파이프라인이 채운다."""
    kind = "grammar"

    def __init__(self, message: str, resource: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.resource = resource

    def __str__(self) -> str:
        if self.resource:
            return f"{self.resource}: {self.message}"
        return self.message


class LexicalError(GrammarError):
    kind = "lexical"

    def __init__(self, offset: int, excerpt: str, src: Optional[str] = None):
        msg = f"Unexpected input {excerpt!r} at offset {offset}"
        if src is not None:
            line, col = line_col(src, offset)
            msg = f"Unexpected input {excerpt!r} at {line}:{col}\n{snippet_at(src, offset)}"
        super().__init__(msg)
        self.offset = offset
        self.excerpt = excerpt


class ParseError(GrammarError):
    kind = "syntax"

    def __init__(self, expected: str, offset: int, src: Optional[str] = None):
        self.expected = expected
        self.offset = offset
        self.line = self.col = 0
        msg = f"Expected {expected} at offset {offset}"
        if src is not None:
            self.line, self.col = line_col(src, offset)
            msg = f"Expected {expected} at {self.line}:{self.col}\n{snippet_at(src, offset)}"
        super().__init__(msg)


class GrammarInvariantError(GrammarError):
    kind = "invariant"


class DuplicateNameError(GrammarInvariantError):
    def __init__(self, name: str):
        super().__init__(f"Duplicate production '{name}'")
        self.name = name


class EmptyAlternativesError(GrammarInvariantError):
    def __init__(self, name: str, count: int):
        super().__init__(
            f"Production '{name}' has {count} empty alternatives (at most one is allowed)"
        )
        self.name = name
        self.count = count


class DoubleQuantificationError(GrammarInvariantError):
    """`x*?` 처럼 수량자 바로 아래 수량자가 온 경우."""
    def __init__(self, original, partial):
        # 순환 import 방지: 렌더러는 지연 로딩
        from .ebnf.render import render
        super().__init__(
            f"Illegal double quantification: {render(original)} (normalized so far: {render(partial)})"
        )
        self.original = original
        self.partial = partial


class ResourceError(OSError):
    """입력 리소스를 읽을 수 없음(파싱 오류와 구분)."""
    kind = "resource"

    def __init__(self, resource: str, reason: str):
        super().__init__(f"{resource}: cannot read ({reason})")
        self.resource = resource
        self.reason = reason
