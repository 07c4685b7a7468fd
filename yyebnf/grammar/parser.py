"""YACC 표기 파서
- `%%` 줄 두 개 사이의 규칙부만 읽는다(선언부/트레일러는 무시)
- 규칙: name (':' | '::=' | '=') rule ('|' rule)* ';'
- rule: ('quoted' | "quoted" | ident)*  [ {action} ]  [ %prec LABEL ]
- 프로덕션 앞의 공백, /* */ 블록 주석, // 줄 주석은 건너뜀
- 액션 블록은 중괄호 균형 스캐너로 건너뜀(중첩/따옴표 인식). 짝이 안 맞으면 오류
- 어휘 오류(닫히지 않은 따옴표/주석, 알 수 없는 문자)는 LexicalError
"""

from __future__ import annotations
from dataclasses import dataclass
import regex as re
from typing import List, Optional, Tuple
from .ast import Grammar, Lit, Name, Production, Rule
from ..errors import LexicalError, ParseError
from ..pcomb import Parser, Success, Failure, choice, literal, pattern, eof

SECTION_MARKER = "%%"

_MARKER_RE  = re.compile(r"^%%[ \t]*\r?$", re.M)
_SKIP_RE    = re.compile(r"(?:\s+|/\*.*?\*/|//[^\n]*)*", re.S)
_IDENT_RE   = re.compile(r"[A-Za-z_][A-Za-z0-9_.]*")
_LIT_RE     = re.compile(r"'(?:\\.|[^'\\\n])+'|\"(?:\\.|[^\"\\\n])*\"")
# 규칙 안에서 어떤 원소로도 시작할 수 없는 문자 (구분자 : = | ; 는 문법 오류로 남긴다)
_STRAY_RE   = re.compile(r"[^\s|;:=]")
_EXCERPT_RE = re.compile(r"\S{1,16}")


def rules_section(src: str) -> Tuple[str, int]:
    """
    규칙부 텍스트와 원문 기준 시작 offset을 돌려준다.
    - 마커 2개: 첫 마커 다음 줄 ~ 두 번째 마커 직전
    - 마커 1개: 첫 마커 다음 줄 ~ 끝
    - 마커 없음: 전체
    """
    marks = list(_MARKER_RE.finditer(src))
    if not marks:
        return src, 0
    start = marks[0].end()
    end = marks[1].start() if len(marks) > 1 else len(src)
    return src[start:end], start


@dataclass(frozen=True)
class _Malformed(Failure):
    """어휘 오류. 항상 committed, 발췌(excerpt)를 함께 싣는다."""
    excerpt: str = ""


def _malformed(expected: str, inp: str, pos: int) -> _Malformed:
    m = _EXCERPT_RE.match(inp, pos)
    return _Malformed(expected, pos, True, m.group(0) if m else inp[pos:pos + 1])


# ---- 특수 스캐너 ----

def _skip(inp: str, pos: int):
    m = _SKIP_RE.match(inp, pos)
    end = m.end()
    if inp.startswith("/*", end):
        return _malformed("'*/' to close the comment", inp, end)
    return Success(m.group(0), end)


def _scan_action(inp: str, pos: int):
    """'{'에서 시작해 균형 맞는 '}'까지 소비. 따옴표 안의 중괄호는 세지 않는다."""
    if pos >= len(inp) or inp[pos] != "{":
        return Failure("action block", pos)
    depth = 0
    i = pos
    quote: Optional[str] = None
    escape = False
    while i < len(inp):
        ch = inp[i]
        if escape:
            escape = False
        elif quote is not None:
            if ch == "\\":
                escape = True
            elif ch == quote:
                quote = None
        elif ch in "'\"":
            quote = ch
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return Success(None, i + 1)
        i += 1
    # 짝이 없는 '{' 는 되돌아갈 수 없는 오류
    return Failure("'}' to close the action block", pos, True)


def _unterminated_literal(inp: str, pos: int):
    # 정상 리터럴은 앞에서 이미 소비됨: 여기 남은 따옴표는 닫히지 않은 것
    if pos < len(inp) and inp[pos] in "'\"":
        return _malformed("closing quote of literal", inp, pos)
    return Failure("quote", pos)


def _stray(inp: str, pos: int):
    if _STRAY_RE.match(inp, pos):
        return _malformed("grammar symbol", inp, pos)
    return Failure("grammar symbol", pos)


# ---- 콤비네이터 조립 ----

def _build() -> Parser[List[Tuple[str, List[Rule]]]]:
    skip = Parser(_skip, "whitespace")

    def tok(p: Parser) -> Parser:
        return skip >> p

    ident  = pattern(_IDENT_RE, "identifier")
    quoted = pattern(_LIT_RE, "quoted literal")
    prec   = literal("%prec") >> tok(ident | quoted)

    element = tok(choice(
        quoted.map(Lit),
        Parser(_unterminated_literal, "literal"),
        prec.map(lambda _: None),
        Parser(_scan_action, "action block"),
        ident.map(Name),
        Parser(_stray, "grammar symbol"),
    ).label("grammar symbol"))
    rule = element.many().map(lambda xs: Rule(tuple(x for x in xs if x is not None)))
    rules = rule.sep_by1(tok(literal("|")))

    sep = tok((literal("::=") | literal(":") | literal("=")).label("':', '::=' or '='"))
    semi = tok(literal(";").label("';' after production"))
    production = (
        tok(ident.label("production name"))
        + (sep >> (rules << semi)).commit()
    )
    return production.many() << skip << eof()


_GRAMMAR = _build()


def parse_yacc(src: str) -> Grammar:
    """YACC 문법 원문 → Grammar (불변식 위반 시 첫 위반을 보고)"""
    text, base = rules_section(src)
    r = _GRAMMAR.run(text)
    if isinstance(r, _Malformed):
        raise LexicalError(base + r.pos, r.excerpt, src)
    if isinstance(r, Failure):
        raise ParseError(r.expected, base + r.pos, src)
    g = Grammar()
    for name, rules in r.value:
        g = g.add(Production(name, tuple(rules)))
    return g
