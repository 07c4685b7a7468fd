# yyebnf/lex/__init__.py
"""보조 EBNF 표기용 토크나이저

특징
----
- `regex` 마스터 패턴 하나로 스캔, 공백/주석(/* */, //)은 토큰으로 내보내지 않음
- 토큰 종류
  - PUNCT  : ::=  |  (  )  ?  *  +  ;
  - IDENT  : 비단말 이름
  - CHAR   : 'x'      (따옴표 포함 원문)
  - STRING : "xyz"    (따옴표 포함 원문)
  - CLASS  : [a-z]    (대괄호 포함 원문)
  - END    : 입력 끝
  - ERROR  : 첫 어휘 오류. 항상 마지막 토큰이며 재동기화는 하지 않는다.


API
---
- `Token(kind, text, offset)`: 불변 토큰
- `scan(src) -> Tuple[Token, ...]`
- `raise_on_error(tokens, src)`: 마지막 토큰이 ERROR면 LexicalError
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Tuple
import regex as re

from ..errors import LexicalError

PUNCT  = "PUNCT"
IDENT  = "IDENT"
CHAR   = "CHAR"
STRING = "STRING"
CLASS  = "CLASS"
END    = "END"
ERROR  = "ERROR"

_TOKEN_SPEC = [
    ("WS",       r"\s+"),
    ("COMMENT",  r"//[^\n]*"),
    ("MCOMMENT", r"/\*.*?\*/"),
    (PUNCT,      r"::=|[|()?*+;]"),
    (CHAR,       r"'(?:\\.|[^'\\\n])+'"),
    (STRING,     r'"(?:\\.|[^"\\\n])*"'),
    (CLASS,      r"\[(?:\\.|[^\]\\\n])+\]"),
    (IDENT,      r"[A-Za-z_][A-Za-z0-9_.]*"),
]
MASTER_RE = re.compile("|".join(f"(?P<{n}>{p})" for n, p in _TOKEN_SPEC), re.S)

# 오류 토큰에 담을 발췌: 공백 전까지
_EXCERPT_RE = re.compile(r"\S{1,16}")


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    offset: int

    def __str__(self) -> str:
        if self.kind == END:
            return "end of input"
        return repr(self.text)


def scan(src: str) -> Tuple[Token, ...]:
    toks: List[Token] = []
    i = 0
    while i < len(src):
        m = MASTER_RE.match(src, i)
        if not m:
            bad = _EXCERPT_RE.match(src, i)
            toks.append(Token(ERROR, bad.group(0) if bad else src[i], i))
            return tuple(toks)
        kind = m.lastgroup or ""
        if kind not in ("WS", "COMMENT", "MCOMMENT"):
            toks.append(Token(kind, m.group(0), i))
        i = m.end()
    toks.append(Token(END, "", len(src)))
    return tuple(toks)


def raise_on_error(tokens: Tuple[Token, ...], src: str) -> None:
    last = tokens[-1]
    if last.kind == ERROR:
        raise LexicalError(last.offset, last.text, src)
