# yyebnf/ebnf/parser.py
from __future__ import annotations
from typing import Dict, List, Tuple
from .ast import Alt, Seq, Qnt, NonTerm, Term, Node, Definition
from .normalize import normalize
from ..errors import ParseError, DuplicateNameError
from ..lex import Token, scan, raise_on_error, PUNCT, IDENT, CHAR, STRING, CLASS, END
from ..pcomb import Parser, Failure, choice, satisfy, lazy

# Supplementary notation we parse (over tokens from yyebnf.lex):
#   grammar     := definition* END
#   definition  := IDENT "::=" alternation ";"
#   alternation := sequence ("|" sequence)*
#   sequence    := quantified*
#   quantified  := atom ("?" | "*" | "+")*
#   atom        := IDENT | CHAR | STRING | CLASS | "(" alternation ")"
#
# Every definition is normalized as soon as it is parsed.
# Groups nest at most MAX_GROUP_DEPTH deep.

MAX_GROUP_DEPTH = 32


def _punct(text: str) -> Parser[Token]:
    return satisfy(lambda t: t.kind == PUNCT and t.text == text, repr(text))

def _kind(kind: str, expected: str) -> Parser[Token]:
    return satisfy(lambda t: t.kind == kind, expected)


def _suffixed(atom_and_suffixes) -> Node:
    node, suffixes = atom_and_suffixes
    # `x*?` stays nested here; the normalizer rejects it
    for s in suffixes:
        node = Qnt(node, s.text)
    return node


def _build() -> Parser[List[Tuple[str, Node]]]:
    ident = _kind(IDENT, "identifier")
    terminal = choice(
        _kind(CHAR, "character literal"),
        _kind(STRING, "string literal"),
        _kind(CLASS, "character class"),
    ).map(lambda t: Term(t.text))

    alternation = lazy(lambda: alternation_p)
    group = _punct("(") >> (alternation << _punct(")")).commit()
    atom = choice(ident.map(lambda t: NonTerm(t.text)), terminal, group).label("atom")
    suffix = choice(_punct("?"), _punct("*"), _punct("+")).label("quantifier")
    quantified = (atom + suffix.many()).map(_suffixed)
    sequence = quantified.many().map(lambda items: Seq(tuple(items)))
    alternation_p = sequence.sep_by1(_punct("|")).map(lambda alts: Alt(tuple(alts)))

    definition = (
        ident.label("definition name")
        + (_punct("::=") >> (alternation << _punct(";").label("';' after definition"))).commit()
    ).map(lambda nb: (nb[0].text, nb[1]))
    return definition.many() << _kind(END, "end of input")


_GRAMMAR = _build()


def _check_nesting(toks: Tuple[Token, ...], src: str) -> None:
    depth = 0
    for t in toks:
        if t.kind != PUNCT:
            continue
        if t.text == "(":
            depth += 1
            if depth > MAX_GROUP_DEPTH:
                raise ParseError(f"at most {MAX_GROUP_DEPTH} nested groups", t.offset, src)
        elif t.text == ")" and depth:
            depth -= 1


def parse_ebnf(src: str) -> Dict[str, Definition]:
    """`name ::= body ;` 목록 → 이름 순서를 보존한 정의 맵(정규화 완료)."""
    toks = scan(src)
    raise_on_error(toks, src)
    _check_nesting(toks, src)
    r = _GRAMMAR.run(toks)
    if isinstance(r, Failure):
        raise ParseError(r.expected, toks[min(r.pos, len(toks) - 1)].offset, src)
    defs: Dict[str, Definition] = {}
    for name, body in r.value:
        if name in defs:
            raise DuplicateNameError(name)
        defs[name] = Definition(name, normalize(body))
    return defs
