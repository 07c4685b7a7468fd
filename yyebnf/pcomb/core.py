# yyebnf/pcomb/core.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, List, Optional, Sequence, Tuple, TypeVar, Union

# Backtracking parser combinators.
# - Input is any indexable sequence (a str, or a tuple of tokens).
# - A parser is a pure function (inp, pos) -> Success | Failure; nothing is raised.
# - Failures carry `committed`. Alternation and repetition only back out of
#   failures that are not committed.
# - A Success may carry `hint`: the uncommitted failure that stopped a
#   repetition or an alternative. The next failure in sequence merges it, so
#   "x or end of input" is reported instead of only "end of input".

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Failure:
    expected: str
    pos: int
    committed: bool = False

    def merge(self, other: "Failure") -> "Failure":
        """Keep the failure that got further; on a tie, join the expectations."""
        if other.pos > self.pos:
            return other
        if self.pos > other.pos or other.expected in self.expected.split(" or "):
            return self
        return Failure(f"{self.expected} or {other.expected}", self.pos,
                       self.committed or other.committed)


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T
    pos: int
    hint: Optional[Failure] = field(default=None, compare=False, repr=False)


Result = Union[Success[T], Failure]


def _join(a: Optional[Failure], b: Optional[Failure]) -> Optional[Failure]:
    if a is None:
        return b
    if b is None:
        return a
    return a.merge(b)


class Parser(Generic[T]):
    def __init__(self, fn: Callable[[Sequence, int], Result], name: str = "parser"):
        self.fn = fn
        self.name = name

    def __call__(self, inp: Sequence, pos: int) -> Result:
        return self.fn(inp, pos)

    def __repr__(self) -> str:
        return f"<Parser {self.name}>"

    def run(self, inp: Sequence, pos: int = 0) -> Result:
        return self.fn(inp, pos)

    # ---- sequencing ----
    def __add__(self, other: "Parser[U]") -> "Parser[Tuple[T, U]]":
        """keep both: a + b -> (a, b)"""
        def _both(inp, pos):
            r1 = self.fn(inp, pos)
            if isinstance(r1, Failure):
                return r1
            r2 = other.fn(inp, r1.pos)
            if isinstance(r2, Failure):
                if r2.committed:
                    return r2
                return _join(r1.hint, r2)
            return Success((r1.value, r2.value), r2.pos, _join(r1.hint, r2.hint))
        return Parser(_both, f"{self.name} {other.name}")

    def __rshift__(self, other: "Parser[U]") -> "Parser[U]":
        """keep right: a >> b -> b"""
        return (self + other).map(lambda ab: ab[1])

    def __lshift__(self, other: "Parser[Any]") -> "Parser[T]":
        """keep left: a << b -> a"""
        return (self + other).map(lambda ab: ab[0])

    # ---- ordered alternation ----
    def __or__(self, other: "Parser[U]") -> "Parser[Union[T, U]]":
        def _alt(inp, pos):
            r1 = self.fn(inp, pos)
            if isinstance(r1, Success) or r1.committed:
                return r1
            r2 = other.fn(inp, pos)
            if isinstance(r2, Success):
                return Success(r2.value, r2.pos, _join(r1, r2.hint))
            if r2.committed:
                return r2
            return r1.merge(r2)
        return Parser(_alt, f"{self.name} | {other.name}")

    # ---- transforms ----
    def map(self, fn: Callable[[T], U]) -> "Parser[U]":
        def _map(inp, pos):
            r = self.fn(inp, pos)
            if isinstance(r, Failure):
                return r
            return Success(fn(r.value), r.pos, r.hint)
        return Parser(_map, self.name)

    def label(self, expected: str) -> "Parser[T]":
        """Replace the expectation of an uncommitted failure that did not get past our start."""
        def _label(inp, pos):
            r = self.fn(inp, pos)
            if isinstance(r, Failure) and r.pos == pos and not r.committed:
                return Failure(expected, pos)
            return r
        return Parser(_label, expected)

    def commit(self) -> "Parser[T]":
        def _commit(inp, pos):
            r = self.fn(inp, pos)
            if isinstance(r, Failure) and not r.committed:
                return Failure(r.expected, r.pos, True)
            return r
        return Parser(_commit, self.name)

    # ---- repetition ----
    def many(self) -> "Parser[List[T]]":
        def _many(inp, pos):
            out: List[T] = []
            cur = pos
            hint: Optional[Failure] = None
            while True:
                r = self.fn(inp, cur)
                if isinstance(r, Failure):
                    if r.committed:
                        return r
                    return Success(out, cur, _join(hint, r))
                out.append(r.value)
                if r.pos == cur:
                    # no progress; stop instead of looping forever
                    return Success(out, cur, r.hint)
                cur = r.pos
                hint = r.hint
        return Parser(_many, f"{self.name}*")

    def many1(self) -> "Parser[List[T]]":
        return (self + self.many()).map(lambda xr: [xr[0]] + xr[1])

    def optional(self, default: Any = None) -> "Parser[Optional[T]]":
        return self | succeed(default)

    def sep_by1(self, delim: "Parser[Any]") -> "Parser[List[T]]":
        return (self + (delim >> self).many()).map(lambda xr: [xr[0]] + xr[1])


# ---- primitives ----

def succeed(value: Any) -> Parser[Any]:
    return Parser(lambda inp, pos: Success(value, pos), "succeed")


def satisfy(pred: Callable[[Any], bool], expected: str) -> Parser[Any]:
    """Consume one input symbol when `pred` holds."""
    def _satisfy(inp, pos):
        if pos < len(inp) and pred(inp[pos]):
            return Success(inp[pos], pos + 1)
        return Failure(expected, pos)
    return Parser(_satisfy, expected)


def literal(text: Sequence, expected: Optional[str] = None) -> Parser[Any]:
    """Match a run of input symbols equal to `text`."""
    n = len(text)
    want = expected or repr(text)

    def _literal(inp, pos):
        if inp[pos:pos + n] == text:
            return Success(text, pos + n)
        return Failure(want, pos)
    return Parser(_literal, want)


def pattern(rx, expected: str) -> Parser[str]:
    """Match a compiled `regex` pattern at the cursor (string input only)."""
    def _pattern(inp, pos):
        m = rx.match(inp, pos)
        if m is None:
            return Failure(expected, pos)
        return Success(m.group(0), m.end())
    return Parser(_pattern, expected)


def eof() -> Parser[None]:
    def _eof(inp, pos):
        if pos >= len(inp):
            return Success(None, pos)
        return Failure("end of input", pos)
    return Parser(_eof, "end of input")


def lazy(thunk: Callable[[], Parser[T]]) -> Parser[T]:
    """Defer construction for recursive grammars."""
    cache: List[Parser[T]] = []

    def _lazy(inp, pos):
        if not cache:
            cache.append(thunk())
        return cache[0].fn(inp, pos)
    return Parser(_lazy, "lazy")


def choice(*parsers: Parser[Any]) -> Parser[Any]:
    """Ordered alternation over several parsers: choice(a, b, c) == a | b | c"""
    out = parsers[0]
    for p in parsers[1:]:
        out = out | p
    return out
