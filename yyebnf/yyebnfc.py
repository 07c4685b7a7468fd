# yyebnf/yyebnfc.py
"""yyebnfc – yyebnf CLI

사용 예)
    $ python -m yyebnf.yyebnfc grammar.y extra.ebnf
    $ python -m yyebnf.yyebnfc grammar.y extra.ebnf -o out/grammar.ebnf -D
    $ python -m yyebnf.yyebnfc grammar.y extra.ebnf --max-alternatives 6 --drop-inlined

기능
----
YACC 문법(%% ... %% 사이 규칙부)과 보조 EBNF 정의를 읽어
의존 순서로 정렬·정규화·인라인된 EBNF를 한 줄에 정의 하나씩 출력합니다.

디버그 모드(-D/--debug)를 켜면 단계별 요약(프로덕션 수, SCC, 인라인 결과)을 stderr로 출력합니다.
"""

from __future__ import annotations
import argparse
import pathlib
import sys
from contextlib import contextmanager
from typing import Iterator, Optional, TextIO

from .analysis import is_recursive_group, reference_graph
from .convert import Conversion, InlinePolicy, MAX_TRIVIAL_ALTERNATIVES, MAX_TRIVIAL_SEQUENCE
from .ebnf.ast import references
from .pipeline import Err, run

# ------------------------------
# 헬퍼
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)


def _report(err: Err) -> None:
    """실패한 리소스 이름과 메시지를 종류별 태그로 출력"""
    tag = {
        "lexical": "[LEX ERROR]",
        "syntax": "[SYNTAX ERROR]",
        "invariant": "[GRAMMAR ERROR]",
        "resource": "[RESOURCE ERROR]",
    }.get(err.kind, "[ERROR]")
    _eprint(tag)
    _eprint(str(err))


@contextmanager
def _open_output(path: Optional[str]) -> Iterator[TextIO]:
    """-o 가 없으면 stdout. 파일은 실행당 한 번 열고 어떤 경로로 나가든 닫는다."""
    if not path:
        yield sys.stdout
        return
    out_path = pathlib.Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8") as f:
        yield f

# ------------------------------
# 디버그 출력 헬퍼
# ------------------------------

def _print_summary(conv: Conversion) -> None:
    graph = reference_graph({d.name: list(references(d.expr)) for d in conv.all})
    recursive = [c for c in conv.components if is_recursive_group(graph, c)]
    _eprint(f"[DEBUG] definitions ready | yacc={len(conv.definitions)} extra={len(conv.extra)}")
    _eprint(f"[DEBUG] components={len(conv.components)} recursive={len(recursive)}")
    for comp in recursive:
        _eprint("  {" + ", ".join(comp) + "}")
    _eprint(f"[DEBUG] trivial={len(conv.trivial)} inlined={len(conv.inlined)}")
    if conv.inlined:
        _eprint("  " + ", ".join(sorted(conv.inlined)))

# ------------------------------
# 엔트리포인트
# ------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="yyebnfc", description="YACC grammar to EBNF converter")
    ap.add_argument("grammar", help="YACC 문법 파일(%%%% 사이 규칙부만 읽음)")
    ap.add_argument("extra", help="보조 EBNF 정의 파일(name ::= body ;)")
    ap.add_argument("-o", "--output", help="출력 파일 경로(미지정시 stdout)")
    ap.add_argument("--max-alternatives", type=int, default=MAX_TRIVIAL_ALTERNATIVES,
                    help="인라인 가능한 Alt의 최대 원자 대안 수")
    ap.add_argument("--max-sequence", type=int, default=MAX_TRIVIAL_SEQUENCE,
                    help="인라인 가능한 원자 Seq의 최대 길이")
    ap.add_argument("--drop-inlined", action="store_true",
                    help="모든 사용처에 인라인된 YACC 정의는 출력하지 않음")
    ap.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    args = ap.parse_args(argv)

    policy = InlinePolicy(
        max_alternatives=args.max_alternatives,
        max_sequence=args.max_sequence,
        drop_inlined=args.drop_inlined,
    )
    result = run(args.grammar, args.extra, policy)
    if isinstance(result, Err):
        _report(result)
        return 2

    conv = result.value
    if args.debug:
        _print_summary(conv)

    with _open_output(args.output) as out:
        for line in conv.lines():
            out.write(line + "\n")
    if args.output:
        print(f"[EMIT] definitions={len(conv.all)} -> {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
