"""Tests for YACC to EBNF conversion and trivial-definition inlining."""

import pytest

from yyebnf.convert import InlinePolicy, convert, inline, is_trivial, production_to_ebnf
from yyebnf.ebnf import Alt, NonTerm, Qnt, Quant, Seq, Term, parse_ebnf, render, render_definition
from yyebnf.errors import DuplicateNameError
from yyebnf.grammar.parser import parse_yacc

a, b, c, d, e = (NonTerm(n) for n in "abcde")


def _bodies(conv):
    return {df.name: render(df.expr) for df in conv.all}


class TestTriviality:
    def test_small_atomic_alternation(self) -> None:
        assert is_trivial(Alt((a, b, c, d)))
        assert not is_trivial(Alt((a, b, c, d, e)))

    def test_alternation_with_non_atomic_child(self) -> None:
        assert not is_trivial(Alt((a, Seq((b, c)))))

    def test_atomic_sequence_limit(self) -> None:
        assert is_trivial(Seq((a, b, c)))
        assert not is_trivial(Seq((a, b, c, d)))

    def test_sequence_with_trivial_elements(self) -> None:
        assert is_trivial(Seq((a, Qnt(b, Quant.STAR))))
        assert is_trivial(Seq((a, Alt((b, c)), d, e)))
        assert not is_trivial(Seq((a, Qnt(Seq((b, c)), Quant.OPT))))

    def test_quantified_atom(self) -> None:
        assert is_trivial(Qnt(a, Quant.PLUS))
        assert not is_trivial(Qnt(Alt((a, b)), Quant.PLUS))

    def test_atom_alone_is_not_listed(self) -> None:
        assert not is_trivial(a)

    def test_policy_overrides_thresholds(self) -> None:
        policy = InlinePolicy(max_alternatives=2, max_sequence=5)
        assert not is_trivial(Alt((a, b, c)), policy)
        assert is_trivial(Seq((a, b, c, d, e)), policy)


class TestInline:
    def test_substitutes_and_renormalizes(self) -> None:
        body = Seq((a, NonTerm("sep"), a))
        out = inline(body, {"sep": Seq((b, c))})
        assert out == Seq((a, b, c, a))

    def test_reaches_fixpoint(self) -> None:
        out = inline(Seq((NonTerm("x"), a)), {"x": Seq((NonTerm("y"), b)), "y": Alt((c, d))})
        assert out == Seq((Alt((c, d)), b, a))

    def test_keeps_reference_under_quantifier(self) -> None:
        body = Qnt(NonTerm("opt"), Quant.STAR)
        assert inline(body, {"opt": Qnt(a, Quant.OPT)}) == body

    def test_unknown_names_untouched(self) -> None:
        assert inline(Seq((a, b)), {}) == Seq((a, b))


class TestConvert:
    def test_production_to_ebnf(self) -> None:
        g = parse_yacc("start : 'a' start | ;")
        assert production_to_ebnf(g.production("start")) == Qnt(
            Seq((Term("'a'"), NonTerm("start"))), Quant.OPT)

    def test_self_recursive_end_to_end(self) -> None:
        conv = convert(parse_yacc("%%\nstart : 'a' start | ;\n%%\n"))
        assert [render_definition(df) for df in conv.definitions] == ["start ::= ('a' start)?"]
        assert "start" not in conv.trivial
        assert conv.lines() == ["start ::= ('a' start)?", ""]

    def test_supplementary_separator_is_inlined(self) -> None:
        extra = parse_ebnf("sep ::= ',' | ';' ;")
        conv = convert(parse_yacc("list : item sep item ;"), extra)
        bodies = _bodies(conv)
        assert bodies["list"] == "item (','|';') item"
        assert "sep" in conv.inlined
        assert [df.name for df in conv.extra] == ["sep"]

    def test_dependency_order_of_output(self) -> None:
        conv = convert(parse_yacc("A : B 'a' B B B ; B : C 'b' C C C ; C : 'c' | 'd' 'e' ;"))
        assert [df.name for df in conv.definitions] == ["C", "B", "A"]

    def test_trivial_yacc_definition_is_inlined(self) -> None:
        conv = convert(parse_yacc("decl : type ID ';' ; type : 'int' | 'char' ;"))
        assert _bodies(conv)["decl"] == "('int'|'char') ID ';'"
        assert conv.inlined == frozenset({"type"})

    def test_transitive_inlining(self) -> None:
        src = "s : x s | 'end' ; x : y 'k' ; y : 'p' | 'q' ;"
        conv = convert(parse_yacc(src))
        bodies = _bodies(conv)
        assert bodies["x"] == "('p'|'q') 'k'"
        assert bodies["s"] == "('p'|'q') 'k' s|'end'"

    def test_mutual_recursion_is_never_inlined(self) -> None:
        conv = convert(parse_yacc("top : a ; a : 'x' b | 'y' ; b : a ;"))
        assert "a" not in conv.trivial
        assert "b" not in conv.trivial
        assert _bodies(conv)["top"] == "a"

    def test_large_alternation_is_kept(self) -> None:
        conv = convert(parse_yacc("op : '+' | '-' | '*' | '/' | '%' ; e : NUM op NUM ;"))
        assert _bodies(conv)["e"] == "NUM op NUM"

    def test_drop_inlined(self) -> None:
        g = parse_yacc("decl : type ID ; type : 'int' | 'char' ;")
        conv = convert(g, policy=InlinePolicy(drop_inlined=True))
        assert [df.name for df in conv.definitions] == ["decl"]

    def test_start_symbol_not_dropped(self) -> None:
        conv = convert(parse_yacc("only : 'a' 'b' ;"), policy=InlinePolicy(drop_inlined=True))
        assert "only" in conv.trivial
        assert [df.name for df in conv.definitions] == ["only"]

    def test_name_defined_twice_across_resources(self) -> None:
        with pytest.raises(DuplicateNameError):
            convert(parse_yacc("sep : ',' ;"), parse_ebnf("sep ::= ';' ;"))

    def test_supplementary_output_follows_file_order(self) -> None:
        extra = parse_ebnf("z ::= [a-z]+ ; digit ::= [0-9] ;")
        conv = convert(parse_yacc("s : z digit ;"), extra)
        assert [df.name for df in conv.all] == ["s", "z", "digit"]
