"""Tests for the parser-combinator runtime."""

import regex as re

from yyebnf.pcomb import Failure, Success, choice, eof, lazy, literal, pattern, satisfy, succeed

digit = satisfy(str.isdigit, "digit")
comma = literal(",")


class TestPrimitives:
    def test_satisfy_consumes_one_symbol(self) -> None:
        assert digit.run("7x") == Success("7", 1)

    def test_satisfy_failure_is_a_value(self) -> None:
        r = digit.run("x")
        assert isinstance(r, Failure)
        assert r.expected == "digit"
        assert r.pos == 0
        assert not r.committed

    def test_literal_on_strings(self) -> None:
        assert literal("::=").run("::= x") == Success("::=", 3)
        assert isinstance(literal("::=").run(":x"), Failure)

    def test_satisfy_on_token_sequences(self) -> None:
        toks = (("ID", "a"), ("ID", "b"))
        p = satisfy(lambda t: t[0] == "ID", "identifier").many()
        r = p.run(toks)
        assert r == Success([("ID", "a"), ("ID", "b")], 2)

    def test_pattern_matches_at_cursor(self) -> None:
        word = pattern(re.compile(r"[a-z]+"), "word")
        assert word.run("  abc", 2) == Success("abc", 5)

    def test_eof(self) -> None:
        assert eof().run("") == Success(None, 0)
        assert eof().run("x").expected == "end of input"


class TestSequencing:
    def test_keep_both(self) -> None:
        assert (digit + digit).run("12") == Success(("1", "2"), 2)

    def test_keep_right_and_left(self) -> None:
        assert (comma >> digit).run(",5") == Success("5", 2)
        assert (digit << comma).run("5,") == Success("5", 2)

    def test_failure_in_second_part_reports_its_position(self) -> None:
        r = (digit + digit).run("1x")
        assert isinstance(r, Failure)
        assert r.pos == 1


class TestAlternation:
    def test_tries_right_after_uncommitted_failure(self) -> None:
        p = (literal("a") + literal("b")) | (literal("a") + literal("c"))
        assert p.run("ac") == Success(("a", "c"), 2)

    def test_does_not_try_right_after_committed_failure(self) -> None:
        p = (literal("a") >> literal("b").commit()) | literal("ac")
        r = p.run("ac")
        assert isinstance(r, Failure)
        assert r.committed
        assert r.pos == 1

    def test_furthest_failure_wins(self) -> None:
        p = (literal("a") >> literal("b")) | literal("x")
        r = p.run("az")
        assert r.pos == 1
        assert r.expected == "'b'"

    def test_tied_failures_merge_expectations(self) -> None:
        r = (literal("a") | literal("b")).run("z")
        assert r.expected == "'a' or 'b'"

    def test_choice_is_ordered_alternation(self) -> None:
        p = choice(literal("a"), literal("b"), literal("c"))
        assert p.run("c") == Success("c", 1)
        assert p.run("z").expected == "'a' or 'b' or 'c'"


class TestRepetition:
    def test_many_allows_zero(self) -> None:
        assert digit.many().run("x") == Success([], 0)

    def test_many1_requires_one(self) -> None:
        assert isinstance(digit.many1().run("x"), Failure)
        assert digit.many1().run("12x") == Success(["1", "2"], 2)

    def test_many_propagates_committed_failure(self) -> None:
        item = literal("(") >> (digit << literal(")")).commit()
        r = item.many().run("(1)(2")
        assert isinstance(r, Failure)
        assert r.pos == 5

    def test_many_stops_without_progress(self) -> None:
        r = succeed(1).many().run("abc")
        assert r == Success([1], 0)

    def test_optional(self) -> None:
        assert digit.optional().run("x") == Success(None, 0)
        assert digit.optional("none").run("x") == Success("none", 0)

    def test_sep_by1(self) -> None:
        assert digit.sep_by1(comma).run("1,2,3") == Success(["1", "2", "3"], 5)
        assert digit.sep_by1(comma).run("1,x") == Success(["1"], 1)


class TestLabelsAndRecursion:
    def test_label_replaces_expectation_at_start(self) -> None:
        r = digit.label("number").run("x")
        assert r.expected == "number"

    def test_label_keeps_deeper_failure(self) -> None:
        r = (digit + digit).label("pair").run("1x")
        assert r.expected == "digit"
        assert r.pos == 1

    def test_lazy_allows_recursive_grammar(self) -> None:
        # nested := '(' nested ')' | 'x'
        nested = lazy(lambda: nested_p)
        nested_p = (literal("(") >> nested << literal(")")) | literal("x")
        assert nested.run("((x))") == Success("x", 5)


class TestFailureHints:
    def test_many_reports_what_stopped_it(self) -> None:
        r = (digit.many() << eof()).run("12x")
        assert r.pos == 2
        assert r.expected == "digit or end of input"

    def test_hint_does_not_change_equality(self) -> None:
        r = digit.many().run("1x")
        assert r == Success(["1"], 1)
        assert r.hint.expected == "digit"

    def test_optional_reports_skipped_alternative(self) -> None:
        r = (digit.optional() + literal(";")).run("x")
        assert r.expected == "digit or ';'"

    def test_further_failure_wins_over_stale_hint(self) -> None:
        r = (digit.many() + literal(",") + literal(";")).run("1,x")
        assert r.pos == 2
        assert r.expected == "';'"

    def test_committed_failure_is_not_merged(self) -> None:
        r = (digit.many() + literal(";").commit()).run("1x")
        assert r.committed
        assert r.expected == "';'"

    def test_label_leaves_committed_failure(self) -> None:
        p = (literal("(") >> literal(")").commit()).label("group")
        assert p.run("(x").expected == "')'"
        r = literal("a").commit().label("letter").run("z")
        assert r.expected == "'a'"
        assert r.committed
