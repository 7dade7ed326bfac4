from __future__ import annotations

import logging

import pytest

from boolsop.product import ONE, ZERO, Product
from boolsop.rewrite import insert_ordered, merge_terms, simplify_terms
from boolsop.variables import VariableRegistry

REGISTRY = VariableRegistry()
a, b, c, d = (REGISTRY.create_variable(n) for n in "ABCD")
A, B, C, D = (Product.from_variable(v) for v in (a, b, c, d))


class TestInsertOrdered:
    def test_keeps_term_order(self) -> None:
        terms: list[Product] = []
        for p in (B, a * b, A, ~a):
            assert insert_ordered(terms, p)
        assert terms == [a * b, ~a, A, B]

    def test_zero_is_dropped(self) -> None:
        terms = [A]
        assert not insert_ordered(terms, ZERO)
        assert terms == [A]

    def test_duplicates_are_kept(self) -> None:
        terms = [A]
        assert insert_ordered(terms, A)
        assert terms == [A, A]


class TestMergeTerms:
    def test_merge_keeps_duplicates(self) -> None:
        assert merge_terms([A, B], [A, C]) == [A, A, B, C]

    def test_merge_longer_terms_first(self) -> None:
        assert merge_terms([A], [b * c, D]) == [b * c, A, D]

    def test_empty_input_is_a_defect(self) -> None:
        with pytest.raises(AssertionError):
            merge_terms([], [A])


class TestSimplifyTerms:
    def test_single_negation_difference_merges(self) -> None:
        assert simplify_terms([a * ~b, a * b]) == [A]

    def test_complementary_variables_collapse_to_one(self) -> None:
        assert simplify_terms([~a, A]) == [ONE]

    def test_absorption(self) -> None:
        assert simplify_terms([a * b * c, a * b]) == [a * b]

    def test_duplicates_removed(self) -> None:
        assert simplify_terms([A, A, B, C]) == [A, B, C]

    def test_single_variable_strips_opposite_literal(self) -> None:
        assert simplify_terms([a * ~b * c, B]) == [a * c, B]

    def test_derived_term_is_retested_against_earlier_terms(self) -> None:
        # A'BC + AB' + AB: the merged A strips A' from A'BC.
        assert simplify_terms([~a * b * c, a * ~b, a * b]) == [b * c, A]

    def test_collapse_through_a_chain(self) -> None:
        # A'B' + A + B = B' + A + B = 1
        assert simplify_terms([~a * ~b, A, B]) == [ONE]

    def test_multi_variable_merges(self) -> None:
        terms = [a * b * c, a * b * ~c, a * ~b * c, a * ~b * ~c]
        terms.sort(key=lambda p: (p.number_of_variables(), p.variables, p.negation), reverse=True)
        assert simplify_terms(terms) == [A]

    def test_consensus_is_not_removed(self) -> None:
        terms = [a * b, ~a * c, b * c]
        terms.sort(key=lambda p: (p.number_of_variables(), p.variables, p.negation), reverse=True)
        assert len(simplify_terms(terms)) == 3

    def test_idempotent(self) -> None:
        once = simplify_terms([~a * b * c, a * ~b, a * b, c * d])
        assert simplify_terms(once) == once

    def test_input_is_not_modified(self) -> None:
        terms = [a * ~b, a * b]
        simplify_terms(terms)
        assert terms == [a * ~b, a * b]

    def test_rewrites_are_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="boolsop.rewrite"):
            simplify_terms([a * ~b, a * b])
        assert any("merging" in r.getMessage() for r in caplog.records)

    def test_stripping_chain_collapses_to_one(self) -> None:
        # D' + DC + C'B + B'A + A' = 1
        terms = [d * c, ~c * b, ~b * a, ~a, ~d]
        terms.sort(key=lambda p: (p.number_of_variables(), p.variables, p.negation), reverse=True)
        assert simplify_terms(terms) == [ONE]
