from __future__ import annotations

import pytest

from boolsop.expression import Expression, zip_merge
from boolsop.helpers import sum_of
from boolsop.product import ONE, ZERO, Product
from boolsop.truth import TruthProduct
from boolsop.variables import VariableRegistry

REGISTRY = VariableRegistry()
a, b, c, d = (REGISTRY.create_variable(n) for n in "ABCD")
A, B, C, D = (Product.from_variable(v) for v in (a, b, c, d))


# ─────────────────────────────────────────────────────────────────────────────
# Construction
# ─────────────────────────────────────────────────────────────────────────────


class TestConstruction:
    def test_default_is_zero(self) -> None:
        e = Expression()
        assert e.is_zero() and e.is_literal()
        assert e.terms == (ZERO,)

    def test_from_bool_variable_and_product(self) -> None:
        assert Expression(True).is_one()
        assert Expression(a) == Expression(A)
        assert Expression(a * ~b).as_product() == a * ~b
        assert Expression.one().is_one()
        assert Expression.zero().is_zero()

    def test_from_terms_requires_terms(self) -> None:
        with pytest.raises(ValueError, match="at least one term"):
            Expression.from_terms([])

    def test_as_product_of_sum(self) -> None:
        with pytest.raises(ValueError):
            (A + B).as_product()

    def test_unsupported_constructor_argument(self) -> None:
        with pytest.raises(TypeError):
            Expression("A")  # type: ignore[arg-type]

    def test_not_hashable(self) -> None:
        with pytest.raises(TypeError):
            hash(Expression(A))

    def test_str(self) -> None:
        assert str(A + ~b) == "x0 + x1'"
        assert str(Expression(True)) == "1"


# ─────────────────────────────────────────────────────────────────────────────
# Worked scenarios
# ─────────────────────────────────────────────────────────────────────────────


class TestScenarios:
    def test_merge_of_single_negation_difference(self) -> None:
        e = a * b + a * ~b
        assert e == Expression(A)

    def test_absorption(self) -> None:
        e = a * b * c + a * b
        assert e == Expression(a * b)

    def test_variable_plus_negation_is_one(self) -> None:
        assert (A + ~a).is_one()

    def test_substitution(self) -> None:
        e = ~a * b + a * c
        result = e(TruthProduct.from_assignment({b: False}))
        assert result == Expression(a * c)
        assert result.equivalent(Expression(a * c))

    def test_de_morgan(self) -> None:
        e = ~Expression(~a * b)
        assert e == sum_of(A, ~b)
        assert e.equivalent(A + ~b)

    def test_zip_merge(self) -> None:
        merged, needs_simplify = zip_merge(A + B, A + C)
        assert needs_simplify
        assert merged.terms == (A, A, B, C)
        merged.simplify()
        assert merged == sum_of(A, B, C)
        merged.sanity_check()

    def test_walkthrough(self) -> None:
        f = ~A * B
        g = f.copy()
        e = Expression(a * d)
        e += g * ~D
        e += ~B * C
        assert len(e) == 3
        f = e.times(f)
        assert f == Expression(~a * b * ~d)
        assert f.inverse() == sum_of(A, ~b, D)


# ─────────────────────────────────────────────────────────────────────────────
# Addition
# ─────────────────────────────────────────────────────────────────────────────


class TestAddition:
    def test_literals(self) -> None:
        x = A + B
        assert (x + Expression(False)) == x
        assert (Expression(False) + x) == x
        assert (x + Expression(True)).is_one()
        assert (Expression(True) + x).is_one()
        assert (x + ZERO) == x
        assert (x + ONE).is_one()

    def test_operands_are_not_modified(self) -> None:
        x = A + B
        y = A + ~b
        _ = x + y
        assert x == sum_of(A, B)
        assert y == sum_of(A, ~b)

    def test_in_place_operator_rebinds(self) -> None:
        x = Expression(A)
        alias = x
        x += B
        assert x == sum_of(A, B)
        assert alias == Expression(A)

    def test_bool_and_variable_operands(self) -> None:
        assert Expression(A) + b == A + B
        assert (Expression(A) + True).is_one()
        assert (True + Expression(A)).is_one()
        assert (B + Expression(A)) == A + B

    def test_unsupported_operand(self) -> None:
        with pytest.raises(TypeError):
            Expression(A) + "B"  # type: ignore[operator]

    def test_result_is_canonical(self) -> None:
        e = a * ~b * c + B + ~a * ~b + a * b * d
        e.sanity_check()
        assert e.equivalent(a * c + B + ~a)


# ─────────────────────────────────────────────────────────────────────────────
# Multiplication and negation
# ─────────────────────────────────────────────────────────────────────────────


class TestMultiplication:
    def test_distributes_over_terms(self) -> None:
        assert (A + B) * C == Expression.from_terms([a * c, b * c])

    def test_literals(self) -> None:
        x = A + B
        assert (x * ONE) == x
        assert (x * ZERO).is_zero()
        assert (Expression(True) * C) == Expression(C)
        assert (Expression(False) * C).is_zero()
        assert (x * Expression(True)) == x
        assert (Expression(True) * x) == x
        assert (x * Expression(False)).is_zero()

    def test_expression_times_expression(self) -> None:
        assert (A + B).times(A + ~b) == Expression(A)
        assert (A + B) * (A + ~b) == Expression(A)

    def test_contradictions_vanish(self) -> None:
        assert ((A + B) * ~a * ~b).is_zero()

    def test_product_on_the_left(self) -> None:
        assert C * (A + B) == (A + B) * C


class TestNegation:
    def test_literals(self) -> None:
        assert (~Expression(True)).is_zero()
        assert (~Expression(False)).is_one()

    def test_de_morgan_on_sum(self) -> None:
        assert ~(A + B) == ~A * ~B

    def test_double_negation(self) -> None:
        x = a * ~b + c * d
        assert (~~x).equivalent(x)

    def test_complement_laws(self) -> None:
        x = A + B
        assert (x * ~x).is_zero()
        assert (x + ~x).is_one()

    def test_inverse_of_product(self) -> None:
        assert Expression.inverse_of(a * ~b * d).terms == (~a, B, ~d)


# ─────────────────────────────────────────────────────────────────────────────
# In-place operations
# ─────────────────────────────────────────────────────────────────────────────


class TestInPlace:
    def test_add_without_simplify(self) -> None:
        e = Expression(a * b)
        assert e.add(a * ~b)
        assert e.terms == (a * ~b, a * b)
        e.simplify()
        assert e == Expression(A)

    def test_add_literals(self) -> None:
        e = Expression(False)
        assert e.add(A)
        assert e == Expression(A)
        assert not e.add(ZERO)
        assert e.add(ONE)
        assert e.is_one()
        assert not e.add(B)
        assert e.is_one()

    def test_copy_is_independent(self) -> None:
        e = A + B
        f = e.copy()
        f.add(C)
        assert len(e) == 2
        assert len(f) == 3

    def test_simplify_is_idempotent(self) -> None:
        e = Expression.from_terms([~a * b * c, a * ~b, a * b])
        e.simplify()
        once = e.copy()
        e.simplify()
        assert e == once
        assert e.terms == (b * c, A)

    def test_sanity_check_rejects_duplicates(self) -> None:
        with pytest.raises(AssertionError):
            Expression.from_terms([A, A]).sanity_check()

    def test_sanity_check_rejects_bad_order(self) -> None:
        with pytest.raises(AssertionError):
            Expression.from_terms([B, A]).sanity_check()

    def test_sanity_check_rejects_literal_in_sum(self) -> None:
        with pytest.raises(AssertionError):
            Expression.from_terms([A, ONE]).sanity_check()


# ─────────────────────────────────────────────────────────────────────────────
# Substitution
# ─────────────────────────────────────────────────────────────────────────────


class TestSubstitution:
    def test_all_pinned_true_gives_one(self) -> None:
        e = a * b + C
        assert e(TruthProduct.from_assignment({a: True, b: True})).is_one()

    def test_conflict_gives_zero(self) -> None:
        e = Expression(a * b)
        assert e(TruthProduct.from_assignment({a: False})).is_zero()

    def test_literal_unchanged(self) -> None:
        t = TruthProduct.from_assignment({a: True})
        assert Expression(True)(t).is_one()
        assert Expression(False)(t).is_zero()

    def test_empty_assignment_is_identity(self) -> None:
        e = ~a * b + c * d
        assert e(TruthProduct()) == e

    def test_substituted_then_multiplied(self) -> None:
        e = ~a * b + a * c + b * ~d
        t = TruthProduct.from_assignment({a: True, d: False})
        assert (e(t) * t).equivalent(e * t)


class TestEquivalence:
    def test_consensus_term_is_kept_but_equivalent(self) -> None:
        with_consensus = a * b + ~a * c + b * c
        without = a * b + ~a * c
        assert len(with_consensus) == 3
        assert with_consensus != without
        assert with_consensus.equivalent(without)

    def test_distributivity(self) -> None:
        x, y, z = A + ~b, B * C + D, ~a + ~d
        assert (x * (y + z)).equivalent(x * y + x * z)
