"""Expressions: canonical sums (OR) of products.

An Expression holds a non-empty list of terms that is kept

  - free of literals, unless the literal is the only term,
  - free of duplicates,
  - sorted in term order (more variables first).

All operators return new Expressions. ``add`` and ``simplify`` are the only
methods that change an Expression in place; plain assignment shares the
object, use ``copy()`` to get an independent one.

Example:

    e = Expression(A * D)           # AD
    e = e + g * ~D                  # AD + A'BD'
    e = e + ~B * C                  # AD + A'BD' + B'C
    f = e.times(f)                  # explicit Expression * Expression
    e = ~(~A * B)                   # A + B'
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from . import oracle
from .product import FULL_MASK, Product, as_product, iter_bits, less
from .rewrite import insert_ordered, merge_terms, simplify_terms
from .variables import Variable

if TYPE_CHECKING:
    from .truth import TruthProduct

logger = logging.getLogger(__name__)


class Expression:
    """A disjunction of Products in canonical form."""

    __slots__ = ("_terms",)

    _terms: list[Product]

    def __init__(self, value: bool | Product | Variable = False) -> None:
        self._terms = [as_product(value)]

    @classmethod
    def from_terms(cls, terms: list[Product]) -> Expression:
        """Wrap an already canonical term list (the list is taken over, not copied)."""
        if not terms:
            raise ValueError("An Expression needs at least one term")
        expression = cls.__new__(cls)
        expression._terms = terms
        return expression

    @classmethod
    def zero(cls) -> Expression:
        return cls(False)

    @classmethod
    def one(cls) -> Expression:
        return cls(True)

    def copy(self) -> Expression:
        return Expression.from_terms(list(self._terms))

    # -- inspection -------------------------------------------------------

    @property
    def terms(self) -> tuple[Product, ...]:
        return tuple(self._terms)

    def __iter__(self) -> Iterator[Product]:
        return iter(tuple(self._terms))

    def __len__(self) -> int:
        return len(self._terms)

    # A literal can only be in a sum when it is the only term.
    def is_literal(self) -> bool:
        return self._terms[0].is_literal()

    def is_zero(self) -> bool:
        return self._terms[0].is_zero()

    def is_one(self) -> bool:
        return self._terms[0].is_one()

    def is_product(self) -> bool:
        return len(self._terms) == 1

    def as_product(self) -> Product:
        if not self.is_product():
            raise ValueError(f"{self} is a sum of {len(self._terms)} products")
        return self._terms[0]

    def variables_mask(self) -> int:
        """Bits of every variable occurring in any term."""
        mask = 0
        for term in self._terms:
            if not term.is_literal():
                mask |= term.present
        return mask

    # -- in-place -----------------------------------------------------------

    def add(self, product: Product) -> bool:
        """Insert ``product`` in term order without simplifying.

        Zero is dropped, One absorbs everything. Returns whether the sum
        changed.
        """
        if product.is_zero() or self.is_one():
            return False
        if self.is_zero() or product.is_one():
            self._terms = [product]
            return True
        return insert_ordered(self._terms, product)

    def simplify(self) -> None:
        """Rewrite the sum into its simplified canonical form.

        A new term list is built, so other Expressions never observe the
        rewrite.
        """
        self._terms = simplify_terms(self._terms)

    def sanity_check(self) -> None:
        terms = self._terms
        assert terms, "empty Expression"
        assert all(t.is_sane() for t in terms)
        assert len(terms) == 1 or not any(t.is_literal() for t in terms), (
            f"literal in a sum of {len(terms)} terms"
        )
        for current, following in zip(terms, terms[1:]):
            assert current != following, f"duplicate term {current}"
            assert less(following, current), f"{following} sorted after {current}"

    # -- algebra ------------------------------------------------------------

    def __add__(self, other: object) -> Expression:
        if isinstance(other, Expression):
            output, needs_simplify = zip_merge(self, other)
            if needs_simplify:
                output.simplify()
            return output
        try:
            product = as_product(other)
        except TypeError:
            return NotImplemented
        if self.is_zero():
            return Expression(product)
        if self.is_one() or product.is_one():
            return Expression(True)
        result = self.copy()
        if result.add(product):
            result.simplify()
        return result

    def __radd__(self, other: object) -> Expression:
        return self.__add__(other)

    def __mul__(self, other: object) -> Expression:
        if isinstance(other, Expression):
            return self.times(other)
        try:
            product = as_product(other)
        except TypeError:
            return NotImplemented
        if self.is_literal() or product.is_literal():
            if self.is_zero() or product.is_zero():
                return Expression(False)
            return Expression(product) if self.is_one() else self.copy()
        return _distribute(term * product for term in self._terms)

    def __rmul__(self, other: object) -> Expression:
        return self.__mul__(other)

    def times(self, other: Expression) -> Expression:
        """Expression * Expression, multiplying every pair of terms."""
        if self.is_literal() or other.is_literal():
            if self.is_zero() or other.is_zero():
                return Expression(False)
            return other.copy() if self.is_one() else self.copy()
        return _distribute(t1 * t2 for t1 in self._terms for t2 in other._terms)

    @staticmethod
    def inverse_of(product: Product) -> Expression:
        """De Morgan: the negation of a product is the sum of its negated variables."""
        if product.is_literal():
            raise ValueError(f"Cannot expand the negation of literal {product}")
        terms: list[Product] = []
        # Ascending ids give descending variable masks, which is term order.
        for vid in iter_bits(product.present):
            bit = 1 << vid
            terms.append(Product(FULL_MASK ^ bit, FULL_MASK ^ (product.negation & bit)))
        return Expression.from_terms(terms)

    def inverse(self) -> Expression:
        if self.is_literal():
            return Expression(not self.is_one())
        result = Expression(True)
        for term in self._terms:
            result = result.times(Expression.inverse_of(term))
        return result

    def __invert__(self) -> Expression:
        return self.inverse()

    def __call__(self, truth_product: TruthProduct) -> Expression:
        """Substitute the variables pinned by ``truth_product``."""
        if self.is_literal():
            return self.copy()
        pinned = truth_product.present
        result = Expression(False)
        for term in self._terms:
            # A variable pinned to the other polarity makes the term Zero.
            if term.present & pinned & (truth_product.negation ^ term.negation):
                continue
            variables = term.variables | pinned
            if variables == FULL_MASK:
                return Expression(True)
            result = result + Product(variables, term.negation | pinned)
        return result

    def equivalent(self, other: Expression) -> bool:
        """Brute force truth table comparison; exponential in the variable count."""
        return oracle.equivalent(self, other)

    # -- misc ---------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Expression):
            return NotImplemented
        return self._terms == other._terms

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return " + ".join(str(t) for t in self._terms)

    def __repr__(self) -> str:
        return f"Expression({self})"


def _distribute(products: Iterable[Product]) -> Expression:
    terms: list[Product] = []
    non_zero = False
    for product in products:
        non_zero |= insert_ordered(terms, product)
    if not non_zero:
        return Expression(False)
    return Expression.from_terms(simplify_terms(terms))


def zip_merge(expression0: Expression, expression1: Expression) -> tuple[Expression, bool]:
    """Sum two expressions without simplifying.

    Returns the merged expression and whether it still needs simplify().
    When either side is a literal the OR truth table decides and the result
    is already final.
    """
    if expression0.is_literal() or expression1.is_literal():
        # Copy the right side if it is One or the left side is Zero.
        chosen = expression1 if expression1.is_one() or expression0.is_zero() else expression0
        return chosen.copy(), False
    return Expression.from_terms(merge_terms(expression0._terms, expression1._terms)), True
