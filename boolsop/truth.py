"""Truth products: (partial) truth assignments encoded as a Product.

A variable that is present in a TruthProduct is pinned: positive means
true, negated means false. Absent variables are unknown.

increment() treats the pinned variables as the digits of a binary counter
(lowest id first, positive before negated), so starting from "all true"
it visits every assignment of those variables once and then wraps.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass

from .product import FULL_MASK, ONE, Product, iter_bits, to_mask
from .variables import Variable


@dataclass(frozen=True, eq=False)
class TruthProduct(Product):
    """A Product used as a truth assignment."""

    variables: int = FULL_MASK
    negation: int = 0

    @classmethod
    def from_product(cls, product: Product) -> TruthProduct:
        return cls(product.variables, product.negation)

    @classmethod
    def from_assignment(cls, assignment: Mapping[Variable, bool]) -> TruthProduct:
        """Pin every variable of ``assignment`` to its truth value."""
        product = ONE
        for variable, value in assignment.items():
            product = product * Product.from_variable(variable, negated=not value)
        return cls.from_product(product)

    @classmethod
    def over(cls, variables: Iterable[Variable]) -> TruthProduct:
        """The first assignment of the counter over ``variables``: all true."""
        return cls.from_assignment({v: True for v in variables})

    def value_of(self, variable: Variable) -> bool | None:
        negated = self.is_negated(variable)
        return None if negated is None else not negated

    def increment(self) -> TruthProduct:
        """The next assignment; wraps to all true after all false."""
        if self.is_literal():
            return self
        negation = self.negation
        for vid in iter_bits(self.present):
            bit = to_mask(vid)
            if not negation & bit:
                negation |= bit
                break
            negation &= ~bit
        return TruthProduct(self.variables, negation)


def assignments(variables: Iterable[Variable]) -> Iterator[TruthProduct]:
    """Yield each of the 2**k assignments of ``variables`` exactly once."""
    first = TruthProduct.over(variables)
    current = first
    while True:
        yield current
        current = current.increment()
        if current == first:
            return
