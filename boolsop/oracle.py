"""Brute force equivalence of expressions.

Every assignment of the variables occurring in either expression is
evaluated, so the cost is 2**k evaluations for k variables. This is a
verification tool for tests and the ``verify`` command; the algebra itself
never calls it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .product import FULL_MASK, Product, iter_bits
from .truth import TruthProduct

if TYPE_CHECKING:
    from .expression import Expression

logger = logging.getLogger(__name__)


def term_holds(term: Product, true_mask: int) -> bool:
    """Whether ``term`` is true when exactly the variables in ``true_mask`` are true."""
    if term.is_literal():
        return term.is_one()
    present = term.present
    # A positive literal needs its bit set, a negated one needs it clear.
    return (present & (true_mask ^ term.negation)) == present


def evaluate(expression: Expression, true_mask: int) -> bool:
    return any(term_holds(term, true_mask) for term in expression.terms)


def _spread(index: int, variable_bits: list[int]) -> int:
    mask = 0
    for position, bit in enumerate(variable_bits):
        if index & (1 << position):
            mask |= bit
    return mask


def find_counterexample(
    expression1: Expression,
    expression2: Expression,
    *,
    max_variables: int | None = None,
) -> int | None:
    """Return a mask of true variables on which the two expressions differ, or None.

    Raises ValueError when more than ``max_variables`` variables would have
    to be enumerated.
    """
    all_variables = expression1.variables_mask() | expression2.variables_mask()
    variable_bits = [1 << vid for vid in iter_bits(all_variables)]
    if max_variables is not None and len(variable_bits) > max_variables:
        raise ValueError(
            f"Equivalence check over {len(variable_bits)} variables exceeds the limit of {max_variables}"
        )
    logger.debug("enumerating %d assignments", 1 << len(variable_bits))
    for index in range(1 << len(variable_bits)):
        true_mask = _spread(index, variable_bits)
        if evaluate(expression1, true_mask) != evaluate(expression2, true_mask):
            logger.info(
                "expressions differ when true variables are %#x: %s vs %s",
                true_mask,
                expression1,
                expression2,
            )
            return true_mask
    return None


def equivalent(
    expression1: Expression,
    expression2: Expression,
    *,
    max_variables: int | None = None,
) -> bool:
    return find_counterexample(expression1, expression2, max_variables=max_variables) is None


def as_truth_product(true_mask: int, variables_mask: int) -> TruthProduct:
    """Pin every variable of ``variables_mask``: true if its bit is in ``true_mask``."""
    if not variables_mask:
        return TruthProduct()
    variables = FULL_MASK ^ variables_mask
    return TruthProduct(variables, variables | (variables_mask & ~true_mask))
