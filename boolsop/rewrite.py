"""Term rewriting for sums of products.

Comparing the logical OR (+) of two products can lead to the following
simplifications, where A and D are single variables and ABC / XYZ stand
for any product:

  ABCD   + ABCD'  = ABC     both terms are replaced with their common factor
  A      + A'     = 1       the whole sum becomes One
  AB'C   + B      = AC + B  the first term loses the single variable
  ABCXYZ + ABC    = ABC     the first term is absorbed
  ABC    + ABC    = ABC     (same as above)

The pass relies on the term order: terms with more variables come first,
so a term that loses a variable can only move towards terms that still
have to be compared.

This is not a complete minimizer. Consensus terms are never removed, for
example AB + A'C + BC keeps BC even though it is implied by the other two.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .product import ONE, Product, common_factor, less, remove_variable

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Ordered term lists
# ---------------------------------------------------------------------------


def insert_ordered(terms: list[Product], product: Product) -> bool:
    """Insert ``product`` in term order, without simplifying.

    Zero is never a disjunct and is dropped. Returns whether anything was
    inserted.
    """
    if product.is_zero():
        return False
    for index, term in enumerate(terms):
        if less(term, product):
            terms.insert(index, product)
            break
    else:
        terms.append(product)
    return True


def merge_terms(terms0: Sequence[Product], terms1: Sequence[Product]) -> list[Product]:
    """Merge two term-ordered lists into one term-ordered list.

    Duplicates across the inputs are all kept; only simplification removes
    them.
    """
    assert terms0 and terms1, "an Expression without terms is undefined"
    merged: list[Product] = []
    i = j = 0
    while i < len(terms0) and j < len(terms1):
        if less(terms0[i], terms1[j]):
            merged.append(terms1[j])
            j += 1
        else:
            merged.append(terms0[i])
            i += 1
    merged.extend(terms0[i:])
    merged.extend(terms1[j:])
    return merged


# ---------------------------------------------------------------------------
# Simplification
# ---------------------------------------------------------------------------


class _Collapsed(Exception):
    """The sum was found to be One."""


class _Arena:
    """Terms of one pass; removed terms stay in place until compaction."""

    def __init__(self, terms: Sequence[Product]) -> None:
        self.terms = list(terms)
        self.live = [True] * len(self.terms)
        self.changed = False

    def __len__(self) -> int:
        return len(self.terms)

    def remove(self, index: int) -> None:
        self.live[index] = False
        self.changed = True

    def survivors(self) -> list[Product]:
        return [t for t, alive in zip(self.terms, self.live, strict=True) if alive]

    def _place(self, term: Product) -> int:
        # Before the first live term that is less than term.
        for index, other in enumerate(self.terms):
            if self.live[index] and less(other, term):
                break
        else:
            index = len(self.terms)
        self.terms.insert(index, term)
        self.live.insert(index, True)
        return index

    def insert(self, term: Product) -> None:
        """Insert a freshly derived term and retest it against the terms before it.

        Only stripping and absorption are retried here; terms that are
        stripped in turn are queued and inserted the same way.
        """
        pending = [term]
        while pending:
            term = pending.pop()
            if term.is_one():
                raise _Collapsed
            logger.debug("inserting %s", term)
            position = self._place(term)
            self.changed = True
            for k in range(position):
                if not self.live[k]:
                    continue
                earlier = self.terms[k]
                if earlier.has_different_negation_for_single_variable(term):
                    logger.debug("stripping %s from %s", term, earlier)
                    self.remove(k)
                    pending.append(remove_variable(earlier, term))
                elif earlier.includes_all_of(term):
                    logger.debug("dropping %s, absorbed by %s", earlier, term)
                    self.remove(k)


def _simplify_pass(terms: Sequence[Product]) -> tuple[list[Product], bool]:
    arena = _Arena(terms)
    i = 0
    while i < len(arena) - 1:
        if not arena.live[i]:
            i += 1
            continue
        for j in range(i + 1, len(arena)):
            if not arena.live[j]:
                continue
            first, second = arena.terms[i], arena.terms[j]
            if first.is_single_negation_different_from(second):
                factor = common_factor(first, second)
                logger.debug("merging %s and %s into %s", first, second, factor)
                arena.remove(i)
                arena.remove(j)
                arena.insert(factor)
                break
            if first.has_different_negation_for_single_variable(second):
                logger.debug("stripping %s from %s", second, first)
                arena.remove(i)
                arena.insert(remove_variable(first, second))
                break
            if first.includes_all_of(second):
                # i has at least as many variables as j.
                logger.debug("dropping %s, absorbed by %s", first, second)
                arena.remove(i)
                break
        i += 1
    return arena.survivors(), arena.changed


def simplify_terms(terms: Sequence[Product]) -> list[Product]:
    """Return the simplified, term-ordered version of ``terms``.

    Passes are repeated until one of them rewrites nothing; every rewrite
    lowers the total number of literals, so this terminates. The result is
    ``[ONE]`` when the sum was found to be true.
    """
    assert terms, "an Expression without terms is undefined"
    if len(terms) == 1:
        return list(terms)
    current = list(terms)
    passes = 0
    try:
        while True:
            passes += 1
            current, changed = _simplify_pass(current)
            if not changed or len(current) == 1:
                break
    except _Collapsed:
        logger.debug("sum collapsed to 1 after %d pass(es)", passes)
        return [ONE]
    logger.debug("simplified %d term(s) to %d in %d pass(es)", len(terms), len(current), passes)
    return current
