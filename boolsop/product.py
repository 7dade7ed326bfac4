"""Products: conjunctions of possibly negated variables, as a pair of bit masks.

Every variable owns one bit (its id) of two 64-bit masks:

  variables   bit set   -> the variable does NOT occur in the product
  negation    bit set   -> the variable does not occur, or occurs negated

So for a single bit:

  variables  negation
      0         0       X       (present, positive)
      0         1       X'      (present, negated)
      1         1       -       (absent)

Multiplying two products is then a bitwise AND of the ``variables`` masks
plus a small table for the negations (see Product.__mul__).

The two literals use the remaining bit patterns:

  One  = (full, empty)  every slot absent, the multiplicative identity
  Zero = (empty, full)  every slot present; reachable only because bit 63
                        never belongs to a real variable

A product is *literal* iff it is One or Zero, which is exactly when the two
masks are each other's complement.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .variables import MASK_SIZE, MAX_VARIABLES, Variable, VariableId

if TYPE_CHECKING:
    from .expression import Expression

EMPTY_MASK = 0
FULL_MASK = (1 << MASK_SIZE) - 1
ALL_VARIABLES = FULL_MASK >> (MASK_SIZE - MAX_VARIABLES)
RESERVED_MASK = FULL_MASK & ~ALL_VARIABLES


def to_mask(vid: int) -> int:
    """Encode a variable id as the mask holding only its bit."""
    if not 0 <= vid < MAX_VARIABLES:
        raise ValueError(f"Variable id {vid} out of range [0, {MAX_VARIABLES})")
    return 1 << vid


def iter_bits(mask: int) -> Iterator[int]:
    """Yield the ids of the set bits of ``mask``, lowest first."""
    while mask:
        low = mask & -mask
        yield low.bit_length() - 1
        mask ^= low


@dataclass(frozen=True, eq=False)
class Product:
    """A conjunction (AND) of literals.

    Immutable; equality is structural on both masks. Build products with
    Product.literal, Product.from_variable, or by multiplying.
    """

    variables: int
    negation: int

    def __post_init__(self) -> None:
        if not self.is_sane():
            raise ValueError(
                f"Not a valid product encoding: variables={self.variables:#018x}, "
                f"negation={self.negation:#018x}"
            )

    # -- construction -----------------------------------------------------

    @classmethod
    def literal(cls, value: bool) -> Product:
        variables = FULL_MASK if value else EMPTY_MASK
        return cls(variables, FULL_MASK ^ variables)

    @classmethod
    def from_variable(cls, variable: Variable, negated: bool = False) -> Product:
        variables = FULL_MASK ^ to_mask(variable.id)
        return cls(variables, FULL_MASK if negated else variables)

    # -- predicates -------------------------------------------------------

    def is_sane(self) -> bool:
        v, n = self.variables, self.negation
        if not (0 <= v <= FULL_MASK and 0 <= n <= FULL_MASK):
            return False
        if self.is_literal():
            return v in (EMPTY_MASK, FULL_MASK)
        # Absent slots mirror their presence bit in the negation mask, and
        # the reserved slot is always absent.
        return v != FULL_MASK and (v & RESERVED_MASK) == RESERVED_MASK and (n & v) == v

    def is_literal(self) -> bool:
        return (self.variables ^ self.negation) == FULL_MASK

    def is_zero(self) -> bool:
        return self.variables == EMPTY_MASK

    def is_one(self) -> bool:
        return self.variables == FULL_MASK

    @property
    def present(self) -> int:
        """Mask with a bit set for every variable occurring in the product."""
        return FULL_MASK ^ self.variables

    def number_of_variables(self) -> int:
        return self.present.bit_count()

    def variable_ids(self) -> tuple[VariableId, ...]:
        if self.is_literal():
            return ()
        return tuple(VariableId(i) for i in iter_bits(self.present))

    def is_negated(self, variable: Variable) -> bool | None:
        """Polarity of ``variable`` in this product, None when it is absent."""
        bit = to_mask(variable.id)
        if self.is_literal() or self.variables & bit:
            return None
        return bool(self.negation & bit)

    # -- algebra ----------------------------------------------------------

    def __mul__(self, other: object) -> Product:
        other_product = _coerce(other)
        if other_product is None:
            return NotImplemented
        v1, n1 = self.variables, self.negation
        v2, n2 = other_product.variables, other_product.negation
        # Per slot (variables, negation): 00 = X, 01 = X' or part of Zero,
        # 10 = part of One, 11 = absent. A slot present in both operands with
        # different negation makes the whole product Zero.
        is_false = FULL_MASK if (~v1 & ~v2 & (n1 ^ n2) & FULL_MASK) else EMPTY_MASK
        negation = ((~v1 & n1) | (~v2 & n2) | (v2 & n1) | (v1 & n2)) & FULL_MASK
        variables = v1 & v2 & ~is_false & FULL_MASK
        return Product(variables, negation | is_false)

    def __rmul__(self, other: object) -> Product:
        return self.__mul__(other)

    def __add__(self, other: object) -> Expression:
        from .expression import Expression

        return Expression(self) + other

    def __radd__(self, other: object) -> Expression:
        return self.__add__(other)

    def __invert__(self) -> Expression:
        from .expression import Expression

        if self.is_literal():
            return Expression(not self.is_one())
        return Expression.inverse_of(self)

    # -- structural predicates used by simplification ---------------------

    def is_single_negation_different_from(self, other: Product) -> bool:
        """Same variables, exactly one of them with a different negation.

        ABCD + ABCD' = ABC
        """
        difference = self.negation ^ other.negation
        return (
            self.variables == other.variables
            and difference != 0
            and (difference & (difference - 1)) == 0
        )

    def includes_all_of(self, other: Product) -> bool:
        """Every variable of ``other`` occurs in self with the same negation.

        ABCXYZ + ABC = ABC
        """
        difference = self.negation ^ other.negation
        return (self.variables | other.variables) == other.variables and not (
            difference & ~other.variables & FULL_MASK
        )

    def has_different_negation_for_single_variable(self, other: Product) -> bool:
        """``other`` is a single variable that occurs in self with the opposite negation.

        AB'C + B = AC + B
        """
        is_single = (((other.variables + 1) & FULL_MASK) | other.variables) == FULL_MASK
        if is_single and (self.variables | other.variables) != FULL_MASK:
            difference = self.negation ^ other.negation
            return bool(difference & ~other.variables & FULL_MASK)
        return False

    # -- misc -------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Product):
            return NotImplemented
        return self.variables == other.variables and self.negation == other.negation

    def __hash__(self) -> int:
        return hash((self.variables, self.negation))

    def __str__(self) -> str:
        if self.is_literal():
            return "1" if self.is_one() else "0"
        return "".join(
            f"x{i}'" if self.negation & (1 << i) else f"x{i}" for i in iter_bits(self.present)
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self})"


ONE = Product.literal(True)
ZERO = Product.literal(False)


def _coerce(value: object) -> Product | None:
    if isinstance(value, Product):
        return value
    if isinstance(value, Variable):
        return Product.from_variable(value)
    if isinstance(value, bool):
        return ONE if value else ZERO
    return None


def as_product(value: object) -> Product:
    """Convert a Product, Variable or bool to a Product."""
    product = _coerce(value)
    if product is None:
        raise TypeError(f"Expected Product, Variable or bool, got {type(value).__name__}")
    return product


def term_key(product: Product) -> tuple[int, int, int]:
    """Sort key of the term order.

    Canonical sums list terms by *descending* key: terms with more variables
    first, the masks only break ties.
    """
    return (product.number_of_variables(), product.variables, product.negation)


def less(product1: Product, product2: Product) -> bool:
    return term_key(product1) < term_key(product2)


def common_factor(product1: Product, product2: Product) -> Product:
    """The product both reduce to after dropping the one variable whose negation differs."""
    difference = product1.negation ^ product2.negation
    variables = product1.variables | product2.variables | difference
    if variables == FULL_MASK:
        return ONE
    return Product(variables, product1.negation | variables)


def remove_variable(product: Product, variable: Product) -> Product:
    """``product`` with the variable(s) of ``variable`` made absent."""
    gone = FULL_MASK ^ variable.variables
    variables = product.variables | gone
    if variables == FULL_MASK:
        return ONE
    return Product(variables, product.negation | gone)
