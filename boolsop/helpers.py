"""Builder helpers for writing expressions by hand.

    registry = VariableRegistry()
    A, B, C = variables(registry, "A B C")
    e = sum_of(A * B, ~A * C)
"""

from __future__ import annotations

from .expression import Expression
from .product import ONE, Product, as_product
from .variables import Variable, VariableRegistry


def variables(registry: VariableRegistry, names: str) -> tuple[Product, ...]:
    """Create one variable per whitespace separated name and return them as Products."""
    return tuple(Product.from_variable(registry.create_variable(n)) for n in names.split())


def var(variable: Variable, negated: bool = False) -> Product:
    return Product.from_variable(variable, negated)


def literal(value: bool) -> Expression:
    return Expression(value)


def product_of(*factors: Product | Variable | bool) -> Product:
    result = ONE
    for factor in factors:
        result = result * as_product(factor)
    return result


def sum_of(*terms: Product | Expression | Variable | bool) -> Expression:
    result = Expression(False)
    for term in terms:
        result = result + term
    return result
