"""Worked examples of the algebra.

Each function builds one expression from fresh variables of the given
registry and returns it together with the expression it should be
equivalent to. Run this module to print them all.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from dataclasses import dataclass

from .expression import Expression, zip_merge
from .helpers import sum_of, var, variables
from .render import NegationStyle, as_html, expression_to_string, render
from .truth import TruthProduct
from .variables import VariableRegistry


@dataclass(frozen=True)
class Example:
    name: str
    description: str
    result: Expression
    expected: Expression

    @property
    def holds(self) -> bool:
        return self.result.equivalent(self.expected)


# ===================================================================
# Single rewrite rules
# ===================================================================


def merge_example(registry: VariableRegistry) -> Example:
    """AB + AB' = A"""
    A, B = variables(registry, "A B")
    return Example("merge", "terms differing in one negation merge", A * B + A * ~B, Expression(A))


def absorb_example(registry: VariableRegistry) -> Example:
    """ABC + AB = AB"""
    A, B, C = variables(registry, "A B C")
    return Example("absorb", "a longer term is absorbed by a shorter one", A * B * C + A * B, Expression(A * B))


def complement_example(registry: VariableRegistry) -> Example:
    """A + A' = 1"""
    (A,) = variables(registry, "A")
    return Example("complement", "a variable or its negation is always true", A + ~A, Expression(True))


def substitute_example(registry: VariableRegistry) -> Example:
    """(A'B + AC)(B = 0) = AC"""
    a, b, c = (registry.create_variable(name) for name in ("A", "B", "C"))
    A, B, C = var(a), var(b), var(c)
    e = ~a * B + A * C
    assignment = TruthProduct.from_assignment({b: False})
    return Example(
        "substitute",
        f"substitute {registry.name(b)} = false",
        e(assignment),
        Expression(A * C),
    )


def de_morgan_example(registry: VariableRegistry) -> Example:
    """(A'B)' = A + B'"""
    A, B = variables(registry, "A B")
    return Example("de_morgan", "negation of a product", ~(~A * B), A + ~B)


def zip_example(registry: VariableRegistry) -> Example:
    """(A + B) + (A + C) = A + B + C"""
    A, B, C = variables(registry, "A B C")
    merged, _ = zip_merge(A + B, A + C)
    merged.simplify()
    return Example("zip", "merging two sums keeps term order", merged, sum_of(A, B, C))


# ===================================================================
# Longer derivations
# ===================================================================


def walkthrough_example(registry: VariableRegistry) -> Example:
    """Build up a sum step by step, multiply it by a product and invert the result."""
    A, B, C, D = variables(registry, "A B C D")
    f = ~A * B
    g = f.copy()
    e = Expression(A * D)
    e += g * ~D                 # AD + A'BD'
    e += ~B * C                 # AD + A'BD' + B'C
    f = e.times(f)              # A'BD'
    return Example("walkthrough", "(AD + A'BD' + B'C)(A'B), inverted", f.inverse(), sum_of(A, ~B, D))


def consensus_example(registry: VariableRegistry) -> Example:
    """AB + A'C + BC: the consensus term BC is not removed."""
    A, B, C = variables(registry, "A B C")
    return Example(
        "consensus",
        "consensus terms survive simplification",
        A * B + ~A * C + B * C,
        A * B + ~A * C,
    )


ALL_EXAMPLES: tuple[Callable[[VariableRegistry], Example], ...] = (
    merge_example,
    absorb_example,
    complement_example,
    substitute_example,
    de_morgan_example,
    zip_example,
    walkthrough_example,
    consensus_example,
)


def build_examples() -> list[tuple[Example, VariableRegistry]]:
    """Build every example with its own registry."""
    built = []
    for factory in ALL_EXAMPLES:
        registry = VariableRegistry()
        built.append((factory(registry), registry))
    return built


def render_examples(
    examples: list[tuple[Example, VariableRegistry]],
    *,
    html: bool = False,
    style: NegationStyle = NegationStyle.QUOTE,
) -> str:
    entries = []
    for example, registry in examples:
        if html:
            result, expected = as_html(example.result, registry), as_html(example.expected, registry)
        else:
            result = expression_to_string(example.result, registry, style)
            expected = expression_to_string(example.expected, registry, style)
        entries.append(
            {
                "name": example.name,
                "description": example.description,
                "result": result,
                "expected": expected,
                "terms": len(example.result),
                "holds": example.holds,
            }
        )
    return render("report.html.j2" if html else "report.txt.j2", title="Worked examples", entries=entries)


def main() -> None:
    sys.stdout.write(render_examples(build_examples()))


if __name__ == "__main__":
    main()
