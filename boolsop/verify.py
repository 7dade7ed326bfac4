"""Randomized property checks of the algebra, decided by the brute force oracle.

Every round draws random expressions over a small set of variables and
checks the algebraic laws the implementation promises: canonical form,
idempotent simplification, identities, double negation, distributivity
and substitution. Failures are collected as diagnostics, not raised.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum

from .expression import Expression
from .oracle import as_truth_product, find_counterexample
from .product import ONE, Product
from .render import expression_to_string, product_to_string
from .truth import TruthProduct
from .variables import Variable, VariableRegistry

logger = logging.getLogger(__name__)


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    check: str
    severity: Severity
    round: int
    message: str


@dataclass(frozen=True)
class VerifyResult:
    seed: int
    rounds: int
    checks_run: int
    diagnostics: tuple[Diagnostic, ...]

    @property
    def errors(self) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if d.severity == Severity.ERROR)

    @property
    def warnings(self) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if d.severity == Severity.WARNING)

    @property
    def passed(self) -> bool:
        return len(self.errors) == 0


@dataclass
class VerifyContext:
    registry: VariableRegistry
    variables: list[Variable]
    rng: random.Random
    equivalence_limit: int | None
    round: int = 0
    checks_run: int = 0
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def error(self, check: str, message: str) -> None:
        logger.warning("round %d: %s failed: %s", self.round, check, message)
        self.diagnostics.append(Diagnostic(check, Severity.ERROR, self.round, message))

    def warning(self, check: str, message: str) -> None:
        self.diagnostics.append(Diagnostic(check, Severity.WARNING, self.round, message))

    def show(self, value: Expression | Product) -> str:
        if isinstance(value, Product):
            return product_to_string(value, self.registry)
        return expression_to_string(value, self.registry)

    def expect_canonical(self, check: str, expression: Expression) -> None:
        self.checks_run += 1
        try:
            expression.sanity_check()
        except AssertionError as e:
            self.error(check, f"{self.show(expression)} is not canonical: {e}")

    def expect_equal(self, check: str, actual: Expression, expected: Expression) -> None:
        self.checks_run += 1
        if actual != expected:
            self.error(check, f"got {self.show(actual)}, expected {self.show(expected)}")

    def expect_equivalent(self, check: str, actual: Expression, expected: Expression) -> None:
        self.checks_run += 1
        counterexample = find_counterexample(actual, expected, max_variables=self.equivalence_limit)
        if counterexample is not None:
            pinned = as_truth_product(counterexample, actual.variables_mask() | expected.variables_mask())
            self.error(
                check,
                f"{self.show(actual)} differs from {self.show(expected)} at {self.show(pinned)}",
            )


# ---------------------------------------------------------------------------
# Random values
# ---------------------------------------------------------------------------


def random_product(ctx: VerifyContext, max_width: int = 3) -> Product:
    width = ctx.rng.randint(1, min(max_width, len(ctx.variables)))
    product = ONE
    for variable in ctx.rng.sample(ctx.variables, width):
        product = product * Product.from_variable(variable, negated=ctx.rng.random() < 0.5)
    return product


def random_expression(ctx: VerifyContext, max_terms: int) -> Expression:
    result = Expression(False)
    for _ in range(ctx.rng.randint(1, max_terms)):
        result = result + random_product(ctx)
    return result


def random_assignment(ctx: VerifyContext) -> TruthProduct:
    chosen = ctx.rng.sample(ctx.variables, ctx.rng.randint(1, len(ctx.variables)))
    return TruthProduct.from_assignment({v: ctx.rng.random() < 0.5 for v in chosen})


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------


def check_canonical_form(ctx: VerifyContext, a: Expression, b: Expression) -> None:
    for name, value in (
        ("a + b", a + b),
        ("a * b", a.times(b)),
        ("~a", ~a),
    ):
        ctx.expect_canonical(f"canonical({name})", value)


def check_idempotent_simplify(ctx: VerifyContext, a: Expression) -> None:
    once = a.copy()
    once.simplify()
    twice = once.copy()
    twice.simplify()
    ctx.expect_equal("idempotent_simplify", twice, once)


def check_identities(ctx: VerifyContext, a: Expression) -> None:
    one, zero = Expression(True), Expression(False)
    ctx.expect_equal("times_one", a * ONE, a)
    ctx.expect_equal("times_zero", a.times(zero), zero)
    ctx.expect_equal("plus_zero", a + zero, a)
    ctx.expect_equal("plus_one", a + one, one)
    ctx.expect_equal("times_inverse", a.times(~a), zero)
    # The simplifier is incomplete, so only the boolean function is promised.
    ctx.expect_equivalent("plus_inverse", a + ~a, one)
    if not (a + ~a).is_one():
        ctx.warning("plus_inverse", f"{ctx.show(a)} + its inverse did not reduce to 1")


def check_double_negation(ctx: VerifyContext, a: Expression) -> None:
    ctx.expect_equivalent("double_negation", ~~a, a)


def check_distributivity(ctx: VerifyContext, a: Expression, b: Expression, c: Expression) -> None:
    ctx.expect_equivalent("distributivity", a.times(b + c), a.times(b) + a.times(c))


def check_substitution(ctx: VerifyContext, a: Expression) -> None:
    t = random_assignment(ctx)
    # Substituting and then pinning again must agree with pinning directly.
    ctx.expect_equivalent("substitution", a(t) * t, a * t)
    ctx.expect_canonical("canonical(substitution)", a(t))


def check_oracle(ctx: VerifyContext, a: Expression, b: Expression) -> None:
    ctx.checks_run += 1
    if not a.equivalent(a):
        ctx.error("oracle_reflexive", f"{ctx.show(a)} is not equivalent to itself")
    ctx.checks_run += 1
    if a.equivalent(b) != b.equivalent(a):
        ctx.error("oracle_symmetric", f"{ctx.show(a)} vs {ctx.show(b)}")


def verify(
    *,
    seed: int = 0,
    rounds: int = 100,
    variables: int = 4,
    terms: int = 4,
    equivalence_limit: int | None = None,
) -> VerifyResult:
    """Run every check on ``rounds`` random triples of expressions."""
    if not 1 <= variables <= 26:
        raise ValueError(f"variables must be in 1..26, got {variables}")
    registry = VariableRegistry()
    handles = [registry.create_variable(chr(ord("A") + i)) for i in range(variables)]
    ctx = VerifyContext(registry, handles, random.Random(seed), equivalence_limit)
    for index in range(rounds):
        ctx.round = index
        a = random_expression(ctx, terms)
        b = random_expression(ctx, terms)
        c = random_expression(ctx, terms)
        for expression in (a, b, c):
            ctx.expect_canonical("canonical(sum)", expression)
        check_canonical_form(ctx, a, b)
        check_idempotent_simplify(ctx, a)
        check_identities(ctx, a)
        check_double_negation(ctx, a)
        check_distributivity(ctx, a, b, c)
        check_substitution(ctx, a)
        check_oracle(ctx, a, b)
    logger.info("ran %d checks in %d rounds, %d diagnostic(s)", ctx.checks_run, rounds, len(ctx.diagnostics))
    return VerifyResult(seed, rounds, ctx.checks_run, tuple(ctx.diagnostics))


def format_report(result: VerifyResult, *, show_warnings: bool = True) -> str:
    """Human-readable summary for terminal output."""
    lines = [f"seed {result.seed}: {result.checks_run} checks in {result.rounds} rounds"]
    if result.passed:
        lines.append("  ✓ all checks passed")
    else:
        lines.append(f"  × {len(result.errors)} failed")
        for diag in result.errors:
            lines.append(f"    - [{diag.check}] round {diag.round}: {diag.message}")
    if result.warnings and show_warnings:
        lines.append(f"  ⚠ {len(result.warnings)} warning{'s' if len(result.warnings) > 1 else ''}")
        for diag in result.warnings:
            lines.append(f"    - [{diag.check}] round {diag.round}: {diag.message}")
    return "\n".join(lines)
