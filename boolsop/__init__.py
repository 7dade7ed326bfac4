"""boolsop: indeterminate booleans as canonical sums of products."""

from .variables import (
    MAX_VARIABLES,
    Variable,
    VariableData,
    VariableId,
    VariableRegistry,
)
from .product import (
    ONE,
    ZERO,
    Product,
    common_factor,
    remove_variable,
    term_key,
)
from .truth import TruthProduct, assignments
from .expression import Expression, zip_merge
from .oracle import equivalent, evaluate, find_counterexample
from .render import NegationStyle, expression_to_string, product_to_string
from .helpers import literal, product_of, sum_of, var, variables
from .result import Ok, Err, Result

__all__ = [
    # Variables
    "MAX_VARIABLES", "Variable", "VariableData", "VariableId", "VariableRegistry",
    # Products
    "ONE", "ZERO", "Product", "common_factor", "remove_variable", "term_key",
    "TruthProduct", "assignments",
    # Expressions
    "Expression", "zip_merge",
    # Oracle
    "equivalent", "evaluate", "find_counterexample",
    # Rendering
    "NegationStyle", "expression_to_string", "product_to_string",
    # Helpers
    "literal", "product_of", "sum_of", "var", "variables",
    # Result
    "Ok", "Err", "Result",
]
