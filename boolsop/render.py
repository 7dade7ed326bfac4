"""Human readable rendering of products and expressions.

Variable names come from the registry. Negation is marked per character of
the name, in one of three styles:

  quote  A'            plain text
  ansi   ESC[53;4mA    terminal overline
  html   A&#x305;      combining overline, names HTML-escaped

Whole reports are rendered from the Jinja2 templates in ``templates/``.
"""

from __future__ import annotations

import html
import os
from enum import Enum
from typing import Any

import jinja2
from markupsafe import Markup

from .expression import Expression
from .product import Product, iter_bits
from .truth import assignments
from .variables import Variable, VariableId, VariableRegistry


class NegationStyle(Enum):
    QUOTE = "quote"
    ANSI = "ansi"
    HTML = "html"


_MARKS: dict[NegationStyle, tuple[str, str]] = {
    NegationStyle.QUOTE: ("", "'"),
    NegationStyle.ANSI: ("\x1b[53;4m", "\x1b[0m"),
    NegationStyle.HTML: ("", "&#x305;"),
}


def product_to_string(
    product: Product,
    registry: VariableRegistry,
    style: NegationStyle = NegationStyle.QUOTE,
) -> str:
    if product.is_literal():
        return "1" if product.is_one() else "0"
    pre, post = _MARKS[style]
    parts: list[str] = []
    for vid in iter_bits(product.present):
        name = registry.name(vid)
        negated = bool(product.negation & (1 << vid))
        for c in name:
            if style == NegationStyle.HTML:
                c = html.escape(c)
            parts.append(f"{pre}{c}{post}" if negated else c)
    return "".join(parts)


def expression_to_string(
    expression: Expression,
    registry: VariableRegistry,
    style: NegationStyle = NegationStyle.QUOTE,
) -> str:
    separator = "+" if style == NegationStyle.HTML else " + "
    return separator.join(product_to_string(t, registry, style) for t in expression.terms)


def as_html(expression: Expression | Product, registry: VariableRegistry) -> Markup:
    """HTML fragment of ``expression``, safe to insert into an autoescaped template."""
    if isinstance(expression, Product):
        return Markup(product_to_string(expression, registry, NegationStyle.HTML))
    return Markup(expression_to_string(expression, registry, NegationStyle.HTML))


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

_TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), "templates")
_ENV = jinja2.Environment(
    loader=jinja2.FileSystemLoader(_TEMPLATE_DIR),
    autoescape=jinja2.select_autoescape(["html", "html.j2"]),
    keep_trailing_newline=True,
    trim_blocks=True,
    lstrip_blocks=True,
)


def render(template_name: str, **kwargs: Any) -> str:
    """Render a Jinja2 template with the given keyword arguments."""
    template = _ENV.get_template(template_name)
    return template.render(**kwargs)


def render_truth_table(
    expression: Expression,
    registry: VariableRegistry,
    name: str = "f",
    style: NegationStyle = NegationStyle.QUOTE,
) -> str:
    """Truth table of ``expression`` over the variables it mentions."""
    handles = [Variable(VariableId(vid)) for vid in iter_bits(expression.variables_mask())]
    names = [registry.name(h) for h in handles]
    rows = []
    for assignment in assignments(handles):
        cells = [(assignment.value_of(h), len(n)) for h, n in zip(handles, names, strict=True)]
        rows.append({"cells": cells, "value": expression(assignment).is_one()})
    return render(
        "truth_table.txt.j2",
        name=name,
        expression=expression_to_string(expression, registry, style),
        names=names,
        rows=rows,
    )
