"""Helpers that build replacement subtrees.

A rewrite always produces a single expression. These helpers wrap that
expression, and the children it is built from, so that the result is legal
wherever the original element stood.
"""
from typing import List, Sequence, Any

from .ast import (
    Node,
    Identifier,
    JSXExpressionContainer,
    JSXFragment,
    is_jsx,
)
from .diagnostic import ErrorKind, fail
from .printer import unparse


def wrap_for_parent(expr: Node, parent: Node) -> Node:
    """Make `expr` substitutable for an element held by `parent`.

    Markup parents take a bare :code:`{expr}`; any other parent needs
    :code:`<>{expr}</>`.
    """
    container = JSXExpressionContainer(expr)
    if is_jsx(parent):
        return container
    return JSXFragment(children=[container])


def wrap_children_as_body(children: List[Node]) -> Node:
    """Turn element children into one expression.

    A single non-markup child is used as is, and a single :code:`{expr}` child
    gives its expression. Anything else becomes a fragment of all the
    children, in order.
    """
    if len(children) == 1:
        child = children[0]
        if isinstance(child, JSXExpressionContainer) and not is_jsx(child.expression):
            return child.expression
        if not is_jsx(child):
            return child
    return JSXFragment(children=list(children))


def pattern_from_var_attribute(expr: Node, context: Sequence[Any] = ()) -> Identifier:
    """Accept only a bare identifier as a binding pattern."""
    if isinstance(expr, Identifier):
        return expr
    fail(
        f"Bad variable pattern {unparse(expr)}",
        [*context, expr],
        ErrorKind.UnsupportedVariablePattern,
    )
