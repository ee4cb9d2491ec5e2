"""Rewrite rules for the pseudo-elements.

Each handler validates one element and replaces it, through the walker's
cursor, with an equivalent expression:

.. code-block:: jsx

    <$for var={x} of={items}>...</$for>      {items.map((x) => <>...</>)}
    <$if test={a}>A</$if><$else>B</$else>    {a ? <>A</> : <>B</>}
    <$let var={n} value={1}>...</$let>       {((n) => <>...</>)(1)}

:code:`<$else-if>` and :code:`<$else>` are consumed by the preceding
:code:`<$if>`; reaching their own handler means they were not.
"""
from typing import Callable, Dict, List, Sequence, Any

from .ast import *
from .debug import channel
from .diagnostic import ErrorKind, fail
from .printer import unparse
from .synthesis import pattern_from_var_attribute, wrap_children_as_body, wrap_for_parent
from .walker import Cursor, Walker

FOR = "$for"
IF = "$if"
ELSE_IF = "$else-if"
ELSE = "$else"
LET = "$let"

debug = channel("jsx-if-for", "jsx_if_for")


def attributes_by_name(opening: JSXOpeningElement) -> Dict[str, Node]:
    """Map attribute names to attributes. A repeated name keeps its last occurrence."""
    return {attribute_name(a): a for a in opening.attributes}


def check_attributes(
    opening: JSXOpeningElement,
    attrs: Dict[str, Node],
    allowed: Sequence[str],
    context: List[Any],
) -> None:
    """Reject the first attribute whose name is not in `allowed`."""
    for name, attribute in attrs.items():
        if name not in allowed:
            fail(
                f"Bad attribute {name} in {unparse(opening)}",
                [*context, attribute],
                ErrorKind.UnexpectedAttribute,
            )


def required_expression(
    opening: JSXOpeningElement,
    attrs: Dict[str, Node],
    name: str,
    placeholder: str,
    context: List[Any],
) -> Node:
    """The expression held by attribute `name`, which must be :code:`name={...}`."""
    attribute = attrs.get(name)
    if attribute is None:
        fail(
            f"Need {name}={{{placeholder}}} in {unparse(opening)}",
            context,
            ErrorKind.MissingRequiredAttribute,
        )
    value = attribute.value
    if not isinstance(value, JSXExpressionContainer) or isinstance(
        value.expression, JSXEmptyExpression
    ):
        fail(
            f"Need {name}={{{placeholder}}}, not {unparse(attribute)}, in {unparse(opening)}",
            [*context, attribute],
            ErrorKind.InvalidAttributeValueShape,
        )
    return value.expression


def rewrite_for(walker: Walker, node: JSXElement, cursor: Cursor) -> None:
    """Rewrite :code:`<$for var={name} of={expr}>...</$for>`."""
    opening = node.opening_element
    context = [cursor.parent, node, opening]
    if debug.enabled:
        debug("Rewriting %s", unparse(opening))
    attrs = attributes_by_name(opening)
    var = required_expression(opening, attrs, "var", "name", context)
    items = required_expression(opening, attrs, "of", "expression", context)
    check_attributes(opening, attrs, ("var", "of"), context)

    param = pattern_from_var_attribute(var, [*context, attrs["var"]])
    new_expr = CallExpression(
        MemberExpression(items, Identifier("map")),
        [ArrowFunctionExpression([param], wrap_children_as_body(node.children))],
    )
    cursor.replace(wrap_for_parent(new_expr, cursor.parent))


def _collect_chain(walker: Walker, node: JSXElement, cursor: Cursor) -> List[JSXElement]:
    """Detach the :code:`<$else-if>`/:code:`<$else>` siblings following `node`."""
    chain = [node]
    siblings = cursor.siblings
    if siblings is None:
        return chain
    start = cursor.index + 1
    end = start
    while end < len(siblings) and tag_name(siblings[end]) == ELSE_IF:
        end += 1
    if end < len(siblings) and tag_name(siblings[end]) == ELSE:
        end += 1
    branches = siblings[start:end]
    del siblings[start:end]
    for branch in branches:
        # Detached before the walker reached them.
        walker.walk_children(branch)
    chain.extend(branches)
    return chain


def rewrite_if(walker: Walker, node: JSXElement, cursor: Cursor) -> None:
    """Rewrite an :code:`<$if>` chain into nested conditional expressions."""
    chain = _collect_chain(walker, node, cursor)
    if debug.enabled:
        debug(
            "Rewriting if-chain:\n  %s",
            "\n  ".join(unparse(n.opening_element) for n in chain),
        )

    new_expr: Node = Literal(None)
    for cond in reversed(chain):
        opening = cond.opening_element
        context = [cursor.parent, cond, opening]
        attrs = attributes_by_name(opening)
        check_attributes(opening, attrs, ("test",), context)
        name = tag_name(cond)
        if name in (IF, ELSE_IF):
            test = required_expression(opening, attrs, "test", "expression", context)
            new_expr = ConditionalExpression(
                test, wrap_children_as_body(cond.children), new_expr
            )
        elif name == ELSE:
            if "test" in attrs:
                fail(
                    f"Unexpected test=... in {unparse(opening)}",
                    [*context, attrs["test"]],
                    ErrorKind.MalformedTerminalBranch,
                )
            new_expr = wrap_children_as_body(cond.children)
        else:
            fail(f"Bad element {unparse(opening)} in if-chain", context)

    cursor.replace(wrap_for_parent(new_expr, cursor.parent))


def reject_orphan(walker: Walker, node: JSXElement, cursor: Cursor) -> None:
    """:code:`<$else-if>` and :code:`<$else>` only exist as part of a chain."""
    opening = node.opening_element
    fail(
        f"Need preceding <{IF}> for {unparse(opening)}",
        [cursor.parent, node, opening],
        ErrorKind.OrphanChainContinuation,
    )


def rewrite_let(walker: Walker, node: JSXElement, cursor: Cursor) -> None:
    """Rewrite :code:`<$let var={name} value={expr}>...</$let>`."""
    opening = node.opening_element
    context = [cursor.parent, node, opening]
    if debug.enabled:
        debug("Rewriting %s", unparse(opening))
    attrs = attributes_by_name(opening)
    var = required_expression(opening, attrs, "var", "name", context)
    value = required_expression(opening, attrs, "value", "expression", context)
    check_attributes(opening, attrs, ("var", "value"), context)

    param = pattern_from_var_attribute(var, [*context, attrs["var"]])
    new_expr = CallExpression(
        ArrowFunctionExpression([param], wrap_children_as_body(node.children)),
        [value],
    )
    cursor.replace(wrap_for_parent(new_expr, cursor.parent))


Handler = Callable[[Walker, JSXElement, Cursor], None]

ELEMENT_HANDLERS: Dict[str, Handler] = {
    FOR: rewrite_for,
    IF: rewrite_if,
    ELSE_IF: reject_orphan,
    ELSE: reject_orphan,
    LET: rewrite_let,
}
