"""The rewrite pass: one post-order traversal that replaces every
pseudo-element with plain expressions and disarms the reference checks
generated for their names.
"""
from .ast import (
    Node,
    CallExpression,
    EmptyStatement,
    ExpressionStatement,
    Identifier,
    JSXElement,
    Literal,
    tag_name,
)
from .debug import channel
from .handlers import ELEMENT_HANDLERS, debug
from .printer import pretty, unparse
from .walker import Cursor, Walker

# MDX calls this for every component name the document references.
REFERENCE_GUARD = "_missingMdxReference"

debug_file = channel("jsx-if-for-file", "jsx_if_for.file")
debug_tree = channel("jsx-if-for-tree", "jsx_if_for.tree")


def is_reference_guard(node: Node) -> bool:
    """Whether `node` is a generated existence check for a pseudo-element."""
    if not isinstance(node, CallExpression):
        return False
    callee = node.callee
    if not isinstance(callee, Identifier) or callee.name != REFERENCE_GUARD:
        return False
    if len(node.arguments) == 0 or not isinstance(node.arguments[0], Literal):
        return False
    return node.arguments[0].value in ELEMENT_HANDLERS


class Rewriter(Walker):
    """Dispatches each node, on the way up, to its rewrite rule."""

    def leave(self, node: Node, cursor: Cursor) -> None:
        if isinstance(node, JSXElement):
            self.leave_element(node, cursor)
        elif isinstance(node, ExpressionStatement):
            self.leave_expression_statement(node, cursor)

    def leave_element(self, node: JSXElement, cursor: Cursor) -> None:
        handler = ELEMENT_HANDLERS.get(tag_name(node))
        if handler is not None:
            handler(self, node, cursor)

    def leave_expression_statement(
        self, node: ExpressionStatement, cursor: Cursor
    ) -> None:
        # The elements are gone, so their checks would fail at run time.
        if is_reference_guard(node.expression):
            if debug.enabled:
                debug("Disabling %s", unparse(node))
            cursor.replace(EmptyStatement())


def rewrite(tree: Node, filename: str = "<input>") -> None:
    """Rewrite all pseudo-elements in `tree`, in place.

    `filename` only labels debug output. A :py:class:`RewriteError` aborts
    the rewrite and leaves `tree` partially rewritten.
    """
    if debug_file.enabled:
        debug_file("\nOLD %s\n%s\n", filename, unparse(tree))
    if debug_tree.enabled:
        debug_tree("\nOLD %s\n%s", filename, pretty(tree))

    if Rewriter().walk(tree) is not tree:
        raise ValueError(f"cannot rewrite root {tree.type} of {filename} in place")

    if debug_file.enabled:
        debug_file("\nNEW %s\n%s", filename, unparse(tree))
    if debug_tree.enabled:
        debug_tree("\nNEW %s\n%s", filename, pretty(tree))
