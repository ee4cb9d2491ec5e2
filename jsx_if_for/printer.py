"""Render trees back into JavaScript with JSX, and dump them for debugging.

The printer is only used for messages and debug output, so it favors readable
output over faithful reproduction of the original formatting.
"""
import json
from typing import Any, List, Optional

import attr

from .ast import *

# Binding power of each expression kind; higher binds tighter.
_BINARY_PRECEDENCE = {
    "??": 4,
    "||": 4,
    "&&": 5,
    "|": 6,
    "^": 7,
    "&": 8,
    "==": 9,
    "!=": 9,
    "===": 9,
    "!==": 9,
    "<": 10,
    ">": 10,
    "<=": 10,
    ">=": 10,
    "in": 10,
    "instanceof": 10,
    "<<": 11,
    ">>": 11,
    ">>>": 11,
    "+": 12,
    "-": 12,
    "*": 13,
    "/": 13,
    "%": 13,
    "**": 14,
}
_ASSIGN = 2
_CONDITIONAL = 3
_UNARY = 15
_CALL = 18
_PRIMARY = 20

INDENT = "  "


def precedence(node: Node) -> int:
    if isinstance(node, (BinaryExpression, LogicalExpression)):
        return _BINARY_PRECEDENCE.get(node.operator, _UNARY - 1)
    if isinstance(node, ArrowFunctionExpression):
        return _ASSIGN
    if isinstance(node, ConditionalExpression):
        return _CONDITIONAL
    if isinstance(node, UnaryExpression):
        return _UNARY
    if isinstance(node, (CallExpression, MemberExpression)):
        return _CALL
    if isinstance(node, Opaque):
        return 0
    return _PRIMARY


class Printer:
    """Turns a tree into source text. Use :py:func:`unparse`."""

    def __init__(self) -> None:
        self.depth = 0

    def node(self, node: Node) -> str:
        if isinstance(node, (Statement, Program)):
            return self.stmt(node)
        if is_jsx(node):
            return self.jsx(node)
        if isinstance(node, VariableDeclarator):
            return self.declarator(node)
        if isinstance(node, Property):
            return self.property(node)
        return self.expr(node)

    def stmt(self, stmt: Node) -> str:
        if isinstance(stmt, Program):
            return "\n".join(self.stmt(s) for s in stmt.body)
        if isinstance(stmt, ExpressionStatement):
            text = self.expr(stmt.expression)
            if text.startswith("{") or text.startswith("function"):
                text = f"({text})"
            return text + ";"
        if isinstance(stmt, EmptyStatement):
            return ";"
        if isinstance(stmt, BlockStatement):
            return self.block(stmt.body)
        if isinstance(stmt, IfStatement):
            text = f"if ({self.expr(stmt.test)}) {self.stmt(stmt.consequent)}"
            if stmt.alternate is not None:
                text += f" else {self.stmt(stmt.alternate)}"
            return text
        if isinstance(stmt, ReturnStatement):
            if stmt.argument is None:
                return "return;"
            return f"return {self.expr(stmt.argument)};"
        if isinstance(stmt, VariableDeclaration):
            decls = ", ".join(self.declarator(d) for d in stmt.declarations)
            return f"{stmt.kind} {decls};"
        if isinstance(stmt, FunctionDeclaration):
            name = stmt.id.name if stmt.id is not None else ""
            params = ", ".join(self.expr(p) for p in stmt.params)
            return f"function {name}({params}) {self.block(stmt.body.body)}"
        return self.expr(stmt)

    def block(self, body: List[Node]) -> str:
        if len(body) == 0:
            return "{}"
        self.depth += 1
        lines = [INDENT * self.depth + self.stmt(s) for s in body]
        self.depth -= 1
        return "{\n" + "\n".join(lines) + "\n" + INDENT * self.depth + "}"

    def declarator(self, decl: VariableDeclarator) -> str:
        if decl.init is None:
            return self.expr(decl.id)
        return f"{self.expr(decl.id)} = {self.expr(decl.init, _ASSIGN)}"

    def property(self, prop: Property) -> str:
        if prop.shorthand:
            return self.expr(prop.value)
        key = self.expr(prop.key)
        if prop.computed:
            key = f"[{key}]"
        return f"{key}: {self.expr(prop.value, _ASSIGN)}"

    def expr(self, expr: Optional[Node], min_precedence: int = 0) -> str:
        """Render `expr`, parenthesized if it binds looser than `min_precedence`."""
        if expr is None:
            return ""
        text = self._expr(expr)
        if precedence(expr) < min_precedence:
            return f"({text})"
        return text

    def _expr(self, expr: Node) -> str:
        if isinstance(expr, Identifier):
            return expr.name
        if isinstance(expr, Literal):
            return literal(expr)
        if isinstance(expr, MemberExpression):
            obj = self.expr(expr.object, _CALL)
            if isinstance(expr.object, Literal) and isinstance(expr.object.value, int):
                obj = f"({obj})"
            dot = "?." if expr.optional else "."
            if expr.computed:
                index = self.expr(expr.property)
                return f"{obj}{'?.' if expr.optional else ''}[{index}]"
            return f"{obj}{dot}{self.expr(expr.property)}"
        if isinstance(expr, CallExpression):
            callee = self.expr(expr.callee, _CALL)
            args = ", ".join(self.expr(a, _ASSIGN) for a in expr.arguments)
            return f"{callee}{'?.' if expr.optional else ''}({args})"
        if isinstance(expr, ArrowFunctionExpression):
            params = ", ".join(self.expr(p) for p in expr.params)
            if isinstance(expr.body, BlockStatement):
                body = self.block(expr.body.body)
            elif isinstance(expr.body, ObjectExpression):
                body = f"({self.expr(expr.body)})"
            else:
                body = self.expr(expr.body, _ASSIGN)
            return f"({params}) => {body}"
        if isinstance(expr, ConditionalExpression):
            test = self.expr(expr.test, _CONDITIONAL + 1)
            consequent = self.expr(expr.consequent, _ASSIGN)
            alternate = self.expr(expr.alternate, _ASSIGN)
            return f"{test} ? {consequent} : {alternate}"
        if isinstance(expr, UnaryExpression):
            arg = self.expr(expr.argument, _UNARY)
            if expr.operator.isalpha():
                return f"{expr.operator} {arg}"
            return f"{expr.operator}{arg}"
        if isinstance(expr, (BinaryExpression, LogicalExpression)):
            prec = precedence(expr)
            if expr.operator == "**":
                left = self.expr(expr.left, prec + 1)
                right = self.expr(expr.right, prec)
            else:
                left = self.expr(expr.left, prec)
                right = self.expr(expr.right, prec + 1)
            return f"{left} {expr.operator} {right}"
        if isinstance(expr, SpreadElement):
            return "..." + self.expr(expr.argument, _ASSIGN)
        if isinstance(expr, ArrayExpression):
            return "[" + ", ".join(self.expr(e, _ASSIGN) for e in expr.elements) + "]"
        if isinstance(expr, ObjectExpression):
            if len(expr.properties) == 0:
                return "{}"
            return "{" + ", ".join(self.node(p) for p in expr.properties) + "}"
        if is_jsx(expr):
            return self.jsx(expr)
        if isinstance(expr, (Statement, Program, VariableDeclarator, Property)):
            return self.node(expr)
        return f"/* {expr.type} */"

    def jsx(self, node: Node) -> str:
        if isinstance(node, JSXElement):
            children = "".join(self.jsx(c) for c in node.children)
            opening = self.jsx(node.opening_element)
            if node.opening_element.self_closing:
                return opening
            return f"{opening}{children}</{self.jsx(node.opening_element.name)}>"
        if isinstance(node, JSXOpeningElement):
            parts = [self.jsx(node.name)]
            parts.extend(self.jsx(a) for a in node.attributes)
            if node.self_closing:
                parts.append("/")
            return "<" + " ".join(parts) + ">"
        if isinstance(node, JSXClosingElement):
            return f"</{self.jsx(node.name)}>"
        if isinstance(node, JSXFragment):
            return "<>" + "".join(self.jsx(c) for c in node.children) + "</>"
        if isinstance(node, JSXOpeningFragment):
            return "<>"
        if isinstance(node, JSXClosingFragment):
            return "</>"
        if isinstance(node, JSXAttribute):
            name = self.jsx(node.name)
            if node.value is None:
                return name
            if isinstance(node.value, Literal):
                return f"{name}={literal(node.value)}"
            return f"{name}={self.jsx(node.value)}"
        if isinstance(node, JSXSpreadAttribute):
            return "{..." + self.expr(node.argument, _ASSIGN) + "}"
        if isinstance(node, JSXIdentifier):
            return node.name
        if isinstance(node, JSXMemberExpression):
            return f"{self.jsx(node.object)}.{node.property.name}"
        if isinstance(node, JSXNamespacedName):
            return f"{node.namespace.name}:{node.name.name}"
        if isinstance(node, JSXExpressionContainer):
            return "{" + self.jsx(node.expression) + "}"
        if isinstance(node, JSXEmptyExpression):
            return ""
        if isinstance(node, JSXText):
            return node.raw if node.raw is not None else node.value
        return self.expr(node)


def literal(node: Literal) -> str:
    if node.raw is not None:
        return node.raw
    value = node.value
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value)


def unparse(node: Node) -> str:
    """Render `node` (any kind, including JSX) as source text.

    Example
    -------

        >>> unparse(CallExpression(Identifier("f"), [Literal(1)]))
        'f(1)'

    """
    return Printer().node(node)


_HIDDEN = ("type", "start", "end", "loc", "range", "extra")


def pretty(tree: Any, pre: str = "") -> str:
    """Indented dump of a tree with location metadata suppressed."""
    if isinstance(tree, list):
        if len(tree) == 0:
            return "[]\n"
        return "\n" + "".join(
            f"{pre}  #{i} {pretty(item, pre + '  ')}" for i, item in enumerate(tree)
        )
    if isinstance(tree, Opaque):
        items = list(tree.fields.items())
    elif isinstance(tree, Node):
        items = [(f.name, getattr(tree, f.name)) for f in attr.fields(type(tree))]
    else:
        return json.dumps(tree, default=str) + "\n"
    return f"[{tree.type}]\n" + "".join(
        f"{pre}  {k}: {pretty(v, pre + '  ')}" for k, v in items if k not in _HIDDEN
    )
