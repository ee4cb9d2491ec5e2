"""
`jsx_if_for.ast` contains definitions of the ESTree nodes (including the JSX
extension) this package reads, rewrites and prints. Nodes are mutable: the
rewriter replaces them in place. Nodes read from source carry location
information, nodes synthesized by the rewriter do not.
"""
import attr
from typing import Optional, Any, List, Dict, Tuple, Union


@attr.s(auto_attribs=True, frozen=True)
class Position:
    """A point in a source file.

    Notes
    -----
    Lines are one indexed and columns are zero indexed, as in ESTree. The
    offset, when known, is the character index from the start of the file.
    """

    line: int
    column: int
    offset: Optional[int] = None


@attr.s(auto_attribs=True, frozen=True)
class SourceLocation:
    """An interval in a source file from a start to an end position.

    The interval spanned is inclusive of the start and exclusive of the end.
    """

    start: Position
    end: Position

    def with_offsets(self, offsets: Optional[Tuple[int, int]]) -> "SourceLocation":
        """Return a copy whose positions carry the given character offsets.

        Example
        -------

            >>> SourceLocation(Position(1, 0), Position(1, 4)).with_offsets((0, 4))
            SourceLocation(start=Position(line=1, column=0, offset=0), end=Position(line=1, column=4, offset=4))

        """
        if offsets is None:
            return self
        return SourceLocation(
            attr.evolve(self.start, offset=offsets[0]),
            attr.evolve(self.end, offset=offsets[1]),
        )


_META = ("loc", "range", "extra")


@attr.s(auto_attribs=True)
class Node:
    """Base class of any tree node.

    Children live in fields that hold a single node or a list of nodes. Other
    fields (names, operators, flags) are plain values.
    """

    loc: Optional[SourceLocation] = attr.ib(default=None, kw_only=True, repr=False)
    range: Optional[Tuple[int, int]] = attr.ib(default=None, kw_only=True, repr=False)
    extra: Dict[str, Any] = attr.ib(factory=dict, kw_only=True, repr=False)

    @property
    def type(self) -> str:
        return type(self).__name__

    def child_keys(self) -> List[str]:
        return [f.name for f in attr.fields(type(self)) if f.name not in _META]

    def get_child(self, key: str) -> Any:
        return getattr(self, key)

    def set_child(self, key: str, value: Any) -> None:
        setattr(self, key, value)


@attr.s(auto_attribs=True)
class Opaque(Node):
    """Any ESTree node kind without a dedicated class.

    The fields are kept verbatim (converted recursively) so that traversal can
    reach pseudo-elements nested inside, for example, an export declaration.
    """

    kind: str
    fields: Dict[str, Any] = attr.ib(factory=dict)

    @property
    def type(self) -> str:
        return self.kind

    def child_keys(self) -> List[str]:
        return list(self.fields)

    def get_child(self, key: str) -> Any:
        return self.fields[key]

    def set_child(self, key: str, value: Any) -> None:
        self.fields[key] = value


class Statement(Node):
    """Base class of a statement."""

    pass


class Expression(Node):
    """Base class of an expression."""

    pass


# Statements


@attr.s(auto_attribs=True)
class Program(Node):
    body: List[Node] = attr.ib(factory=list)
    source_type: str = "module"


@attr.s(auto_attribs=True)
class ExpressionStatement(Statement):
    """An expression evaluated for its effect.

    Example
    -------
    :code:`_missingMdxReference("$for", true);`
    """

    expression: Node


@attr.s(auto_attribs=True)
class EmptyStatement(Statement):
    """A lone :code:`;`. Used to disarm statements in place."""

    pass


@attr.s(auto_attribs=True)
class BlockStatement(Statement):
    body: List[Node] = attr.ib(factory=list)


@attr.s(auto_attribs=True)
class IfStatement(Statement):
    test: Node
    consequent: Node
    alternate: Optional[Node] = None


@attr.s(auto_attribs=True)
class ReturnStatement(Statement):
    argument: Optional[Node] = None


@attr.s(auto_attribs=True)
class VariableDeclarator(Node):
    id: Node
    init: Optional[Node] = None


@attr.s(auto_attribs=True)
class VariableDeclaration(Statement):
    declarations: List[VariableDeclarator]
    kind: str = "const"


@attr.s(auto_attribs=True)
class FunctionDeclaration(Statement):
    id: Optional["Identifier"]
    params: List[Node]
    body: BlockStatement


# Expressions


@attr.s(auto_attribs=True)
class Identifier(Expression):
    name: str


@attr.s(auto_attribs=True)
class Literal(Expression):
    """A literal value.

    Examples
    --------
    :code:`1`, :code:`"$for"` and :code:`null`. :code:`raw` is the source
    text when the literal was parsed.
    """

    value: Union[str, bool, int, float, None]
    raw: Optional[str] = None


@attr.s(auto_attribs=True)
class MemberExpression(Expression):
    """Field access.

    Example
    -------
    In :code:`items.map`, :code:`items` is the :code:`object` and :code:`map`
    is the :code:`property`. In :code:`items[0]`, :code:`computed` is true.
    """

    object: Node
    property: Node
    computed: bool = False
    optional: bool = False


@attr.s(auto_attribs=True)
class CallExpression(Expression):
    callee: Node
    arguments: List[Node] = attr.ib(factory=list)
    optional: bool = False


@attr.s(auto_attribs=True)
class ArrowFunctionExpression(Expression):
    """An arrow function.

    Example
    -------
    In :code:`(x) => x.id`, :code:`params[0]` is :code:`x` and :code:`body` is
    :code:`x.id`. :code:`expression` is true when the body is an expression
    rather than a block.
    """

    params: List[Node]
    body: Node
    expression: bool = True


@attr.s(auto_attribs=True)
class ConditionalExpression(Expression):
    """A ternary :code:`test ? consequent : alternate`."""

    test: Node
    consequent: Node
    alternate: Node


@attr.s(auto_attribs=True)
class UnaryExpression(Expression):
    operator: str
    argument: Node
    prefix: bool = True


@attr.s(auto_attribs=True)
class BinaryExpression(Expression):
    operator: str
    left: Node
    right: Node


@attr.s(auto_attribs=True)
class LogicalExpression(Expression):
    operator: str
    left: Node
    right: Node


@attr.s(auto_attribs=True)
class SpreadElement(Node):
    argument: Node


@attr.s(auto_attribs=True)
class ArrayExpression(Expression):
    elements: List[Optional[Node]] = attr.ib(factory=list)


@attr.s(auto_attribs=True)
class Property(Node):
    key: Node
    value: Node
    kind: str = "init"
    computed: bool = False
    shorthand: bool = False
    method: bool = False


@attr.s(auto_attribs=True)
class ObjectExpression(Expression):
    properties: List[Node] = attr.ib(factory=list)


# JSX


@attr.s(auto_attribs=True)
class JSXIdentifier(Node):
    name: str


@attr.s(auto_attribs=True)
class JSXMemberExpression(Node):
    """A dotted tag name such as :code:`<ui.Button>`."""

    object: Node
    property: JSXIdentifier


@attr.s(auto_attribs=True)
class JSXNamespacedName(Node):
    namespace: JSXIdentifier
    name: JSXIdentifier


@attr.s(auto_attribs=True)
class JSXEmptyExpression(Node):
    """The nothing inside :code:`{}` or :code:`{/* comment */}`."""

    pass


@attr.s(auto_attribs=True)
class JSXExpressionContainer(Node):
    """Braces embedding an expression in markup.

    Example
    -------
    :code:`{items}` in :code:`<$for var={x} of={items}>`.
    """

    expression: Node


@attr.s(auto_attribs=True)
class JSXText(Node):
    value: str
    raw: Optional[str] = None


@attr.s(auto_attribs=True)
class JSXAttribute(Node):
    """An attribute of an opening tag.

    Example
    -------
    In :code:`of={items}`, :code:`name` is :code:`of` and :code:`value` is a
    :code:`JSXExpressionContainer`. A boolean attribute has no value.
    """

    name: Node
    value: Optional[Node] = None


@attr.s(auto_attribs=True)
class JSXSpreadAttribute(Node):
    argument: Node


@attr.s(auto_attribs=True)
class JSXOpeningElement(Node):
    name: Node
    attributes: List[Node] = attr.ib(factory=list)
    self_closing: bool = False


@attr.s(auto_attribs=True)
class JSXClosingElement(Node):
    name: Node


@attr.s(auto_attribs=True)
class JSXElement(Node):
    opening_element: JSXOpeningElement
    children: List[Node] = attr.ib(factory=list)
    closing_element: Optional[JSXClosingElement] = None


@attr.s(auto_attribs=True)
class JSXOpeningFragment(Node):
    pass


@attr.s(auto_attribs=True)
class JSXClosingFragment(Node):
    pass


@attr.s(auto_attribs=True)
class JSXFragment(Node):
    """A tagless container :code:`<>...</>`."""

    opening_fragment: JSXOpeningFragment = attr.ib(factory=JSXOpeningFragment)
    children: List[Node] = attr.ib(factory=list)
    closing_fragment: JSXClosingFragment = attr.ib(factory=JSXClosingFragment)


def is_jsx(node: Optional[Node]) -> bool:
    """Whether `node` is a markup-kind node."""
    return node is not None and node.type.startswith("JSX")


def tag_name(node: Any) -> Optional[str]:
    """The literal tag name of an element, or None.

    Computed names (:code:`<a.b>`, :code:`<a:b>`) and anything that is not a
    :code:`JSXElement` give None.
    """
    if isinstance(node, JSXElement):
        name = node.opening_element.name
        if isinstance(name, JSXIdentifier):
            return name.name
    return None


def attribute_name(node: Node) -> str:
    """Display name of an attribute; spread attributes have none."""
    if isinstance(node, JSXAttribute):
        name = node.name
        if isinstance(name, JSXNamespacedName):
            return f"{name.namespace.name}:{name.name.name}"
        return name.name
    return "..."

