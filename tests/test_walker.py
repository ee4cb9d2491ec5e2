from jsx_if_for import ast
from jsx_if_for.walker import Cursor, Walker


class Recorder(Walker):
    def __init__(self):
        self.seen = []

    def leave(self, node, cursor):
        label = node.name if isinstance(node, ast.Identifier) else node.type
        self.seen.append((label, cursor.key, cursor.index))


def sample():
    call = ast.CallExpression(ast.Identifier("f"), [ast.Identifier("a"), ast.Identifier("b")])
    return ast.Program([ast.ExpressionStatement(call)])


def test_post_order():
    recorder = Recorder()
    tree = sample()
    assert recorder.walk(tree) is tree
    assert recorder.seen == [
        ("f", "callee", None),
        ("a", "arguments", 0),
        ("b", "arguments", 1),
        ("CallExpression", "expression", None),
        ("ExpressionStatement", "body", 0),
        ("Program", None, None),
    ]


def test_opaque_fields_are_traversed():
    recorder = Recorder()
    tree = ast.Opaque("ExportDefaultDeclaration", {"declaration": ast.Identifier("x"), "flag": True})
    recorder.walk(tree)
    assert recorder.seen == [("x", "declaration", None), ("ExportDefaultDeclaration", None, None)]


class Renamer(Walker):
    def leave(self, node, cursor):
        if isinstance(node, ast.Identifier) and node.name != "f":
            cursor.replace(ast.Identifier(node.name.upper()))


def test_replace_in_list_and_field():
    tree = sample()
    Renamer().walk(tree)
    call = tree.body[0].expression
    assert [a.name for a in call.arguments] == ["A", "B"]
    assert call.callee.name == "f"

    stmt = ast.ExpressionStatement(ast.Identifier("x"))
    Renamer().walk(stmt)
    assert stmt.expression.name == "X"


def test_replacing_the_root_is_returned():
    assert Renamer().walk(ast.Identifier("x")) == ast.Identifier("X")


class Collapser(Walker):
    """Removes every sibling after an Identifier named "stop"."""

    def __init__(self):
        self.seen = []

    def leave(self, node, cursor):
        if isinstance(node, ast.Identifier):
            self.seen.append(node.name)
            if node.name == "stop":
                del cursor.siblings[cursor.index + 1 :]


def test_spliced_siblings_are_not_visited():
    names = ["a", "stop", "b", "c"]
    arr = ast.ArrayExpression([ast.Identifier(n) for n in names])
    walker = Collapser()
    walker.walk(arr)
    assert walker.seen == ["a", "stop"]
    assert [e.name for e in arr.elements] == ["a", "stop"]


def test_walk_children_skips_the_node_itself():
    recorder = Recorder()
    recorder.walk_children(ast.ExpressionStatement(ast.Identifier("x")))
    assert recorder.seen == [("x", "expression", None)]


def test_cursor_siblings():
    arr = ast.ArrayExpression([ast.Identifier("a")])
    assert Cursor(arr, "elements", 0).siblings is arr.elements
    assert Cursor(arr, "elements", None).siblings is None
    assert Cursor(None, None, None).siblings is None
