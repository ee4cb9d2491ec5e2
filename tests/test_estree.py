import json

import pytest

from jsx_if_for import ast, from_estree, to_estree, rewrite, unparse, RewriteError, ErrorKind
from jsx_if_for.ast import Position, SourceLocation
from jsx_if_for.estree import camel_case, snake_case


def jsx_id(name):
    return {"type": "JSXIdentifier", "name": name}


def attr_(name, expression):
    return {
        "type": "JSXAttribute",
        "name": jsx_id(name),
        "value": {"type": "JSXExpressionContainer", "expression": expression},
    }


def ident(name):
    return {"type": "Identifier", "name": name}


def element(name, attributes, children, **located):
    return {
        "type": "JSXElement",
        "openingElement": {
            "type": "JSXOpeningElement",
            "name": jsx_id(name),
            "attributes": attributes,
            "selfClosing": False,
            **located,
        },
        "children": children,
        "closingElement": {"type": "JSXClosingElement", "name": jsx_id(name)},
    }


def test_case_conversion():
    assert snake_case("openingElement") == "opening_element"
    assert snake_case("selfClosing") == "self_closing"
    assert snake_case("name") == "name"
    assert camel_case("opening_element") == "openingElement"
    assert camel_case("source_type") == "sourceType"


def test_round_trip_keeps_locations_and_unknown_keys():
    doc = {
        "type": "Identifier",
        "name": "x",
        "start": 0,
        "end": 1,
        "loc": {"start": {"line": 1, "column": 0}, "end": {"line": 1, "column": 1}},
        "range": [0, 1],
    }
    node = from_estree(doc)
    assert isinstance(node, ast.Identifier)
    assert node.loc == SourceLocation(Position(1, 0), Position(1, 1))
    assert node.range == (0, 1)
    assert node.extra == {"start": 0, "end": 1}
    assert to_estree(node) == doc


def test_acorn_offsets_become_range():
    node = from_estree({"type": "Literal", "value": 1, "raw": "1", "start": 4, "end": 5})
    assert node.range == (4, 5)
    assert node.raw == "1"


def test_unknown_kinds_are_opaque():
    doc = {
        "type": "ImportDeclaration",
        "specifiers": [],
        "source": {"type": "Literal", "value": "react", "raw": "'react'"},
    }
    node = from_estree(doc)
    assert isinstance(node, ast.Opaque)
    assert node.type == "ImportDeclaration"
    assert isinstance(node.fields["source"], ast.Literal)
    assert to_estree(node) == doc
    assert unparse(node) == "/* ImportDeclaration */"


def test_rewrite_estree_document():
    loop = element(
        "$for",
        [attr_("var", ident("x")), attr_("of", ident("items"))],
        [
            {
                "type": "JSXExpressionContainer",
                "expression": {
                    "type": "MemberExpression",
                    "object": ident("x"),
                    "property": ident("id"),
                    "computed": False,
                    "optional": False,
                },
            }
        ],
    )
    doc = {
        "type": "Program",
        "sourceType": "module",
        "body": [
            {
                "type": "ExportDefaultDeclaration",
                "declaration": element("ul", [], [loop]),
            }
        ],
    }
    tree = from_estree(json.loads(json.dumps(doc)))
    rewrite(tree, "list.mdx")
    out = to_estree(tree)

    ul = out["body"][0]["declaration"]
    container = ul["children"][0]
    assert container["type"] == "JSXExpressionContainer"
    call = container["expression"]
    assert call["type"] == "CallExpression"
    assert call["callee"]["type"] == "MemberExpression"
    assert call["callee"]["object"] == ident("items")
    assert call["callee"]["property"] == ident("map")
    arrow = call["arguments"][0]
    assert arrow["type"] == "ArrowFunctionExpression"
    assert arrow["expression"] is True
    assert arrow["params"] == [ident("x")]
    assert arrow["body"]["type"] == "MemberExpression"
    assert "loc" not in call, "synthesized nodes carry no location"
    json.dumps(out)


def test_rewrite_under_opaque_parent_wraps_in_fragment():
    doc = {
        "type": "Program",
        "sourceType": "module",
        "body": [
            {
                "type": "ExportDefaultDeclaration",
                "declaration": element("$if", [attr_("test", ident("ok"))], [{"type": "JSXText", "value": "yes", "raw": "yes"}]),
            }
        ],
    }
    tree = from_estree(doc)
    rewrite(tree)
    declaration = tree.body[0].fields["declaration"]
    assert isinstance(declaration, ast.JSXFragment)
    assert unparse(declaration) == "<>{ok ? <>yes</> : null}</>"


def test_estree_locations_reach_diagnostics():
    located = {
        "loc": {"start": {"line": 3, "column": 2}, "end": {"line": 3, "column": 9}},
        "range": [20, 27],
    }
    doc = {
        "type": "Program",
        "sourceType": "module",
        "body": [
            {
                "type": "ExpressionStatement",
                "expression": {
                    "type": "JSXFragment",
                    "openingFragment": {"type": "JSXOpeningFragment"},
                    "children": [element("$else", [], [], **located)],
                    "closingFragment": {"type": "JSXClosingFragment"},
                },
            }
        ],
    }
    with pytest.raises(RewriteError) as info:
        rewrite(from_estree(doc))
    assert info.value.kind is ErrorKind.OrphanChainContinuation
    assert info.value.place == SourceLocation(Position(3, 2, 20), Position(3, 9, 27))


def test_root_element_cannot_be_replaced():
    tree = from_estree(element("$if", [attr_("test", ident("a"))], []))
    with pytest.raises(ValueError):
        rewrite(tree)
