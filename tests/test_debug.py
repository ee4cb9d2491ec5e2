import logging

import pytest

from jsx_if_for import ast, debug, rewrite
from jsx_if_for import handlers, rewriter


@pytest.fixture(autouse=True)
def restore_channels():
    yield
    debug.configure()


def sample():
    loop = ast.JSXElement(
        ast.JSXOpeningElement(
            ast.JSXIdentifier("$for"),
            [
                ast.JSXAttribute(ast.JSXIdentifier("var"), ast.JSXExpressionContainer(ast.Identifier("x"))),
                ast.JSXAttribute(ast.JSXIdentifier("of"), ast.JSXExpressionContainer(ast.Identifier("xs"))),
            ],
        ),
        [ast.JSXExpressionContainer(ast.Identifier("x"))],
    )
    return ast.Program([ast.ExpressionStatement(loop)])


def test_enable_list():
    debug.configure("jsx-if-for")
    assert handlers.debug.enabled
    assert not rewriter.debug_file.enabled
    assert not rewriter.debug_tree.enabled

    debug.configure("jsx-if-for*, -jsx-if-for-tree")
    assert handlers.debug.enabled
    assert rewriter.debug_file.enabled
    assert not rewriter.debug_tree.enabled

    debug.configure("")
    assert not handlers.debug.enabled


def test_environment_variable(monkeypatch):
    monkeypatch.setenv("DEBUG", "*")
    debug.configure()
    assert rewriter.debug_tree.enabled


def test_channels_log_through_logging(caplog):
    caplog.set_level(logging.DEBUG)
    debug.configure("jsx-if-for*")
    rewrite(sample(), "page.mdx")
    assert "Rewriting <$for var={x} of={xs}>" in caplog.text
    assert "OLD page.mdx" in caplog.text
    assert "NEW page.mdx" in caplog.text
    assert "<>{xs.map((x) => x)}</>;" in caplog.text
    assert "[ArrowFunctionExpression]" in caplog.text
    names = {r.name for r in caplog.records}
    assert names == {"jsx_if_for", "jsx_if_for.file", "jsx_if_for.tree"}


def test_disabled_dumps_are_not_built(monkeypatch):
    debug.configure("")

    def explode(*args):
        raise AssertionError("dump built while disabled")

    monkeypatch.setattr(rewriter, "pretty", explode)
    monkeypatch.setattr(rewriter, "unparse", explode)
    monkeypatch.setattr(handlers, "unparse", explode)
    rewrite(sample())


def test_channel_is_shared():
    assert debug.channel("jsx-if-for", "jsx_if_for") is handlers.debug
