"""This module provides the post-order traversal the rewriter is built on. A
`Walker` visits every node after its children and hands the visitor a `Cursor`
describing the slot the node occupies, through which the node can be replaced.
"""
from typing import Optional, List, Any

import attr

from .ast import Node


@attr.s(auto_attribs=True)
class Cursor:
    """The slot of the node being visited.

    `parent` is None for the root. `key` names the parent's field holding the
    node and `index` is the node's position when that field is a list.
    """

    parent: Optional[Node]
    key: Optional[str]
    index: Optional[int]
    replacement: Optional[Node] = None

    @property
    def siblings(self) -> Optional[List[Any]]:
        """The list holding the node, or None for a single-node slot."""
        if self.parent is None or self.index is None:
            return None
        return self.parent.get_child(self.key)

    def replace(self, node: Node) -> None:
        """Write `node` into the visited node's slot.

        The walker does not descend into `node`.
        """
        self.replacement = node
        if self.parent is None:
            return
        if self.index is None:
            self.parent.set_child(self.key, node)
        else:
            self.parent.get_child(self.key)[self.index] = node


class Walker:
    """A post-order visitor. Subclasses override `leave`."""

    def walk(self, root: Node) -> Node:
        """Entry point for the traversal.

        Returns the root, or whatever replaced it.
        """
        cursor = self._visit(root, None, None, None)
        if cursor.replacement is not None:
            return cursor.replacement
        return root

    def leave(self, node: Node, cursor: Cursor) -> None:
        """Called once per node, after all of its children."""
        pass

    def walk_children(self, node: Node) -> None:
        """Visit every child of `node`, but not `node` itself.

        Handlers call this for nodes they detach from the tree before the
        traversal reaches them.
        """
        for key in node.child_keys():
            value = node.get_child(key)
            if isinstance(value, list):
                # Handlers may splice the list, so its length is re-read.
                i = 0
                while i < len(value):
                    if isinstance(value[i], Node):
                        self._visit(value[i], node, key, i)
                    i += 1
            elif isinstance(value, Node):
                self._visit(value, node, key, None)

    def _visit(
        self, node: Node, parent: Optional[Node], key: Optional[str], index: Optional[int]
    ) -> Cursor:
        self.walk_children(node)
        cursor = Cursor(parent, key, index)
        self.leave(node, cursor)
        return cursor
