"""Error handling in jsx_if_for is done by raising a `RewriteError`. The first
malformed construct aborts the whole rewrite; nothing inside the engine
catches the error, so the caller must discard the partially rewritten tree.
"""
from enum import Enum, auto
from typing import Optional, Sequence, Any, NoReturn

import attr

from .ast import Node, SourceLocation

SOURCE = "jsx-if-for"


class ErrorKind(Enum):
    """What went wrong. Every kind is fatal."""

    MissingRequiredAttribute = auto()
    UnexpectedAttribute = auto()
    InvalidAttributeValueShape = auto()
    UnsupportedVariablePattern = auto()
    OrphanChainContinuation = auto()
    MalformedTerminalBranch = auto()
    UnreachableConstruct = auto()


@attr.s(auto_attribs=True, auto_exc=True)
class RewriteError(Exception):
    """A fatal, location carrying diagnostic.

    `place` is the location of the most specific node that could be found for
    the fault, with character offsets when the node had a range, or None when
    no node in the context carried a location.
    """

    message: str
    place: Optional[SourceLocation] = None
    kind: ErrorKind = ErrorKind.UnreachableConstruct
    source: str = SOURCE
    fatal: bool = True

    def __str__(self) -> str:
        if self.place is None:
            return self.message
        start = self.place.start
        return f"{start.line}:{start.column + 1}: {self.message}"

    def render(self, source: str, filename: str = "<input>") -> str:
        """Render the message with the offending source underlined."""
        if self.place is None:
            return f"Rewrite error in {filename}:\n{self.message}"
        start, end = self.place.start, self.place.end
        lines = source.split("\n")
        msg = f"Rewrite error on line {filename}:{start.line}:{start.column + 1}:\n"
        msg += "\n".join(lines[start.line - 1 : end.line])
        msg += "\n"
        if start.line == end.line:
            width = max(end.column - start.column, 1)
        else:
            width = max(len(lines[start.line - 1]) - start.column, 1)
        msg += " " * start.column + "^" * width + "\n"
        msg += self.message
        return msg


def locate(context: Sequence[Any]) -> Optional[SourceLocation]:
    """Find the location of the innermost located node in `context`.

    `context` lists the nodes leading from the enclosing scope down to the
    node at fault, outermost first, so it is searched from the end.
    """
    for node in reversed(context):
        if isinstance(node, Node) and node.loc is not None:
            return node.loc.with_offsets(node.range)
    return None


def fail(
    message: str,
    context: Sequence[Any] = (),
    kind: ErrorKind = ErrorKind.UnreachableConstruct,
) -> NoReturn:
    """Raise a fatal `RewriteError` placed at the innermost located node."""
    raise RewriteError(message, locate(context), kind)
