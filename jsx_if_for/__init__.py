"""
jsx_if_for rewrites control-flow pseudo-elements in JSX into plain
expressions, so that later stages (code generators, bundlers) never see them.

jsx_if_for provides
- :code:`<$for var={x} of={items}>`, :code:`<$if test={a}>` with
  :code:`<$else-if>`/:code:`<$else>` chains, and :code:`<$let var={n} value={v}>`.
- Fatal diagnostics located at the most specific offending node.
- Conversion from and to ESTree JSON.
"""

__version__ = "0.1.0"

from .diagnostic import ErrorKind, RewriteError
from .estree import from_estree, to_estree
from .printer import pretty, unparse
from .rewriter import rewrite
