"""Named debug channels.

Channels are switched on through the ``DEBUG`` environment variable, a comma
or whitespace separated list of channel names. ``*`` matches any run of
characters and a leading ``-`` switches matching channels off again::

    DEBUG=jsx-if-for           # rewrite trace
    DEBUG=jsx-if-for*          # trace, source before/after, tree dumps
    DEBUG=*,-jsx-if-for-tree   # everything but the tree dumps

Output goes through :py:mod:`logging`. Dumps are expensive, so callers test
:py:attr:`Channel.enabled` before building them.
"""
import fnmatch
import logging
import os
import re
import sys
from typing import Dict, List, Optional, Tuple

ENV_VAR = "DEBUG"

_channels: Dict[str, "Channel"] = {}
_patterns: Tuple[List[str], List[str]] = ([], [])


def _parse(spec: str) -> Tuple[List[str], List[str]]:
    include, exclude = [], []
    for name in re.split(r"[\s,]+", spec.strip()):
        if not name:
            continue
        if name.startswith("-"):
            exclude.append(name[1:])
        else:
            include.append(name)
    return include, exclude


def _matches(namespace: str) -> bool:
    include, exclude = _patterns
    if any(fnmatch.fnmatchcase(namespace, p) for p in exclude):
        return False
    return any(fnmatch.fnmatchcase(namespace, p) for p in include)


class Channel:
    """A debug channel bound to a logger.

    The channel is enabled when the enable list names it. Enabling lowers the
    logger to DEBUG and, if nothing is configured to receive its records,
    attaches a stderr handler.
    """

    def __init__(self, namespace: str, logger: str) -> None:
        self.namespace = namespace
        self.logger = logging.getLogger(logger)
        self.enabled = False
        self._handler: Optional[logging.Handler] = None
        self._refresh()

    def _refresh(self) -> None:
        self.enabled = _matches(self.namespace)
        if self.enabled:
            self.logger.setLevel(logging.DEBUG)
            if not self.logger.hasHandlers() and self._handler is None:
                self._handler = logging.StreamHandler(sys.stderr)
                self._handler.setFormatter(
                    logging.Formatter(f"{self.namespace} %(message)s")
                )
                self.logger.addHandler(self._handler)
        elif self._handler is not None:
            self.logger.removeHandler(self._handler)
            self._handler = None

    def __call__(self, message: str, *args) -> None:
        if self.enabled:
            self.logger.debug(message, *args)


def channel(namespace: str, logger: str) -> Channel:
    """Get or create the channel called `namespace`."""
    if namespace not in _channels:
        _channels[namespace] = Channel(namespace, logger)
    return _channels[namespace]


def configure(spec: Optional[str] = None) -> None:
    """Re-read the enable list, from `spec` or from the environment."""
    global _patterns
    if spec is None:
        spec = os.environ.get(ENV_VAR, "")
    _patterns = _parse(spec)
    for ch in _channels.values():
        ch._refresh()


configure()
