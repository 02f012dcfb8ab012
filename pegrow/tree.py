# -*- coding: utf-8; -*-

"""Nesting captures into a tree of matches.

A parse produces a flat list of :class:`~pegrow.context.Capture`,
each appended when its match completes. A match that contains other matches
completes after them, so the list is in post-order, and the tree can be
rebuilt in one pass with a stack.

A zero-width match at the very start of a later match cannot be told apart
from its first child, and is taken to precede it.
"""

from collections import namedtuple


class MatchNode(namedtuple('MatchNode', ('tag', 'start', 'end', 'children'))):

    __slots__ = ()

    def walk(self):
        """Yield this node and all nodes below it, in document order."""
        yield self
        for child in self.children:
            for node in child.walk():
                yield node


def build_tree(captures):
    """Return the top-level :class:`MatchNode` objects for `captures`.

    >>> from pegrow.context import Capture
    >>> [root] = build_tree([Capture('num', 0, 1), Capture('num', 2, 3),
    ...                      Capture('add', 0, 3)])
    >>> root.tag, [child.tag for child in root.children]
    ('add', ['num', 'num'])
    """
    stack = []
    for (tag, start, end) in captures:
        children = []
        while stack and start <= stack[-1].start and \
                start < stack[-1].end <= end:
            children.append(stack.pop())
        children.reverse()
        stack.append(MatchNode(tag, start, end, children))
    return stack
