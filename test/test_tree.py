# -*- coding: utf-8; -*-

import doctest

from pegrow import capture, empty, parse
import pegrow.tree
from pegrow.context import Capture
from pegrow.tree import MatchNode, build_tree
import pegrow.util.text


def test_doctests():
    for module in [pegrow.tree, pegrow.util.text]:
        (failed, _) = doctest.testmod(module)
        assert failed == 0


def test_empty():
    assert build_tree([]) == []


def test_siblings():
    tree = build_tree([Capture('a', 0, 1), Capture('b', 1, 3),
                       Capture('c', 5, 6)])
    assert tree == [MatchNode('a', 0, 1, []), MatchNode('b', 1, 3, []),
                    MatchNode('c', 5, 6, [])]


def test_nesting():
    [root] = build_tree([
        Capture('num', 0, 1),
        Capture('num', 2, 3),
        Capture('add', 0, 3),
        Capture('num', 4, 5),
        Capture('add', 0, 5),
    ])
    assert [(n.tag, n.start, n.end) for n in root.walk()] == [
        ('add', 0, 5), ('add', 0, 3), ('num', 0, 1), ('num', 2, 3),
        ('num', 4, 5),
    ]


def test_empty_matches():
    # A zero-width match at the end of its parent is nested in it,
    # one that follows the parent is not.
    tree = build_tree([Capture('x', 2, 2), Capture('y', 0, 2),
                       Capture('z', 2, 2)])
    assert [(n.tag, [c.tag for c in n.children]) for n in tree] == \
        [('y', ['x']), ('z', [])]


def test_empty_match_before_sibling():
    tree = build_tree([Capture('z', 0, 0), Capture('p', 0, 1)])
    assert [(n.tag, n.children) for n in tree] == [('z', []), ('p', [])]

    result = parse('a', capture('z', empty) * capture('p', 'a'))
    assert [n.tag for n in result.tree()] == ['z', 'p']


def test_empty_match_inside_parent():
    [root] = build_tree([Capture('a', 0, 1), Capture('z', 1, 1),
                         Capture('b', 1, 2), Capture('p', 0, 2)])
    assert [c.tag for c in root.children] == ['a', 'z', 'b']
