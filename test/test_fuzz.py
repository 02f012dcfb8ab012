# -*- coding: utf-8; -*-

"""Randomized testing against a naive PEG interpreter.

Generate random expressions over a small alphabet and random inputs,
and check that pegrow stops at the same position as a direct interpretation
of the same expression. Cases are deterministic for a given seed.
"""

import random

import pytest

from pegrow import (followed_by, literal, many, many1, maybe,
                    not_followed_by, recursive, try_parse)


N_TESTS = 200
N_INPUTS = 20
ALPHABET = 'ab'


def make_expr(rnd, depth):
    if depth == 0 or rnd.random() < 0.2:
        return ('lit', ''.join(rnd.choice(ALPHABET)
                               for _ in range(rnd.randint(1, 2))))
    kind = rnd.choice(['seq', 'seq', 'alt', 'alt', 'many', 'many1', 'maybe',
                       'and', 'not'])
    if kind in ('seq', 'alt'):
        return (kind, make_expr(rnd, depth - 1), make_expr(rnd, depth - 1))
    return (kind, make_expr(rnd, depth - 1))

def make_input(rnd):
    return ''.join(rnd.choice(ALPHABET) for _ in range(rnd.randint(0, 8)))


def to_node(expr):
    kind = expr[0]
    if kind == 'lit':
        return literal(expr[1])
    elif kind == 'seq':
        return to_node(expr[1]) * to_node(expr[2])
    elif kind == 'alt':
        return to_node(expr[1]) | to_node(expr[2])
    else:
        combinator = {'many': many, 'many1': many1, 'maybe': maybe,
                      'and': followed_by, 'not': not_followed_by}[kind]
        return combinator(to_node(expr[1]))


def interpret(expr, s, i):
    """Return the position after matching `expr` at `i`, or `None`."""
    kind = expr[0]
    if kind == 'lit':
        return i + len(expr[1]) if s.startswith(expr[1], i) else None
    elif kind == 'seq':
        j = interpret(expr[1], s, i)
        return None if j is None else interpret(expr[2], s, j)
    elif kind == 'alt':
        j = interpret(expr[1], s, i)
        return interpret(expr[2], s, i) if j is None else j
    elif kind in ('many', 'many1'):
        count = 0
        while True:
            j = interpret(expr[1], s, i)
            if j is None:
                break
            count += 1
            if j == i:
                break
            i = j
        if kind == 'many1' and count == 0:
            return None
        return i
    elif kind == 'maybe':
        j = interpret(expr[1], s, i)
        return i if j is None else j
    elif kind == 'and':
        return None if interpret(expr[1], s, i) is None else i
    elif kind == 'not':
        return i if interpret(expr[1], s, i) is None else None


@pytest.mark.parametrize('seed', range(N_TESTS))
def test_combinators(seed):
    rnd = random.Random(seed)
    expr = make_expr(rnd, 4)
    node = to_node(expr)
    for _ in range(N_INPUTS):
        s = make_input(rnd)
        result = try_parse(s, node)
        expected = interpret(expr, s, 0)
        assert (None if result is None else result.position) == expected, \
            (expr, s)


@pytest.mark.parametrize('seed', range(N_TESTS // 4))
def test_left_recursion(seed):
    # ``r = r x | y`` matches the same as ``y x*``
    # as long as `x` cannot match the empty string.
    rnd = random.Random(seed)
    x = make_input(rnd)[:3] or 'a'
    y = make_input(rnd)[:3] or 'b'
    r = recursive()
    r.rec = r * x | y
    equivalent = literal(y) * many(x)
    for _ in range(N_INPUTS):
        s = y + ''.join(rnd.choice([x, x, ALPHABET]) for _ in range(3))
        result = try_parse(s, r)
        expected = try_parse(s, equivalent)
        assert result == expected, (x, y, s)
