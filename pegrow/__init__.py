# -*- coding: utf-8; -*-

from pegrow.__metadata__ import version as __version__
from pegrow.context import Capture, Context
from pegrow.parse import (GrammarError, Grammar, LeftRecursionError,
                          ParseError, ParseResult, Rule, UndefinedRuleError,
                          anything, auto, capture, char_range, char_set,
                          empty, eof, fill_names, followed_by, literal, many,
                          many1, maybe, named, not_followed_by, parse,
                          recursive, token, try_parse)
from pegrow.reports import html_report, text_report
from pegrow.tree import MatchNode, build_tree

__all__ = [
    'Capture',
    'Context',
    'Grammar',
    'GrammarError',
    'LeftRecursionError',
    'MatchNode',
    'ParseError',
    'ParseResult',
    'Rule',
    'UndefinedRuleError',
    'anything',
    'auto',
    'build_tree',
    'capture',
    'char_range',
    'char_set',
    'empty',
    'eof',
    'fill_names',
    'followed_by',
    'html_report',
    'literal',
    'many',
    'many1',
    'maybe',
    'named',
    'not_followed_by',
    'parse',
    'recursive',
    'text_report',
    'token',
    'try_parse',
]
