# -*- coding: utf-8; -*-

"""A library of PEG parser combinators that supports left recursion.

A grammar is built out of :class:`Node` objects with Python operators::

    digit = char_range('0', '9')                    > auto
    expr = recursive()                              > auto
    expr.rec = 'add' << expr * '+' * digit | digit

Here ``*`` is a sequence, ``|`` is an ordered choice (the first alternative
that matches wins), and ``'add' << ...`` captures the matched span under the
tag ``'add'``. Plain strings are turned into literals. :func:`many`,
:func:`many1`, :func:`maybe`, :func:`followed_by` and :func:`not_followed_by`
(also ``~node``) complete the set of combinators.

Only a :class:`Rule` may be referenced before it is defined, and so only
rules can form cycles. Rules are also where left recursion is detected:
when a rule is entered again at the same position, without any input
consumed in between, it raises the :exc:`LeftRecursion` signal.
The signal passes through every node except :class:`Choice`, which
resolves it by growing a seed:

1. The rule is put into ``reject`` mode, so re-entering it fails, and
   the remaining alternatives are tried to find a non-recursive parse
   (the seed). If there is none, the signal goes on to the next choice up.
2. The rule is put into ``accept`` mode at the end of the seed, where
   re-entering it succeeds without consuming anything: it stands in for
   what has been parsed so far. All alternatives are tried again from there,
   and every time one of them uses the stand-in and gets further,
   the parse has grown. This repeats until it stops growing.

So ``1+2+3`` is parsed as ``1``, then ``1+2``, then ``1+2+3``, and the
``'add'`` captures come out left-associative: ``((1+2)+3)``.

All state of a parse lives in a :class:`~pegrow.context.Context`, so
the same grammar can be used for any number of parses.
"""

from collections import namedtuple
import logging

from bitstring import BitArray, Bits

from pegrow.context import Context, Mode, RecursionRecord
from pegrow.tree import build_tree
from pegrow.util.text import format_chars


log = logging.getLogger('pegrow')

#: Set to `True` to log every rule entry and its result at DEBUG level.
debug = False


###############################################################################
# The main interface to parsing.

def parse(data, symbol, to_end=False, name=None):
    """Parse `data` as `symbol`.

    :param data:
        A Unicode string, a bytestring, or another sequence of tokens.
    :param symbol:
        The :class:`Node` (normally a :class:`Rule`) to parse as.
    :param to_end:
        If `True`, the entire `data` must be consumed.
    :param name:
        Name of the input stream (file), to be included in errors.

    :return: A :class:`ParseResult`.

    :raises:
        :exc:`ParseError` if `data` does not match,
        :exc:`LeftRecursionError` if the grammar is left-recursive
        in a way that cannot be resolved.
    """
    ctx = Context(data, name)
    if not _run(ctx, as_node(symbol)):
        raise ParseError(name, ctx.position)
    if to_end and not ctx.at_end:
        raise ParseError(name, ctx.position)
    return ParseResult(data, ctx.position, list(ctx.captures))


def try_parse(data, symbol, to_end=False, name=None):
    """Like :func:`parse`, but return `None` instead of raising `ParseError`.

    Grammar errors are still raised.
    """
    try:
        return parse(data, symbol, to_end, name)
    except ParseError:
        return None


def _run(ctx, node):
    try:
        return node.parse(ctx)
    except LeftRecursion as signal:
        if not signal.has_base_case:
            log.debug('unresolved left recursion on %r at %d',
                      signal.rule, signal.position)
            raise LeftRecursionError(signal.rule)
        # Some choice did have non-recursive alternatives,
        # they just didn't match this input.
        return False


class ParseResult(namedtuple('ParseResult', ('data', 'position', 'captures'))):

    """The outcome of a successful parse.

    :ivar data: The input.
    :ivar position: Where the parse stopped.
    :ivar captures:
        List of :class:`~pegrow.context.Capture`, in the order in which
        their matches completed (so nested captures come before the capture
        that contains them).
    """

    __slots__ = ()

    def __repr__(self):
        return 'ParseResult(position=%r, captures=%r)' % (self.position,
                                                          self.captures)

    def text(self, capture):
        return self.data[capture.start:capture.end]

    def tree(self):
        """The captures as a list of :class:`~pegrow.tree.MatchNode`."""
        return build_tree(self.captures)


class ParseError(Exception):

    def __init__(self, name, position):
        """
        :param name: Name of the input stream (file) with the error, or `None`.
        :param position: Offset at which the parse stopped.
        """
        super(ParseError, self).__init__(
            'unexpected input at position %r' % position)
        self.name = name
        self.position = position


class GrammarError(Exception):

    """The grammar itself is broken, regardless of the input."""


class LeftRecursionError(GrammarError):

    def __init__(self, rule):
        super(LeftRecursionError, self).__init__(
            'left recursion in %r has no non-recursive alternative' % rule)
        self.rule = rule


class UndefinedRuleError(GrammarError):

    def __init__(self, rule):
        super(UndefinedRuleError, self).__init__(
            '%r is used but never defined' % rule)
        self.rule = rule


class LeftRecursion(Exception):

    """Raised when a rule is re-entered without consuming any input.

    This is not a parse failure but a signal to the nearest enclosing
    :class:`Choice`. Other nodes restore their state and let it through.
    """

    def __init__(self, rule, position):
        super(LeftRecursion, self).__init__(rule, position)
        self.rule = rule
        self.position = position
        # Set by a choice that had alternatives which failed on their own,
        # not because they ran into the rejected rule. If this stays `False`
        # all the way up, the grammar can never terminate.
        self.has_base_case = False


###############################################################################
# Combinators.


class Node(object):

    """A parsing expression.

    Subclasses implement :meth:`parse`, which either advances `ctx`
    and returns `True`, or leaves `ctx` as it was and returns `False`.
    """

    children = ()

    def parse(self, ctx):
        raise NotImplementedError

    def __gt__(self, name):
        """``node > named('foo')`` turns `node` into a rule named ``foo``.

        See also :func:`auto` and :func:`fill_names`.
        """
        return Rule(self, name=name)

    def __or__(self, other):
        return Choice(_alternatives(self) + _alternatives(as_node(other)))

    def __ror__(self, other):
        return Choice(_alternatives(as_node(other)) + _alternatives(self))

    def __mul__(self, other):
        return Sequence(_items(self) + _items(as_node(other)))

    def __rmul__(self, other):
        return Sequence(_items(as_node(other)) + _items(self))

    def __rlshift__(self, tag):
        """``tag << node`` captures the span matched by `node` as `tag`."""
        return Match(tag, self)

    def __invert__(self):
        return Not(self)


def _alternatives(node):
    return node.alternatives if isinstance(node, Choice) else (node,)

def _items(node):
    return node.children if isinstance(node, Sequence) else (node,)


class Sequence(Node):

    def __init__(self, children):
        self.children = tuple(children)

    def __repr__(self):
        return 'Sequence(%s)' % ', '.join(repr(c) for c in self.children)

    def parse(self, ctx):
        state = ctx.state()
        try:
            for child in self.children:
                if not child.parse(ctx):
                    ctx.restore(state)
                    return False
        except LeftRecursion:
            ctx.restore(state)
            raise
        return True


class Choice(Node):

    def __init__(self, alternatives):
        self.alternatives = tuple(alternatives)

    @property
    def children(self):
        return self.alternatives

    def __repr__(self):
        return 'Choice(%s)' % ', '.join(repr(a) for a in self.alternatives)

    def parse(self, ctx):
        return self._parse_from(ctx, 0)

    def _parse_from(self, ctx, index, growing=None, signal=None):
        # Try alternatives starting with `index`. While `growing` a rule,
        # only alternatives that use its stand-in count as matches.
        failed_alone = False
        for i in range(index, len(self.alternatives)):
            state = ctx.state()
            rejections = ctx.rejections
            try:
                ok = self.alternatives[i].parse(ctx)
            except LeftRecursion as other:
                ctx.restore(state)
                try:
                    resolved = self._resolve(ctx, i, other)
                except LeftRecursion as unresolved:
                    if failed_alone:
                        unresolved.has_base_case = True
                    raise
                if resolved and self._grew(ctx, state, growing):
                    return True
                ctx.restore(state)
                return False
            if ok and self._grew(ctx, state, growing):
                return True
            ctx.restore(state)
            if not ok and ctx.rejections == rejections:
                failed_alone = True
                if signal is not None:
                    signal.has_base_case = True
        return False

    @staticmethod
    def _grew(ctx, state, growing):
        if growing is None:
            return True
        return ctx.find_stand_in(state.n_stand_ins, state.position,
                                 growing) is not None

    def _resolve(self, ctx, index, signal):
        # The alternative at `index` ran into left recursion on `rule`.
        rule = signal.rule
        origin = signal.position
        saved = ctx.record(rule)
        log.debug('left recursion on %r at %d', rule, origin)
        try:
            ctx.set_record(rule, RecursionRecord(origin, Mode.reject, origin))
            if not self._parse_from(ctx, index + 1, signal=signal):
                log.debug('no seed for %r at %d', rule, origin)
                raise signal

            best = ctx.state()
            log.debug('seed for %r: %d to %d', rule, origin, best.position)
            while not ctx.at_end:
                ctx.set_record(rule, RecursionRecord(ctx.position,
                                                     Mode.accept, origin))
                if not self._parse_from(ctx, 0, growing=rule) or \
                        ctx.position <= best.position:
                    ctx.restore(best)
                    break
                best = ctx.state()
                log.debug('%r grew to %d', rule, best.position)
            return True
        finally:
            ctx.set_record(rule, saved)


class Loop(Node):

    """Zero or more repetitions of `inner`."""

    min_count = 0

    def __init__(self, inner):
        self.inner = inner

    @property
    def children(self):
        return (self.inner,)

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.inner)

    def parse(self, ctx):
        start = ctx.state()
        count = 0
        while True:
            state = ctx.state()
            try:
                ok = self.inner.parse(ctx)
            except LeftRecursion:
                ctx.restore(start)
                raise
            if not ok:
                ctx.restore(state)
                break
            count += 1
            if ctx.position == state.position:
                # Matched nothing; it would match nothing forever.
                break
        if count < self.min_count:
            ctx.restore(start)
            return False
        return True


class Loop1(Loop):

    """One or more repetitions of `inner`."""

    min_count = 1


class _Wrapper(Node):

    def __init__(self, inner):
        self.inner = inner

    @property
    def children(self):
        return (self.inner,)

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.inner)

    def _attempt(self, ctx):
        state = ctx.state()
        try:
            return state, self.inner.parse(ctx)
        except LeftRecursion:
            ctx.restore(state)
            raise


class Optional(_Wrapper):

    def parse(self, ctx):
        (state, ok) = self._attempt(ctx)
        if not ok:
            ctx.restore(state)
        return True


class And(_Wrapper):

    """Succeeds if `inner` matches here, but never consumes input."""

    def parse(self, ctx):
        (state, ok) = self._attempt(ctx)
        ctx.restore(state)
        return ok


class Not(_Wrapper):

    """Succeeds if `inner` does not match here; never consumes input."""

    def parse(self, ctx):
        (state, ok) = self._attempt(ctx)
        ctx.restore(state)
        return not ok


class Match(_Wrapper):

    """Records a :class:`~pegrow.context.Capture` of what `inner` matched."""

    def __init__(self, tag, inner):
        super(Match, self).__init__(as_node(inner))
        self.tag = tag

    def __repr__(self):
        return 'Match(%r, %r)' % (self.tag, self.inner)

    def parse(self, ctx):
        (state, ok) = self._attempt(ctx)
        if not ok:
            return False
        start = state.position
        # If `inner` began with a left-recursive rule's stand-in, the match
        # really begins where that rule began.
        stand_in = ctx.find_stand_in(state.n_stand_ins, state.position)
        if stand_in is not None:
            start = stand_in.origin
        ctx.capture(self.tag, start, ctx.position)
        return True


class Rule(Node):

    """A named, possibly recursive, grammar rule.

    A rule can be created before its expression is known, and defined later
    by assigning to :attr:`rec`::

        value = recursive()                             > auto
        array = '[' * maybe(value * many(',' * value)) * ']'
        value.rec = array | number

    """

    def __init__(self, expr=None, name=None):
        self.name = name
        self._expr = None if expr is None else as_node(expr)

    def __repr__(self):
        return '<Rule %s>' % (self.name or hex(id(self)))

    def __gt__(self, name):
        if self.name is None:
            self.name = name
            return self
        return super(Rule, self).__gt__(name)

    @property
    def expr(self):
        return self._expr

    @property
    def children(self):
        return () if self._expr is None else (self._expr,)

    def define(self, expr):
        if self._expr is not None:
            raise GrammarError('%r is already defined' % self)
        self._expr = as_node(expr)

    rec = property(None, define)

    def parse(self, ctx):
        if self._expr is None:
            raise UndefinedRuleError(self)

        record = ctx.record(self)
        if record is not None and record.position == ctx.position:
            if record.mode is Mode.normal:
                raise LeftRecursion(self, ctx.position)
            elif record.mode is Mode.reject:
                return ctx.reject()
            else:
                ctx.stand_in(self, record.origin)
                return True

        if debug:
            log.debug('trying %r at %d', self, ctx.position)
        ctx.set_record(self, RecursionRecord(ctx.position, Mode.normal,
                                             ctx.position))
        try:
            ok = self._expr.parse(ctx)
        finally:
            ctx.set_record(self, record)
        if debug:
            log.debug('%s %r, now at %d', 'matched' if ok else 'failed',
                      self, ctx.position)
        return ok


recursive = Rule


class Grammar(object):

    """A graph of rules reachable from the `entry` rule."""

    def __init__(self, entry):
        self.entry = entry if isinstance(entry, Rule) else Rule(entry)
        self._checked = False

    def __repr__(self):
        return '<Grammar %r>' % self.entry

    @property
    def rules(self):
        """All rules reachable from :attr:`entry`, depth-first."""
        rules = []
        seen = set()
        stack = [self.entry]
        while stack:
            node = stack.pop()
            if id(node) in seen:
                continue
            seen.add(id(node))
            if isinstance(node, Rule):
                rules.append(node)
            stack.extend(reversed(node.children))
        return rules

    def check(self):
        for rule in self.rules:
            if rule.expr is None:
                raise UndefinedRuleError(rule)
        self._checked = True

    def parse(self, data, to_end=True, name=None):
        if not self._checked:
            self.check()
        return parse(data, self.entry, to_end, name)


###############################################################################
# Terminals.


def _code(unit):
    return unit if isinstance(unit, int) else ord(unit)

def _unit_code(unit):
    # Units of token input may be anything; only characters and octets
    # have a code point.
    if isinstance(unit, int):
        return unit
    if isinstance(unit, str) and len(unit) == 1:
        return ord(unit)
    return None


class Terminal(Node):

    """Matches one character (or byte) from a set.

    Code points below 256 are kept in a bit array, the rest in a set.
    """

    def __init__(self, bits=None, extra=frozenset()):
        self.bits = bits if bits is not None else Bits(length=256)
        self.extra = frozenset(extra)

    def __repr__(self):
        points = [i for (i, v) in enumerate(self.bits) if v]
        return '<Terminal %s>' % format_chars(points + sorted(self.extra))

    def match(self, unit):
        code = _unit_code(unit)
        if code is None:
            return False
        if code < 256:
            return self.bits[code]
        return code in self.extra

    def parse(self, ctx):
        if not ctx.at_end and self.match(ctx.peek()):
            ctx.position += 1
            return True
        return False

    def __or__(self, other):
        other = as_node(other)
        if isinstance(other, Terminal):
            return Terminal(self.bits | other.bits, self.extra | other.extra)
        else:
            return super(Terminal, self).__or__(other)

    def __sub__(self, other):
        other = as_node(other)
        return Terminal(self.bits ^ (self.bits & other.bits),
                        self.extra - other.extra)


class Range(Node):

    """Matches one character whose code point is from `min_` to `max_`."""

    def __init__(self, min_, max_):
        self.min = min_
        self.max = max_

    def __repr__(self):
        return '<Range %#x-%#x>' % (self.min, self.max)

    def parse(self, ctx):
        if ctx.at_end:
            return False
        code = _unit_code(ctx.peek())
        if code is not None and self.min <= code <= self.max:
            ctx.position += 1
            return True
        return False


class Literal(Node):

    """Matches a whole string, bytestring or tuple of tokens."""

    def __init__(self, value, case_sensitive=True):
        if not case_sensitive and not isinstance(value, (str, bytes)):
            raise TypeError('only strings can be matched case-insensitively, '
                            'not %r' % (value,))
        self.value = value
        self.case_sensitive = case_sensitive

    def __repr__(self):
        return 'Literal(%r)' % (self.value,)

    def parse(self, ctx):
        end = ctx.position + len(self.value)
        chunk = ctx.data[ctx.position:end]
        if isinstance(chunk, bytes) and isinstance(self.value, str):
            chunk = chunk.decode('iso-8859-1')
        elif isinstance(chunk, str) and isinstance(self.value, bytes):
            chunk = chunk.encode('iso-8859-1', 'replace')
        elif isinstance(chunk, list):
            chunk = tuple(chunk)
        if self.case_sensitive:
            ok = (chunk == self.value)
        else:
            ok = (chunk.lower() == self.value.lower())
        if ok:
            ctx.position = end
        return ok


class Token(Node):

    """Matches one unit of input for which `test` returns true."""

    def __init__(self, test, name=None):
        self.test = test
        self.name = name

    def __repr__(self):
        return '<Token %s>' % (self.name or self.test.__name__)

    def parse(self, ctx):
        if not ctx.at_end and self.test(ctx.peek()):
            ctx.position += 1
            return True
        return False


class Any(Node):

    def __repr__(self):
        return 'anything'

    def parse(self, ctx):
        if ctx.at_end:
            return False
        ctx.position += 1
        return True


class End(Node):

    def __repr__(self):
        return 'eof'

    def parse(self, ctx):
        return ctx.at_end


class Empty(Node):

    def __repr__(self):
        return 'empty'

    def parse(self, ctx):
        return True


empty = Empty()
anything = Any()
eof = End()


def octet_range(min_, max_):
    """Create a terminal that accepts code points `min_` to `max_` < 256."""
    bits = BitArray(length=256)
    for i in range(min_, max_ + 1):
        bits[i] = True
    return Terminal(bits=Bits(bits))

def octet(value):
    """Create a terminal that accepts only the `value` code point."""
    return octet_range(value, value)

def char_range(min_, max_):
    """Create a terminal that accepts characters from `min_` to `max_`."""
    (min_, max_) = (_code(min_), _code(max_))
    if max_ < 256:
        return octet_range(min_, max_)
    return Range(min_, max_)

def char_set(chars):
    """Create a terminal that accepts any one of `chars`."""
    bits = BitArray(length=256)
    extra = set()
    for c in chars:
        code = _code(c)
        if code < 256:
            bits[code] = True
        else:
            extra.add(code)
    return Terminal(Bits(bits), extra)

def literal(s, case_sensitive=True):
    """Create a symbol that parses the `s` string."""
    if isinstance(s, (str, bytes)) and len(s) == 1:
        c = chr(_code(s[0]))
        return char_set(c if case_sensitive else c.lower() + c.upper())
    return Literal(s, case_sensitive)

def token(value):
    """Create a symbol that parses one token equal to `value`."""
    def test(unit):
        return unit == value
    return Token(test, name=repr(value))

def as_node(x):
    if isinstance(x, Node):
        return x
    if isinstance(x, (str, bytes)):
        return literal(x)
    raise TypeError('cannot use %r as a parsing expression' % (x,))


###############################################################################
# Shorthands.


def many(inner):
    return Loop(as_node(inner))

def many1(inner):
    return Loop1(as_node(inner))

def maybe(inner):
    return Optional(as_node(inner))

def followed_by(inner):
    return And(as_node(inner))

def not_followed_by(inner):
    return Not(as_node(inner))

def capture(tag, inner):
    return Match(tag, inner)


class _AutoName(object):

    def __repr__(self):
        return '_AUTO'

_AUTO = _AutoName()


def named(name):
    return name

auto = named(_AUTO)


def fill_names(scope):
    """Process automatic names for all rules in `scope`.

    When we write::

      digits = many1(char_range('0', '9'))            > auto

    there is no way for `digits` to know its own name, unless we post-process
    it with this function, which takes names from `scope` (normally
    ``globals()`` of a grammar module) and writes them back into the rules.
    """
    for name, x in scope.items():
        if isinstance(x, Rule) and x.name is _AUTO:
            x.name = name.rstrip('_')
