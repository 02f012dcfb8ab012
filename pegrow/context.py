# -*- coding: utf-8; -*-

"""The mutable state of one parse.

A :class:`Context` is created for every top-level parse and thrown away
afterwards. It holds the input, the current position, the captures made so
far, and the left-recursion bookkeeping of every :class:`~pegrow.parse.Rule`
that has been entered. Keeping that bookkeeping here, keyed by rule identity,
rather than on the rules themselves, is what lets one grammar be reused for
any number of parses.

Every parser node that may fail after changing the context takes a
:meth:`Context.state` snapshot first and hands it back to
:meth:`Context.restore` on failure.
"""

from collections import namedtuple
import enum


class Mode(enum.Enum):

    """How a rule reacts when it is re-entered at the position it started at.

    ``normal`` raises the left-recursion signal,
    ``reject`` fails (while a seed is being looked for),
    ``accept`` succeeds without consuming input (while the seed is growing).
    """

    normal = 0
    reject = 1
    accept = 2


RecursionRecord = namedtuple('RecursionRecord', ('position', 'mode', 'origin'))

ParseState = namedtuple('ParseState',
                        ('position', 'n_captures', 'n_stand_ins'))

Capture = namedtuple('Capture', ('tag', 'start', 'end'))

# A zero-width success of `rule` at `position`, standing in for the input
# from `origin` to `position` that the rule has already consumed.
StandIn = namedtuple('StandIn', ('rule', 'position', 'origin'))


class Context(object):

    def __init__(self, data, name=None):
        """
        :param data:
            The input: a Unicode string, a bytestring,
            or any other sequence of tokens.
        :param name:
            Name of the input (such as a file name), or `None`.
        """
        self.data = data
        self.name = name
        self.position = 0
        self.end = len(data)
        self.captures = []
        self.stand_ins = []
        self._records = {}
        self._rejections = 0

    def __repr__(self):
        return '<Context %s at %d/%d>' % (self.name or hex(id(self)),
                                          self.position, self.end)

    @property
    def at_end(self):
        return self.position >= self.end

    def peek(self):
        """The unit at the current position. Only valid if not `at_end`."""
        return self.data[self.position]

    def state(self):
        return ParseState(self.position, len(self.captures),
                          len(self.stand_ins))

    def restore(self, state):
        self.position = state.position
        del self.captures[state.n_captures:]
        del self.stand_ins[state.n_stand_ins:]

    ###########################################################################
    # Left-recursion bookkeeping.

    def record(self, rule):
        """The :class:`RecursionRecord` of `rule`, or `None` if not entered."""
        return self._records.get(id(rule))

    def set_record(self, rule, record):
        if record is None:
            self._records.pop(id(rule), None)
        else:
            self._records[id(rule)] = record

    def reject(self):
        """Count a failure forced by a rule in ``reject`` mode."""
        self._rejections += 1
        return False

    @property
    def rejections(self):
        return self._rejections

    def stand_in(self, rule, origin):
        self.stand_ins.append(StandIn(rule, self.position, origin))

    def find_stand_in(self, since, position, rule=None):
        """Find a stand-in made at `position` after the first `since` ones."""
        for stand_in in self.stand_ins[since:]:
            if stand_in.position == position and \
                    (rule is None or stand_in.rule is rule):
                return stand_in
        return None

    ###########################################################################
    # Captures.

    def capture(self, tag, start, end):
        self.captures.append(Capture(tag, start, end))

    def location(self, position):
        """Return the 1-based ``(line, column)`` of `position`.

        Lines are only counted in string and bytestring input;
        for other sequences, everything is on line 1.
        """
        if isinstance(self.data, bytes):
            newline = b'\n'
        elif isinstance(self.data, str):
            newline = '\n'
        else:
            return (1, position + 1)
        line = self.data.count(newline, 0, position) + 1
        last = self.data.rfind(newline, 0, position)
        return (line, position - last)
