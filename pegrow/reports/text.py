# -*- coding: utf-8; -*-

import codecs
from functools import singledispatch

from pegrow.util.text import ellipsize, force_unicode, printable


def text_report(result, buf):
    """Write the matches of a parse as an indented plain-text tree.

    Every line shows the capture tag, the span, and an excerpt of
    the matched input.

    :param result:
        A :class:`~pegrow.parse.ParseResult`.

    :param buf:
        The file (or file-like object) to which the report will be written.
        It must be opened in binary mode (not text).

    """
    f = codecs.getwriter('utf-8')(buf)
    for node in result.tree():
        _write_node(result, node, 0, f)
    if result.position < len(result.data):
        f.write('-- not parsed: %s\n' %
                _excerpt(result.data[result.position:]))


def _write_node(result, node, depth, f):
    f.write('%s%s %d-%d %s\n' % ('  ' * depth, force_unicode(node.tag),
                                 node.start, node.end,
                                 _excerpt(result.data[node.start:node.end])))
    for child in node.children:
        _write_node(result, child, depth + 1, f)


def _excerpt(chunk):
    # The number 40 leaves room for deep indentation within 79 columns.
    return ellipsize(printable(_chunk_to_text(chunk).replace('\n', '\\n')),
                     40)


@singledispatch
def _chunk_to_text(chunk):
    return ' '.join(force_unicode(token) for token in chunk)

@_chunk_to_text.register(str)
def _str_to_text(chunk):
    return chunk

@_chunk_to_text.register(bytes)
def _bytes_to_text(chunk):
    return force_unicode(chunk)
