# -*- coding: utf-8; -*-

from functools import singledispatch
import pkgutil

import dominate
import dominate.tags as H
from dominate.util import text as text_node

from pegrow.__metadata__ import version
from pegrow.util.text import force_unicode, printable


css_code = pkgutil.get_data('pegrow.reports', 'html.css').decode('utf-8')


def html_report(result, buf, title='pegrow parse'):
    """Generate an HTML page showing the input with its matches marked up.

    Every match becomes a ``span`` with the ``match`` class,
    its tag in the ``data-tag`` and ``title`` attributes.
    Nested matches become nested spans.

    :param result:
        A :class:`~pegrow.parse.ParseResult`.

    :param buf:
        The file (or file-like object) to which the report will be written.
        It must be opened in binary mode (not text).

    """
    document = dominate.document(title=title)
    _common_meta(document)
    with document:
        H.h1(title)
        with H.pre(_class='parsed-input'):
            # Dominate defaults to ``__pretty=False`` for ``pre``,
            # so the spans don't introduce any whitespace.
            _render_nodes(result.data, result.tree(), 0, result.position)
            _piece_to_html(result.data[result.position:])
        if result.position < len(result.data):
            H.p('Parsed %d of %d.' % (result.position, len(result.data)),
                _class='unparsed')
    buf.write(document.render().encode('utf-8'))


def _common_meta(document):
    with document:
        H.attr(lang='en')
    with document.head:
        H.meta(charset='utf-8')
        H.meta(name='generator', content='pegrow %s' % version)
        H.style(type='text/css').add_raw_string(css_code)


def _render_nodes(data, nodes, start, end):
    i = start
    for node in nodes:
        _piece_to_html(data[i:node.start])
        tag = printable(force_unicode(node.tag))
        with H.span(_class='match', title=tag, **{'data-tag': tag}):
            _render_nodes(data, node.children, node.start, node.end)
        i = node.end
    _piece_to_html(data[i:end])


@singledispatch
def _piece_to_html(piece):
    if len(piece) > 0:
        text_node(' '.join(printable(force_unicode(token))
                           for token in piece))

@_piece_to_html.register(str)
def _text_to_html(piece):
    if piece:
        text_node(printable(piece))

@_piece_to_html.register(bytes)
def _bytes_to_html(piece):
    if piece:
        text_node(printable(force_unicode(piece)))
