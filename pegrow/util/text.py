# -*- coding: utf-8; -*-

import re
import string


CHAR_NAMES = {
    ord('\t'): 'tab',
    ord('\n'): 'LF',
    ord('\r'): 'CR',
    ord(' '): 'space',
    ord('"'): 'double quote (")',
    ord("'"): "single quote (')",
    ord(','): 'comma (,)',
    ord('.'): 'period (.)',
    ord(';'): 'semicolon (;)',
    ord('-'): 'dash (-)',
}


def _char_ranges(points, as_hex=False):
    intervals = []
    min_ = max_ = None
    for point in points:
        if max_ == point - 1:
            max_ = point
        else:
            if min_ is not None:
                intervals.append((min_, max_))
            min_ = max_ = point
    if min_ is not None:
        intervals.append((min_, max_))
    if as_hex:
        show = lambda point: '%#04x' % point
    else:
        show = chr
    return [
        ('%s' % show(p1)) if p1 == p2 else ('%s–%s' % (show(p1), show(p2)))
        for (p1, p2) in intervals]


def format_chars(points):
    """
    >>> print(format_chars([0x00, 0x04, 0x05, 0x06, 0x07, 0x20,
    ...                     0x30, 0x31, 0x32, 0x41, 0x42, 0x43]))
    A–C or 0–2 or space or 0x00 or 0x04–0x07

    >>> print(format_chars([ord('\\t'), ord(' ')]))
    tab or space

    >>> print(format_chars([ord(c) for c in '!#$+.0123abcde']))
    a–e or 0–3 or period (.) or !#$+

    >>> print(format_chars([ord(c) for c in 'VWXYZabc']))
    V–Z or a–c
    """
    (letters, digits, named, visible, other) = ([], [], [], [], [])
    for point in sorted(points):
        c = chr(point)
        if c in string.ascii_letters:
            letters.append(point)
        elif c in string.digits:
            digits.append(point)
        elif point in CHAR_NAMES:
            named.append(point)
        elif 0x21 <= point < 0x7F:
            visible.append(point)
        else:
            other.append(point)
    pieces = (_char_ranges(letters) + _char_ranges(digits) +
              [CHAR_NAMES[point] for point in named] +
              [''.join(chr(point) for point in visible)] +
              _char_ranges(other, as_hex=True))
    return ' or '.join(piece for piece in pieces if piece)


def force_unicode(x):
    """
    >>> print(force_unicode(b'caf\\xe9'))
    café
    >>> print(force_unicode(42))
    42
    """
    if isinstance(x, bytes):
        return x.decode('iso-8859-1')
    else:
        return str(x)


def ellipsize(s, max_length=60):
    """
    >>> print(ellipsize('lorem ipsum dolor sit amet', 40))
    lorem ipsum dolor sit amet
    >>> print(ellipsize('lorem ipsum dolor sit amet', 20))
    lorem ipsum dolor...
    """
    if len(s) > max_length:
        ellipsis = '...'
        return s[:(max_length - len(ellipsis))] + ellipsis
    else:
        return s


def printable(s):
    # Based on `XML 1.0 section 2.2 <https://www.w3.org/TR/xml/#charsets>`_,
    # with the addition of U+0085.
    return re.sub(
        pattern=('[\u0000-\u0008\u000B\u000C\u000E-\u001F'
                 '\u007F-\u009F\uD800-\uDFFF\uFDD0-\uFDEF\uFFFE\uFFFF]'),
        repl='\N{REPLACEMENT CHARACTER}',
        string=s
    )
