# -*- coding: utf-8; -*-

import io

import pytest

from pegrow import char_range, parse, recursive
from pegrow.reports import formats, html_report, text_report


@pytest.fixture
def result():
    digit = 'num' << char_range('0', '9')
    expr = recursive()
    expr.rec = 'add' << expr * '+' * digit | digit
    return parse('1+2+3 and\nthe rest', expr)


def test_text_report(result):
    buf = io.BytesIO()
    text_report(result, buf)
    assert buf.getvalue().decode('utf-8').splitlines() == [
        'add 0-5 1+2+3',
        '  add 0-3 1+2',
        '    num 0-1 1',
        '    num 2-3 2',
        '  num 4-5 3',
        '-- not parsed:  and\\nthe rest',
    ]


def test_text_report_bytes():
    buf = io.BytesIO()
    text_report(parse(b'7\xff', 'digit' << char_range('0', '9')), buf)
    assert buf.getvalue().decode('utf-8').splitlines() == [
        'digit 0-1 7',
        '-- not parsed: \xff',
    ]


def test_text_report_long_match():
    buf = io.BytesIO()
    text_report(parse('x' * 100, 'xs' << char_range('x', 'x') * 'x' * 'x'),
                buf)
    assert buf.getvalue() == b'xs 0-3 xxx\n-- not parsed: ' + \
        b'x' * 37 + b'...\n'


def test_html_report(result):
    buf = io.BytesIO()
    html_report(result, buf)
    out = buf.getvalue()
    assert out.count(b'class="match"') == 5
    assert b'data-tag="add"' in out
    assert b'data-tag="num"' in out
    assert b'Parsed 5 of 18.' in out
    assert b'the rest' in out
    assert b'name="generator"' in out


def test_html_report_whole_input():
    buf = io.BytesIO()
    html_report(parse('<5>', '<' * ('n' << char_range('0', '9')) * '>'), buf,
                title='digits')
    out = buf.getvalue()
    assert b'<title>digits</title>' in out
    assert b'&lt;<span ' in out
    assert b'data-tag="n"' in out
    assert b'>5</span>&gt;' in out
    assert b'class="unparsed"' not in out


def test_formats():
    assert formats['text'] is text_report
    assert formats['html'] is html_report
