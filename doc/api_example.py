import io
import logging

import pegrow
from pegrow import (auto, char_range, fill_names, many, many1, maybe,
                    recursive)

logging.basicConfig(level=logging.DEBUG)

ws = many(' ')
number = 'number' << many1(char_range('0', '9'))            > auto
term = recursive()                                          > auto
expr = recursive()                                          > auto
factor = number | '(' * ws * expr * ws * ')'                > auto
term.rec = ('mul' << term * ws * '*' * ws * factor |
            'div' << term * ws * '/' * ws * factor |
            factor)
expr.rec = ('add' << expr * ws * '+' * ws * term |
            'sub' << expr * ws * '-' * ws * term |
            maybe('-') * term)

fill_names(globals())

grammar = pegrow.Grammar(expr)
result = grammar.parse('1 + 2 * (3 - 4) / 5')

with io.open('report.html', 'wb') as f:
    pegrow.html_report(result, f)
buf = io.BytesIO()
pegrow.text_report(result, buf)
print(buf.getvalue().decode('utf-8'))
