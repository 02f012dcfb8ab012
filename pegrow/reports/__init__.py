# -*- coding: utf-8; -*-

from pegrow.reports.html import html_report
from pegrow.reports.text import text_report


formats = {
    'text': text_report,
    'html': html_report,
}
