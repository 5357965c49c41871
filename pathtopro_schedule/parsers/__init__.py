"""
Parsers sub-package for pathtopro-schedule.

Turns the HTML table fragments found by the navigator into raw schedule
rows.

- base.py defines ``RawRecord`` and the ``BaseParser`` ABC.
- table.py implements ``TableFragmentParser`` for the ``<table>`` markup
  produced by the page's rich text editor.
"""

from pathtopro_schedule.parsers.base import BaseParser, RawRecord
from pathtopro_schedule.parsers.table import TableFragmentParser, parse_fragment

__all__ = ["BaseParser", "RawRecord", "TableFragmentParser", "parse_fragment"]
