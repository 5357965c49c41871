"""
Schedule table fragment parser.

Each content block of the schedule page holds one HTML table written by
the page's rich text editor::

    <table>
      <thead>...</thead>
      <tbody>
        <tr>
          <td class="dateBody">03-15-2024</td>
          <td class="tournamentBody">Summer Showdown</td>
          <td class="regionBody">NA</td>
          <td class="timeBody">6:00 PM PT</td>
          <td class="broadcastBody">Twitch</td>
        </tr>
      </tbody>
    </table>

The editor emits well-formed markup except for bare ``&`` characters
(``Blizzard & Co``), so the fragment is parsed with a strict XML parser
after escaping those. ``<thead>`` is never looked at. Cells are matched
to fields by their ``class`` attribute, not by column position.
"""

from __future__ import annotations

import logging
import re

from lxml import etree

from pathtopro_schedule.exceptions import MalformedFragment
from pathtopro_schedule.parsers.base import BaseParser, RawRecord

logger = logging.getLogger(__name__)

# '&' that does not start one of XML's predefined or numeric references
_BARE_AMPERSAND = re.compile(r"&(?!(?:amp|lt|gt|quot|apos|#[0-9]+|#x[0-9a-fA-F]+);)")

# json.loads keeps unpaired \uD800-\uDFFF escapes as lone surrogates
_LONE_SURROGATE = re.compile("[\ud800-\udfff]")

# Synthetic container so that content after the first element parses
_WRAPPER = "fragment"

# Cell class label -> RawRecord field
CELL_FIELDS: dict[str, str] = {
    "dateBody": "date",
    "tournamentBody": "tournament",
    "regionBody": "region",
    "timeBody": "time",
    "broadcastBody": "broadcast",
}


def escape_bare_ampersands(fragment: str) -> str:
    """Replace every bare ``&`` with ``&amp;``, leaving entity references alone."""
    return _BARE_AMPERSAND.sub("&amp;", fragment)


def _local_name(element: etree._Element) -> str:
    return etree.QName(element).localname


def _cell_text(cell: etree._Element) -> str:
    return "".join(cell.itertext())


def _row_to_record(row: etree._Element) -> RawRecord:
    """Build a RawRecord from one ``<tr>``; for repeated labels the last cell wins."""
    cells: dict[str, str] = {}
    for cell in row:
        if not isinstance(cell.tag, str) or _local_name(cell) != "td":
            continue
        cells[cell.get("class", "")] = _cell_text(cell)
    return RawRecord(
        **{field: cells.get(label, "") for label, field in CELL_FIELDS.items()}
    )


class TableFragmentParser(BaseParser):
    """Parses ``<table>`` fragments into RawRecords.

    The XML parser is strict (``recover=False``): unbalanced tags,
    undefined entities or a first element other than ``<table>`` raise
    ``MalformedFragment``. There is no lenient fallback. Text before the
    table and well-formed siblings after it (an editor's trailing
    ``<p>`` note) are ignored; only the first element is read.
    """

    def __init__(self) -> None:
        self._parser = etree.XMLParser(
            recover=False,
            resolve_entities=False,
            no_network=True,
        )

    def parse(self, fragment: str) -> list[RawRecord]:
        """Parse one table fragment.

        Args:
            fragment: The raw ``articleRawHtml`` string.

        Returns:
            One RawRecord per body row, in document order. A table without
            ``<tbody>`` yields an empty list.

        Raises:
            MalformedFragment: If the fragment is not a well-formed table.
        """
        if not fragment.strip():
            raise MalformedFragment("Table fragment is empty")
        escaped = escape_bare_ampersands(_LONE_SURROGATE.sub("\ufffd", fragment))
        wrapped = f"<{_WRAPPER}>{escaped}</{_WRAPPER}>"
        try:
            container = etree.fromstring(wrapped.encode("utf-8"), self._parser)
        except etree.XMLSyntaxError as exc:
            raise MalformedFragment(f"Table fragment is not well-formed: {exc}") from exc

        root = next((el for el in container if isinstance(el.tag, str)), None)
        if root is None:
            raise MalformedFragment("Table fragment contains no element")
        if _local_name(root) != "table":
            raise MalformedFragment(
                f"Expected <table> as fragment root, found <{_local_name(root)}>"
            )

        bodies = [
            child for child in root
            if isinstance(child.tag, str) and _local_name(child) == "tbody"
        ]
        if not bodies:
            logger.warning("Table fragment has no <tbody>; no rows extracted")
            return []

        records: list[RawRecord] = []
        for body in bodies:
            for row in body:
                if isinstance(row.tag, str) and _local_name(row) == "tr":
                    records.append(_row_to_record(row))
        logger.debug("Parsed %d row(s) from table fragment", len(records))
        return records


def parse_fragment(fragment: str) -> list[RawRecord]:
    """Parse one table fragment with a fresh ``TableFragmentParser``."""
    return TableFragmentParser().parse(fragment)
