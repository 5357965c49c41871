"""
Unit tests for the table fragment parser (pathtopro_schedule.parsers.table).

Covers row/field mapping, order preservation, missing and repeated cell
labels, bare ampersand escaping, and strict rejection of malformed markup.
"""

from __future__ import annotations

import pytest

from pathtopro_schedule.exceptions import MalformedFragment
from pathtopro_schedule.parsers import RawRecord, TableFragmentParser, parse_fragment
from pathtopro_schedule.parsers.table import escape_bare_ampersands
from tests.conftest import EMEA_ROW, KOREA_ROW, SHOWDOWN_ROW, make_table


class TestRowMapping:
    """Cells are mapped to fields by class label."""

    def test_single_row(self):
        records = parse_fragment(make_table([SHOWDOWN_ROW]))
        assert records == [
            RawRecord(
                date="03-15-2024",
                tournament="Summer Showdown",
                region="NA",
                time="6:00 PM PT",
                broadcast="Twitch",
            )
        ]

    def test_row_order_preserved(self):
        """Output order equals body order, not any date/time order."""
        records = parse_fragment(make_table([EMEA_ROW, KOREA_ROW, SHOWDOWN_ROW]))
        assert [r.tournament for r in records] == [
            "EMEA Open", "Contenders Korea", "Summer Showdown",
        ]

    def test_cell_order_does_not_matter(self):
        fragment = (
            "<table><tbody><tr>"
            '<td class="broadcastBody">Twitch</td>'
            '<td class="timeBody">6:00 PM PT</td>'
            '<td class="dateBody">03-15-2024</td>'
            "</tr></tbody></table>"
        )
        (record,) = parse_fragment(fragment)
        assert record.date == "03-15-2024"
        assert record.time == "6:00 PM PT"
        assert record.broadcast == "Twitch"

    def test_missing_cell_yields_empty_string(self):
        fragment = (
            "<table><tbody><tr>"
            '<td class="dateBody">03-15-2024</td>'
            '<td class="timeBody">6:00 PM PT</td>'
            "</tr></tbody></table>"
        )
        (record,) = parse_fragment(fragment)
        assert record.tournament == ""
        assert record.region == ""
        assert record.broadcast == ""

    def test_empty_row(self):
        (record,) = parse_fragment("<table><tbody><tr></tr></tbody></table>")
        assert record == RawRecord()

    def test_unmatched_labels_ignored(self):
        fragment = (
            "<table><tbody><tr>"
            '<td class="notesBody">Finals</td>'
            "<td>no class</td>"
            '<td class="regionBody">NA</td>'
            "</tr></tbody></table>"
        )
        (record,) = parse_fragment(fragment)
        assert record.region == "NA"
        assert record.tournament == ""

    def test_repeated_label_last_wins(self):
        fragment = (
            "<table><tbody><tr>"
            '<td class="regionBody">NA</td>'
            '<td class="regionBody">EMEA</td>'
            "</tr></tbody></table>"
        )
        (record,) = parse_fragment(fragment)
        assert record.region == "EMEA"

    def test_nested_markup_in_cell(self):
        fragment = (
            "<table><tbody><tr>"
            '<td class="broadcastBody"><a href="https://twitch.tv/x">Twitch</a> '
            "<strong>(EN)</strong></td>"
            "</tr></tbody></table>"
        )
        (record,) = parse_fragment(fragment)
        assert record.broadcast == "Twitch (EN)"

    def test_pretty_printed_table(self):
        fragment = """
<table>
  <tbody>
    <tr>
      <td class="dateBody">03-15-2024</td>
      <td class="regionBody">NA</td>
    </tr>
    <tr>
      <td class="dateBody">03-16-2024</td>
    </tr>
  </tbody>
</table>
"""
        records = parse_fragment(fragment.strip())
        assert [r.date for r in records] == ["03-15-2024", "03-16-2024"]


class TestTableSections:
    """Only <tbody> rows are extracted."""

    def test_thead_ignored(self):
        head = (
            '<thead><tr><td class="dateBody">Date</td>'
            '<td class="tournamentBody">Tournament</td></tr></thead>'
        )
        records = parse_fragment(make_table([SHOWDOWN_ROW], head=head))
        assert len(records) == 1
        assert records[0].date == "03-15-2024"

    def test_thead_with_unexpected_structure(self):
        head = '<thead><caption>Week 1</caption><foo bar="1">x</foo></thead>'
        records = parse_fragment(make_table([SHOWDOWN_ROW], head=head))
        assert len(records) == 1

    def test_no_tbody_yields_no_rows(self):
        assert parse_fragment("<table><thead><tr><th>Date</th></tr></thead></table>") == []

    def test_multiple_tbody_sections_concatenated(self):
        first = make_table([SHOWDOWN_ROW], head="").removesuffix("</table>")
        second = make_table([KOREA_ROW], head="").removeprefix("<table>")
        fragment = first + second
        records = parse_fragment(fragment)
        assert [r.tournament for r in records] == ["Summer Showdown", "Contenders Korea"]


class TestAmpersands:
    """Bare '&' is escaped before parsing; entity references are kept."""

    def test_escape_bare_only(self):
        text = "A & B &amp; C &#38; D &#x26; E &lt;"
        assert escape_bare_ampersands(text) == "A &amp; B &amp; C &#38; D &#x26; E &lt;"

    def test_escape_leaves_other_text_alone(self):
        text = '<td class="x">No ampersand here</td>'
        assert escape_bare_ampersands(text) == text

    def test_bare_ampersand_decodes_to_literal(self):
        row = ("03-15-2024", "Blizzard & Friends Cup", "NA", "6:00 PM PT", "Twitch & YouTube")
        (record,) = parse_fragment(make_table([row]))
        assert record.tournament == "Blizzard & Friends Cup"
        assert record.broadcast == "Twitch & YouTube"

    def test_escaped_ampersand_decodes_once(self):
        row = ("03-15-2024", "Rock &amp; Roll", "NA", "6:00 PM PT", "Twitch")
        (record,) = parse_fragment(make_table([row]))
        assert record.tournament == "Rock & Roll"

    def test_html_named_entity_kept_literally(self):
        """Entities XML does not define are escaped, so the text survives verbatim."""
        row = ("03-15-2024", "Open&nbsp;Cup", "NA", "6:00 PM PT", "Twitch")
        (record,) = parse_fragment(make_table([row]))
        assert record.tournament == "Open&nbsp;Cup"


class TestMalformed:
    """Anything that is not a well-formed <table> raises MalformedFragment."""

    @pytest.mark.parametrize(
        "fragment",
        [
            "",
            "<table><tbody><tr><td>x</tr></tbody></table>",
            "<table><tbody>",
            "just some text",
            "<table></table><p>",
        ],
    )
    def test_not_well_formed(self, fragment):
        with pytest.raises(MalformedFragment):
            parse_fragment(fragment)

    def test_wrong_root_element(self):
        with pytest.raises(MalformedFragment, match="Expected <table>"):
            parse_fragment("<div><table><tbody></tbody></table></div>")

    def test_parser_is_reusable(self):
        parser = TableFragmentParser()
        with pytest.raises(MalformedFragment):
            parser.parse("<table>")
        assert len(parser.parse(make_table([SHOWDOWN_ROW]))) == 1


class TestFragmentBoundaries:
    """Only the first element of a fragment is read."""

    def test_trailing_note_ignored(self):
        records = parse_fragment(make_table([SHOWDOWN_ROW]) + "<p>note</p>")
        assert [r.tournament for r in records] == ["Summer Showdown"]

    def test_second_table_ignored(self):
        fragment = make_table([SHOWDOWN_ROW]) + make_table([KOREA_ROW])
        assert [r.tournament for r in parse_fragment(fragment)] == ["Summer Showdown"]

    def test_leading_text_and_comment_skipped(self):
        records = parse_fragment("\n<!-- week 1 -->\n" + make_table([EMEA_ROW]))
        assert [r.tournament for r in records] == ["EMEA Open"]

    def test_empty_table_followed_by_table(self):
        assert parse_fragment("<table></table><table></table>") == []

    def test_lone_surrogate_is_replaced(self):
        row = ("03-15-2024", "Cup \ud800 Finals", "NA", "6:00 PM PT", "Twitch")
        (record,) = parse_fragment(make_table([row]))
        assert record.tournament == "Cup \ufffd Finals"
