"""
Shared test fixtures for pathtopro-schedule tests.

No test touches the network. Schedule pages are built from synthetic
rows that mimic the Path to Pro page: a Next.js ``__NEXT_DATA__`` script
whose page props hold a ``tabs`` block, each tab holding rich-text blocks
with one ``<table>`` fragment apiece.
"""

from __future__ import annotations

import json
from typing import Any

import pytest

from pathtopro_schedule.config import PAYLOAD_PREFIX, PAYLOAD_SUFFIX

# ---------------------------------------------------------------------------
# Sample rows -- (date, tournament, region, time, broadcast)
# ---------------------------------------------------------------------------
SHOWDOWN_ROW = ("03-15-2024", "Summer Showdown", "NA", "6:00 PM PT", "Twitch")
EMEA_ROW = ("03-16-2024", "EMEA Open", "EMEA", "7:00 PM CET", "YouTube")
KOREA_ROW = ("03-14-2024", "Contenders Korea", "KR", "8:00 PM KST", "Afreeca")


def make_table(
    rows: list[tuple[str, str, str, str, str]],
    head: str = "<thead><tr><th>Date</th><th>Tournament</th></tr></thead>",
) -> str:
    """Render rows as a schedule ``<table>`` fragment."""
    body = "".join(
        "<tr>"
        f'<td class="dateBody">{date}</td>'
        f'<td class="tournamentBody">{tournament}</td>'
        f'<td class="regionBody">{region}</td>'
        f'<td class="timeBody">{time}</td>'
        f'<td class="broadcastBody">{broadcast}</td>'
        "</tr>"
        for date, tournament, region, time, broadcast in rows
    )
    return f"<table>{head}<tbody>{body}</tbody></table>"


def make_document(
    tabs: list[list[str]],
    leading_blocks: list[Any] | None = None,
    trailing_blocks: list[Any] | None = None,
) -> dict[str, Any]:
    """Build page props holding *tabs* (each a list of table fragments)."""
    tabs_block = {
        "blockType": "tabs",
        "tabs": {
            "title": "Schedule",
            "tabs": [
                {
                    "tabTitle": f"Week {index + 1}",
                    "blocks": [
                        {"richTextEditor": {"articleRawHtml": fragment}}
                        for fragment in fragments
                    ],
                }
                for index, fragments in enumerate(tabs)
            ],
        },
    }
    blocks = list(leading_blocks or []) + [tabs_block] + list(trailing_blocks or [])
    return {
        "props": {"pageProps": {"title": "Path to Pro", "blocks": blocks}},
        "page": "/pathtopro/schedule",
        "buildId": "test",
    }


def make_page(document: dict[str, Any]) -> str:
    """Embed *document* in a minimal Next.js page."""
    return (
        "<!DOCTYPE html><html><head><title>Schedule</title></head><body>"
        '<div id="__next"></div>'
        f"{PAYLOAD_PREFIX}{json.dumps(document)}{PAYLOAD_SUFFIX}"
        "<script>window.analytics = {};</script>"
        "</body></html>"
    )


@pytest.fixture()
def sample_document() -> dict[str, Any]:
    """Two tabs: one table with two rows, one table with one row."""
    return make_document(
        [
            [make_table([SHOWDOWN_ROW, EMEA_ROW])],
            [make_table([KOREA_ROW])],
        ],
        leading_blocks=[{"hero": {"title": "Path to Pro"}}],
    )


@pytest.fixture()
def sample_page(sample_document) -> str:
    return make_page(sample_document)


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: end-to-end tests over a synthetic schedule page",
    )
