"""
Base parser interface and raw record type for pathtopro-schedule.

All fragment parsers implement ``BaseParser.parse()``, which takes one
markup fragment and returns the schedule rows found in it as
``RawRecord`` objects, in document order.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RawRecord:
    """One schedule row as authored, before any time normalization.

    Every field is a plain string; a cell missing from the row is ``""``.

    Attributes:
        date: Calendar date, ``MM-DD-YYYY``.
        tournament: Tournament name.
        region: Region label (e.g. ``NA``, ``EMEA``).
        time: Clock time with an optional zone suffix, e.g. ``6:00 PM PT``
            or ``7:00 PM CET``.
        broadcast: Broadcast channel.
    """

    date: str = ""
    tournament: str = ""
    region: str = ""
    time: str = ""
    broadcast: str = ""


class BaseParser(ABC):
    """Abstract base class for schedule fragment parsers."""

    @abstractmethod
    def parse(self, fragment: str) -> list[RawRecord]:
        """Parse one markup fragment into schedule rows.

        Raises:
            MalformedFragment: If the fragment is not parseable.
        """
