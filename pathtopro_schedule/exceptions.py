"""
Custom exception hierarchy for pathtopro-schedule.

Every error carries a ``stage`` attribute naming the pipeline stage that
raised it (fetch, extract, navigate, parse, resolve, export, config).
The entry script uses it to tell the user which stage failed.
"""


class ScheduleError(Exception):
    """Base exception for all pathtopro-schedule errors."""

    stage = "pipeline"


class MalformedDocument(ScheduleError):
    """Raised when the JSON document does not have the expected shape.

    The message names the path that was being accessed, e.g.
    ``props.pageProps.blocks[3]``.
    """

    stage = "navigate"


class PayloadNotFoundError(MalformedDocument):
    """Raised when the page HTML lacks the embedded JSON marker pair."""

    stage = "extract"


class MalformedFragment(ScheduleError):
    """Raised when a schedule table fragment is not well-formed markup."""

    stage = "parse"


class UnresolvableTime(ScheduleError):
    """Raised when a row's date/time text cannot be turned into an instant.

    Covers format mismatches as well as unknown zone abbreviations.
    """

    stage = "resolve"


class TransportError(ScheduleError):
    """Raised when the schedule page cannot be fetched.

    Either the request itself failed or the server answered with a
    non-200 status.
    """

    stage = "fetch"


class ExportError(ScheduleError):
    """Raised when a report file cannot be written."""

    stage = "export"


class ConfigValidationError(ScheduleError):
    """Raised when schedule.yaml is empty or unusable."""

    stage = "config"
