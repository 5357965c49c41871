"""
Fetch the Path to Pro schedule and write the Almaty-time reports.

Usage:
    uv run python scripts/run_schedule.py                  # built-in defaults
    uv run python scripts/run_schedule.py schedule.yaml    # with a config file

Reports are written to the configured output directory (the current
directory by default). On any failure the stage that failed is logged and
the script exits with status 1 without writing reports.
"""

from __future__ import annotations

import logging
import sys

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("run_schedule")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> int:
    from pydantic import ValidationError

    import pathtopro_schedule
    from pathtopro_schedule.exceptions import ConfigValidationError, ScheduleError

    config_path = sys.argv[1] if len(sys.argv) > 1 else None

    try:
        written = pathtopro_schedule.run(config_path=config_path)
    except ScheduleError as exc:
        log.error("%s stage failed: %s", exc.stage, exc)
        return 1
    except (FileNotFoundError, ValidationError) as exc:
        log.error("%s stage failed: %s", ConfigValidationError.stage, exc)
        return 1

    for path in written:
        log.info("Wrote %s", path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
