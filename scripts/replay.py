"""Tabular replay of an order event file.

Example usage:
    $ python -m scripts.replay sessions/2014-04-09.txt \
                               --out steps.csv --config twapbook/config.yaml

Every event is applied to a fresh session; the resulting best price and
running TWAP after each event are written out as CSV.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure repo root importable
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from twapbook import load_config  # noqa: E402  pylint: disable=wrong-import-position
from twapbook.data.events import EventParseError  # noqa: E402
from twapbook.data.replay import load_events_frame, replay_frame  # noqa: E402
from twapbook.execution.session import TwapSession  # noqa: E402
from twapbook.utils.logger import setup_logger  # noqa: E402


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description="Replay an order event file into a per-event TWAP table")
    p.add_argument("events", type=Path, help="Order event file")
    p.add_argument("--out", type=Path, default=None, help="CSV destination (stdout if omitted)")
    p.add_argument("--config", type=Path, default=ROOT / "twapbook" / "config.yaml")
    p.add_argument("--lenient", action="store_true", help="Skip malformed event lines instead of failing")
    args = p.parse_args(argv)

    cfg = load_config(args.config)
    if args.lenient:
        cfg["replay"]["strict"] = False
    logger = setup_logger(
        cfg["logging"]["level"],
        cfg["logging"]["path"],
        max_bytes=cfg["logging"]["max_bytes"],
        backup_count=cfg["logging"]["backup_count"],
    )

    try:
        events = load_events_frame(args.events, strict=cfg["replay"]["strict"])
    except (EventParseError, FileNotFoundError) as exc:
        logger.error("Replay failed: %s", exc)
        return 1
    logger.info("Loaded %d events from %s", len(events), args.events)

    session = TwapSession(logger=logger, trace=cfg["replay"]["trace"])
    steps = replay_frame(events, session)

    if args.out:
        steps.to_csv(args.out, index=False)
        logger.info("Wrote %d steps to %s", len(steps), args.out)
    else:
        steps.to_csv(sys.stdout, index=False)
    return 0


if __name__ == "__main__":
    sys.exit(main())
