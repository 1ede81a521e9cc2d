"""Command-line entrypoint: replay an order event file and report the TWAP."""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from twapbook import __version__, load_config
from twapbook.data.events import EventParseError, read_events
from twapbook.execution.session import TwapSession
from twapbook.utils.logger import setup_logger
from twapbook.utils.metrics import Metrics


def run(events_path: Path, config: dict) -> Optional[float]:
    """Replay *events_path* through a fresh session and return the final TWAP."""
    log_cfg = config["logging"]
    logger = setup_logger(
        log_cfg["level"], log_cfg["path"], max_bytes=log_cfg["max_bytes"], backup_count=log_cfg["backup_count"]
    )
    logger.info("twapbook v%s replaying %s", __version__, events_path)

    metrics = Metrics(config["metrics"]["path"])
    session = TwapSession(logger=logger, metrics=metrics, trace=config["replay"]["trace"])
    twap = session.replay(read_events(events_path, strict=config["replay"]["strict"]))

    if config["metrics"]["path"]:
        metrics.flush()
    return twap


def cli(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Time-weighted average of the best order price")
    parser.add_argument("events", type=Path, help="Order event file ('<time> I|E <order_id> [price]' per line)")
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=Path(__file__).with_name("config.yaml"),
        help="Path to the YAML configuration file",
    )
    parser.add_argument("--trace", action="store_true", help="Log max price and TWAP after every event")
    parser.add_argument("--lenient", action="store_true", help="Skip malformed event lines instead of failing")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)

    config = load_config(args.config)
    if args.trace:
        config["replay"]["trace"] = True
    if args.lenient:
        config["replay"]["strict"] = False

    try:
        twap = run(args.events, config)
    except (EventParseError, FileNotFoundError) as exc:
        setup_logger(config["logging"]["level"]).error("Replay failed: %s", exc)
        return 1

    print("nan" if twap is None else twap)
    return 0


if __name__ == "__main__":
    sys.exit(cli())
