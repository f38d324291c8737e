"""Command-line interface for the beehiiv_rss application."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from .config import parse_env_config
from .handler import handle_request
from .server import serve

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Render a Beehiiv publication's posts as an RSS 2.0 feed."
    )
    parser.add_argument(
        "--env-file",
        default=None,
        help="Optional XML file of environment variables to load first.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Optional path to a log file.",
    )
    parser.add_argument(
        "--output",
        metavar="PATH",
        help="Write the feed to PATH instead of stdout.",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Run a local HTTP server that renders the feed on every request.",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Host for --serve.")
    parser.add_argument("--port", type=int, default=3000, help="Port for --serve.")

    return parser


def configure_logging(level_name: str, log_file: Optional[str] = None) -> None:
    """Initialise logging according to options."""
    log_level = getattr(logging, level_name.upper(), None)
    if not isinstance(log_level, int):
        raise ValueError(f"Unsupported log level: {level_name}")

    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.setLevel(log_level)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    if log_file:
        log_path = Path(log_file)
        if log_path.parent and not log_path.parent.exists():
            log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        logger.debug(
            "Logger initialised with level %s and file output to %s",
            level_name.upper(),
            log_path,
        )
    else:
        logger.debug(
            "Logger initialised with console output at level %s", level_name.upper()
        )


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        configure_logging(args.log_level, args.log_file)

        if args.env_file:
            os.environ.update(parse_env_config(args.env_file))
    except ValueError as exc:
        parser.error(str(exc))
    except Exception:  # noqa: BLE001
        logger.exception("Failed to load environment configuration.")
        return 1

    if args.serve:
        serve(args.host, args.port)
        return 0

    response = handle_request()
    if response.status != 200:
        logger.error("Feed generation failed (%d): %s", response.status, response.body)
        return 1

    if args.output:
        output_path = Path(args.output)
        if output_path.parent and not output_path.parent.exists():
            output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(response.body, encoding="utf-8")
        logger.info("Wrote feed to %s", output_path)
    else:
        sys.stdout.write(response.body + "\n")
    return 0
