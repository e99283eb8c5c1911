from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog

from tubelink.domain.entities.exceptions import ResolutionError
from tubelink.domain.entities.resolution import ResolutionResult
from tubelink.domain.entities.streams import QualityTier
from tubelink.infrastructure.config import load_config
from tubelink.logging.setup import configure_logging
from tubelink.interfaces.composition import build_registry

log = structlog.get_logger(__name__)


def _parse_args(argv: Iterable[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tubelink",
        description="Resolve a YouTube link into direct stream URLs.",
    )

    parser.add_argument("url", help="Video page URL to resolve.")
    parser.add_argument(
        "--quality",
        default=None,
        choices=[tier.value for tier in QualityTier],
        help="Quality tier (default from config, else highest).",
    )
    parser.add_argument(
        "--fallback",
        action="store_true",
        help="Also run the fallback resolution and print its URL.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON.",
    )

    # Config wiring flags (no business logic)
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML config file.",
    )
    parser.add_argument(
        "--dotenv",
        default=None,
        help="Path to .env file.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override log level.",
    )
    parser.add_argument(
        "--log-format",
        default=None,
        choices=["json", "console"],
        help="Override log format.",
    )

    return parser.parse_args(argv)


def _result_to_dict(result: ResolutionResult) -> dict[str, Any]:
    return {
        "url": result.url,
        "audio_url": result.audio_url,
        "is_video": result.is_video,
        "is_live": result.is_live,
    }


def start(argv: Iterable[str] | None = None) -> int:
    """
    Process entrypoint.

    Load config exactly once here, then build the resolver registry with it.
    """

    if argv is None:
        argv = sys.argv[1:]

    args = _parse_args(argv)

    config_path = Path(args.config) if args.config else None
    dotenv_path = Path(args.dotenv) if args.dotenv else None

    cli_overrides: dict[str, Any] = {}
    if args.quality:
        cli_overrides["default_quality"] = args.quality
    if args.log_level:
        cli_overrides["log_level"] = args.log_level
    if args.log_format:
        cli_overrides["log_format"] = args.log_format

    config = load_config(
        config_path=config_path,
        dotenv_path=dotenv_path,
        cli_overrides=cli_overrides,
    )

    configure_logging(config)

    registry = build_registry(config)
    try:
        result = registry.resolve(args.url, config.quality)
    except ResolutionError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    log.debug("cli_resolved", url=args.url, is_live=result.is_live)

    fallback = result.attempt_fallback() if args.fallback else None

    if args.json:
        payload = _result_to_dict(result)
        if args.fallback:
            payload["fallback"] = _result_to_dict(fallback) if fallback else None
        print(json.dumps(payload, indent=2))
        return 0

    print(result.url)
    if result.audio_url:
        print(f"audio: {result.audio_url}")
    if args.fallback:
        print(f"fallback: {fallback.url if fallback else 'none'}")
    return 0


if __name__ == "__main__":
    raise SystemExit(start())
