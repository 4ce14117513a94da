"""CLI entrypoint for wordtiming."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence

from wordtiming.config import configure_logging, load_config
from wordtiming.core import needs_recalculation, retime
from wordtiming.eval import summarize_retiming
from wordtiming.io import read_timed_words, to_json, write_json
from wordtiming.models import RetimeRequest, TimedWord

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="wordtiming",
        description="Preserve word timing when caption text is edited.",
    )
    subparsers = parser.add_subparsers(dest="command")

    retime_cmd = subparsers.add_parser("retime", help="Retime edited caption text")
    retime_cmd.add_argument(
        "words_path",
        help="JSON file with the original timed words, or '-' for none",
    )
    retime_cmd.add_argument("text", help="Edited caption text")
    retime_cmd.add_argument("--start", type=float, required=True, help="Segment start (seconds)")
    retime_cmd.add_argument("--end", type=float, required=True, help="Segment end (seconds)")
    retime_cmd.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="Word similarity threshold (default: from config)",
    )
    retime_cmd.add_argument(
        "--report",
        action="store_true",
        help="Print a retiming quality summary to stderr",
    )
    retime_cmd.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output JSON path. If omitted, prints to stdout.",
    )

    check = subparsers.add_parser("check", help="Check whether an edit changes word identity")
    check.add_argument("old_text", help="Caption text before the edit")
    check.add_argument("new_text", help="Caption text after the edit")

    serve = subparsers.add_parser("serve", help="Run the wordtiming HTTP API")
    serve.add_argument("--host", default=None, help="Override API host")
    serve.add_argument("--port", type=int, default=None, help="Override API port")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    config = load_config()
    configure_logging(config)

    if args.command == "retime":
        try:
            words = _load_words(args.words_path)
            request = RetimeRequest(
                words=words,
                text=args.text,
                segment_start=args.start,
                segment_end=args.end,
                similarity_threshold=args.threshold,
            )
        except (OSError, ValueError) as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2

        response = retime(request, default_threshold=config.similarity_threshold)
        if args.report:
            summary = summarize_retiming(response.words, words)
            print(json.dumps(summary, indent=2), file=sys.stderr)
        if args.output:
            write_json(response, args.output)
            print(f"Wrote retimed words JSON to {args.output}")
            return 0
        print(to_json(response))
        return 0

    if args.command == "check":
        print(json.dumps(needs_recalculation(args.old_text, args.new_text)))
        return 0

    if args.command == "serve":
        try:
            import uvicorn
        except ModuleNotFoundError:
            print(
                "`wordtiming serve` requires uvicorn. Install project dependencies first.",
                file=sys.stderr,
            )
            return 1

        host = args.host or config.api_host
        port = args.port or config.api_port
        logger.info("serving wordtiming API on %s:%d (env=%s)", host, port, config.env)
        uvicorn.run(
            "wordtiming.api:app",
            host=host,
            port=port,
            workers=config.workers,
            reload=False,
        )
        return 0

    parser.error(f"Unknown command: {args.command}")
    return 2


def _load_words(words_path: str) -> list[TimedWord]:
    if words_path == "-":
        return []
    return read_timed_words(words_path)


if __name__ == "__main__":
    raise SystemExit(main())
